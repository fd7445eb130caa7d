from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Optional, Pattern

from packages.story_geo.types import StoryForInference

_LANGUAGE_SUBTAG_SPLIT = re.compile(r"[-_]")


def normalize_text(value: Optional[str]) -> str:
    return str(value or "").strip().lower()


@lru_cache(maxsize=4096)
def word_pattern(value: str) -> Pattern[str]:
    return re.compile(rf"\b{re.escape(normalize_text(value))}\b", re.IGNORECASE)


def contains_word(haystack: str, value: Optional[str]) -> bool:
    # An empty needle would match at every word boundary.
    if not normalize_text(value):
        return False
    return word_pattern(str(value)).search(haystack) is not None


def build_haystack(story: StoryForInference) -> str:
    parts = [
        story.headline,
        story.summary,
        story.original_headline,
        story.original_summary,
        story.city,
    ]
    return " ".join(str(item) for item in parts if item).lower()


def tokenize(haystack: str, min_length: int = 4) -> List[str]:
    return [token for token in haystack.split() if len(token) >= min_length]


def normalize_language_code(lang: Optional[str]) -> Optional[str]:
    """Reduce a BCP-47 style tag to its lowercased primary subtag ("en-US" -> "en")."""
    if not lang:
        return None
    primary = _LANGUAGE_SUBTAG_SPLIT.split(lang.lower())[0]
    return primary or None
