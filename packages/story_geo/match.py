from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from packages.story_geo.aliases import AliasIndex, get_alias_index
from packages.story_geo.config import MatcherSettings, bootstrap_story_geo_env
from packages.story_geo.normalize import build_haystack, contains_word, normalize_text, tokenize
from packages.story_geo.similarity import similarity
from packages.story_geo.types import (
    CONFIDENCE_HIGH,
    CONFIDENCE_LOW,
    CONFIDENCE_MEDIUM,
    MATCH_ALIAS,
    MATCH_EXACT,
    MATCH_FUZZY,
    DistrictCandidate,
    InferredDistrictResult,
    StoryForInference,
)

logger = logging.getLogger(__name__)


class DistrictMatcher:
    """Resolves the district a story is about: exact name, then alias, then fuzzy token match."""

    def __init__(
        self,
        settings: Optional[MatcherSettings] = None,
        alias_index: Optional[AliasIndex] = None,
    ) -> None:
        self._settings = settings or MatcherSettings()
        self._alias_index = alias_index or get_alias_index()

    @classmethod
    def from_env(cls, alias_index: Optional[AliasIndex] = None) -> "DistrictMatcher":
        bootstrap_story_geo_env()
        return cls(MatcherSettings.from_env(), alias_index)

    @property
    def settings(self) -> MatcherSettings:
        return self._settings

    def infer(
        self,
        story: StoryForInference,
        districts: Sequence[DistrictCandidate],
    ) -> Optional[InferredDistrictResult]:
        # Explicitly tagged data wins over inference.
        if story.district:
            return InferredDistrictResult(story.district, CONFIDENCE_HIGH, MATCH_EXACT)
        if not districts:
            return None

        haystack = build_haystack(story)
        if not haystack:
            return None

        # Longest names first so "Bengaluru Rural" is tried before "Bengaluru".
        ordered = sorted(
            (item for item in districts if normalize_text(item.name)),
            key=lambda item: len(item.name),
            reverse=True,
        )

        result = (
            self._match_exact(haystack, ordered)
            or self._match_alias(haystack, ordered)
            or self._match_fuzzy(haystack, ordered)
        )
        if result is None:
            logger.debug(f"no district resolved for headline {story.headline!r}")
        else:
            logger.debug(
                f"resolved {result.district!r} via {result.match_type} "
                f"({result.confidence}, score={result.score})"
            )
        return result

    def infer_name(
        self,
        story: StoryForInference,
        districts: Sequence[DistrictCandidate],
    ) -> Optional[str]:
        result = self.infer(story, districts)
        return result.district if result else None

    def _match_exact(
        self, haystack: str, ordered: List[DistrictCandidate]
    ) -> Optional[InferredDistrictResult]:
        for item in ordered:
            if contains_word(haystack, item.name):
                return InferredDistrictResult(item.name, CONFIDENCE_HIGH, MATCH_EXACT)
        for item in ordered:
            if item.headquarters and contains_word(haystack, item.headquarters):
                return InferredDistrictResult(item.name, CONFIDENCE_HIGH, MATCH_EXACT)
        return None

    def _match_alias(
        self, haystack: str, ordered: List[DistrictCandidate]
    ) -> Optional[InferredDistrictResult]:
        for item in ordered:
            for alias in self._alias_index.variants_for(item.name):
                if contains_word(haystack, alias):
                    return InferredDistrictResult(item.name, CONFIDENCE_HIGH, MATCH_ALIAS)
        return None

    def _match_fuzzy(
        self, haystack: str, ordered: List[DistrictCandidate]
    ) -> Optional[InferredDistrictResult]:
        tokens = tokenize(haystack, self._settings.min_token_length)
        if not tokens:
            return None

        best: Optional[Tuple[DistrictCandidate, float]] = None
        for item in ordered:
            fields = [normalize_text(item.name)]
            if item.headquarters:
                fields.append(normalize_text(item.headquarters))
            for token in tokens:
                for field in fields:
                    score = similarity(token, field)
                    if score < self._settings.fuzzy_min_score:
                        continue
                    if best is None or score > best[1]:
                        best = (item, score)
            if best is not None and best[1] >= 1.0 and self._settings.stop_on_perfect_fuzzy:
                break

        if best is None:
            return None
        item, score = best
        confidence = CONFIDENCE_MEDIUM if score >= self._settings.fuzzy_medium_score else CONFIDENCE_LOW
        return InferredDistrictResult(item.name, confidence, MATCH_FUZZY, score)


_DEFAULT_MATCHER: Optional[DistrictMatcher] = None


def default_matcher() -> DistrictMatcher:
    """Shared matcher configured from STORY_GEO_* env vars on first use."""
    global _DEFAULT_MATCHER
    if _DEFAULT_MATCHER is None:
        _DEFAULT_MATCHER = DistrictMatcher.from_env()
    return _DEFAULT_MATCHER


def infer_district_from_text(
    story: StoryForInference,
    districts: Sequence[DistrictCandidate],
) -> Optional[InferredDistrictResult]:
    return default_matcher().infer(story, districts)


def infer_district_name(
    story: StoryForInference,
    districts: Sequence[DistrictCandidate],
) -> Optional[str]:
    return default_matcher().infer_name(story, districts)
