from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from packages.story_geo.match import DistrictMatcher, default_matcher
from packages.story_geo.models import DistrictCandidateInput, StoryRecordInput
from packages.story_geo.normalize import build_haystack, normalize_language_code, normalize_text
from packages.story_geo.types import DistrictCandidate, StoryForInference

logger = logging.getLogger(__name__)

CandidateLike = Union[DistrictCandidate, Mapping[str, Any]]
StoryLike = Union[StoryForInference, Mapping[str, Any]]


def _to_candidates(districts: Sequence[CandidateLike]) -> List[DistrictCandidate]:
    candidates: List[DistrictCandidate] = []
    for item in districts:
        if isinstance(item, DistrictCandidate):
            candidates.append(item)
            continue
        try:
            candidates.append(DistrictCandidateInput.model_validate(dict(item)).to_domain())
        except ValidationError as exc:
            logger.warning(f"skipping invalid district candidate {item!r}: {exc.error_count()} error(s)")
    return candidates


def _to_story(item: StoryLike) -> StoryForInference:
    if isinstance(item, StoryForInference):
        return item
    return StoryRecordInput.model_validate(dict(item)).to_domain()


def run(
    records: Sequence[Mapping[str, Any]],
    districts: Sequence[CandidateLike],
    matcher: Optional[DistrictMatcher] = None,
) -> List[Dict[str, Any]]:
    resolver = matcher or default_matcher()
    candidates = _to_candidates(districts)
    outputs: List[Dict[str, Any]] = []
    for item in records:
        story_id = str(item.get("story_id", "") or "")
        try:
            story = StoryRecordInput.model_validate(dict(item)).to_domain()
        except ValidationError as exc:
            logger.warning(f"story {story_id or '<unknown>'} rejected: {exc.error_count()} validation error(s)")
            outputs.append(
                {
                    "story_id": story_id,
                    "district": None,
                    "confidence": None,
                    "matchType": None,
                    "score": 0.0,
                    "error": "invalid_record",
                    "evidence": {"items": [{"step": "validate", "errors": exc.error_count()}]},
                }
            )
            continue

        result = resolver.infer(story, candidates)
        outputs.append(
            {
                "story_id": story_id,
                "district": result.district if result else None,
                "confidence": result.confidence if result else None,
                "matchType": result.match_type if result else None,
                "score": result.score if result else 0.0,
                "evidence": {
                    "items": [
                        {"step": "ground_truth", "value": bool(story.district)},
                        {"step": "haystack_length", "count": len(build_haystack(story))},
                        {"step": "candidate_count", "count": len(candidates)},
                    ]
                },
            }
        )
    return outputs


def summarize_district_coverage(
    stories: Sequence[StoryLike],
    districts: Sequence[CandidateLike],
    matcher: Optional[DistrictMatcher] = None,
) -> Dict[str, Dict[str, Any]]:
    """Count stories per district, with regional-language and per-category breakdowns.

    Keys are the candidate names as supplied. Stories that resolve to no district
    are left out; stories tagged with a district outside the candidate list get
    their own entry.
    """
    resolver = matcher or default_matcher()
    candidates = _to_candidates(districts)
    stats: Dict[str, Dict[str, Any]] = {
        item.name: {"count": 0, "regional": 0, "categories": {}} for item in candidates
    }
    by_key = {normalize_text(name): name for name in stats}

    for item in stories:
        try:
            story = _to_story(item)
        except ValidationError as exc:
            logger.warning(f"skipping invalid story {item!r}: {exc.error_count()} validation error(s)")
            continue
        name = resolver.infer_name(story, candidates)
        if not name:
            continue
        key = by_key.setdefault(normalize_text(name), name)
        entry = stats.setdefault(key, {"count": 0, "regional": 0, "categories": {}})
        entry["count"] += 1

        language = normalize_language_code(story.original_language)
        if language and language != "en":
            entry["regional"] += 1
        if story.category:
            entry["categories"][story.category] = entry["categories"].get(story.category, 0) + 1
    return stats
