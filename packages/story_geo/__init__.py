from __future__ import annotations

from packages.story_geo.aliases import DISTRICT_ALIASES, AliasIndex, get_alias_index
from packages.story_geo.config import MatcherSettings, bootstrap_story_geo_env
from packages.story_geo.errors import InvalidSettingsError, StoryGeoError
from packages.story_geo.match import DistrictMatcher, default_matcher, infer_district_from_text, infer_district_name
from packages.story_geo.normalize import normalize_language_code
from packages.story_geo.similarity import levenshtein_distance, similarity
from packages.story_geo.types import DistrictCandidate, InferredDistrictResult, StoryForInference

__all__ = [
    "AliasIndex",
    "DISTRICT_ALIASES",
    "DistrictCandidate",
    "DistrictMatcher",
    "InferredDistrictResult",
    "InvalidSettingsError",
    "MatcherSettings",
    "StoryForInference",
    "StoryGeoError",
    "bootstrap_story_geo_env",
    "default_matcher",
    "get_alias_index",
    "infer_district_from_text",
    "infer_district_name",
    "levenshtein_distance",
    "normalize_language_code",
    "similarity",
]
