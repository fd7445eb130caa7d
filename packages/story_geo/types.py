from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

Confidence = Literal["high", "medium", "low"]
MatchType = Literal["exact", "alias", "fuzzy"]

CONFIDENCE_HIGH: Confidence = "high"
CONFIDENCE_MEDIUM: Confidence = "medium"
CONFIDENCE_LOW: Confidence = "low"

MATCH_EXACT: MatchType = "exact"
MATCH_ALIAS: MatchType = "alias"
MATCH_FUZZY: MatchType = "fuzzy"


@dataclass(frozen=True)
class DistrictCandidate:
    name: str
    headquarters: Optional[str] = None


@dataclass(frozen=True)
class StoryForInference:
    headline: str
    summary: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    original_headline: Optional[str] = None
    original_summary: Optional[str] = None
    # Coverage-only fields; the matcher never reads them.
    original_language: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class InferredDistrictResult:
    district: str
    confidence: Confidence
    match_type: MatchType
    score: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "district": self.district,
            "confidence": self.confidence,
            "matchType": self.match_type,
            "score": self.score,
        }
