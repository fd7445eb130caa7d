from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from packages.story_geo.types import DistrictCandidate, StoryForInference


class DistrictCandidateInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    headquarters: Optional[str] = None

    def to_domain(self) -> DistrictCandidate:
        return DistrictCandidate(name=self.name, headquarters=self.headquarters or None)


class StoryRecordInput(BaseModel):
    # Database rows often carry integer primary keys.
    story_id: Union[str, int] = ""
    headline: str
    summary: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    original_headline: Optional[str] = None
    original_summary: Optional[str] = None
    original_language: Optional[str] = None
    category: Optional[str] = None

    def to_domain(self) -> StoryForInference:
        return StoryForInference(
            headline=self.headline,
            summary=self.summary,
            city=self.city,
            district=self.district,
            original_headline=self.original_headline,
            original_summary=self.original_summary,
            original_language=self.original_language,
            category=self.category,
        )
