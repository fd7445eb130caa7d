import pytest

from packages.story_geo import match as match_module
from packages.story_geo.pipeline import run, summarize_district_coverage
from packages.story_geo.types import DistrictCandidate, StoryForInference


def test_pipeline_resolves_batch_records() -> None:
    outputs = run(
        records=[
            {"story_id": "s1", "headline": "Bombay police report a fire"},
            {"story_id": "s2", "summary": "headline is missing"},
            {"story_id": "s3", "headline": "Temple festival", "district": "Mysuru"},
        ],
        districts=[{"name": "Mumbai"}, {"name": "Pune", "headquarters": "Pune"}, {"name": "  "}],
    )
    assert [item["story_id"] for item in outputs] == ["s1", "s2", "s3"]

    assert outputs[0]["district"] == "Mumbai"
    assert outputs[0]["matchType"] == "alias"
    assert outputs[0]["confidence"] == "high"
    assert {"step": "candidate_count", "count": 2} in outputs[0]["evidence"]["items"]

    assert outputs[1]["district"] is None
    assert outputs[1]["error"] == "invalid_record"

    assert outputs[2]["district"] == "Mysuru"
    assert outputs[2]["matchType"] == "exact"


def test_pipeline_unresolved_story() -> None:
    outputs = run([{"story_id": "s1", "headline": "Markets close higher"}], [DistrictCandidate("Pune")])
    assert outputs[0]["district"] is None
    assert outputs[0]["score"] == 0.0
    assert "error" not in outputs[0]


def test_summarize_district_coverage() -> None:
    stories = [
        {"headline": "Bombay rains disrupt trains", "original_language": "mr-IN", "category": "weather"},
        StoryForInference(headline="Pune metro opens", original_language="en", category="civic"),
        {"headline": "Pune fest draws crowds", "category": "culture"},
        {"headline": "Nothing here"},
    ]
    stats = summarize_district_coverage(stories, [{"name": "Mumbai"}, {"name": "Pune"}])
    assert stats["Mumbai"] == {"count": 1, "regional": 1, "categories": {"weather": 1}}
    assert stats["Pune"] == {"count": 2, "regional": 0, "categories": {"civic": 1, "culture": 1}}


def test_summarize_counts_tagged_district_outside_candidates() -> None:
    stories = [{"headline": "Palace lights", "district": "Mysuru", "original_language": "kn"}]
    stats = summarize_district_coverage(stories, [DistrictCandidate("Pune")])
    assert stats["Pune"]["count"] == 0
    assert stats["Mysuru"] == {"count": 1, "regional": 1, "categories": {}}


def test_pipeline_accepts_numeric_story_ids() -> None:
    outputs = run([{"story_id": 42, "headline": "Pune metro opens"}], [{"name": "Pune"}])
    assert outputs[0]["story_id"] == "42"
    assert outputs[0]["district"] == "Pune"
    assert "error" not in outputs[0]


def test_pipeline_has_no_text_length_caps() -> None:
    long_name = "Pune " + "y" * 300
    outputs = run(
        [
            {"story_id": "long", "headline": "Pune " + "x" * 2100},
            {"story_id": "wide", "headline": f"Rally in {long_name}"},
        ],
        [{"name": "Pune"}, {"name": long_name}],
    )
    assert outputs[0]["district"] == "Pune"
    assert outputs[1]["district"] == long_name
    assert {"step": "candidate_count", "count": 2} in outputs[0]["evidence"]["items"]


def test_summarize_skips_invalid_stories() -> None:
    stories = [{"headline": "Pune metro opens"}, {"summary": "no headline"}, {"headline": "Pune fest"}]
    stats = summarize_district_coverage(stories, [{"name": "Pune"}])
    assert stats["Pune"]["count"] == 2


def test_pipeline_default_matcher_reads_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(match_module, "_DEFAULT_MATCHER", None)
    monkeypatch.setenv("STORY_GEO_FUZZY_MIN_SCORE", "0.95")
    outputs = run(
        [{"story_id": "s1", "headline": "Cyclone nears Visakapatnam coast"}],
        [{"name": "Visakhapatnam"}],
    )
    assert outputs[0]["district"] is None
    assert match_module.default_matcher().settings.fuzzy_min_score == 0.95
