import os
from pathlib import Path

import pytest

from packages.story_geo.config import MatcherSettings, bootstrap_story_geo_env
from packages.story_geo.errors import InvalidSettingsError, StoryGeoError


def test_default_settings() -> None:
    settings = MatcherSettings()
    assert settings.fuzzy_min_score == 0.85
    assert settings.fuzzy_medium_score == 0.95
    assert settings.min_token_length == 4
    assert settings.stop_on_perfect_fuzzy is False


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORY_GEO_FUZZY_MIN_SCORE", "0.8")
    monkeypatch.setenv("STORY_GEO_FUZZY_MEDIUM_SCORE", "0.9")
    monkeypatch.setenv("STORY_GEO_MIN_TOKEN_LENGTH", "5")
    monkeypatch.setenv("STORY_GEO_STOP_ON_PERFECT_FUZZY", "1")
    settings = MatcherSettings.from_env()
    assert settings == MatcherSettings(0.8, 0.9, 5, True)


def test_settings_from_env_falls_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "STORY_GEO_FUZZY_MIN_SCORE",
        "STORY_GEO_FUZZY_MEDIUM_SCORE",
        "STORY_GEO_MIN_TOKEN_LENGTH",
        "STORY_GEO_STOP_ON_PERFECT_FUZZY",
    ):
        monkeypatch.delenv(name, raising=False)
    assert MatcherSettings.from_env() == MatcherSettings()


def test_unparsable_env_value_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORY_GEO_FUZZY_MIN_SCORE", "high")
    with pytest.raises(InvalidSettingsError):
        MatcherSettings.from_env()


def test_out_of_range_settings_raise() -> None:
    with pytest.raises(InvalidSettingsError):
        MatcherSettings(fuzzy_min_score=0.97, fuzzy_medium_score=0.95)
    with pytest.raises(StoryGeoError):
        MatcherSettings(min_token_length=0)


def test_bootstrap_reads_env_files_without_overriding(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text(
        "# matcher overrides\n"
        "STORY_GEO_MIN_TOKEN_LENGTH='6'\n"
        "STORY_GEO_FUZZY_MIN_SCORE=0.9\n"
        "DATABASE_URL=postgres://ignored\n",
        encoding="utf-8",
    )
    # setenv first so teardown removes whatever bootstrap writes.
    for name in ("STORY_GEO_MIN_TOKEN_LENGTH", "DATABASE_URL"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("STORY_GEO_FUZZY_MIN_SCORE", "0.88")

    bootstrap_story_geo_env(tmp_path)

    assert os.environ["STORY_GEO_MIN_TOKEN_LENGTH"] == "6"
    assert os.environ["STORY_GEO_FUZZY_MIN_SCORE"] == "0.88"
    assert "DATABASE_URL" not in os.environ


def test_bootstrap_ignores_comments_and_missing_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "story_geo.env").write_text(
        "#STORY_GEO_FUZZY_MEDIUM_SCORE=0.99\nSTORY_GEO_STOP_ON_PERFECT_FUZZY=\"1\"\n",
        encoding="utf-8",
    )
    for name in ("STORY_GEO_FUZZY_MEDIUM_SCORE", "STORY_GEO_STOP_ON_PERFECT_FUZZY"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)

    bootstrap_story_geo_env(tmp_path)

    assert "STORY_GEO_FUZZY_MEDIUM_SCORE" not in os.environ
    assert MatcherSettings.from_env().stop_on_perfect_fuzzy is True
