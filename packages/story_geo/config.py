from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Tuple

from packages.story_geo.errors import InvalidSettingsError


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


_ENV_PREFIX = "STORY_GEO_"


def _read_story_geo_vars(path: Path) -> Iterator[Tuple[str, str]]:
    """Yield STORY_GEO_* assignments from a dotenv-style file; other keys are ignored."""
    if not path.is_file():
        return
    with path.open(encoding="utf-8") as handle:
        for line in handle:
            name, sep, raw = line.strip().partition("=")
            name = name.strip()
            if not sep or name.startswith("#") or not name.startswith(_ENV_PREFIX):
                continue
            yield name, raw.strip().strip("'\"")


def bootstrap_story_geo_env(root: Optional[Path] = None) -> None:
    """Fill unset STORY_GEO_* env vars from project-level files; the process env wins."""
    base = root or _project_root()
    for env_path in (base / ".env.local", base / ".env", base / "config" / "story_geo.env"):
        for name, value in _read_story_geo_vars(env_path):
            os.environ.setdefault(name, value)


def _env_float(name: str, default: float) -> float:
    raw = str(os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise InvalidSettingsError(f"{name} must be a number, got {raw!r}") from exc


def _env_int(name: str, default: int) -> int:
    raw = str(os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidSettingsError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class MatcherSettings:
    fuzzy_min_score: float = 0.85
    fuzzy_medium_score: float = 0.95
    # Tokens shorter than this are too noisy for similarity scoring.
    min_token_length: int = 4
    stop_on_perfect_fuzzy: bool = False

    def __post_init__(self) -> None:
        if not 0.0 < self.fuzzy_min_score <= self.fuzzy_medium_score <= 1.0:
            raise InvalidSettingsError(
                "expected 0 < fuzzy_min_score <= fuzzy_medium_score <= 1, "
                f"got {self.fuzzy_min_score} / {self.fuzzy_medium_score}"
            )
        if self.min_token_length < 1:
            raise InvalidSettingsError(f"min_token_length must be >= 1, got {self.min_token_length}")

    @classmethod
    def from_env(cls) -> "MatcherSettings":
        defaults = cls()
        return cls(
            fuzzy_min_score=_env_float("STORY_GEO_FUZZY_MIN_SCORE", defaults.fuzzy_min_score),
            fuzzy_medium_score=_env_float("STORY_GEO_FUZZY_MEDIUM_SCORE", defaults.fuzzy_medium_score),
            min_token_length=_env_int("STORY_GEO_MIN_TOKEN_LENGTH", defaults.min_token_length),
            stop_on_perfect_fuzzy=os.getenv("STORY_GEO_STOP_ON_PERFECT_FUZZY", "0") == "1",
        )
