"""
Runtime settings for PoseSnake.

Values come from the environment (a local .env file is loaded first) and
fall back to the defaults below. CLI flags in posesnake.py override them.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from dotenv import load_dotenv

from domain.constants import DEFAULT_GRID_HEIGHT, DEFAULT_GRID_WIDTH, MIN_GRID_WIDTH
from pose.classifier import DEFAULT_DWELL_MS, DEFAULT_MIN_SCORE, EMISSION_POLICIES, REPEAT
from pose.sampler import DEFAULT_TARGET_FPS
from services.game_loop import DEFAULT_TICK_MS

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    grid_width: int = DEFAULT_GRID_WIDTH
    grid_height: int = DEFAULT_GRID_HEIGHT
    tick_ms: int = DEFAULT_TICK_MS
    pose_min_score: float = DEFAULT_MIN_SCORE
    pose_dwell_ms: float = DEFAULT_DWELL_MS
    pose_target_fps: float = DEFAULT_TARGET_FPS
    pose_emission_policy: str = REPEAT
    log_level: str = "INFO"

    def __post_init__(self):
        if self.grid_width < MIN_GRID_WIDTH or self.grid_height < 1:
            raise ValueError(
                f"Grid {self.grid_width}x{self.grid_height} is too small; "
                f"need at least {MIN_GRID_WIDTH}x1."
            )
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if not 0.0 <= self.pose_min_score <= 1.0:
            raise ValueError(f"pose_min_score must be within [0, 1], got {self.pose_min_score}")
        if self.pose_dwell_ms < 0:
            raise ValueError(f"pose_dwell_ms must be non-negative, got {self.pose_dwell_ms}")
        if self.pose_target_fps <= 0:
            raise ValueError(f"pose_target_fps must be positive, got {self.pose_target_fps}")
        if self.pose_emission_policy not in EMISSION_POLICIES:
            raise ValueError(
                f"pose_emission_policy must be one of {sorted(EMISSION_POLICIES)}, "
                f"got '{self.pose_emission_policy}'"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}, got '{self.log_level}'")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Raises:
            ValueError: If a variable is set but cannot be parsed or is out of range.
        """
        env = os.environ if env is None else env
        defaults = cls()
        return cls(
            grid_width=_int(env, "SNAKE_GRID_WIDTH", defaults.grid_width),
            grid_height=_int(env, "SNAKE_GRID_HEIGHT", defaults.grid_height),
            tick_ms=_int(env, "SNAKE_TICK_MS", defaults.tick_ms),
            pose_min_score=_float(env, "POSE_MIN_SCORE", defaults.pose_min_score),
            pose_dwell_ms=_float(env, "POSE_DWELL_MS", defaults.pose_dwell_ms),
            pose_target_fps=_float(env, "POSE_TARGET_FPS", defaults.pose_target_fps),
            pose_emission_policy=_str(env, "POSE_EMISSION_POLICY", defaults.pose_emission_policy).lower(),
            log_level=_str(env, "LOG_LEVEL", defaults.log_level).upper(),
        )

    def override(self, **changes) -> "Settings":
        """Return a copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()


def _raw(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _str(env: Mapping[str, str], name: str, default: str) -> str:
    value = _raw(env, name)
    return default if value is None else value


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    value = _raw(env, name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{value}'") from None


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    value = _raw(env, name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{value}'") from None
