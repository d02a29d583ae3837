"""Render settings, optionally read from the environment."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from badgesmith.errors import BadgeError

DEFAULT_FONT_SIZE = 11.0
# Extra advance per character on top of the font's own advances.
DEFAULT_KERNING_PX = 0.8

ENV_FONT_PATH = "BADGESMITH_FONT_PATH"
ENV_FONT_SIZE = "BADGESMITH_FONT_SIZE"
ENV_KERNING_PX = "BADGESMITH_KERNING_PX"


class ConfigError(BadgeError):
    """Raised when a setting has an unusable value."""


@dataclass
class Settings:
    """Settings shared by every render."""
    font_path: Optional[str] = None
    font_size: float = DEFAULT_FONT_SIZE
    kerning_px: float = DEFAULT_KERNING_PX

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``BADGESMITH_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        return cls(
            font_path=env.get(ENV_FONT_PATH) or None,
            font_size=_env_float(env, ENV_FONT_SIZE, DEFAULT_FONT_SIZE, positive=True),
            kerning_px=_env_float(env, ENV_KERNING_PX, DEFAULT_KERNING_PX),
        )


def _env_float(env: Mapping[str, str], name: str, default: float, positive: bool = False) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be finite, got {raw!r}")
    if value < 0 or (positive and value == 0):
        raise ConfigError(f"{name} must be {'positive' if positive else 'non-negative'}, got {raw!r}")
    return value
