"""Exception hierarchy for badgesmith."""

from __future__ import annotations


class BadgeError(Exception):
    """Base class for every error raised while building a badge."""


class FontLoadError(BadgeError):
    """Raised when the font resource cannot be parsed."""


class InvalidColor(BadgeError):
    """Raised when a color string cannot be parsed."""

    def __init__(self, color: str) -> None:
        super().__init__(f"Invalid color: {color!r}")
        self.color = color


class LogoError(BadgeError):
    """Raised when a logo cannot be embedded."""
