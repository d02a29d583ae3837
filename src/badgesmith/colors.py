"""Color parsing and accent-color selection."""

from __future__ import annotations

import re

from PIL import ImageColor

from badgesmith.errors import InvalidColor
from badgesmith.models import AccentColors, Color

__all__ = [
    "BRIGHTNESS_THRESHOLD",
    "DARK_ACCENT",
    "InvalidColor",
    "LIGHT_ACCENT",
    "NAMED_COLORS",
    "accent_for_luminance",
    "format_color",
    "parse_color",
    "relative_luminance",
    "select_accent",
    "srgb_to_linear",
]

LIGHT_TEXT_COLOR = "#fff"
DARK_TEXT_COLOR = "#333"
LIGHT_SHADOW_COLOR = "#ccc"
DARK_SHADOW_COLOR = "#010101"

LIGHT_ACCENT = AccentColors(text_color=LIGHT_TEXT_COLOR, shadow_color=DARK_SHADOW_COLOR)
DARK_ACCENT = AccentColors(text_color=DARK_TEXT_COLOR, shadow_color=LIGHT_SHADOW_COLOR)

# Gamma-adjusted greyscale midpoint, normalized to 0-1.
BRIGHTNESS_THRESHOLD = 0.579

# Badge palette names, checked before CSS names.
NAMED_COLORS = {
    "brightgreen": "#4c1",
    "green": "#97ca00",
    "yellowgreen": "#a4a61d",
    "yellow": "#dfb317",
    "orange": "#fe7d37",
    "red": "#e05d44",
    "blue": "#007ec6",
    "lightgrey": "#9f9f9f",
    "lightgray": "#9f9f9f",
    "grey": "#555",
    "gray": "#555",
    "success": "#4c1",
    "important": "#fe7d37",
    "critical": "#e05d44",
    "informational": "#007ec6",
    "inactive": "#9f9f9f",
}

_BARE_HEX = re.compile(r"[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8}")


def parse_color(spec: str) -> Color:
    """Parse a color string into a normalized Color.

    Accepts badge palette names, anything ``PIL.ImageColor`` understands, and
    hex digits without a leading ``#``.

    Raises:
        InvalidColor: If the string is not a color.
    """
    value = spec.strip()
    value = NAMED_COLORS.get(value.lower(), value)
    try:
        channels = ImageColor.getrgb(value)
    except ValueError:
        if not _BARE_HEX.fullmatch(value):
            raise InvalidColor(spec) from None
        try:
            channels = ImageColor.getrgb(f"#{value}")
        except ValueError:
            raise InvalidColor(spec) from None

    red, green, blue = channels[:3]
    alpha = channels[3] if len(channels) == 4 else 255
    return Color(red=red / 255, green=green / 255, blue=blue / 255, alpha=alpha / 255)


def format_color(color: Color) -> str:
    """Format a color as an SVG ``rgb()`` value."""
    return "rgb({}, {}, {})".format(
        round(color.red * 255), round(color.green * 255), round(color.blue * 255)
    )


def srgb_to_linear(channel: float) -> float:
    if channel <= 0.03928:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def relative_luminance(color: Color) -> float:
    """CIE XYZ relative luminance of the color's RGB channels."""
    return (
        srgb_to_linear(color.red) * 0.2126
        + srgb_to_linear(color.green) * 0.7152
        + srgb_to_linear(color.blue) * 0.0722
    )


def accent_for_luminance(luminance: float) -> AccentColors:
    """Light text on dark shadow up to and including the threshold, dark text above."""
    if luminance <= BRIGHTNESS_THRESHOLD:
        return LIGHT_ACCENT
    return DARK_ACCENT


def select_accent(background: Color) -> AccentColors:
    """Pick the text/shadow pair that stays legible on ``background``."""
    return accent_for_luminance(relative_luminance(background))
