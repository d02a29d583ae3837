"""badgesmith — shields-style SVG badges with measured text geometry."""

__version__ = "0.3.0"

from badgesmith.colors import InvalidColor, parse_color, select_accent
from badgesmith.errors import BadgeError, FontLoadError, LogoError
from badgesmith.fonts import measure_text
from badgesmith.layout import derive_layout
from badgesmith.models import AccentColors, Badge, Color, Flavor, LayoutGeometry, TextMeasurement
from badgesmith.render import render_svg

__all__ = [
    "AccentColors",
    "Badge",
    "BadgeError",
    "Color",
    "Flavor",
    "FontLoadError",
    "InvalidColor",
    "LayoutGeometry",
    "LogoError",
    "TextMeasurement",
    "derive_layout",
    "measure_text",
    "parse_color",
    "render_svg",
    "select_accent",
]
