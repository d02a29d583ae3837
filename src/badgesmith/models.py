"""Core data models for badgesmith."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Flavor(str, Enum):
    """Visual style preset of a badge."""

    FLAT = "flat"
    PLASTIC = "plastic"
    FLAT_SQUARE = "flat-square"
    SOCIAL = "social"
    FOR_THE_BADGE = "for-the-badge"


class TextTransform(str, Enum):
    NONE = "none"
    CAPITALIZE = "capitalize"
    UPPER = "upper"


@dataclass(frozen=True)
class FlavorSpec:
    """Constants that distinguish one flavor's layout and template."""
    badge_height: int
    corner_radius: int
    emits_logo_position: bool
    emits_ids: bool
    template: str
    text_transform: TextTransform = TextTransform.NONE


@dataclass(frozen=True)
class Color:
    """RGBA color with every channel in the [0, 1] range."""
    red: float
    green: float
    blue: float
    alpha: float = 1.0


@dataclass(frozen=True)
class TextMeasurement:
    """NFC-normalized text and its rendered pixel width."""
    text: str
    width: float


@dataclass(frozen=True)
class AccentColors:
    """Text and shadow colors readable against one background."""
    text_color: str
    shadow_color: str


@dataclass
class LayoutGeometry:
    """Computed badge geometry.

    Text widths and text x-centers are in tenths of a pixel; box widths and
    logo fields are in pixels.
    """
    badge_height: float
    label_text_width: float
    msg_text_width: float
    label_text_x: float
    msg_text_x: float
    label_total_width: float
    msg_total_width: float
    logo_width: float = 0.0
    logo_padding: float = 0.0
    logo_x: Optional[float] = None
    logo_y: Optional[float] = None

    @property
    def total_width(self) -> float:
        return self.label_total_width + self.msg_total_width


@dataclass
class Badge:
    """A badge render request."""
    label_text: str = "test"
    msg_text: str = "test"
    badge_link: str = ""
    label_link: str = ""
    msg_link: str = ""
    label_color: str = "#555"
    msg_color: str = "#007ec6"
    logo: str = ""
    embed_logo: bool = False
    badge_title: str = ""
    label_title: str = ""
    msg_title: str = ""
    flavor: Flavor = Flavor.FLAT
