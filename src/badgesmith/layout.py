"""Badge geometry derived from measured text widths and flavor constants."""

from __future__ import annotations

from typing import Dict

from badgesmith.models import Flavor, FlavorSpec, LayoutGeometry, TextTransform

HORIZONTAL_PADDING = 5.0
LOGO_WIDTH = 14.0
LOGO_HEIGHT = 14.0
LOGO_PADDING = 3.0
# Templates address text in tenths of a pixel.
SVG_SCALE = 10.0

FLAVOR_SPECS: Dict[Flavor, FlavorSpec] = {
    Flavor.FLAT: FlavorSpec(
        badge_height=20, corner_radius=3,
        emits_logo_position=True, emits_ids=True, template="flat",
    ),
    Flavor.PLASTIC: FlavorSpec(
        badge_height=18, corner_radius=4,
        emits_logo_position=False, emits_ids=True, template="plastic",
    ),
    Flavor.FLAT_SQUARE: FlavorSpec(
        badge_height=20, corner_radius=0,
        emits_logo_position=False, emits_ids=False, template="flat-square",
    ),
    Flavor.SOCIAL: FlavorSpec(
        badge_height=20, corner_radius=3,
        emits_logo_position=True, emits_ids=True, template="flat",
        text_transform=TextTransform.CAPITALIZE,
    ),
    Flavor.FOR_THE_BADGE: FlavorSpec(
        badge_height=28, corner_radius=0,
        emits_logo_position=True, emits_ids=False, template="flat-square",
        text_transform=TextTransform.UPPER,
    ),
}


def flavor_spec(flavor: Flavor) -> FlavorSpec:
    return FLAVOR_SPECS[Flavor(flavor)]


def derive_layout(
    label_width: float,
    msg_width: float,
    flavor: Flavor,
    has_logo: bool,
    has_label_text: bool,
    has_msg_text: bool,
) -> LayoutGeometry:
    """Compute box widths and text/logo offsets for a two-segment badge.

    Without label text the label box collapses to zero and the message box
    takes over the logo, if any.
    """
    spec = flavor_spec(flavor)
    badge_height = float(spec.badge_height)

    logo_width = 0.0
    logo_padding = 0.0
    logo_x = None
    logo_y = None
    if has_logo:
        logo_width = LOGO_WIDTH
        if has_label_text:
            logo_padding = LOGO_PADDING
        if spec.emits_logo_position:
            logo_x = HORIZONTAL_PADDING
            logo_y = (badge_height - LOGO_HEIGHT) * 0.5
    total_logo_width = logo_width + logo_padding

    label_total_width = 0.0
    if has_label_text:
        label_total_width = label_width + 2 * HORIZONTAL_PADDING + total_logo_width

    label_text_margin = total_logo_width + 1.0
    msg_text_margin = label_total_width
    # Adjacent segments share one pixel of border.
    if has_msg_text:
        msg_text_margin -= 1.0
    if not has_label_text:
        if has_logo:
            msg_text_margin += logo_width + HORIZONTAL_PADDING
        else:
            msg_text_margin += 1.0

    msg_total_width = msg_width + 2 * HORIZONTAL_PADDING
    if has_logo and not has_label_text:
        msg_total_width += logo_width + HORIZONTAL_PADDING - 1.0

    label_text_x = label_text_margin + 0.5 * label_width + HORIZONTAL_PADDING
    msg_text_x = msg_text_margin + 0.5 * msg_width + HORIZONTAL_PADDING

    return LayoutGeometry(
        badge_height=badge_height,
        label_text_width=label_width * SVG_SCALE,
        msg_text_width=msg_width * SVG_SCALE,
        label_text_x=label_text_x * SVG_SCALE,
        msg_text_x=msg_text_x * SVG_SCALE,
        label_total_width=label_total_width,
        msg_total_width=msg_total_width,
        logo_width=logo_width,
        logo_padding=logo_padding,
        logo_x=logo_x,
        logo_y=logo_y,
    )
