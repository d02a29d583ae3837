"""SVG rendering: merge geometry, accent colors and text into flavor templates."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from html import escape
from typing import Callable, Dict, Optional

from PIL import ImageFont

from badgesmith.colors import format_color, parse_color, select_accent
from badgesmith.config import Settings
from badgesmith.fonts import get_font, measure_text
from badgesmith.layout import LOGO_HEIGHT, derive_layout, flavor_spec
from badgesmith.logo import resolve_logo
from badgesmith.models import AccentColors, Badge, Flavor, FlavorSpec, LayoutGeometry, TextTransform

logger = logging.getLogger(__name__)

FONT_FAMILY = "Verdana,Geneva,DejaVu Sans,sans-serif"


def uppercase_first_letter(text: str) -> str:
    return text[:1].upper() + text[1:]


def apply_text_transform(text: str, transform: TextTransform) -> str:
    if transform == TextTransform.CAPITALIZE:
        return uppercase_first_letter(text)
    if transform == TextTransform.UPPER:
        return text.upper()
    return text


@dataclass
class _Context:
    """Everything a template substitutes, already escaped and truncated."""
    spec: FlavorSpec
    geometry: LayoutGeometry
    label: str
    msg: str
    title: str
    label_title: str
    msg_title: str
    badge_link: str
    label_link: str
    msg_link: str
    label_color: str
    msg_color: str
    label_accent: AccentColors
    msg_accent: AccentColors
    logo: str
    id_smooth: str
    id_round: str

    @property
    def height(self) -> int:
        return int(self.geometry.badge_height)

    @property
    def left(self) -> int:
        return int(self.geometry.label_total_width)

    @property
    def right(self) -> int:
        return int(self.geometry.msg_total_width)

    @property
    def width(self) -> int:
        return self.left + self.right

    @property
    def baseline(self) -> int:
        # Tenths of a pixel: 140 on a 20px badge.
        return self.height * 5 + 40


def render_svg(
    badge: Badge,
    id_suffix: str = "",
    settings: Optional[Settings] = None,
    font: Optional[ImageFont.FreeTypeFont] = None,
) -> str:
    """Render ``badge`` as an SVG document.

    Args:
        badge: The badge to render.
        id_suffix: Appended to element ids so several badges can share a page.
        settings: Font and measurement settings. Defaults to ``Settings()``.
        font: Face to measure with. Defaults to the shared face for
            ``settings.font_path``.

    Raises:
        FontLoadError, InvalidColor, LogoError
    """
    settings = settings or Settings()
    flavor = Flavor(badge.flavor)
    spec = flavor_spec(flavor)
    if font is None:
        font = get_font(settings.font_path)

    label = measure_text(
        apply_text_transform(badge.label_text, spec.text_transform),
        settings.font_size, settings.kerning_px, font,
    )
    msg = measure_text(
        apply_text_transform(badge.msg_text, spec.text_transform),
        settings.font_size, settings.kerning_px, font,
    )
    logo = resolve_logo(badge.logo, badge.embed_logo)
    geometry = derive_layout(
        label.width, msg.width, flavor,
        has_logo=bool(logo), has_label_text=bool(label.text), has_msg_text=bool(msg.text),
    )
    label_color = parse_color(badge.label_color)
    msg_color = parse_color(badge.msg_color)

    if badge.badge_title:
        title = badge.badge_title
    elif label.text:
        title = f"{label.text}: {msg.text}"
    else:
        title = msg.text

    ctx = _Context(
        spec=spec,
        geometry=geometry,
        label=escape(label.text),
        msg=escape(msg.text),
        title=escape(title),
        label_title=escape(badge.label_title or label.text),
        msg_title=escape(badge.msg_title or msg.text),
        badge_link=escape(badge.badge_link),
        label_link=escape(badge.label_link),
        msg_link=escape(badge.msg_link),
        label_color=format_color(label_color),
        msg_color=format_color(msg_color),
        label_accent=select_accent(label_color),
        msg_accent=select_accent(msg_color),
        logo=escape(logo),
        id_smooth=f"smooth{id_suffix}" if spec.emits_ids else "",
        id_round=f"round{id_suffix}" if spec.emits_ids else "",
    )
    logger.debug(
        "Rendering %s badge %r/%r at %dx%d", flavor.value, label.text, msg.text, ctx.width, ctx.height
    )
    return _TEMPLATES[spec.template](ctx)


def render_flat(
    badge: Badge,
    id_suffix: str = "",
    settings: Optional[Settings] = None,
    font: Optional[ImageFont.FreeTypeFont] = None,
) -> str:
    return render_svg(replace(badge, flavor=Flavor.FLAT), id_suffix, settings, font)


def render_plastic(
    badge: Badge,
    id_suffix: str = "",
    settings: Optional[Settings] = None,
    font: Optional[ImageFont.FreeTypeFont] = None,
) -> str:
    return render_svg(replace(badge, flavor=Flavor.PLASTIC), id_suffix, settings, font)


def render_flat_square(
    badge: Badge,
    id_suffix: str = "",
    settings: Optional[Settings] = None,
    font: Optional[ImageFont.FreeTypeFont] = None,
) -> str:
    return render_svg(replace(badge, flavor=Flavor.FLAT_SQUARE), id_suffix, settings, font)


# ── template fragments ──


def _texts(ctx: _Context, shadow: bool) -> str:
    g = ctx.geometry
    parts = []
    segments = (
        (ctx.label, g.label_text_x, g.label_text_width, ctx.label_accent),
        (ctx.msg, g.msg_text_x, g.msg_text_width, ctx.msg_accent),
    )
    for text, x, text_width, accent in segments:
        if not text:
            continue
        x, text_width = int(x), int(text_width)
        if shadow:
            parts.append(
                f'    <text aria-hidden="true" x="{x}" y="{ctx.baseline + 10}" fill="{accent.shadow_color}" '
                f'fill-opacity=".3" transform="scale(.1)" textLength="{text_width}">{text}</text>\n'
            )
        parts.append(
            f'    <text x="{x}" y="{ctx.baseline}" fill="{accent.text_color}" '
            f'transform="scale(.1)" textLength="{text_width}">{text}</text>\n'
        )
    return "".join(parts)


def _logo(ctx: _Context, default_y: int) -> str:
    if not ctx.logo:
        return ""
    g = ctx.geometry
    x = int(g.logo_x) if g.logo_x is not None else 5
    y = int(g.logo_y) if g.logo_y is not None else default_y
    return (
        f'    <image x="{x}" y="{y}" width="{int(g.logo_width)}" height="{int(LOGO_HEIGHT)}" '
        f'xlink:href="{ctx.logo}"/>\n'
    )


def _segment_links(ctx: _Context) -> str:
    if ctx.badge_link:
        return ""
    parts = []
    if ctx.label_link and ctx.left:
        parts.append(
            f'  <a target="_blank" xlink:href="{ctx.label_link}">\n'
            f'    <title>{ctx.label_title}</title>\n'
            f'    <rect width="{ctx.left}" height="{ctx.height}" fill="rgba(0,0,0,0)"/>\n'
            f'  </a>\n'
        )
    if ctx.msg_link:
        parts.append(
            f'  <a target="_blank" xlink:href="{ctx.msg_link}">\n'
            f'    <title>{ctx.msg_title}</title>\n'
            f'    <rect x="{ctx.left}" width="{ctx.right}" height="{ctx.height}" fill="rgba(0,0,0,0)"/>\n'
            f'  </a>\n'
        )
    return "".join(parts)


def _document(ctx: _Context, body: str) -> str:
    if ctx.badge_link:
        body = f'  <a target="_blank" xlink:href="{ctx.badge_link}">\n{body}  </a>\n'
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
        f'width="{ctx.width}" height="{ctx.height}" role="img" aria-label="{ctx.title}">\n'
        f'  <title>{ctx.title}</title>\n'
        f'{body}'
        f'{_segment_links(ctx)}'
        f'</svg>\n'
    )


def _text_group(ctx: _Context, logo_default_y: int, shadow: bool) -> str:
    return (
        f'  <g text-anchor="middle" font-family="{FONT_FAMILY}" '
        f'text-rendering="geometricPrecision" font-size="110">\n'
        f'{_logo(ctx, logo_default_y)}'
        f'{_texts(ctx, shadow)}'
        f'  </g>\n'
    )


def _flat_template(ctx: _Context) -> str:
    body = (
        f'  <linearGradient id="{ctx.id_smooth}" x2="0" y2="100%">\n'
        f'    <stop offset="0" stop-color="#bbb" stop-opacity=".1"/>\n'
        f'    <stop offset="1" stop-opacity=".1"/>\n'
        f'  </linearGradient>\n'
        f'  <clipPath id="{ctx.id_round}">\n'
        f'    <rect width="{ctx.width}" height="{ctx.height}" rx="{ctx.spec.corner_radius}" fill="#fff"/>\n'
        f'  </clipPath>\n'
        f'  <g clip-path="url(#{ctx.id_round})">\n'
        f'    <rect width="{ctx.left}" height="{ctx.height}" fill="{ctx.label_color}"/>\n'
        f'    <rect x="{ctx.left}" width="{ctx.right}" height="{ctx.height}" fill="{ctx.msg_color}"/>\n'
        f'    <rect width="{ctx.width}" height="{ctx.height}" fill="url(#{ctx.id_smooth})"/>\n'
        f'  </g>\n'
        f'{_text_group(ctx, 3, shadow=True)}'
    )
    return _document(ctx, body)


def _plastic_template(ctx: _Context) -> str:
    body = (
        f'  <linearGradient id="{ctx.id_smooth}" x2="0" y2="100%">\n'
        f'    <stop offset="0" stop-color="#fff" stop-opacity=".7"/>\n'
        f'    <stop offset=".1" stop-color="#aaa" stop-opacity=".1"/>\n'
        f'    <stop offset=".9" stop-color="#000" stop-opacity=".3"/>\n'
        f'    <stop offset="1" stop-color="#000" stop-opacity=".5"/>\n'
        f'  </linearGradient>\n'
        f'  <clipPath id="{ctx.id_round}">\n'
        f'    <rect width="{ctx.width}" height="{ctx.height}" rx="{ctx.spec.corner_radius}" fill="#fff"/>\n'
        f'  </clipPath>\n'
        f'  <g clip-path="url(#{ctx.id_round})">\n'
        f'    <rect width="{ctx.left}" height="{ctx.height}" fill="{ctx.label_color}"/>\n'
        f'    <rect x="{ctx.left}" width="{ctx.right}" height="{ctx.height}" fill="{ctx.msg_color}"/>\n'
        f'    <rect width="{ctx.width}" height="{ctx.height}" fill="url(#{ctx.id_smooth})"/>\n'
        f'  </g>\n'
        f'{_text_group(ctx, 2, shadow=True)}'
    )
    return _document(ctx, body)


def _flat_square_template(ctx: _Context) -> str:
    body = (
        f'  <g shape-rendering="crispEdges">\n'
        f'    <rect width="{ctx.left}" height="{ctx.height}" fill="{ctx.label_color}"/>\n'
        f'    <rect x="{ctx.left}" width="{ctx.right}" height="{ctx.height}" fill="{ctx.msg_color}"/>\n'
        f'  </g>\n'
        f'{_text_group(ctx, 3, shadow=False)}'
    )
    return _document(ctx, body)


_TEMPLATES: Dict[str, Callable[[_Context], str]] = {
    "flat": _flat_template,
    "plastic": _plastic_template,
    "flat-square": _flat_square_template,
}
