"""Tests for badgesmith.render."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest
from PIL import ImageFont

from badgesmith import fonts
from badgesmith.colors import InvalidColor
from badgesmith.config import Settings
from badgesmith.errors import LogoError
from badgesmith.fonts import measure_text, reset_font, set_font
from badgesmith.layout import derive_layout
from badgesmith.models import Badge, Flavor, TextTransform
from badgesmith.render import (
    apply_text_transform,
    render_flat,
    render_flat_square,
    render_plastic,
    render_svg,
    uppercase_first_letter,
)

SVG_NS = "{http://www.w3.org/2000/svg}"


def _parse(svg: str) -> ET.Element:
    return ET.fromstring(svg)


def _texts(root: ET.Element) -> list:
    return [t.text for t in root.iter(f"{SVG_NS}text")]


def test_plain_flat_badge(font):
    badge = Badge(label_text="version", msg_text="1.2.3", label_color="#555555", msg_color="#007ec6")
    svg = render_svg(badge, id_suffix="abc1234", font=font)
    root = _parse(svg)

    label = measure_text("version", font=font)
    msg = measure_text("1.2.3", font=font)
    g = derive_layout(label.width, msg.width, Flavor.FLAT, False, True, True)
    assert g.label_total_width > 0 and g.msg_total_width > 0

    assert root.get("width") == str(int(g.label_total_width) + int(g.msg_total_width))
    assert root.get("height") == "20"
    assert 'id="smoothabc1234"' in svg
    assert 'clip-path="url(#roundabc1234)"' in svg
    assert 'fill="rgb(85, 85, 85)"' in svg
    assert 'fill="rgb(0, 126, 198)"' in svg
    assert _texts(root) == ["version", "version", "1.2.3", "1.2.3"]
    assert 'fill="#fff"' in svg and 'fill="#010101"' in svg
    assert "#333" not in svg


def test_title_defaults_to_label_and_message(font):
    root = _parse(render_svg(Badge(label_text="build", msg_text="passing"), font=font))
    assert root.find(f"{SVG_NS}title").text == "build: passing"
    assert root.get("aria-label") == "build: passing"


def test_explicit_title(font):
    root = _parse(render_svg(Badge(label_text="build", msg_text="passing", badge_title="CI"), font=font))
    assert root.find(f"{SVG_NS}title").text == "CI"


def test_text_is_escaped(font):
    svg = render_svg(Badge(label_text="a<b & c", msg_text='"q"'), font=font)
    assert "a&lt;b &amp; c" in svg
    assert _texts(_parse(svg))[0] == "a<b & c"


def test_text_is_nfc_normalized(font):
    svg = render_svg(Badge(label_text="röck döts", msg_text="metal"), font=font)
    assert "röck döts" in _texts(_parse(svg))


def test_light_background_gets_dark_text(font):
    svg = render_svg(Badge(label_text="a", msg_text="b", msg_color="#eee"), font=font)
    assert 'fill="#333"' in svg
    assert 'fill="#ccc"' in svg


def test_empty_label_renders_single_segment(font):
    svg = render_svg(Badge(label_text="", msg_text="build"), font=font)
    root = _parse(svg)
    assert _texts(root) == ["build", "build"]
    assert '<rect width="0" height="20"' in svg
    assert root.find(f"{SVG_NS}title").text == "build"


def test_plastic_flavor(font):
    svg = render_svg(Badge(label_text="version", msg_text="1.2.3", flavor=Flavor.PLASTIC), id_suffix="x", font=font)
    root = _parse(svg)
    assert root.get("height") == "18"
    assert 'rx="4"' in svg
    assert 'stop-color="#aaa"' in svg


def test_flat_square_has_no_ids_or_shadow(font):
    svg = render_svg(Badge(label_text="version", msg_text="1.2.3", flavor=Flavor.FLAT_SQUARE), id_suffix="x", font=font)
    assert "smooth" not in svg and "clip-path" not in svg
    assert 'shape-rendering="crispEdges"' in svg
    assert _texts(_parse(svg)) == ["version", "1.2.3"]


def test_social_capitalizes_label(font):
    svg = render_svg(Badge(label_text="github", msg_text="stars", flavor=Flavor.SOCIAL), font=font)
    assert _texts(_parse(svg))[0] == "Github"


def test_for_the_badge_upper_cases(font):
    svg = render_svg(Badge(label_text="version", msg_text="1.2.3-rc", flavor="for-the-badge"), font=font)
    root = _parse(svg)
    assert root.get("height") == "28"
    assert _texts(root) == ["VERSION", "1.2.3-RC"]


def test_logo_link_is_passed_through(font):
    svg = render_svg(Badge(label_text="build", msg_text="ok", logo="https://example.com/logo.svg"), font=font)
    image = _parse(svg).find(f".//{SVG_NS}image")
    assert image is not None
    assert image.get("{http://www.w3.org/1999/xlink}href") == "https://example.com/logo.svg"
    assert image.get("x") == "5" and image.get("y") == "3" and image.get("width") == "14"


def test_logo_is_embedded(font, tmp_path):
    logo = tmp_path / "logo.svg"
    logo.write_text('<svg xmlns="http://www.w3.org/2000/svg"/>')
    svg = render_svg(Badge(label_text="", msg_text="build", logo=str(logo), embed_logo=True), font=font)
    assert 'xlink:href="data:image/svg+xml;base64,' in svg


def test_logo_position_falls_back_for_plastic(font):
    svg = render_svg(Badge(msg_text="ok", logo="data:image/png;base64,AA==", flavor=Flavor.PLASTIC), font=font)
    image = _parse(svg).find(f".//{SVG_NS}image")
    assert image.get("y") == "2"


def test_missing_logo_raises(font, tmp_path):
    with pytest.raises(LogoError):
        render_svg(Badge(logo=str(tmp_path / "missing.svg"), embed_logo=True), font=font)


def test_invalid_color_raises(font):
    with pytest.raises(InvalidColor):
        render_svg(Badge(label_color="not-a-color"), font=font)


def test_badge_link_wraps_everything(font):
    svg = render_svg(
        Badge(badge_link="https://example.com/?a=1&b=2", label_link="https://ignored"),
        font=font,
    )
    assert svg.count("<a ") == 1
    assert 'xlink:href="https://example.com/?a=1&amp;b=2"' in svg


def test_segment_links(font):
    svg = render_svg(
        Badge(label_link="https://example.com", msg_link="https://google.com", msg_title="Search"),
        font=font,
    )
    root = _parse(svg)
    links = list(root.iter(f"{SVG_NS}a"))
    assert len(links) == 2
    assert links[1].find(f"{SVG_NS}title").text == "Search"


def test_mandarin_badge(font):
    svg = render_svg(Badge(label_text="版", msg_text="不知道"), font=font)
    assert _texts(_parse(svg)) == ["版", "版", "不知道", "不知道"]


def test_arabic_badge(font):
    svg = render_svg(Badge(label_text="اختبار", msg_text="انا لا اعرف"), font=font)
    assert int(_parse(svg).get("width")) > 0


def test_render_flat_does_not_mutate_badge(font):
    set_font(font)
    try:
        badge = Badge(flavor=Flavor.PLASTIC)
        svg = render_flat(badge, id_suffix="z")
    finally:
        reset_font()
    assert badge.flavor == Flavor.PLASTIC
    assert 'height="20"' in svg


def test_text_transforms():
    assert uppercase_first_letter("") == ""
    assert uppercase_first_letter("élan vital") == "Élan vital"
    assert apply_text_transform("abc", TextTransform.NONE) == "abc"
    assert apply_text_transform("abc", TextTransform.UPPER) == "ABC"


def test_flavor_wrappers(font):
    plastic = render_plastic(Badge(), id_suffix="p", font=font)
    square = render_flat_square(Badge(), "s", Settings(), font)
    flat = render_flat(Badge(flavor=Flavor.PLASTIC), id_suffix="f", settings=Settings(), font=font)
    assert 'id="smoothp"' in plastic and 'height="18"' in plastic
    assert "crispEdges" in square
    assert 'id="smoothf"' in flat and 'height="20"' in flat


def test_font_path_setting_is_honored_after_default_load(monkeypatch, font):
    wide = ImageFont.load_default(size=fonts.REFERENCE_SIZE * 2)
    monkeypatch.setattr(fonts, "load_font", lambda path=None: wide if path == "wide.ttf" else font)
    reset_font()
    set_font(font)
    try:
        badge = Badge(label_text="coverage", msg_text="97%")
        narrow_svg = render_svg(badge, settings=Settings())
        wide_svg = render_svg(badge, settings=Settings(font_path="wide.ttf"))
        again_svg = render_svg(badge, settings=Settings())
    finally:
        reset_font()
    assert int(_parse(wide_svg).get("width")) > int(_parse(narrow_svg).get("width"))
    assert again_svg == narrow_svg
