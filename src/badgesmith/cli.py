"""CLI entry point for badgesmith."""

from __future__ import annotations

import logging
import sys
import uuid
from typing import Optional

import click

from badgesmith import __version__
from badgesmith.colors import parse_color, relative_luminance, select_accent
from badgesmith.config import ConfigError, Settings
from badgesmith.errors import BadgeError
from badgesmith.fonts import get_font, measure_text
from badgesmith.loader import LoadError, load_badge
from badgesmith.models import Badge, Flavor
from badgesmith.render import render_svg

FLAVOR_NAMES = [f.value for f in Flavor]


@click.group()
@click.version_option(version=__version__, prog_name="badgesmith")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """badgesmith — render status badges as SVG."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def make_id_suffix() -> str:
    """Random suffix keeping element ids unique across badges on one page."""
    return uuid.uuid4().hex[:7]


def _settings(font: Optional[str]) -> Settings:
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    if font:
        settings.font_path = font
    return settings


def _font(settings: Settings):
    return get_font(settings.font_path)


def _emit(svg: str, output: Optional[str], open_in_browser: bool) -> None:
    if output is None:
        click.echo(svg, nl=False)
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(svg)
    click.echo(f"Badge written to {output}", err=True)
    if open_in_browser:
        click.launch(output)


def _render(badge: Badge, settings: Settings, id_suffix: Optional[str]) -> str:
    try:
        return render_svg(
            badge,
            id_suffix=make_id_suffix() if id_suffix is None else id_suffix,
            settings=settings,
            font=_font(settings),
        )
    except BadgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("label")
@click.argument("message")
@click.option("--flavor", type=click.Choice(FLAVOR_NAMES), default="flat", show_default=True, help="Badge style.")
@click.option("--label-color", default="#555", show_default=True, help="Label segment color.")
@click.option("--message-color", "msg_color", default="#007ec6", show_default=True, help="Message segment color.")
@click.option("--logo", default="", help="Logo path, URL or data URI.")
@click.option("--embed-logo", is_flag=True, help="Inline a local logo file as a data URI.")
@click.option("--link", "badge_link", default="", help="Link for the whole badge.")
@click.option("--label-link", default="", help="Link for the label segment.")
@click.option("--message-link", "msg_link", default="", help="Link for the message segment.")
@click.option("--title", "badge_title", default="", help="Badge title (defaults to 'label: message').")
@click.option("--label-title", default="", help="Title of the label link.")
@click.option("--message-title", "msg_title", default="", help="Title of the message link.")
@click.option("--font", type=click.Path(exists=True, dir_okay=False), default=None, help="TrueType font to measure with.")
@click.option("--id-suffix", default=None, help="Element id suffix (random by default).")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), default=None, help="Write to file instead of stdout.")
@click.option("--open", "open_in_browser", is_flag=True, help="Open the written file afterwards.")
def render(
    label: str, message: str, flavor: str, label_color: str, msg_color: str, logo: str,
    embed_logo: bool, badge_link: str, label_link: str, msg_link: str, badge_title: str,
    label_title: str, msg_title: str, font: Optional[str], id_suffix: Optional[str],
    output: Optional[str], open_in_browser: bool,
) -> None:
    """Render a badge from LABEL and MESSAGE. Pass '' as LABEL for a single segment."""
    badge = Badge(
        label_text=label,
        msg_text=message,
        badge_link=badge_link,
        label_link=label_link,
        msg_link=msg_link,
        label_color=label_color,
        msg_color=msg_color,
        logo=logo,
        embed_logo=embed_logo,
        badge_title=badge_title,
        label_title=label_title,
        msg_title=msg_title,
        flavor=Flavor(flavor),
    )
    svg = _render(badge, _settings(font), id_suffix)
    _emit(svg, output, open_in_browser)


@cli.command()
@click.argument("badge_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--font", type=click.Path(exists=True, dir_okay=False), default=None, help="TrueType font to measure with.")
@click.option("--id-suffix", default=None, help="Element id suffix (random by default).")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), default=None, help="Write to file instead of stdout.")
@click.option("--open", "open_in_browser", is_flag=True, help="Open the written file afterwards.")
def build(
    badge_file: str, font: Optional[str], id_suffix: Optional[str],
    output: Optional[str], open_in_browser: bool,
) -> None:
    """Render a badge described by a YAML file."""
    try:
        badge = load_badge(badge_file)
    except LoadError as e:
        click.echo(f"Error loading badge: {e}", err=True)
        sys.exit(1)
    svg = _render(badge, _settings(font), id_suffix)
    _emit(svg, output, open_in_browser)


@cli.command()
@click.argument("text")
@click.option("--font", type=click.Path(exists=True, dir_okay=False), default=None, help="TrueType font to measure with.")
@click.option("--size", type=float, default=None, help="Font size in pixels.")
@click.option("--no-kerning", is_flag=True, help="Skip the per-character spacing allowance.")
def measure(text: str, font: Optional[str], size: Optional[float], no_kerning: bool) -> None:
    """Print the rendered width of TEXT."""
    settings = _settings(font)
    if size is not None:
        if size <= 0:
            click.echo("Error: --size must be positive.", err=True)
            sys.exit(1)
        settings.font_size = size
    try:
        m = measure_text(
            text,
            font_size=settings.font_size,
            kerning_px=0.0 if no_kerning else settings.kerning_px,
            font=_font(settings),
        )
    except BadgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"{m.text}\t{m.width:.2f}")


@cli.command()
@click.argument("color")
def accent(color: str) -> None:
    """Print the text and shadow colors used on COLOR."""
    try:
        parsed = parse_color(color)
    except BadgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    colors = select_accent(parsed)
    click.echo(f"luminance: {relative_luminance(parsed):.4f}")
    click.echo(f"text: {colors.text_color}")
    click.echo(f"shadow: {colors.shadow_color}")
