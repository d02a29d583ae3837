"""Text metrics: measure rendered string widths against one shared font."""

from __future__ import annotations

import logging
import threading
import unicodedata
from typing import Dict, Optional

from PIL import ImageFont

from badgesmith.config import DEFAULT_FONT_SIZE, DEFAULT_KERNING_PX
from badgesmith.errors import FontLoadError
from badgesmith.models import TextMeasurement

logger = logging.getLogger(__name__)

# The face is loaded once at this size and advances are scaled down linearly,
# so hinting never rounds the advance of an 11px glyph.
REFERENCE_SIZE = 1000

_FONT: Optional[ImageFont.FreeTypeFont] = None
_PATH_FONTS: Dict[str, ImageFont.FreeTypeFont] = {}
_FONT_LOCK = threading.Lock()


def load_font(path: Optional[str] = None) -> ImageFont.FreeTypeFont:
    """Load a TrueType face at the reference size.

    Without a path, Pillow's embedded default face is used.

    Raises:
        FontLoadError: If the face cannot be read or FreeType is unavailable.
    """
    try:
        if path:
            font = ImageFont.truetype(path, REFERENCE_SIZE, layout_engine=ImageFont.Layout.BASIC)
        else:
            font = ImageFont.load_default(size=REFERENCE_SIZE)
            # load_default picks RAQM when available; advances must not be shaped.
            if isinstance(font, ImageFont.FreeTypeFont) and font.layout_engine != ImageFont.Layout.BASIC:
                font = font.font_variant(layout_engine=ImageFont.Layout.BASIC)
    except (OSError, ImportError, ValueError) as e:
        raise FontLoadError(f"Cannot load font {path or '<embedded>'}: {e}") from e

    if not isinstance(font, ImageFont.FreeTypeFont):
        raise FontLoadError("Pillow was built without FreeType; no scalable font available")
    logger.debug("Loaded font %s %s", path or "<embedded>", font.getname())
    return font


def get_font(path: Optional[str] = None) -> ImageFont.FreeTypeFont:
    """Return a shared font, loading it on first use.

    Without a path this is the process-wide default face. Each configured
    path is loaded once and cached separately.
    """
    global _FONT
    if path:
        with _FONT_LOCK:
            if path not in _PATH_FONTS:
                _PATH_FONTS[path] = load_font(path)
            return _PATH_FONTS[path]
    if _FONT is None:
        with _FONT_LOCK:
            if _FONT is None:
                _FONT = load_font(path)
    return _FONT


def set_font(font: ImageFont.FreeTypeFont) -> None:
    """Install ``font`` as the shared face. It must be loaded at REFERENCE_SIZE."""
    global _FONT
    with _FONT_LOCK:
        _FONT = font


def reset_font() -> None:
    global _FONT
    with _FONT_LOCK:
        _FONT = None
        _PATH_FONTS.clear()


def measure_text(
    text: str,
    font_size: float = DEFAULT_FONT_SIZE,
    kerning_px: float = DEFAULT_KERNING_PX,
    font: Optional[ImageFont.FreeTypeFont] = None,
) -> TextMeasurement:
    """Measure ``text`` as a single unwrapped line.

    The text is NFC-normalized first and the normalized form is returned with
    the width, so the rendered string is the one that was measured.

    The truncated width is always odd: an even width gets one extra pixel so
    centered text never lands on a half-pixel seam.
    """
    normalized = unicodedata.normalize("NFC", text)
    face = font if font is not None else get_font()

    width = face.getlength(normalized) * font_size / REFERENCE_SIZE
    # One allowance per code point of the normalized text.
    width += len(normalized) * kerning_px
    if int(width) % 2 == 0:
        width += 1.0
    return TextMeasurement(text=normalized, width=width)
