"""Logo references: pass through or embed local files as data URIs."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path

from badgesmith.errors import LogoError

DEFAULT_LOGO_MIME = "image/svg+xml"


def resolve_logo(logo: str, embed: bool = False) -> str:
    """Turn a logo reference into an href usable by an ``<image>`` element.

    Args:
        logo: Path, URL or ``data:`` URI. Empty means no logo.
        embed: Inline a local file as a base64 data URI instead of linking it.

    Raises:
        LogoError: If embedding is requested and ``logo`` is not a readable file.
    """
    if not logo or logo.startswith("data:"):
        return logo
    if not embed:
        return logo

    path = Path(logo)
    if not path.is_file():
        raise LogoError(f"Cannot embed logo {logo!r}: not a local file")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise LogoError(f"Cannot embed logo {logo!r}: {e}") from e

    mime = mimetypes.guess_type(path.name)[0] or DEFAULT_LOGO_MIME
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
