"""YAML badge definition loader for badgesmith."""

from __future__ import annotations

from pathlib import Path

import yaml

from badgesmith.errors import BadgeError
from badgesmith.models import Badge, Flavor

VALID_FLAVORS = {f.value for f in Flavor}

_TEXT_FIELDS = {
    "badge_link": "badge_link",
    "label_link": "label_link",
    "message_link": "msg_link",
    "label_color": "label_color",
    "message_color": "msg_color",
    "logo": "logo",
    "title": "badge_title",
    "label_title": "label_title",
    "message_title": "msg_title",
}


class LoadError(BadgeError):
    """Raised when a badge file cannot be loaded or is invalid."""


def load_badge(path: str) -> Badge:
    """Load a Badge from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        A validated Badge.

    Raises:
        LoadError: If the file is missing, invalid YAML, or fails validation.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise LoadError(f"Badge file not found: {path}")

    try:
        with open(filepath, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LoadError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise LoadError(f"Badge file must contain a YAML mapping, got {type(data).__name__}")

    # Required fields
    if "message" not in data:
        raise LoadError("Badge missing required field: 'message'")

    flavor = data.get("flavor", Flavor.FLAT.value)
    if not isinstance(flavor, str) or flavor not in VALID_FLAVORS:
        raise LoadError(
            f"Badge has invalid flavor '{flavor}'. "
            f"Valid flavors: {', '.join(sorted(VALID_FLAVORS))}"
        )

    unknown = set(data) - set(_TEXT_FIELDS) - {"label", "message", "flavor", "embed_logo"}
    if unknown:
        raise LoadError(f"Badge has unknown field(s): {', '.join(sorted(unknown))}")

    embed_logo = data.get("embed_logo", False)
    if not isinstance(embed_logo, bool):
        raise LoadError("Badge field 'embed_logo' must be true or false")

    badge = Badge(
        label_text=_as_text(data, "label", ""),
        msg_text=_as_text(data, "message", ""),
        flavor=Flavor(flavor),
        embed_logo=embed_logo,
    )
    for key, attr in _TEXT_FIELDS.items():
        if key in data:
            setattr(badge, attr, _as_text(data, key, ""))
    return badge


def _as_text(data: dict, key: str, default: str) -> str:
    value = data.get(key, default)
    if value is None:
        return default
    # YAML reads `message: 1.0` as a float; badges want the literal text.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise LoadError(f"Badge field '{key}' must be a string, got {type(value).__name__}")
    return value
