"""Shared fixtures for badgesmith tests."""

from __future__ import annotations

import pytest

from badgesmith.fonts import load_font


@pytest.fixture(scope="session")
def font():
    """The embedded default face, loaded once for the whole session."""
    return load_font()
