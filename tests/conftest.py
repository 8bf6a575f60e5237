"""Root conftest — shared test configuration."""

import os

import pytest

# Ensure tests never reach the real screenshot service
os.environ.setdefault("RENDER_SERVICE_URL", "http://renderer.test/screenshot")
os.environ.setdefault("LOG_FORMAT", "text")

from rankcard.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop the cached Settings so monkeypatched env vars take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def card_payload() -> dict:
    """A valid inbound card payload."""
    return {
        "rank_text": "Gold",
        "rank": 3,
        "avatar": "http://x/a.png",
        "user_name": "Ann",
        "max_xp": 1000,
        "xp": 250,
    }
