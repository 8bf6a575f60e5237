"""API test fixtures — FastAPI test client with the renderer swapped for a fake.

Invariants:
    - No test reaches the network: get_renderer is always overridden
    - fake_renderer records every HTML document it was asked to render
"""

import pytest
from httpx import ASGITransport, AsyncClient

from rankcard.infrastructure.screenshot_client import get_renderer
from rankcard.main import app

FAKE_PNG = b"\x89PNG\r\n\x1a\nrank-card"


class FakeRenderer:
    """Stand-in renderer; set .error to make render() raise."""

    def __init__(self):
        self.calls: list[str] = []
        self.image = FAKE_PNG
        self.error: Exception | None = None

    async def render(self, html: str) -> bytes:
        self.calls.append(html)
        if self.error is not None:
            raise self.error
        return self.image


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
async def client(fake_renderer):
    """FastAPI test client with the renderer dependency overridden."""
    app.dependency_overrides[get_renderer] = lambda: fake_renderer

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
