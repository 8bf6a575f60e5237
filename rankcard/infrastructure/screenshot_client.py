"""Screenshot Client — posts card HTML to the screenshot API and returns PNG bytes.

Invariants:
    - One attempt per render: no retry, no backoff
    - Non-2xx replies raise RenderFailedError; the body of a failed reply is never returned
    - Transport errors (connect, timeout) propagate as httpx exceptions
    - Card HTML travels as a data: URI, percent-encoded like encodeURIComponent
    - A single AsyncClient is shared by all requests and closed on shutdown

Design Decisions:
    - Module-level singleton initialized in lifespan, exposed through get_renderer()
      so routes can have it overridden in tests
"""

import logging
from urllib.parse import quote

import httpx

from rankcard.config import Settings
from rankcard.core.errors import RenderFailedError

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:text/html;charset=UTF-8,"
# encodeURIComponent leaves A-Z a-z 0-9 and these untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_data_uri(html: str) -> str:
    """Wrap an HTML document in a data: URI the screenshot service can load."""
    return DATA_URI_PREFIX + quote(html, safe=_URI_COMPONENT_SAFE)


class ScreenshotRenderer:
    """CardRenderer backed by an HTTP screenshot service."""

    def __init__(
        self,
        endpoint: str,
        *,
        delay_seconds: int = 2,
        width: int = 900,
        height: int = 300,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.endpoint = endpoint
        self.delay_seconds = delay_seconds
        self.width = width
        self.height = height
        self.client = client or httpx.AsyncClient(timeout=timeout_seconds)

    @classmethod
    def from_settings(
        cls, settings: Settings, client: httpx.AsyncClient | None = None,
    ) -> "ScreenshotRenderer":
        return cls(
            settings.render_service_url,
            delay_seconds=settings.render_delay_seconds,
            width=settings.card_width,
            height=settings.card_height,
            timeout_seconds=settings.render_timeout_seconds,
            client=client,
        )

    def build_payload(self, html: str) -> dict:
        return {
            "url": build_data_uri(html),
            "delay": self.delay_seconds,
            "width": self.width,
            "height": self.height,
        }

    async def render(self, html: str) -> bytes:
        """POST the document and return the image bytes unmodified."""
        response = await self.client.post(
            self.endpoint, json=self.build_payload(html),
        )
        if not response.is_success:
            logger.error(
                f"Screenshot service returned {response.status_code}",
                extra={"upstream_status": response.status_code},
            )
            raise RenderFailedError(response.status_code)
        return response.content

    async def aclose(self) -> None:
        await self.client.aclose()


# Singleton (initialized on startup)
screenshot_renderer: ScreenshotRenderer | None = None


def init_renderer(settings: Settings) -> ScreenshotRenderer:
    global screenshot_renderer
    screenshot_renderer = ScreenshotRenderer.from_settings(settings)
    return screenshot_renderer


async def close_renderer() -> None:
    global screenshot_renderer
    if screenshot_renderer is not None:
        await screenshot_renderer.aclose()
        screenshot_renderer = None


def get_renderer() -> ScreenshotRenderer:
    """FastAPI dependency for the card renderer."""
    if not screenshot_renderer:
        raise RuntimeError("Renderer not initialized")
    return screenshot_renderer
