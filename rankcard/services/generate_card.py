"""Card Generation — validate, template and rasterize one card request.

Invariants:
    - Received → Validated → Rendered; any failure leaves the pipeline immediately
    - The renderer is called at most once, and only after validation passed
    - Image bytes are returned exactly as the renderer produced them
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

from rankcard.config import Settings
from rankcard.core.card_fields import normalize_card_request
from rankcard.core.renderer_protocol import CardRenderer
from rankcard.schemas.card import CardRequest
from rankcard.services.card_document import render_card_html

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedCard:
    card: CardRequest
    html: str
    image: bytes


async def generate_card(
    payload: Any, renderer: CardRenderer, settings: Settings,
) -> GeneratedCard:
    """Run the full pipeline for a decoded JSON payload."""
    card = normalize_card_request(payload)
    html = render_card_html(
        card,
        fallback_avatar_url=settings.fallback_avatar_url,
        width=settings.card_width,
        height=settings.card_height,
    )

    started = time.monotonic()
    image = await renderer.render(html)
    logger.info(
        f"Rendered card for {card.user_name} ({card.percentage}%)",
        extra={
            "user_name": card.user_name,
            "duration_ms": int((time.monotonic() - started) * 1000),
            "image_bytes": len(image),
        },
    )
    return GeneratedCard(card=card, html=html, image=image)
