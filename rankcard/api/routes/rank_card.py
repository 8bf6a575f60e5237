"""Rank Card Route — POST / turns a JSON rank payload into a PNG card.

Invariants:
    - Only POST is served on /; every other method gets 405 {"error": "Method not allowed"}
    - 400s come from validation, before the renderer is touched
    - Any non-domain exception (bad JSON, network failure) becomes a 500 carrying its message
    - Success bodies are the renderer's bytes, image/png, with a fixed Cache-Control

Design Decisions:
    - Body read as raw JSON instead of a Pydantic body model: validation order and
      messages are part of the public contract and live in core/card_fields.py
    - Renderer and settings injected with Depends so tests swap them out
"""

from fastapi import APIRouter, Depends, Request, Response

from rankcard.config import Settings, get_settings
from rankcard.core.errors import (
    MethodNotAllowedError,
    RankCardError,
    UnhandledPipelineError,
)
from rankcard.core.renderer_protocol import CardRenderer
from rankcard.infrastructure.screenshot_client import get_renderer
from rankcard.schemas.card import ErrorResponse
from rankcard.services.generate_card import generate_card

router = APIRouter(tags=["rank-card"])

IMAGE_MEDIA_TYPE = "image/png"
_REJECTED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.post(
    "/",
    response_class=Response,
    responses={
        200: {"content": {IMAGE_MEDIA_TYPE: {}}, "description": "Rendered card"},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def create_rank_card(
    request: Request,
    renderer: CardRenderer = Depends(get_renderer),
    settings: Settings = Depends(get_settings),
):
    """Validate the payload, render the card and return the PNG."""
    try:
        payload = await request.json()
        generated = await generate_card(payload, renderer, settings)
    except RankCardError:
        raise
    except Exception as e:
        raise UnhandledPipelineError(str(e) or type(e).__name__) from e

    return Response(
        content=generated.image,
        media_type=IMAGE_MEDIA_TYPE,
        headers={"Cache-Control": settings.cache_control},
    )


@router.api_route(
    "/", methods=_REJECTED_METHODS, include_in_schema=False,
)
async def reject_method(request: Request):
    raise MethodNotAllowedError(request.method)
