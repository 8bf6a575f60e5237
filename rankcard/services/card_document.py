"""Card Document — HTML synthesis for the rank card.

Invariants:
    - Every interpolated value is HTML-escaped (Jinja2 autoescape)
    - Colors reaching the <style> block have already been reduced to CSS color syntax
    - The document is self-contained apart from the web font and the avatar image

Design Decisions:
    - Template file over an f-string: markup stays reviewable as HTML
    - Environment built once per process; templates are cached by Jinja2
"""

from functools import lru_cache

from jinja2 import Environment, PackageLoader, select_autoescape

from rankcard.schemas.card import CardRequest

CARD_TEMPLATE = "rank_card.html"


@lru_cache
def get_template_environment() -> Environment:
    return Environment(
        loader=PackageLoader("rankcard", "templates"),
        autoescape=select_autoescape(["html"]),
    )


def render_card_html(
    card: CardRequest,
    *,
    fallback_avatar_url: str,
    width: int = 900,
    height: int = 300,
) -> str:
    """Fill the card template with normalized card data."""
    template = get_template_environment().get_template(CARD_TEMPLATE)
    return template.render(
        card=card,
        fallback_avatar_url=fallback_avatar_url,
        width=width,
        height=height,
    )

