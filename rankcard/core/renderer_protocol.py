"""Boundary Protocols — contract between the card pipeline and the rendering shell.

Invariants:
    - Core never imports an HTTP client; rasterization is reached only through CardRenderer
    - render() returns the raw image bytes or raises; it never returns an error value

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no base class
"""

from typing import Protocol


class CardRenderer(Protocol):
    """Turns a complete HTML document into PNG bytes. Implemented by the shell."""
    async def render(self, html: str) -> bytes: ...
