"""Card Schemas — normalized card data and the error envelope.

Invariants:
    - CardRequest is only built by core.card_fields.normalize_card_request
      (after validation), so every field is already non-empty
    - percentage is a 2-decimal string, never a float

Design Decisions:
    - Numeric fields kept as display strings: the card shows them exactly as sent
    - ErrorResponse exists for OpenAPI docs; handlers build the dict directly
"""

from pydantic import BaseModel, ConfigDict, Field


class CardRequest(BaseModel):
    """Validated, defaulted card data ready for templating."""
    model_config = ConfigDict(frozen=True)

    rank_text: str = Field(min_length=1)
    rank: str = Field(min_length=1)
    avatar: str = Field(min_length=1)
    user_name: str = Field(min_length=1)
    max_xp: str = Field(min_length=1)
    xp: str = Field(min_length=1)
    avatar_border: str
    bar_placeholder: str
    bar: str
    percentage: str = Field(pattern=r"^-?\d+\.\d{2}$")


class ErrorResponse(BaseModel):
    """Error body returned on every non-200 response."""
    error: str
