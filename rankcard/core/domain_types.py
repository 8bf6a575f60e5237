"""Domain Types — named types and constants shared across the card pipeline.

Invariants:
    - REQUIRED_FIELDS order is the order validation reports missing fields
    - NUMERIC_FIELDS is a subset of REQUIRED_FIELDS
    - Default colors are 8-digit hex where an alpha channel is implied

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

CssColor = NewType("CssColor", str)
Percentage = NewType("Percentage", str)    # always 2 decimals, e.g. "42.50"


# ─── Field Sets ──────────────────────────────────────────────────

class CardField(str, Enum):
    """Inbound card payload keys."""
    RANK_TEXT = "rank_text"
    RANK = "rank"
    AVATAR = "avatar"
    USER_NAME = "user_name"
    MAX_XP = "max_xp"
    XP = "xp"
    AVATAR_BORDER = "avatar_border"
    BAR_PLACEHOLDER = "bar_placeholder"
    BAR = "bar"


REQUIRED_FIELDS: tuple[CardField, ...] = (
    CardField.RANK_TEXT,
    CardField.RANK,
    CardField.AVATAR,
    CardField.USER_NAME,
    CardField.MAX_XP,
    CardField.XP,
)

NUMERIC_FIELDS: tuple[CardField, ...] = (
    CardField.RANK,
    CardField.MAX_XP,
    CardField.XP,
)


# ─── Defaults ────────────────────────────────────────────────────

DEFAULT_AVATAR_BORDER = CssColor("#FFFFFF")
DEFAULT_BAR = CssColor("#FFFFFF")
DEFAULT_BAR_PLACEHOLDER = CssColor("#80808080")
PLACEHOLDER_ALPHA_SUFFIX = "80"
