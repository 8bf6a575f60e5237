"""Card Field Rules — validation, defaulting and percentage for card payloads.

Invariants:
    - Checks run in a fixed order: presence (all six fields), numeric, range
    - The first failing check raises; nothing after it runs
    - Zero counts as missing for required fields (kept for client compatibility)
    - Range check compares the leading integer part of xp and max_xp
    - Pure functions only: no IO, no logging

Design Decisions:
    - Numbers are displayed the way JSON clients send them: 250.0 shows as "250"
    - Numeric strings are plain ASCII decimals (optional sign, fraction, exponent);
      hex, underscores, non-ASCII digits, NaN and infinities are rejected
    - Colors land inside a <style> block where HTML escaping does nothing, so a
      supplied color that is not a hex, a keyword or an rgb/hsl function is
      replaced by the field default
"""

import json
import math
import re
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Any, Mapping

from rankcard.core.domain_types import (
    DEFAULT_AVATAR_BORDER,
    DEFAULT_BAR,
    DEFAULT_BAR_PLACEHOLDER,
    NUMERIC_FIELDS,
    PLACEHOLDER_ALPHA_SUFFIX,
    REQUIRED_FIELDS,
    CardField,
    CssColor,
    Percentage,
)
from rankcard.core.errors import (
    InvalidNumericError,
    MissingFieldError,
    XpExceedsMaxError,
)
from rankcard.schemas.card import CardRequest

_DECIMAL_RE = re.compile(r"^\s*[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?\s*$")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")
_CSS_COLOR_RE = re.compile(
    r"#[0-9A-Fa-f]{3,8}|[A-Za-z]+|(rgba?|hsla?)\([0-9A-Za-z.,%/+ -]*\)"
)
_TWO_PLACES = Decimal("0.01")
# wide enough to quantize any finite double to 2 places
_WIDE_CONTEXT = Context(prec=400)


# ─── Value helpers ───────────────────────────────────────────────

def is_blank(value: Any) -> bool:
    """True for values a client would consider empty: None, "", False, 0."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def is_numeric(value: Any) -> bool:
    """True for finite numbers and strings holding a decimal number."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str):
        return bool(_DECIMAL_RE.match(value)) and math.isfinite(float(value))
    return False


def display_value(value: Any) -> str:
    """Text shown on the card for a raw payload value."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return json.dumps(value, ensure_ascii=False)


def leading_int(value: Any) -> int | None:
    """Integer prefix of the value's text form, None when there is none."""
    match = _LEADING_INT_RE.match(display_value(value))
    return int(match.group(1)) if match else None


def format_percentage(xp: float, max_xp: float) -> Percentage:
    """xp / max_xp * 100 with exactly 2 decimals, halves rounded away from zero.

    A max_xp of "0" gets past the presence check as a string, so it is
    rejected here along with ratios too large for a float.
    """
    if max_xp == 0:
        raise InvalidNumericError(CardField.MAX_XP.value)
    ratio = xp / max_xp * 100
    if not math.isfinite(ratio):
        raise InvalidNumericError(CardField.XP.value)
    if ratio == 0:
        # "-0" renders as 0.00, not -0.00
        ratio = 0.0
    quantized = Decimal(ratio).quantize(
        _TWO_PLACES, rounding=ROUND_HALF_UP, context=_WIDE_CONTEXT,
    )
    return Percentage(f"{quantized:f}")


def is_css_color(value: Any) -> bool:
    """True for a hex color, a color keyword or an rgb()/hsl() call."""
    return isinstance(value, str) and _CSS_COLOR_RE.fullmatch(value) is not None


def placeholder_color(value: Any) -> CssColor:
    """Track color: given color plus alpha suffix, or the translucent grey."""
    if is_blank(value) or not is_css_color(value):
        return DEFAULT_BAR_PLACEHOLDER
    return CssColor(f"{display_value(value)}{PLACEHOLDER_ALPHA_SUFFIX}")


def color_or_default(value: Any, default: CssColor) -> CssColor:
    if is_blank(value) or not is_css_color(value):
        return default
    return CssColor(display_value(value))


# ─── Validation ──────────────────────────────────────────────────

def check_required_fields(data: Mapping[str, Any]) -> None:
    """Raise MissingFieldError for the first absent or blank required field."""
    for card_field in REQUIRED_FIELDS:
        if is_blank(data.get(card_field.value)):
            raise MissingFieldError(card_field.value)


def check_numeric_fields(data: Mapping[str, Any]) -> None:
    """Raise InvalidNumericError if rank, max_xp or xp is not a number."""
    for card_field in NUMERIC_FIELDS:
        if not is_numeric(data[card_field.value]):
            raise InvalidNumericError(card_field.value)


def check_xp_range(data: Mapping[str, Any]) -> None:
    """Raise XpExceedsMaxError when the integer part of xp exceeds max_xp's."""
    xp = leading_int(data[CardField.XP.value])
    max_xp = leading_int(data[CardField.MAX_XP.value])
    if xp is None or max_xp is None:
        return
    if xp > max_xp:
        raise XpExceedsMaxError(xp, max_xp)


def validate_card_payload(data: Any) -> Mapping[str, Any]:
    """Run every check in order. Non-object payloads have no fields at all."""
    fields: Mapping[str, Any] = data if isinstance(data, dict) else {}
    check_required_fields(fields)
    check_numeric_fields(fields)
    check_xp_range(fields)
    return fields


# ─── Normalization ───────────────────────────────────────────────

def normalize_card_request(data: Any) -> CardRequest:
    """Validate a decoded JSON payload and apply defaults."""
    fields = validate_card_payload(data)
    xp = float(fields[CardField.XP.value])
    max_xp = float(fields[CardField.MAX_XP.value])

    return CardRequest(
        rank_text=display_value(fields[CardField.RANK_TEXT.value]),
        rank=display_value(fields[CardField.RANK.value]),
        avatar=display_value(fields[CardField.AVATAR.value]),
        user_name=display_value(fields[CardField.USER_NAME.value]),
        max_xp=display_value(fields[CardField.MAX_XP.value]),
        xp=display_value(fields[CardField.XP.value]),
        avatar_border=color_or_default(
            fields.get(CardField.AVATAR_BORDER.value), DEFAULT_AVATAR_BORDER,
        ),
        bar_placeholder=placeholder_color(
            fields.get(CardField.BAR_PLACEHOLDER.value),
        ),
        bar=color_or_default(fields.get(CardField.BAR.value), DEFAULT_BAR),
        percentage=format_percentage(xp, max_xp),
    )
