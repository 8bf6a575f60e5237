"""Card field rules — pure tests for validation order, defaults and percentage.

Tests cover:
    - Each required field reported by name when absent, null, empty or zero
    - Presence is checked for all six fields before any numeric check
    - Numeric strings accepted; words, booleans, NaN-like and non-ASCII digits rejected
    - xp > max_xp compared on integer parts
    - Color defaults, the placeholder alpha suffix, unsafe colors replaced
    - Percentage always has 2 decimals and never shows -0.00 for zero
"""

import pytest

from rankcard.core.card_fields import (
    display_value,
    format_percentage,
    is_blank,
    is_css_color,
    is_numeric,
    leading_int,
    normalize_card_request,
    validate_card_payload,
)
from rankcard.core.errors import (
    InvalidNumericError,
    MissingFieldError,
    XpExceedsMaxError,
)

REQUIRED = ["rank_text", "rank", "avatar", "user_name", "max_xp", "xp"]


# ─── presence ────────────────────────────────────────────────────

@pytest.mark.parametrize("field", REQUIRED)
def test_missing_field_is_named(card_payload, field):
    del card_payload[field]
    with pytest.raises(MissingFieldError) as exc_info:
        validate_card_payload(card_payload)
    assert exc_info.value.message == f"Missing required field: {field}"
    assert exc_info.value.http_status == 400


@pytest.mark.parametrize("blank", [None, "", 0, 0.0, False])
def test_blank_values_count_as_missing(card_payload, blank):
    card_payload["xp"] = blank
    with pytest.raises(MissingFieldError) as exc_info:
        validate_card_payload(card_payload)
    assert exc_info.value.field == "xp"


def test_first_missing_field_wins(card_payload):
    del card_payload["user_name"]
    del card_payload["rank_text"]
    with pytest.raises(MissingFieldError) as exc_info:
        validate_card_payload(card_payload)
    assert exc_info.value.field == "rank_text"


def test_presence_checked_before_numeric(card_payload):
    card_payload["rank"] = "abc"
    del card_payload["xp"]
    with pytest.raises(MissingFieldError):
        validate_card_payload(card_payload)


def test_non_object_payload_reports_first_field():
    with pytest.raises(MissingFieldError) as exc_info:
        validate_card_payload(["Gold", 3])
    assert exc_info.value.field == "rank_text"


# ─── numeric ─────────────────────────────────────────────────────

@pytest.mark.parametrize("field", ["rank", "max_xp", "xp"])
def test_non_numeric_field_rejected(card_payload, field):
    card_payload[field] = "lots"
    with pytest.raises(InvalidNumericError) as exc_info:
        validate_card_payload(card_payload)
    assert exc_info.value.message == "Rank, max_xp, and xp must be numbers"


def test_numeric_strings_accepted(card_payload):
    card_payload.update(rank="3", max_xp=" 1000 ", xp="250.5")
    assert validate_card_payload(card_payload) is card_payload


@pytest.mark.parametrize(
    "value", ["12", "-4", "1.5", ".5", "3.", "1e3", 7, 2.25],
)
def test_is_numeric_accepts(value):
    assert is_numeric(value)


@pytest.mark.parametrize(
    "value",
    ["abc", "NaN", "Infinity", "inf", "1_000", "0x1A", " ", True, [1], None,
     "١٢", "٣", "１２"],
)
def test_is_numeric_rejects(value):
    assert not is_numeric(value)


def test_leading_int_ignores_non_ascii_digits():
    assert leading_int("١٢") is None


# ─── range ───────────────────────────────────────────────────────

def test_xp_above_max_rejected(card_payload):
    card_payload.update(xp=1001, max_xp=1000)
    with pytest.raises(XpExceedsMaxError) as exc_info:
        validate_card_payload(card_payload)
    assert exc_info.value.message == "xp cannot be greater than max_xp"


def test_xp_equal_to_max_allowed(card_payload):
    card_payload.update(xp=1000, max_xp=1000)
    validate_card_payload(card_payload)


def test_range_compares_integer_parts(card_payload):
    card_payload.update(xp="10.9", max_xp="10.1")
    validate_card_payload(card_payload)


def test_leading_int_reads_integer_prefix():
    assert leading_int("42.9") == 42
    assert leading_int(" -3.2") == -3
    assert leading_int(1000) == 1000
    assert leading_int(".5") is None


# ─── display & defaults ──────────────────────────────────────────

def test_display_value_drops_trailing_zero_fraction():
    assert display_value(250.0) == "250"
    assert display_value(12.5) == "12.5"
    assert display_value("0250") == "0250"
    assert display_value(True) == "true"


def test_is_blank():
    assert is_blank(None)
    assert is_blank(0)
    assert not is_blank("0")
    assert not is_blank([])


def test_defaults_applied(card_payload):
    card = normalize_card_request(card_payload)
    assert card.avatar_border == "#FFFFFF"
    assert card.bar == "#FFFFFF"
    assert card.bar_placeholder == "#80808080"


def test_placeholder_gets_alpha_suffix(card_payload):
    card_payload["bar_placeholder"] = "#112233"
    card = normalize_card_request(card_payload)
    assert card.bar_placeholder == "#11223380"


def test_empty_optional_colors_fall_back(card_payload):
    card_payload.update(avatar_border="", bar="", bar_placeholder="")
    card = normalize_card_request(card_payload)
    assert (card.avatar_border, card.bar, card.bar_placeholder) == (
        "#FFFFFF", "#FFFFFF", "#80808080",
    )


def test_supplied_colors_kept(card_payload):
    card_payload.update(avatar_border="#FF0000", bar="rebeccapurple")
    card = normalize_card_request(card_payload)
    assert card.avatar_border == "#FF0000"
    assert card.bar == "rebeccapurple"


@pytest.mark.parametrize(
    "value", ["#FFF", "#11223344", "red", "rgb(255, 0, 0)", "hsla(120 50% 50% / 0.5)"],
)
def test_is_css_color_accepts(value):
    assert is_css_color(value)


@pytest.mark.parametrize(
    "value",
    [
        "red} .card{background:url(http://evil.test/x)} .y{",
        "red;background:url(x)",
        "url(http://evil.test/x)",
        "rgb(1,2,3)) .x{",
        "#fff\n",
        "</style>",
        "'red'",
        "#12",
        12,
    ],
)
def test_is_css_color_rejects(value):
    assert not is_css_color(value)


def test_unsafe_colors_fall_back_to_defaults(card_payload):
    card_payload.update(
        avatar_border="#000;}",
        bar="red} .card{background:url(http://evil.test/x)} .y{",
        bar_placeholder="blue{",
    )
    card = normalize_card_request(card_payload)
    assert (card.avatar_border, card.bar, card.bar_placeholder) == (
        "#FFFFFF", "#FFFFFF", "#80808080",
    )


def test_normalized_numbers_are_display_strings(card_payload):
    card = normalize_card_request(card_payload)
    assert (card.rank, card.xp, card.max_xp) == ("3", "250", "1000")


# ─── percentage ──────────────────────────────────────────────────

@pytest.mark.parametrize(
    "xp, max_xp, expected",
    [
        (50, 200, "25.00"),
        (250, 1000, "25.00"),
        (1, 3, "33.33"),
        (2, 3, "66.67"),
        (85, 200, "42.50"),
        (1, 8, "12.50"),
        (7, 7, "100.00"),
    ],
)
def test_format_percentage(xp, max_xp, expected):
    assert format_percentage(xp, max_xp) == expected


def test_negative_zero_percentage_has_no_sign():
    assert format_percentage(-0.0, 100) == "0.00"


def test_small_negative_percentage_keeps_sign():
    assert format_percentage(-0.001, 1000) == "-0.00"


def test_negative_zero_string_xp(card_payload):
    card_payload["xp"] = "-0"
    card = normalize_card_request(card_payload)
    assert card.percentage == "0.00"
    assert card.xp == "-0"


def test_percentage_on_normalized_card(card_payload):
    card_payload.update(xp=50, max_xp=200)
    assert normalize_card_request(card_payload).percentage == "25.00"


def test_zero_max_xp_string_rejected(card_payload):
    card_payload.update(xp="0", max_xp="0")
    with pytest.raises(InvalidNumericError):
        normalize_card_request(card_payload)
