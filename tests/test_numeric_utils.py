from decimal import Decimal

from dashboard.utils.numeric import (
    coerce_amount,
    format_cents,
    normalise_plain_number,
    to_cents,
)


def test_to_cents_converts_decimal_amounts():
    assert to_cents(Decimal("10.50")) == 1050
    assert to_cents(Decimal("0.01")) == 1
    assert to_cents(Decimal("1234")) == 123400


def test_coerce_amount_rounds_half_up_to_cents():
    assert coerce_amount("2.675") == Decimal("2.68")
    assert coerce_amount(3) == Decimal("3.00")
    assert coerce_amount(Decimal("0.004")) == Decimal("0.00")


def test_coerce_amount_rejects_unusable_values():
    assert coerce_amount(None) is None
    assert coerce_amount("") is None
    assert coerce_amount("ten") is None
    assert coerce_amount("sNaN") is None
    assert coerce_amount(float("inf")) is None


def test_coerce_amount_rejects_values_too_large_for_cents():
    assert coerce_amount("1e30") is None
    assert coerce_amount("9" * 29) is None
    assert coerce_amount(Decimal("1E+25")) is None
    assert coerce_amount("1e20") == Decimal("100000000000000000000.00")


def test_normalise_plain_number_strips_presentation_characters():
    assert normalise_plain_number("$1,234.50") == "1234.50"
    assert normalise_plain_number("1.234,50 €") == "1234.50"
    assert normalise_plain_number("(15)") == "-15"
    assert normalise_plain_number("$") is None


def test_format_cents():
    assert format_cents(1050) == "$10.50"
    assert format_cents(123456789) == "$1,234,567.89"
    assert format_cents(-250) == "-$2.50"
    assert format_cents(None) == ""
