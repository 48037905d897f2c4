"""Unit tests for money helpers"""

import pytest
from decimal import Decimal
from invoicebook.domain.money import format_money, parse_amount, plain_number, round2


class TestParseAmount:
    """Lenient numeric parsing"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("12.5", Decimal("12.5")),
            ("  7", Decimal("7")),
            ("12abc", Decimal("12")),
            ("-3.25", Decimal("-3.25")),
            (".5", Decimal("0.5")),
            (42, Decimal("42")),
            (0.1, Decimal("0.1")),
            (Decimal("9.99"), Decimal("9.99")),
        ],
    )
    def test_reads_numeric_input(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "NaN", "Infinity", float("nan"), float("inf"), True])
    def test_unreadable_input_is_zero(self, raw):
        assert parse_amount(raw) == Decimal("0")


class TestRound2:
    """Half away from zero to 2 decimals"""

    def test_rounds_half_up(self):
        assert round2(Decimal("200.005")) == Decimal("200.01")
        assert round2(Decimal("1.004")) == Decimal("1.00")

    def test_rounds_negative_half_away_from_zero(self):
        assert round2(Decimal("-1.005")) == Decimal("-1.01")

    def test_nan_rounds_to_zero(self):
        assert round2(float("nan")) == Decimal("0.00")

    def test_is_idempotent(self):
        once = round2("123.456")
        assert round2(once) == once


class TestFormatting:

    def test_format_money(self):
        assert format_money(Decimal("1000"), "₹") == "₹1000.00"
        assert format_money("45.005", "$") == "$45.01"

    def test_format_money_has_no_grouping(self):
        assert format_money(Decimal("1234567.8"), "₹") == "₹1234567.80"

    def test_plain_number_drops_trailing_zeros(self):
        assert plain_number(Decimal("1000.00")) == "1000"
        assert plain_number(Decimal("295.10")) == "295.1"
        assert plain_number(Decimal("18")) == "18"
