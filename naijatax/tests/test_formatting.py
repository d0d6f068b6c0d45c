"""
Currency display tests — whole naira, thousands separators.
"""
from __future__ import annotations

import pytest

from naijatax.formatting import format_currency, format_rate


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "₦0"),
        (5, "₦5"),
        (500, "₦500"),
        (1_000, "₦1,000"),
        (800_000, "₦800,000"),
        (591_000, "₦591,000"),
        (1_000_000, "₦1,000,000"),
        (50_000_000, "₦50,000,000"),
        (1_000_000_000, "₦1,000,000,000"),
    ],
)
def test_format_naira(amount: float, expected: str) -> None:
    assert format_currency(amount) == expected


def test_format_rounds_to_whole_naira() -> None:
    assert format_currency(1000.4) == "₦1,000"
    assert format_currency(1000.9) == "₦1,001"
    assert format_currency(12_345.67) == "₦12,346"
    assert format_currency(1000.5) == "₦1,001"


def test_format_negative() -> None:
    assert format_currency(-5_000) == "-₦5,000"
    assert format_currency(-1_000_000) == "-₦1,000,000"
    assert format_currency(-2.5) == "-₦3"
    assert format_currency(-0.4) == "₦0"


def test_format_usd() -> None:
    assert format_currency(2_000, "USD") == "$2,000"
    assert format_currency(24_000, "usd") == "$24,000"


def test_format_unknown_currency() -> None:
    with pytest.raises(KeyError):
        format_currency(1, "EUR")


def test_format_rate() -> None:
    assert format_rate(11.82) == "11.82%"
    assert format_rate(7.878, places=1) == "7.9%"
    assert format_rate(0) == "0.00%"
