"""
Input sanitiser tests — every raw value maps to a finite number in [0, ceiling].
"""
from __future__ import annotations

import math

import pytest

from naijatax.config import SANITIZE_CEILING
from naijatax.input.sanitizer import sanitize, sanitize_flag


@pytest.mark.parametrize(
    "raw",
    ["₦1,000,000", "1 000 000", "1000000", "  1000000  ", "NGN 1,000,000.00", "1,000,000 naira"],
)
def test_formatting_characters_stripped(raw: str) -> None:
    assert sanitize(raw) == 1_000_000


@pytest.mark.parametrize("raw", ["", "   ", "\t\n", None])
def test_empty_is_zero(raw: str | None) -> None:
    assert sanitize(raw) == 0


@pytest.mark.parametrize("raw", ["abc", "₦", "-", ".", "--", "N/A"])
def test_unparseable_is_zero(raw: str) -> None:
    assert sanitize(raw) == 0


@pytest.mark.parametrize("raw", ["-500", "-0.01", "-₦1,000"])
def test_negative_clamped_to_zero(raw: str) -> None:
    assert sanitize(raw) == 0


def test_decimals_preserved() -> None:
    assert sanitize("500000.50") == pytest.approx(500_000.5)
    assert sanitize("₦ 2,500.75") == pytest.approx(2_500.75)
    assert sanitize(".5") == pytest.approx(0.5)


def test_leading_number_wins() -> None:
    """After stripping, the longest leading decimal is parsed: '1.5.2' → 1.5."""
    assert sanitize("1.5.2") == pytest.approx(1.5)
    assert sanitize("12-3") == 12


def test_ceiling_applied() -> None:
    assert SANITIZE_CEILING == 1e12
    assert sanitize("5000000000000") == SANITIZE_CEILING
    assert sanitize("9" * 400) == SANITIZE_CEILING


def test_custom_ceiling() -> None:
    assert sanitize("500", ceiling=100) == 100
    assert sanitize("50", ceiling=100) == 50


def test_numeric_values_accepted() -> None:
    assert sanitize(1500) == 1500
    assert sanitize(2.5) == pytest.approx(2.5)
    assert sanitize(-3) == 0
    assert sanitize(math.nan) == 0
    assert sanitize(math.inf) == SANITIZE_CEILING


def test_bool_is_not_a_number() -> None:
    assert sanitize(True) == 0


def test_result_is_always_finite_and_bounded() -> None:
    for raw in ["₦1,000,000", "", "abc", "-5", "1e400", "9" * 400, "0"]:
        value = sanitize(raw)
        assert math.isfinite(value)
        assert 0 <= value <= SANITIZE_CEILING


# ---------------------------------------------------------------------------
# Checkbox flags
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("raw", [True, "true", "TRUE", " yes ", "Y", "1", "on", 1, 2.5])
def test_flag_truthy(raw: object) -> None:
    assert sanitize_flag(raw) is True


@pytest.mark.parametrize(
    "raw", [False, None, "", "   ", "false", "no", "0", "off", "abc", "₦", 0, -1, math.nan],
)
def test_flag_falsy_or_unrecognised(raw: object) -> None:
    assert sanitize_flag(raw) is False
