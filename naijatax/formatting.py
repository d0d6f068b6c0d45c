"""
formatting.py — display strings for result figures.

Whole units only, thousands separators, halves rounded away from zero
(₦1,000.5 → ₦1,001; -₦2.5 → -₦3). Presentation helper — the engine never calls it.
"""
from __future__ import annotations

import math

CURRENCY_SYMBOLS = {
    "NGN": "₦",
    "USD": "$",
}


def _round_half_away(amount: float) -> int:
    return int(math.floor(abs(amount) + 0.5)) * (-1 if amount < 0 else 1)


def format_currency(amount: float, currency: str = "NGN") -> str:
    """format_currency(1_000_000) → '₦1,000,000'; format_currency(-5000) → '-₦5,000'."""
    symbol = CURRENCY_SYMBOLS[currency.upper()]
    whole = _round_half_away(amount)
    sign = "-" if whole < 0 else ""
    return f"{sign}{symbol}{abs(whole):,}"


def format_rate(rate: float, places: int = 2) -> str:
    """Effective-rate percentage for display: 11.82 → '11.82%'."""
    return f"{rate:.{places}f}%"
