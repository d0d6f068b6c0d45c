"""
normalizer.py — frequency and currency normalisation.

Order for foreign income: normalise frequency in the foreign currency first,
then convert each of monthly / annual by the exchange rate.
An exchange rate ≤ 0 is invalid input: convert_currency returns None and the
calling variant produces no result. Which of these steps run is decided by
the category pipeline (variants.PIPELINES).
"""
from __future__ import annotations

from typing import NamedTuple, Optional

from naijatax.input.schemas import Frequency

MONTHS_PER_YEAR = 12


class NormalizedIncome(NamedTuple):
    annual: float
    monthly: float


def normalize_frequency(amount: float, frequency: Frequency) -> NormalizedIncome:
    """Monthly figures are ×12 to annual; annual figures are ÷12 to monthly."""
    annual = amount * MONTHS_PER_YEAR if frequency == Frequency.monthly else amount
    return NormalizedIncome(annual=annual, monthly=annual / MONTHS_PER_YEAR)


def convert_currency(
    income: NormalizedIncome,
    exchange_rate: float,
) -> Optional[NormalizedIncome]:
    """Convert both figures to local currency. None if the rate is not positive."""
    if exchange_rate <= 0:
        return None
    return NormalizedIncome(
        annual=income.annual * exchange_rate,
        monthly=income.monthly * exchange_rate,
    )
