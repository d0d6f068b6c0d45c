"""
naijatax Tax Engine — Nigeria Tax Act 2025 (effective 1 January 2026)
Pure Python, deterministic. Same input → same output. No I/O.

Holds the statutory rates and caps, the progressive bracket calculator and the
deduction/relief calculators. Category orchestration lives in variants.py.

Rounding: every "round" here is half-up (floor(x + 0.5)), NOT Python's
banker's round(). ₦0.5 → ₦1, ₦2.5 → ₦3.
"""
from __future__ import annotations

import math
from typing import Optional

from naijatax.engine.schedule import NTA_2025_SCHEDULE, TaxSchedule
from naijatax.engine.schemas import DeductionBreakdown, DeductionOptions

# ===========================================================================
# MANDATORY PAYROLL DEDUCTIONS (rates on the deduction base)
# ===========================================================================

PENSION_RATE          = 0.08     # Contributory pension, employee share, no cap
HOUSING_FUND_RATE     = 0.025    # NHF, no cap
HEALTH_INSURANCE_RATE = 0.05     # NHIS
HEALTH_INSURANCE_CAP  = 25_000   # flat cap, whatever the base

# ===========================================================================
# OPTIONAL RELIEFS
# ===========================================================================

RENT_RELIEF_RATE      = 0.20     # 20% of annual rent paid
RENT_RELIEF_CAP       = 500_000
LIFE_INSURANCE_CAP_PCT = 0.20    # relief capped at 20% of the base; premium itself not rounded

# ===========================================================================
# COMPANY INCOME TAX
# ===========================================================================

CIT_RATE                 = 0.30
SMALL_COMPANY_THRESHOLD  = 50_000_000   # turnover ≤ ₦50M (and not professional services) → 0%

# ===========================================================================
# INVESTMENT INCOME — flat rates, no brackets
# ===========================================================================

WHT_DIVIDEND_RATE = 0.10
WHT_INTEREST_RATE = 0.10
CGT_RATE          = 0.10
WHT_RATE          = 0.10     # any other withheld income

# Flat rate per tax component name
FLAT_RATES = {
    "wht_dividend": WHT_DIVIDEND_RATE,
    "wht_interest": WHT_INTEREST_RATE,
    "cgt":          CGT_RATE,
}


# ===========================================================================
# HELPERS
# ===========================================================================

def round_half_up(amount: float) -> int:
    """Round to the nearest whole naira, halves towards +∞."""
    return int(math.floor(amount + 0.5))


# ===========================================================================
# PROGRESSIVE TAX
# ===========================================================================

def compute_progressive_tax(
    taxable_income: float,
    schedule: TaxSchedule = NTA_2025_SCHEDULE,
) -> int:
    """
    Marginal (progressive) tax on taxable_income.

    Income up to the schedule's exempt threshold (leading 0% bands) is never
    taxed. Each bracket only taxes the slice of income between its cumulative_base
    and its upper_bound. Slices are accumulated unrounded; only the final
    total is rounded, so rounding error never compounds across brackets.

    At ₦5,000,000: 0 + 15%×2.2M + 18%×2M = 330,000 + 360,000 = 690,000
    (NOT 18% × 5M).
    """
    if taxable_income <= schedule.exempt_threshold:
        return 0

    tax = 0.0
    for bracket in schedule.brackets:
        if taxable_income <= bracket.cumulative_base:
            break
        slice_income = min(taxable_income - bracket.cumulative_base, bracket.width)
        tax += slice_income * bracket.marginal_rate
    return round_half_up(tax)


# ===========================================================================
# DEDUCTION CALCULATORS
# ===========================================================================

def calculate_pension(base: float) -> int:
    return round_half_up(base * PENSION_RATE)


def calculate_housing_fund(base: float) -> int:
    return round_half_up(base * HOUSING_FUND_RATE)


def calculate_health_insurance(base: float) -> int:
    """5% of base, never more than ₦25,000."""
    return min(round_half_up(base * HEALTH_INSURANCE_RATE), HEALTH_INSURANCE_CAP)


def calculate_rent_relief(rent_paid: Optional[float]) -> int:
    """20% of annual rent, never more than ₦500,000. No rent → 0."""
    return min(round_half_up((rent_paid or 0) * RENT_RELIEF_RATE), RENT_RELIEF_CAP)


def calculate_life_insurance_relief(premium_paid: Optional[float], base: float) -> float:
    """
    Premium actually paid, capped at 20% of base.
    Only the cap is rounded — the premium passes through unrounded.
    """
    return min(premium_paid or 0, round_half_up(base * LIFE_INSURANCE_CAP_PCT))


def compute_deductions(
    base: float,
    options: Optional[DeductionOptions] = None,
    include_mandatory: bool = True,
) -> DeductionBreakdown:
    """
    Full deduction breakdown for a deduction base.

    Mandatory pension / NHF / NHIS are computed unless include_mandatory is
    False (company and investment income carry none). Rent and life-insurance
    reliefs are computed only when the option is supplied (not None); otherwise
    they stay None in the breakdown, meaning "not offered by this calculator".
    """
    options = options or DeductionOptions()
    base = max(0.0, base)

    rent_relief = (
        calculate_rent_relief(options.rent_paid)
        if options.rent_paid is not None else None
    )
    life_insurance = (
        calculate_life_insurance_relief(options.life_insurance_premium, base)
        if options.life_insurance_premium is not None else None
    )

    if not include_mandatory:
        return DeductionBreakdown(rent_relief=rent_relief, life_insurance=life_insurance)

    return DeductionBreakdown(
        pension=calculate_pension(base),
        housing_fund=calculate_housing_fund(base),
        health_insurance=calculate_health_insurance(base),
        rent_relief=rent_relief,
        life_insurance=life_insurance,
    )
