"""
schemas.py — calculation result contracts (Pydantic v2, frozen).

Defines:
  - DeductionBreakdown   (itemised deductions and reliefs)
  - CalculationResult    (fields common to every calculator)
  - EmployeeResult, USDIncomeResult, FreelancerResult, CreatorResult,
    BusinessResult, InvestmentResult  (category extras)

Results are derived records: built fresh on every calculation and never
mutated. Two calculations from identical inputs compare equal field-for-field.
"""
from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

from naijatax.input.schemas import CalculatorCategory


# ---------------------------------------------------------------------------
# DeductionOptions — which optional reliefs a calculator offers
# ---------------------------------------------------------------------------

class DeductionOptions(BaseModel):
    """
    Sanitised relief inputs. None means the calculator does not offer the
    relief at all (field stays None in the breakdown); 0 means offered but unused.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    rent_paid: Optional[float] = None
    life_insurance_premium: Optional[float] = None


# ---------------------------------------------------------------------------
# DeductionBreakdown — what reduced the tax base
# ---------------------------------------------------------------------------

class DeductionBreakdown(BaseModel):
    """
    Itemised deductions after caps, not the raw inputs.

    pension / housing_fund / health_insurance are withheld from pay and reduce
    net income. rent_relief / life_insurance only reduce the tax base; they are
    None when the calculator does not offer that relief.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    pension: int = 0                        # 8% of base, no cap
    housing_fund: int = 0                   # NHF 2.5% of base, no cap
    health_insurance: int = 0               # NHIS 5% of base, cap ₦25,000
    rent_relief: Optional[int] = None       # 20% of rent, cap ₦500,000
    life_insurance: Optional[float] = None  # premium, cap 20% of base

    @property
    def withheld(self) -> int:
        """Mandatory payroll deductions — taken out of take-home pay."""
        return self.pension + self.housing_fund + self.health_insurance

    @property
    def reliefs(self) -> float:
        """Reliefs that lower the tax base without lowering cash received."""
        return (self.rent_relief or 0) + (self.life_insurance or 0)

    @property
    def total(self) -> float:
        return self.withheld + self.reliefs


# ---------------------------------------------------------------------------
# CalculationResult — common record
# ---------------------------------------------------------------------------

class CalculationResult(BaseModel):
    """
    Computation sequence shared by the progressive categories:
      1. gross_income  (annual, before expenses)
      2. base = gross, or max(0, gross - expenses)
      3. deductions from base, capped
      4. taxable_income = max(0, base - deductions.total)
      5. total_tax = progressive schedule on taxable_income
      6. net_income = base - deductions.withheld - total_tax
      7. effective_rate = total_tax / gross_income × 100

    tax_components itemises total_tax (e.g. {"paye": 591000} or
    {"cit": ..., "levy": ...}); its values always sum to total_tax.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    category: CalculatorCategory
    gross_income: float
    deductions: DeductionBreakdown = DeductionBreakdown()
    total_deductions: float = 0
    taxable_income: float
    tax_components: Dict[str, int]
    total_tax: int
    net_income: float
    effective_rate: float        # percentage, e.g. 11.82


# ---------------------------------------------------------------------------
# Personal income
# ---------------------------------------------------------------------------

class EmployeeResult(CalculationResult):
    gross_monthly: int
    net_monthly: int


class USDIncomeResult(EmployeeResult):
    """gross_monthly / net_monthly are the naira figures after conversion."""
    foreign_annual: float
    foreign_monthly: float
    exchange_rate: float


# ---------------------------------------------------------------------------
# Self-employed
# ---------------------------------------------------------------------------

class FreelancerResult(CalculationResult):
    total_expenses: float
    net_business_income: float   # max(0, gross - expenses), the deduction base


class CreatorResult(FreelancerResult):
    platform_fees: float
    equipment_costs: float
    other_expenses: float


# ---------------------------------------------------------------------------
# Company
# ---------------------------------------------------------------------------

class BusinessResult(CalculationResult):
    """
    Company Income Tax. No personal deductions: deductions is always empty.
    Small company (revenue ≤ ₦50M, not professional services) pays 0% CIT and 0 levy.
    """
    total_expenses: float
    taxable_profit: float
    cit: int
    levy: int
    levy_rate: float
    levy_label: str
    is_small_company: bool
    qualifies_for_exemption: bool
    net_profit: float


# ---------------------------------------------------------------------------
# Investment income
# ---------------------------------------------------------------------------

class InvestmentResult(CalculationResult):
    """Flat 10% withholding per stream. No bracket taxation, no deductions."""
    dividend_income: float
    interest_income: float
    capital_gains: float
    wht_dividend: int
    wht_interest: int
    cgt: int


__all__ = [
    "DeductionOptions",
    "DeductionBreakdown",
    "CalculationResult",
    "EmployeeResult",
    "USDIncomeResult",
    "FreelancerResult",
    "CreatorResult",
    "BusinessResult",
    "InvestmentResult",
]
