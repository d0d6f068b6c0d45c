"""
schemas.py — raw calculator input contracts (Pydantic v2).

Defines:
  - Frequency, CalculatorCategory enums
  - One raw-input record per calculator category
  - INPUT_MODELS  (category → input record class)

Numeric and flag fields hold the RAW form text ("₦1,200,000", "", "abc"). They are
sanitised by the variant pipelines, never here — a garbage value is not a
validation error, it is a 0 (False for a flag). Numbers are accepted too, for programmatic callers.

extra='forbid': an unknown field name is a programming error and raises.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

RawField = Optional[Union[str, float]]
RawFlag = Optional[Union[bool, str, float]]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Frequency(str, Enum):
    monthly = "monthly"
    annual = "annual"


class CalculatorCategory(str, Enum):
    employee = "employee"
    usd_income = "usd_income"
    freelancer = "freelancer"
    creator = "creator"
    business = "business"
    investment = "investment"


# ---------------------------------------------------------------------------
# Base record
# ---------------------------------------------------------------------------

class CalculationInput(BaseModel):
    """Transient form state for one calculator. Immutable once built."""
    model_config = ConfigDict(extra="forbid", frozen=True)


# ---------------------------------------------------------------------------
# Personal income (PAYE)
# ---------------------------------------------------------------------------

class EmployeeInput(CalculationInput):
    gross_salary: RawField = Field(
        default="",
        description="Gross salary, monthly or annual according to `frequency`.",
    )
    frequency: Frequency = Frequency.annual
    annual_rent: RawField = Field(
        default="",
        description="Annual rent paid. 20% is relieved, capped at ₦500,000.",
    )
    life_insurance: RawField = Field(
        default="",
        description="Annual life insurance premium. Relief capped at 20% of gross.",
    )


class USDIncomeInput(CalculationInput):
    foreign_income: RawField = Field(
        default="",
        description="Income in US dollars, monthly or annual according to `frequency`.",
    )
    frequency: Frequency = Frequency.monthly
    exchange_rate: RawField = Field(
        default="",
        description="NGN per 1 USD. Must be > 0 or no result is produced.",
    )
    annual_rent: RawField = ""
    life_insurance: RawField = ""


# ---------------------------------------------------------------------------
# Self-employed
# ---------------------------------------------------------------------------

class FreelancerInput(CalculationInput):
    gross_income: RawField = Field(default="", description="Annual gross revenue.")
    business_expenses: RawField = Field(
        default="",
        description="Allowable business expenses, deducted before personal deductions.",
    )
    annual_rent: RawField = ""


class CreatorInput(CalculationInput):
    gross_income: RawField = Field(
        default="",
        description="Annual platform / brand-deal income (YouTube, Instagram, TikTok …).",
    )
    platform_fees: RawField = ""
    equipment_costs: RawField = ""
    other_expenses: RawField = ""


# ---------------------------------------------------------------------------
# Company
# ---------------------------------------------------------------------------

class BusinessInput(CalculationInput):
    revenue: RawField = Field(default="", description="Annual gross turnover.")
    expenses: RawField = Field(default="", description="Allowable business expenses.")
    is_professional_service: RawFlag = Field(
        default=False,
        description=(
            "Checkbox value (bool or text such as \"true\" / \"\"). Professional-service "
            "businesses never qualify for the small-company exemption."
        ),
    )


# ---------------------------------------------------------------------------
# Investment income
# ---------------------------------------------------------------------------

class InvestmentInput(CalculationInput):
    dividend_income: RawField = ""
    interest_income: RawField = ""
    capital_gains: RawField = ""


INPUT_MODELS: dict[CalculatorCategory, type[CalculationInput]] = {
    CalculatorCategory.employee:   EmployeeInput,
    CalculatorCategory.usd_income: USDIncomeInput,
    CalculatorCategory.freelancer: FreelancerInput,
    CalculatorCategory.creator:    CreatorInput,
    CalculatorCategory.business:   BusinessInput,
    CalculatorCategory.investment: InvestmentInput,
}


__all__ = [
    "Frequency",
    "CalculatorCategory",
    "CalculationInput",
    "EmployeeInput",
    "USDIncomeInput",
    "FreelancerInput",
    "CreatorInput",
    "BusinessInput",
    "InvestmentInput",
    "INPUT_MODELS",
]
