"""
variants.py — per-category calculator pipelines.

Every category is a stateless pipeline over raw form text:
  1. sanitise inputs; normalise frequency / currency where the pipeline says so
  2. deduction base: gross, or max(0, gross - expenses)
  3. mandatory deductions (pension, NHF, NHIS) from the base, if personal_deductions
  4. optional reliefs (rent, life insurance) where the category offers them
  5. taxable_income = max(0, base - all deductions and reliefs)
  6. tax step picked by tax_rule: progressive schedule, corporate (CIT + levy)
     or flat withholding
  7. net = base - withheld deductions - tax  (reliefs are not cash out)
  8. effective_rate = tax / gross × 100  (gross before expenses)

Steps 1-8 read the category's PIPELINES entry; the calculate_* functions only
sanitise their own input fields and add category extras to the result.

No result (None), never a zero-filled record, when the primary income is
≤ 0, or when a foreign-currency pipeline gets an exchange rate ≤ 0.

Public API:
  - run_calculator_variant(category, raw_inputs, config=None)
  - calculate_employee / calculate_usd_income / calculate_freelancer /
    calculate_creator / calculate_business / calculate_investment
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict

from naijatax.config import DEFAULT_CONFIG, EngineConfig
from naijatax.engine.errors import UnknownCategoryError
from naijatax.engine.normalizer import (
    MONTHS_PER_YEAR,
    NormalizedIncome,
    convert_currency,
    normalize_frequency,
)
from naijatax.engine.schemas import (
    BusinessResult,
    CalculationResult,
    CreatorResult,
    DeductionOptions,
    EmployeeResult,
    FreelancerResult,
    InvestmentResult,
    USDIncomeResult,
)
from naijatax.engine.tax_engine import (
    CIT_RATE,
    FLAT_RATES,
    SMALL_COMPANY_THRESHOLD,
    WHT_RATE,
    compute_deductions,
    compute_progressive_tax,
    round_half_up,
)
from naijatax.input.sanitizer import RawValue, sanitize, sanitize_flag
from naijatax.input.schemas import (
    INPUT_MODELS,
    BusinessInput,
    CalculationInput,
    CalculatorCategory,
    CreatorInput,
    EmployeeInput,
    Frequency,
    FreelancerInput,
    InvestmentInput,
    USDIncomeInput,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pipeline configuration
# ---------------------------------------------------------------------------

class DeductionBase(str, Enum):
    gross = "gross"                       # salary: no expenses
    net_of_expenses = "net_of_expenses"   # max(0, revenue - expenses)


class TaxRule(str, Enum):
    progressive = "progressive"           # PAYE bracket schedule
    corporate = "corporate"               # CIT + secondary levy, small-company exemption
    flat_withholding = "flat_withholding" # WHT / CGT per income stream


class VariantPipeline(BaseModel):
    """
    Which steps run for one category. _run_pipeline and _normalize_income
    read these flags; the calculators never branch on category themselves.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    category: CalculatorCategory
    deduction_base: DeductionBase
    tax_rule: TaxRule
    personal_deductions: bool = True      # pension / NHF / NHIS
    rent_relief: bool = False
    life_insurance_relief: bool = False
    frequency_normalized: bool = False
    foreign_currency: bool = False


PIPELINES: dict[CalculatorCategory, VariantPipeline] = {
    CalculatorCategory.employee: VariantPipeline(
        category=CalculatorCategory.employee,
        deduction_base=DeductionBase.gross,
        tax_rule=TaxRule.progressive,
        rent_relief=True,
        life_insurance_relief=True,
        frequency_normalized=True,
    ),
    CalculatorCategory.usd_income: VariantPipeline(
        category=CalculatorCategory.usd_income,
        deduction_base=DeductionBase.gross,
        tax_rule=TaxRule.progressive,
        rent_relief=True,
        life_insurance_relief=True,
        frequency_normalized=True,
        foreign_currency=True,
    ),
    CalculatorCategory.freelancer: VariantPipeline(
        category=CalculatorCategory.freelancer,
        deduction_base=DeductionBase.net_of_expenses,
        tax_rule=TaxRule.progressive,
        rent_relief=True,
    ),
    CalculatorCategory.creator: VariantPipeline(
        category=CalculatorCategory.creator,
        deduction_base=DeductionBase.net_of_expenses,
        tax_rule=TaxRule.progressive,
    ),
    CalculatorCategory.business: VariantPipeline(
        category=CalculatorCategory.business,
        deduction_base=DeductionBase.net_of_expenses,
        tax_rule=TaxRule.corporate,
        personal_deductions=False,
    ),
    CalculatorCategory.investment: VariantPipeline(
        category=CalculatorCategory.investment,
        deduction_base=DeductionBase.gross,
        tax_rule=TaxRule.flat_withholding,
        personal_deductions=False,
    ),
}


# ===========================================================================
# INTERNAL HELPERS (pure functions, no I/O)
# ===========================================================================

def _no_result(category: CalculatorCategory, reason: str) -> None:
    # Category and reason only, never income figures
    logger.debug("No result category=%s reason=%s", category.value, reason)
    return None


def _normalize_income(
    pipeline: VariantPipeline,
    amount: float,
    frequency: Frequency = Frequency.annual,
    exchange_rate: float = 0.0,
) -> Optional[tuple[NormalizedIncome, NormalizedIncome]]:
    """
    Step 1 for salary-style income. Returns (as entered, local currency)
    figures, or None when a foreign-currency pipeline has no valid rate.
    Without frequency normalisation the amount is taken as annual.
    """
    if pipeline.frequency_normalized:
        income = normalize_frequency(amount, frequency)
    else:
        income = NormalizedIncome(annual=amount, monthly=amount / MONTHS_PER_YEAR)

    if not pipeline.foreign_currency:
        return income, income
    local = convert_currency(income, exchange_rate)
    if local is None:
        return None
    return income, local


def _deduction_base(pipeline: VariantPipeline, gross: float, expenses: float) -> float:
    if pipeline.deduction_base == DeductionBase.net_of_expenses:
        return max(0.0, gross - expenses)
    return gross


def _relief_options(
    pipeline: VariantPipeline,
    config: EngineConfig,
    annual_rent: RawValue = None,
    life_insurance: RawValue = None,
) -> DeductionOptions:
    """Sanitise relief inputs; reliefs the category does not offer stay None."""
    return DeductionOptions(
        rent_paid=(
            sanitize(annual_rent, config.sanitize_ceiling)
            if pipeline.rent_relief else None
        ),
        life_insurance_premium=(
            sanitize(life_insurance, config.sanitize_ceiling)
            if pipeline.life_insurance_relief else None
        ),
    )


def _effective_rate(total_tax: float, gross: float) -> float:
    return total_tax / gross * 100 if gross > 0 else 0.0


# ---------------------------------------------------------------------------
# Tax steps, one per TaxRule. Each returns the named tax components.
# ---------------------------------------------------------------------------

def _progressive_tax(
    taxable_income: float,
    config: EngineConfig,
    streams: Optional[Mapping[str, float]] = None,
    exempt: bool = False,
) -> dict[str, int]:
    return {"paye": compute_progressive_tax(taxable_income, config.schedule)}


def _corporate_tax(
    taxable_income: float,
    config: EngineConfig,
    streams: Optional[Mapping[str, float]] = None,
    exempt: bool = False,
) -> dict[str, int]:
    """CIT 30% + secondary levy on profit; both 0 for an exempt small company."""
    if exempt:
        return {"cit": 0, "levy": 0}
    return {
        "cit": round_half_up(taxable_income * CIT_RATE),
        "levy": round_half_up(taxable_income * config.business_levy_rate),
    }


def _flat_withholding_tax(
    taxable_income: float,
    config: EngineConfig,
    streams: Optional[Mapping[str, float]] = None,
    exempt: bool = False,
) -> dict[str, int]:
    """
    Each named stream at its own flat rate. Without streams the whole
    taxable income is one "wht" stream.
    """
    if streams is None:
        streams = {"wht": taxable_income}
    return {
        name: round_half_up(amount * FLAT_RATES.get(name, WHT_RATE))
        for name, amount in streams.items()
    }


_TAX_STEPS: dict[TaxRule, Callable[..., dict[str, int]]] = {
    TaxRule.progressive:      _progressive_tax,
    TaxRule.corporate:        _corporate_tax,
    TaxRule.flat_withholding: _flat_withholding_tax,
}


def _run_pipeline(
    pipeline: VariantPipeline,
    config: EngineConfig,
    gross: float,
    expenses: float = 0.0,
    options: Optional[DeductionOptions] = None,
    streams: Optional[Mapping[str, float]] = None,
    exempt: bool = False,
) -> dict[str, Any]:
    """
    Steps 2-8. Returns the common CalculationResult fields; callers add
    their category extras.
    """
    base = _deduction_base(pipeline, gross, expenses)
    deductions = compute_deductions(
        base, options, include_mandatory=pipeline.personal_deductions,
    )
    taxable_income = max(0.0, base - deductions.total)
    tax_components = _TAX_STEPS[pipeline.tax_rule](
        taxable_income, config, streams=streams, exempt=exempt,
    )
    total_tax = sum(tax_components.values())
    net_income = base - deductions.withheld - total_tax

    return dict(
        category=pipeline.category,
        gross_income=gross,
        deductions=deductions,
        total_deductions=deductions.total,
        taxable_income=taxable_income,
        tax_components=tax_components,
        total_tax=total_tax,
        net_income=net_income,
        effective_rate=_effective_rate(total_tax, gross),
    )


# ===========================================================================
# PERSONAL INCOME (PAYE)
# ===========================================================================

def calculate_employee(
    inputs: EmployeeInput,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Optional[EmployeeResult]:
    """
    Salaried employee. Frequency is normalised before anything else; the
    deduction base is annual gross. Rent and life-insurance reliefs apply.

    Gross ₦5,000,000/yr, no reliefs:
      pension 400,000 + NHF 125,000 + NHIS 25,000 = 550,000
      taxable 4,450,000 → tax 330,000 + 261,000 = 591,000
    """
    pipeline = PIPELINES[CalculatorCategory.employee]
    gross = sanitize(inputs.gross_salary, config.sanitize_ceiling)
    if gross <= 0:
        return _no_result(pipeline.category, "non-positive income")

    normalized = _normalize_income(pipeline, gross, inputs.frequency)
    if normalized is None:
        return _no_result(pipeline.category, "non-positive exchange rate")
    _, income = normalized

    options = _relief_options(
        pipeline, config,
        annual_rent=inputs.annual_rent,
        life_insurance=inputs.life_insurance,
    )
    fields = _run_pipeline(pipeline, config, income.annual, options=options)

    return EmployeeResult(
        **fields,
        gross_monthly=round_half_up(income.monthly),
        net_monthly=round_half_up(fields["net_income"] / MONTHS_PER_YEAR),
    )


def calculate_usd_income(
    inputs: USDIncomeInput,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Optional[USDIncomeResult]:
    """
    Foreign-currency salary (remote workers paid in USD). Frequency is
    normalised in USD, then both figures are converted at the given rate;
    from there it is the employee pipeline on the naira annual figure.
    """
    pipeline = PIPELINES[CalculatorCategory.usd_income]
    amount = sanitize(inputs.foreign_income, config.sanitize_ceiling)
    rate = sanitize(inputs.exchange_rate, config.sanitize_ceiling)
    if amount <= 0:
        return _no_result(pipeline.category, "non-positive income")

    normalized = _normalize_income(pipeline, amount, inputs.frequency, rate)
    if normalized is None:
        return _no_result(pipeline.category, "non-positive exchange rate")
    foreign, local = normalized

    options = _relief_options(
        pipeline, config,
        annual_rent=inputs.annual_rent,
        life_insurance=inputs.life_insurance,
    )
    fields = _run_pipeline(pipeline, config, local.annual, options=options)

    return USDIncomeResult(
        **fields,
        gross_monthly=round_half_up(local.monthly),
        net_monthly=round_half_up(fields["net_income"] / MONTHS_PER_YEAR),
        foreign_annual=foreign.annual,
        foreign_monthly=foreign.monthly,
        exchange_rate=rate,
    )


# ===========================================================================
# SELF-EMPLOYED
# ===========================================================================

def calculate_freelancer(
    inputs: FreelancerInput,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Optional[FreelancerResult]:
    """
    Consultants / contractors. Business expenses come off revenue first;
    pension, NHF and NHIS are then computed on the net business income.
    Rent relief applies, life-insurance relief does not.
    """
    pipeline = PIPELINES[CalculatorCategory.freelancer]
    gross = sanitize(inputs.gross_income, config.sanitize_ceiling)
    if gross <= 0:
        return _no_result(pipeline.category, "non-positive income")

    expenses = sanitize(inputs.business_expenses, config.sanitize_ceiling)
    options = _relief_options(pipeline, config, annual_rent=inputs.annual_rent)
    fields = _run_pipeline(pipeline, config, gross, expenses=expenses, options=options)

    return FreelancerResult(
        **fields,
        total_expenses=expenses,
        net_business_income=_deduction_base(pipeline, gross, expenses),
    )


def calculate_creator(
    inputs: CreatorInput,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Optional[CreatorResult]:
    """Content creators. Platform fees, equipment and other costs are summed as expenses."""
    pipeline = PIPELINES[CalculatorCategory.creator]
    gross = sanitize(inputs.gross_income, config.sanitize_ceiling)
    if gross <= 0:
        return _no_result(pipeline.category, "non-positive income")

    platform_fees = sanitize(inputs.platform_fees, config.sanitize_ceiling)
    equipment_costs = sanitize(inputs.equipment_costs, config.sanitize_ceiling)
    other_expenses = sanitize(inputs.other_expenses, config.sanitize_ceiling)
    total_expenses = platform_fees + equipment_costs + other_expenses

    options = _relief_options(pipeline, config)
    fields = _run_pipeline(
        pipeline, config, gross, expenses=total_expenses, options=options,
    )

    return CreatorResult(
        **fields,
        total_expenses=total_expenses,
        net_business_income=_deduction_base(pipeline, gross, total_expenses),
        platform_fees=platform_fees,
        equipment_costs=equipment_costs,
        other_expenses=other_expenses,
    )


# ===========================================================================
# COMPANY INCOME TAX
# ===========================================================================

def calculate_business(
    inputs: BusinessInput,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Optional[BusinessResult]:
    """
    Company Income Tax. No personal deductions.

    Small company (turnover ≤ ₦50M AND not professional services):
      CIT 0, levy 0.
    Otherwise:
      CIT  = round(taxable_profit × 30%)
      levy = round(taxable_profit × config.business_levy_rate)
    The levy rate (2% Education Tax vs 4% Development Levy) comes from config.
    """
    pipeline = PIPELINES[CalculatorCategory.business]
    revenue = sanitize(inputs.revenue, config.sanitize_ceiling)
    if revenue <= 0:
        return _no_result(pipeline.category, "non-positive revenue")

    expenses = sanitize(inputs.expenses, config.sanitize_ceiling)
    is_professional_service = sanitize_flag(inputs.is_professional_service)
    is_small_company = revenue <= SMALL_COMPANY_THRESHOLD
    qualifies_for_exemption = is_small_company and not is_professional_service

    fields = _run_pipeline(
        pipeline, config, revenue, expenses=expenses, exempt=qualifies_for_exemption,
    )
    tax_components = fields["tax_components"]

    return BusinessResult(
        **fields,
        total_expenses=expenses,
        taxable_profit=fields["taxable_income"],
        cit=tax_components.get("cit", 0),
        levy=tax_components.get("levy", 0),
        levy_rate=config.business_levy_rate,
        levy_label=config.business_levy_label,
        is_small_company=is_small_company,
        qualifies_for_exemption=qualifies_for_exemption,
        net_profit=fields["net_income"],
    )


# ===========================================================================
# INVESTMENT INCOME
# ===========================================================================

def calculate_investment(
    inputs: InvestmentInput,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Optional[InvestmentResult]:
    """
    Flat 10% on each stream independently: dividend WHT, interest WHT, CGT.
    No bracket taxation and no deduction pipeline. No result only when all
    three streams are zero.
    """
    pipeline = PIPELINES[CalculatorCategory.investment]
    dividend = sanitize(inputs.dividend_income, config.sanitize_ceiling)
    interest = sanitize(inputs.interest_income, config.sanitize_ceiling)
    gains = sanitize(inputs.capital_gains, config.sanitize_ceiling)

    total_income = dividend + interest + gains
    if total_income <= 0:
        return _no_result(pipeline.category, "non-positive income")

    fields = _run_pipeline(
        pipeline, config, total_income,
        streams={"wht_dividend": dividend, "wht_interest": interest, "cgt": gains},
    )
    tax_components = fields["tax_components"]

    return InvestmentResult(
        **fields,
        dividend_income=dividend,
        interest_income=interest,
        capital_gains=gains,
        wht_dividend=tax_components.get("wht_dividend", 0),
        wht_interest=tax_components.get("wht_interest", 0),
        cgt=tax_components.get("cgt", 0),
    )


# ===========================================================================
# DISPATCH — public API
# ===========================================================================

# Input handling per category; which steps run comes from PIPELINES
_CALCULATORS: dict[CalculatorCategory, Callable[..., Optional[CalculationResult]]] = {
    CalculatorCategory.employee:   calculate_employee,
    CalculatorCategory.usd_income: calculate_usd_income,
    CalculatorCategory.freelancer: calculate_freelancer,
    CalculatorCategory.creator:    calculate_creator,
    CalculatorCategory.business:   calculate_business,
    CalculatorCategory.investment: calculate_investment,
}


def resolve_category(category: Union[CalculatorCategory, str]) -> CalculatorCategory:
    """Map a category tag onto the closed enum. Raises UnknownCategoryError."""
    try:
        return CalculatorCategory(category)
    except ValueError:
        raise UnknownCategoryError(category) from None


def run_calculator_variant(
    category: Union[CalculatorCategory, str],
    raw_inputs: Union[CalculationInput, Mapping[str, Any]],
    config: Optional[EngineConfig] = None,
) -> Optional[CalculationResult]:
    """
    Run one calculator over raw form values.

    Args:
        category: CalculatorCategory or its string value ("employee", …).
        raw_inputs: the category's input record, or a mapping of field name
            → raw text. Unknown field names raise pydantic.ValidationError.
        config: engine parameters; DEFAULT_CONFIG when omitted.

    Returns:
        A fresh result record, or None when there is nothing to compute
        (primary income ≤ 0, or invalid exchange rate).
    """
    resolved = resolve_category(category)
    input_model = INPUT_MODELS[resolved]
    if isinstance(raw_inputs, input_model):
        inputs = raw_inputs
    elif isinstance(raw_inputs, Mapping):
        inputs = input_model.model_validate(dict(raw_inputs))
    else:
        inputs = input_model.model_validate(raw_inputs)
    return _CALCULATORS[resolved](inputs, config=config or DEFAULT_CONFIG)


__all__ = [
    "DeductionBase",
    "TaxRule",
    "VariantPipeline",
    "PIPELINES",
    "calculate_employee",
    "calculate_usd_income",
    "calculate_freelancer",
    "calculate_creator",
    "calculate_business",
    "calculate_investment",
    "resolve_category",
    "run_calculator_variant",
]
