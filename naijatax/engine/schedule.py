"""
schedule.py — Progressive PIT bracket table (Nigeria Tax Act 2025, effective 1 Jan 2026).

The bracket table is configuration data, not code. A TaxSchedule is a named,
validated, immutable object; the engine receives it through EngineConfig and
never hard-codes band thresholds.

Invariants enforced by TaxSchedule (raised as InvalidScheduleError):
  1. At least one bracket.
  2. First bracket's cumulative_base == 0.
  3. cumulative_base[i] == upper_bound[i-1]  (contiguous, no gaps or overlaps)
  4. upper_bound[i] > cumulative_base[i]     (ascending, non-empty bands)
  5. marginal rates are non-decreasing
  6. Final bracket's upper_bound is unbounded (inf); no other bracket is.
"""
from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

from naijatax.engine.errors import InvalidScheduleError


# ---------------------------------------------------------------------------
# TaxBracket — one marginal band
# ---------------------------------------------------------------------------

class TaxBracket(BaseModel):
    """
    A single marginal band: income in [cumulative_base, upper_bound) is taxed
    at marginal_rate. upper_bound is exclusive and may be math.inf.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    upper_bound: float = Field(..., gt=0)
    marginal_rate: float = Field(..., ge=0, le=1)
    cumulative_base: float = Field(..., ge=0)

    @property
    def width(self) -> float:
        """Amount of income this band can hold (inf for the top band)."""
        return self.upper_bound - self.cumulative_base


# ---------------------------------------------------------------------------
# TaxSchedule — ordered, contiguous set of brackets
# ---------------------------------------------------------------------------

class TaxSchedule(BaseModel):
    """Named, versioned bracket table. Swap it via EngineConfig.schedule."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    tax_year: int
    brackets: tuple[TaxBracket, ...]

    @model_validator(mode="after")
    def validate_brackets(self) -> "TaxSchedule":
        brackets = self.brackets
        if not brackets:
            raise InvalidScheduleError(f"Schedule {self.name!r} has no brackets")

        if brackets[0].cumulative_base != 0:
            raise InvalidScheduleError(
                f"Schedule {self.name!r}: first bracket must start at 0, "
                f"got {brackets[0].cumulative_base:,.0f}"
            )

        for i, bracket in enumerate(brackets):
            if bracket.upper_bound <= bracket.cumulative_base:
                raise InvalidScheduleError(
                    f"Schedule {self.name!r}: bracket {i} upper bound "
                    f"{bracket.upper_bound:,.0f} is not above its base "
                    f"{bracket.cumulative_base:,.0f}"
                )
            is_last = i == len(brackets) - 1
            if math.isinf(bracket.upper_bound) != is_last:
                raise InvalidScheduleError(
                    f"Schedule {self.name!r}: only the final bracket may be unbounded "
                    f"(bracket {i})"
                )
            if i == 0:
                continue
            previous = brackets[i - 1]
            if bracket.cumulative_base != previous.upper_bound:
                raise InvalidScheduleError(
                    f"Schedule {self.name!r}: bracket {i} base "
                    f"{bracket.cumulative_base:,.0f} does not meet previous upper bound "
                    f"{previous.upper_bound:,.0f}"
                )
            if bracket.marginal_rate < previous.marginal_rate:
                raise InvalidScheduleError(
                    f"Schedule {self.name!r}: marginal rate drops at bracket {i} "
                    f"({previous.marginal_rate:.2%} → {bracket.marginal_rate:.2%})"
                )
        return self

    @property
    def exempt_threshold(self) -> float:
        """Income up to this amount carries no tax (upper bound of leading 0% bands)."""
        threshold = 0.0
        for bracket in self.brackets:
            if bracket.marginal_rate > 0:
                break
            threshold = bracket.upper_bound
        return threshold


# ===========================================================================
# NTA 2025 SCHEDULE — PAYE bands (annual taxable income, NGN)
# ===========================================================================

NTA_2025_SCHEDULE = TaxSchedule(
    name="nta_2025",
    tax_year=2026,
    brackets=(
        TaxBracket(upper_bound=800_000,    marginal_rate=0.00, cumulative_base=0),           # first ₦800K exempt
        TaxBracket(upper_bound=3_000_000,  marginal_rate=0.15, cumulative_base=800_000),     # ₦800K–₦3M
        TaxBracket(upper_bound=12_000_000, marginal_rate=0.18, cumulative_base=3_000_000),   # ₦3M–₦12M
        TaxBracket(upper_bound=25_000_000, marginal_rate=0.21, cumulative_base=12_000_000),  # ₦12M–₦25M
        TaxBracket(upper_bound=50_000_000, marginal_rate=0.23, cumulative_base=25_000_000),  # ₦25M–₦50M
        TaxBracket(upper_bound=math.inf,   marginal_rate=0.25, cumulative_base=50_000_000),  # above ₦50M
    ),
)

# Registry of known schedules, keyed by name (Settings.tax_schedule resolves here)
SCHEDULES: dict[str, TaxSchedule] = {
    NTA_2025_SCHEDULE.name: NTA_2025_SCHEDULE,
}

DEFAULT_SCHEDULE_NAME = NTA_2025_SCHEDULE.name


def get_schedule(name: str) -> TaxSchedule:
    """Look up a registered schedule by name. Raises InvalidScheduleError if unknown."""
    try:
        return SCHEDULES[name]
    except KeyError:
        raise InvalidScheduleError(
            f"Unknown tax schedule {name!r}. Registered: {', '.join(sorted(SCHEDULES))}"
        ) from None
