"""
Bracket table tests — NTA 2025 schedule and TaxSchedule invariants.

Groups:
  1. NTA 2025 constants — exact equality
  2. Invariant enforcement on malformed tables
  3. Registry lookup
"""
from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from naijatax.engine.errors import InvalidScheduleError, TaxEngineError
from naijatax.engine.schedule import (
    DEFAULT_SCHEDULE_NAME,
    NTA_2025_SCHEDULE,
    SCHEDULES,
    TaxBracket,
    TaxSchedule,
    get_schedule,
)


# ===========================================================================
# TEST GROUP 1: NTA 2025 constants
# ===========================================================================

def test_nta_2025_thresholds() -> None:
    """Upper bounds 0.8M / 3M / 12M / 25M / 50M / unbounded."""
    bounds = [b.upper_bound for b in NTA_2025_SCHEDULE.brackets]
    assert bounds[:-1] == [800_000, 3_000_000, 12_000_000, 25_000_000, 50_000_000]
    assert math.isinf(bounds[-1])


def test_nta_2025_rates() -> None:
    rates = [b.marginal_rate for b in NTA_2025_SCHEDULE.brackets]
    assert rates == [0.00, 0.15, 0.18, 0.21, 0.23, 0.25]


def test_nta_2025_is_contiguous() -> None:
    """cumulative_base[i] == upper_bound[i-1]; first base is 0."""
    brackets = NTA_2025_SCHEDULE.brackets
    assert brackets[0].cumulative_base == 0
    for previous, current in zip(brackets, brackets[1:]):
        assert current.cumulative_base == previous.upper_bound


def test_nta_2025_rates_non_decreasing() -> None:
    rates = [b.marginal_rate for b in NTA_2025_SCHEDULE.brackets]
    assert rates == sorted(rates)


def test_exempt_threshold() -> None:
    assert NTA_2025_SCHEDULE.exempt_threshold == 800_000
    assert NTA_2025_SCHEDULE.tax_year == 2026


def test_bracket_width() -> None:
    assert NTA_2025_SCHEDULE.brackets[1].width == 2_200_000
    assert math.isinf(NTA_2025_SCHEDULE.brackets[-1].width)


def test_schedule_is_immutable() -> None:
    with pytest.raises(ValidationError):
        NTA_2025_SCHEDULE.name = "tampered"


# ===========================================================================
# TEST GROUP 2: Invariant enforcement
# ===========================================================================

def _schedule(*brackets: tuple[float, float, float]) -> TaxSchedule:
    return TaxSchedule(
        name="test",
        tax_year=2026,
        brackets=tuple(
            TaxBracket(upper_bound=u, marginal_rate=r, cumulative_base=b)
            for u, r, b in brackets
        ),
    )


def test_empty_schedule_rejected() -> None:
    with pytest.raises(ValidationError, match="no brackets"):
        _schedule()


def test_first_bracket_must_start_at_zero() -> None:
    with pytest.raises(ValidationError, match="must start at 0"):
        _schedule((math.inf, 0.1, 100))


def test_gap_between_brackets_rejected() -> None:
    with pytest.raises(ValidationError, match="does not meet previous upper bound"):
        _schedule((1_000, 0.0, 0), (math.inf, 0.1, 2_000))


def test_decreasing_rate_rejected() -> None:
    with pytest.raises(ValidationError, match="marginal rate drops"):
        _schedule((1_000, 0.2, 0), (math.inf, 0.1, 1_000))


def test_final_bracket_must_be_unbounded() -> None:
    with pytest.raises(ValidationError, match="only the final bracket may be unbounded"):
        _schedule((1_000, 0.0, 0), (2_000, 0.1, 1_000))


def test_unbounded_bracket_must_be_last() -> None:
    with pytest.raises(ValidationError, match="only the final bracket may be unbounded"):
        _schedule((math.inf, 0.0, 0), (math.inf, 0.1, 1_000))


def test_empty_band_rejected() -> None:
    with pytest.raises(ValidationError, match="is not above its base"):
        _schedule((1_000, 0.0, 0), (1_000, 0.1, 1_000), (math.inf, 0.2, 1_000))


def test_rate_outside_unit_interval_rejected() -> None:
    with pytest.raises(ValidationError):
        TaxBracket(upper_bound=math.inf, marginal_rate=1.5, cumulative_base=0)


def test_single_unbounded_bracket_is_valid(flat_ten_percent_schedule: TaxSchedule) -> None:
    assert flat_ten_percent_schedule.exempt_threshold == 0
    assert flat_ten_percent_schedule.brackets[-1].marginal_rate == 0.10


# ===========================================================================
# TEST GROUP 3: Registry
# ===========================================================================

def test_get_schedule_default() -> None:
    assert get_schedule(DEFAULT_SCHEDULE_NAME) is NTA_2025_SCHEDULE
    assert DEFAULT_SCHEDULE_NAME in SCHEDULES


def test_get_schedule_unknown_name() -> None:
    with pytest.raises(InvalidScheduleError, match="Unknown tax schedule 'pita_2011'"):
        get_schedule("pita_2011")


def test_invalid_schedule_error_is_value_error() -> None:
    assert issubclass(InvalidScheduleError, TaxEngineError)
    assert issubclass(InvalidScheduleError, ValueError)
