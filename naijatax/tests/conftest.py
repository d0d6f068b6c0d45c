"""
Shared fixtures for the naijatax test suite.

Engine configs are built explicitly — tests never depend on NAIJATAX_* env vars.
"""
from __future__ import annotations

import math

import pytest

from naijatax.config import DEVELOPMENT_LEVY_RATE, EngineConfig
from naijatax.engine.schedule import TaxBracket, TaxSchedule


@pytest.fixture
def default_config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def development_levy_config() -> EngineConfig:
    """The 4% Development Levy reading of the business secondary levy."""
    return EngineConfig(
        business_levy_rate=DEVELOPMENT_LEVY_RATE,
        business_levy_label="Development Levy",
    )


@pytest.fixture
def flat_ten_percent_schedule() -> TaxSchedule:
    """Single-band schedule: 10% on every naira. Used to prove the table is swappable."""
    return TaxSchedule(
        name="flat_10",
        tax_year=2026,
        brackets=(
            TaxBracket(upper_bound=math.inf, marginal_rate=0.10, cumulative_base=0),
        ),
    )


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """No stray .env or NAIJATAX_* variables leak into Settings()."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "NAIJATAX_TAX_SCHEDULE",
        "NAIJATAX_BUSINESS_LEVY_RATE",
        "NAIJATAX_BUSINESS_LEVY_LABEL",
        "NAIJATAX_SANITIZE_CEILING",
        "NAIJATAX_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
