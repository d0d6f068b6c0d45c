"""
config.py — naijatax engine parameters and host-application settings.

Two layers:
  - EngineConfig: frozen, explicit parameters passed into the engine
    (bracket schedule, business levy rate/label, sanitiser ceiling).
    The engine never reads the environment — callers hand it an EngineConfig
    or get DEFAULT_CONFIG.
  - Settings: pydantic-settings loader for host applications (env vars with
    the NAIJATAX_ prefix, or a .env file). settings.engine_config() turns it
    into an EngineConfig.

Usage:
    from naijatax.config import Settings, configure_logging
    settings = Settings()
    configure_logging(settings)
    result = run_calculator_variant("business", raw, config=settings.engine_config())

Business levy: the secondary levy on company profit appears as both 2% Education
Tax and 4% Development Levy. It is resolved here by configuration, not in code.
Default is 2% Education Tax; set NAIJATAX_BUSINESS_LEVY_RATE=0.04 and
NAIJATAX_BUSINESS_LEVY_LABEL="Development Levy" for the other reading.
"""
from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from naijatax.engine.schedule import (
    DEFAULT_SCHEDULE_NAME,
    NTA_2025_SCHEDULE,
    TaxSchedule,
    get_schedule,
)

EDUCATION_TAX_RATE    = 0.02    # 2% of assessable profit
DEVELOPMENT_LEVY_RATE = 0.04    # 4% of assessable profit

SANITIZE_CEILING = 1e12          # ₦1 trillion, upper bound on any parsed input

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s — %(message)s"


# ---------------------------------------------------------------------------
# EngineConfig — explicit engine parameters
# ---------------------------------------------------------------------------

class EngineConfig(BaseModel):
    """Immutable parameters consumed by the variant pipelines."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    schedule: TaxSchedule = NTA_2025_SCHEDULE
    business_levy_rate: float = Field(default=EDUCATION_TAX_RATE, ge=0, le=1)
    business_levy_label: str = "Education Tax"
    sanitize_ceiling: float = Field(default=SANITIZE_CEILING, gt=0)


DEFAULT_CONFIG = EngineConfig()


# ---------------------------------------------------------------------------
# Settings — environment-driven, for host applications only
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NAIJATAX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore any extra env vars
    )

    # --- Tax schedule (registry name, see engine/schedule.py) ---
    tax_schedule: str = DEFAULT_SCHEDULE_NAME

    # --- Business secondary levy ---
    business_levy_rate: float = Field(default=EDUCATION_TAX_RATE, ge=0, le=1)
    business_levy_label: str = "Education Tax"

    # --- Input sanitiser ---
    sanitize_ceiling: float = Field(default=SANITIZE_CEILING, gt=0)

    # --- Logging ---
    log_level: str = "INFO"

    def engine_config(self) -> EngineConfig:
        """Resolve the schedule name and build the EngineConfig the engine consumes."""
        return EngineConfig(
            schedule=get_schedule(self.tax_schedule),
            business_levy_rate=self.business_levy_rate,
            business_levy_label=self.business_levy_label,
            sanitize_ceiling=self.sanitize_ceiling,
        )


def configure_logging(settings: Settings) -> None:
    """Configure root logging once, at application start-up. The engine never calls this."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
