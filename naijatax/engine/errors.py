"""
errors.py — exceptions for programming-contract violations.

Bad numeric input never raises: it is sanitised to 0 or yields no result.
These are raised only when the caller breaks the contract itself
(unknown category, malformed bracket table).
"""


class TaxEngineError(ValueError):
    """Base class for all naijatax contract violations."""


class UnknownCategoryError(TaxEngineError):
    """Category string is not one of the closed CalculatorCategory set."""

    def __init__(self, category: object) -> None:
        self.category = category
        super().__init__(f"Unknown calculator category: {category!r}")


class InvalidScheduleError(TaxEngineError):
    """Bracket table breaks contiguity / ordering invariants, or name is not registered."""
