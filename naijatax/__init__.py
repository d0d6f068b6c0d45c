"""
naijatax — Nigerian personal and corporate tax computation engine (NTA 2025).

Pure, deterministic functions. Same input → same output. No I/O.
"""
from naijatax.engine.variants import run_calculator_variant
from naijatax.engine.tax_engine import compute_deductions, compute_progressive_tax
from naijatax.input.sanitizer import sanitize

__version__ = "0.1.0"

__all__ = [
    "compute_deductions",
    "compute_progressive_tax",
    "run_calculator_variant",
    "sanitize",
]
