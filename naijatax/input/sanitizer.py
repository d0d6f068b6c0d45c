"""
sanitizer.py — raw form text → bounded, non-negative number.

Never raises. Every input maps to a finite float in [0, ceiling]:
  - empty / whitespace-only            → 0
  - currency glyphs, separators, spaces → stripped ("₦1,000,000" → 1000000)
  - nothing numeric left               → 0
  - negative                           → 0
  - above ceiling (₦1 trillion)        → ceiling

Parsing takes the longest leading decimal number after stripping, so
"1.5.2" → 1.5 and "12-3" → 12.
"""
from __future__ import annotations

import math
import re
from typing import Union

from naijatax.config import SANITIZE_CEILING

RawValue = Union[str, int, float, None]

# Everything except digits, decimal point and minus sign is formatting noise
_NON_NUMERIC = re.compile(r"[^\d.\-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")


def sanitize(raw: RawValue, ceiling: float = SANITIZE_CEILING) -> float:
    """Parse raw field text into a value in [0, ceiling]."""
    if raw is None or isinstance(raw, bool):
        return 0.0

    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        if not raw.strip():
            return 0.0
        match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", raw))
        if match is None:
            return 0.0
        value = float(match.group())

    if math.isnan(value) or value < 0:
        return 0.0
    return min(value, ceiling)


# Checkbox / select values a form sends for "yes"
_TRUTHY_FLAGS = frozenset({"true", "yes", "y", "1", "on"})


def sanitize_flag(raw: Union[bool, RawValue]) -> bool:
    """
    Parse a raw checkbox value. Never raises.

    Only recognised truthy text ("true", "yes", "1", "on", any case) is True;
    empty, falsy or unrecognised text is False. Numbers are True when > 0.
    """
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    if isinstance(raw, (int, float)):
        return not math.isnan(raw) and raw > 0
    return raw.strip().lower() in _TRUTHY_FLAGS
