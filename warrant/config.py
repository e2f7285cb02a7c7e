from __future__ import annotations

import os
from typing import Optional


def getenv_str(name: str, default: Optional[str] = None) -> str:
    v = os.getenv(name)
    return v if v is not None else default


def getenv_int(name: str, default: int) -> int:
    v = os.getenv(name)
    try:
        return int(v) if v is not None else default
    except ValueError:
        return default


# Primary parser: how many following lines an item may borrow fields from
LOOKAHEAD_LINES = getenv_int("WP_LOOKAHEAD_LINES", 4)

# Below this many primary records the document is re-read by the fallback scanner
MIN_PRIMARY_RECORDS = getenv_int("WP_MIN_PRIMARY_RECORDS", 3)

# Fallback scanner placeholders
FALLBACK_MAX_AMOUNT = 10_000_000
FALLBACK_MONTH = getenv_str("WP_FALLBACK_MONTH", "03")

DEFAULT_DESCRIPTION = "Payment"
UNKNOWN = "Unknown"

# Structured pipeline logs
LOG_LEVEL = getenv_str("WP_LOG_LEVEL", "INFO")
