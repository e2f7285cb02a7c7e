from __future__ import annotations

import re
from typing import List, Optional

from warrant.patterns import WHITESPACE_RE

# Administrative markers: column headings, subtotal rows, signature blocks, page footers
BOILERPLATE_MARKERS = (
    "Jrnl",
    "Check",
    "Month",
    "Total-",
    "Invoice Total",
    "Vendor Total",
    "Prepaid Total",
    "Current Total",
    "EFT Total",
    "Warrant Total",
    "TREASURER",
    "CERTIFY",
    "SELECTMEN",
    "Page ",
)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(text: Optional[str]) -> List[str]:
    """Split raw extracted text into trimmed, non-empty lines."""
    if not text:
        return []
    lines: List[str] = []
    for raw in _LINE_BREAK_RE.split(text):
        line = raw.strip()
        if line:
            lines.append(line)
    return lines


def is_boilerplate(line: str) -> bool:
    return any(marker in line for marker in BOILERPLATE_MARKERS)


def collapse_whitespace(value: str) -> str:
    return WHITESPACE_RE.sub(" ", value).strip()


def parse_amount(token: str) -> float:
    """``"1,234.50"`` -> ``1234.5``. Callers only pass AMOUNT_RE_STR matches."""
    return float(token.replace(",", ""))
