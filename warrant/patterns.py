from __future__ import annotations

import re


# Precompiled regex patterns shared by the line parsers and header extractor.
# Every field the parser recovers comes from one of these, so each has its own
# unit test in tests/test_patterns.py. Digits are spelled [0-9]: OCR output can
# carry other Unicode digits, which must not become codes or amounts.

AMOUNT_RE_STR = r"[0-9,]+\.[0-9]{2}"
ACCOUNT_RE_STR = r"([EG])\s*([0-9]{1,2})[-\s]([0-9]{1,2})[-\s]([0-9]{2})"
VENDOR_NAME_RE_STR = r"[A-Za-z][A-Za-z\s&.,'\-/()]+?"

# --- header (whole text) ---
DATE_RE = re.compile(r"([0-9]{2}/[0-9]{2}/[0-9]{4})")
WARRANT_NUMBER_RE = re.compile(r"Warrant\s+([0-9]+)", re.IGNORECASE)
MUNICIPALITY_RE = re.compile(r"^([A-Za-z]+)\s", re.MULTILINE)

# --- line classification ---
# 5-digit vendor code, then a name that ends at end-of-line or before a digit
VENDOR_HEADER_RE = re.compile(rf"^([0-9]{{5}})\s+({VENDOR_NAME_RE_STR})(?:\s*$|\s+[0-9])")
# looser variant used by the fallback scanner
VENDOR_HEADER_LOOSE_RE = re.compile(rf"^([0-9]{{5}})\s+({VENDOR_NAME_RE_STR})(?:\s+[0-9]|$)")
# two leading 5-digit groups: an item-like row, never a vendor header
DOUBLE_CODE_RE = re.compile(r"^[0-9]{5}\s+[0-9]{5}")
# jrnl(4) check(5) month(2) tail
LINE_ITEM_RE = re.compile(r"^([0-9]{4})\s+([0-9]{5})\s+([0-9]{2})\s+(.*)")

# --- lookahead terminators ---
NEXT_ITEM_RE = re.compile(r"^[0-9]{4}\s+[0-9]{5}")
NEXT_VENDOR_RE = re.compile(r"^[0-9]{5}\s+[A-Za-z]")

# --- field extraction ---
# payment amount followed by the encumbrance figure at end of line
AMOUNT_WITH_ENCUMBRANCE_RE = re.compile(rf"({AMOUNT_RE_STR})\s+[0-9]+\.[0-9]{{2}}\s*$")
# same shape without the end anchor, for scrubbing descriptions
EMBEDDED_AMOUNT_RE = re.compile(rf"{AMOUNT_RE_STR}\s+[0-9]+\.[0-9]{{2}}")
ACCOUNT_RE = re.compile(ACCOUNT_RE_STR)
FUND_RE = re.compile(r"^FUND\s+[0-9]+\s*/?\s*(.*)$", re.IGNORECASE)
DEPARTMENT_RE = re.compile(r"^([A-Z][A-Z\s.]+)\s*[-–—]\s*([A-Z][A-Z\s.]+)\s*/\s*(.+)", re.IGNORECASE)
ANY_AMOUNT_RE = re.compile(AMOUNT_RE_STR)
# check numbers seen on 2024/2025 warrants; word boundaries are ASCII-only
FALLBACK_CHECK_RE = re.compile(r"\b(2[45][0-9]{3})\b", re.ASCII)

WHITESPACE_RE = re.compile(r"\s+")


def format_account(match: re.Match) -> str:
    """Render an ACCOUNT_RE match as ``"E 1-2-34"``."""
    prefix, a, b, c = match.groups()
    return f"{prefix} {a}-{b}-{c}"
