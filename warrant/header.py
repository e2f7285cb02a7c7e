from __future__ import annotations

from typing import Optional

from warrant.config import UNKNOWN
from warrant.models import WarrantInfo
from warrant.patterns import DATE_RE, MUNICIPALITY_RE, WARRANT_NUMBER_RE


def extract_warrant_info(text: Optional[str]) -> WarrantInfo:
    """
    Pull municipality, warrant number and date from the whole document text.

    Each field is the first match anywhere in the text; a missing field is
    reported as "Unknown" rather than raising.
    """
    if not text:
        return WarrantInfo()

    date_match = DATE_RE.search(text)
    warrant_match = WARRANT_NUMBER_RE.search(text)
    municipality_match = MUNICIPALITY_RE.search(text)

    return WarrantInfo(
        municipality=municipality_match.group(1).strip() if municipality_match else UNKNOWN,
        warrant_number=warrant_match.group(1) if warrant_match else UNKNOWN,
        date=date_match.group(1) if date_match else UNKNOWN,
    )
