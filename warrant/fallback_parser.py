from __future__ import annotations

from typing import List, Optional, Sequence

from warrant import config
from warrant.json_logger import get_json_logger
from warrant.models import ActiveVendor, VendorState, WarrantRecord
from warrant.normalizer import parse_amount
from warrant.patterns import (
    ACCOUNT_RE,
    ANY_AMOUNT_RE,
    FALLBACK_CHECK_RE,
    VENDOR_HEADER_LOOSE_RE,
    format_account,
)


logger = get_json_logger("warrant.fallback")


def first_plausible_amount(line: str, upper: float = config.FALLBACK_MAX_AMOUNT) -> Optional[float]:
    for token in ANY_AMOUNT_RE.findall(line):
        value = parse_amount(token)
        if 0 < value < upper:
            return value
    return None


class FallbackLineParser:
    """
    Recall-first single pass for documents the primary parser cannot follow.

    Any non-total line under an active vendor that carries a decimal amount
    becomes a record. Month and description are placeholders, so output from
    this parser is lower confidence than primary output.
    """

    def parse(self, lines: Sequence[str]) -> List[WarrantRecord]:
        vendor = ActiveVendor()
        records: List[WarrantRecord] = []

        for line in lines:
            header = VENDOR_HEADER_LOOSE_RE.match(line)
            if header:
                vendor.switch(header.group(1), header.group(2).strip())

            if vendor.state is not VendorState.VENDOR_ACTIVE or "Total" in line:
                continue

            amount = first_plausible_amount(line)
            if amount is None:
                continue

            acct = ACCOUNT_RE.search(line)
            check = FALLBACK_CHECK_RE.search(line)
            records.append(
                WarrantRecord(
                    vendor_code=vendor.code,
                    vendor_name=vendor.name,
                    check_number=check.group(1) if check else "",
                    month=config.FALLBACK_MONTH,
                    description=config.DEFAULT_DESCRIPTION,
                    account=format_account(acct) if acct else "",
                    department_category="",
                    amount=amount,
                )
            )

        logger.debug("fallback_scan_done", extra={"extra": {"lines": len(lines), "records": len(records)}})
        return records
