from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from warrant import config
from warrant.json_logger import get_json_logger
from warrant.models import ActiveVendor, VendorState, WarrantRecord
from warrant.normalizer import collapse_whitespace, is_boilerplate, parse_amount
from warrant.patterns import (
    ACCOUNT_RE,
    AMOUNT_WITH_ENCUMBRANCE_RE,
    DEPARTMENT_RE,
    DOUBLE_CODE_RE,
    EMBEDDED_AMOUNT_RE,
    FUND_RE,
    LINE_ITEM_RE,
    NEXT_ITEM_RE,
    NEXT_VENDOR_RE,
    VENDOR_HEADER_RE,
    format_account,
)


logger = get_json_logger("warrant.primary")


def match_vendor_header(line: str) -> Optional[tuple]:
    """Return ``(code, name)`` when ``line`` introduces a vendor section."""
    m = VENDOR_HEADER_RE.match(line)
    if not m or DOUBLE_CODE_RE.match(line):
        return None
    return m.group(1), collapse_whitespace(m.group(2))


def ends_lookahead(line: str) -> bool:
    return bool(NEXT_ITEM_RE.match(line) or NEXT_VENDOR_RE.match(line))


def find_amount(line: str) -> Optional[re.Match]:
    return AMOUNT_WITH_ENCUMBRANCE_RE.search(line)


def clean_description(tail: str) -> str:
    tail = ACCOUNT_RE.sub("", tail, count=1)
    tail = EMBEDDED_AMOUNT_RE.sub("", tail, count=1)
    return collapse_whitespace(tail) or config.DEFAULT_DESCRIPTION


@dataclass
class LookaheadFields:
    """Fields an item borrows from the lines printed beneath it; first match wins."""

    account: str = ""
    department_category: str = ""
    amount: float = 0.0

    def absorb(self, line: str) -> None:
        if not self.account:
            acct = ACCOUNT_RE.search(line)
            if acct:
                self.account = format_account(acct)

        if not self.department_category and FUND_RE.match(line):
            self.department_category = line

        if not self.department_category:
            dept = DEPARTMENT_RE.match(line)
            if dept:
                self.department_category = (
                    f"{dept.group(1).strip()} - {dept.group(2).strip()} / {dept.group(3).strip()}"
                )

        if not self.amount:
            amt = find_amount(line)
            if amt:
                self.amount = parse_amount(amt.group(1))


@dataclass
class PrimaryStats:
    items_seen: int = 0
    items_dropped: int = 0
    vendors_seen: int = 0


class PrimaryLineParser:
    """
    Stateful scan over normalized lines.

    Vendor headers switch the active vendor; line items become records for
    that vendor. An item's amount is taken from its own line when printed
    there, otherwise from a bounded window of following lines together with
    account code and department/category.
    """

    def __init__(self, lookahead: int = config.LOOKAHEAD_LINES) -> None:
        self.lookahead = max(0, int(lookahead))

    def parse(self, lines: Sequence[str]) -> List[WarrantRecord]:
        vendor = ActiveVendor()
        current_check = ""
        current_month = ""
        stats = PrimaryStats()
        records: List[WarrantRecord] = []

        for i, line in enumerate(lines):
            if is_boilerplate(line):
                continue

            header = match_vendor_header(line)
            if header is not None:
                vendor.switch(*header)
                stats.vendors_seen += 1
                continue

            item = LINE_ITEM_RE.match(line)
            if item is None:
                continue

            stats.items_seen += 1
            current_check = item.group(2)
            current_month = item.group(3)
            description = item.group(4) or ""
            amount = 0.0

            same_line = find_amount(line)
            if same_line:
                amount = parse_amount(same_line.group(1))
                description = description.replace(same_line.group(0), "", 1).strip()

            fields = self._scan_following(lines, i)
            if not amount:
                amount = fields.amount

            if amount > 0 and vendor.state is VendorState.VENDOR_ACTIVE:
                records.append(
                    WarrantRecord(
                        vendor_code=vendor.code,
                        vendor_name=vendor.name,
                        check_number=current_check,
                        month=current_month,
                        description=clean_description(description),
                        account=fields.account,
                        department_category=fields.department_category,
                        amount=amount,
                    )
                )
            else:
                stats.items_dropped += 1

        logger.debug(
            "primary_scan_done",
            extra={"extra": {
                "lines": len(lines),
                "vendors": stats.vendors_seen,
                "items": stats.items_seen,
                "dropped": stats.items_dropped,
                "records": len(records),
            }},
        )
        return records

    def _scan_following(self, lines: Sequence[str], index: int) -> LookaheadFields:
        fields = LookaheadFields()
        end = min(len(lines), index + 1 + self.lookahead)
        for j in range(index + 1, end):
            nxt = lines[j]
            if ends_lookahead(nxt):
                break
            fields.absorb(nxt)
        return fields
