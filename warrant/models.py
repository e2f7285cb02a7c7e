from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

from warrant.config import UNKNOWN


@dataclass(frozen=True)
class WarrantRecord:
    """One payment line item recovered from a warrant."""

    vendor_code: str
    vendor_name: str
    check_number: str
    month: str
    description: str
    account: str = ""
    department_category: str = ""
    amount: float = 0.0

    def to_dict(self) -> Dict[str, object]:
        return {
            "vendorCode": self.vendor_code,
            "vendorName": self.vendor_name,
            "check": self.check_number,
            "month": self.month,
            "description": self.description,
            "account": self.account,
            "deptCategory": self.department_category,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class WarrantInfo:
    municipality: str = UNKNOWN
    warrant_number: str = UNKNOWN
    date: str = UNKNOWN

    def to_dict(self) -> Dict[str, str]:
        return {
            "municipality": self.municipality,
            "warrantNumber": self.warrant_number,
            "date": self.date,
        }


class VendorState(Enum):
    NO_VENDOR = "no_vendor"
    VENDOR_ACTIVE = "vendor_active"


@dataclass
class ActiveVendor:
    """Vendor carried forward from the most recent header line."""

    code: str = ""
    name: str = ""

    @property
    def state(self) -> VendorState:
        return VendorState.VENDOR_ACTIVE if self.name else VendorState.NO_VENDOR

    def switch(self, code: str, name: str) -> None:
        self.code = code
        self.name = name


@dataclass(frozen=True)
class ParseResult:
    """
    Output of one parse invocation.

    - records: emitted line items in source order
    - warrant_info: document-level header fields
    - total: float sum of record amounts in emission order
    - used_fallback: True when the primary parser found too few items
    """

    records: Tuple[WarrantRecord, ...] = field(default_factory=tuple)
    warrant_info: WarrantInfo = field(default_factory=WarrantInfo)
    total: float = 0.0
    used_fallback: bool = False

    @property
    def ok(self) -> bool:
        return len(self.records) > 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "data": [r.to_dict() for r in self.records],
            "warrantInfo": self.warrant_info.to_dict(),
            "total": self.total,
            "usedFallback": self.used_fallback,
        }
