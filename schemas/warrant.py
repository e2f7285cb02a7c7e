from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from warrant.models import WarrantInfo, WarrantRecord


class WarrantItem(BaseModel):
    """Wire form of a WarrantRecord (camelCase, as the export endpoint receives it)."""

    model_config = ConfigDict(populate_by_name=True)

    vendor_code: str = Field(alias="vendorCode")
    vendor_name: str = Field(alias="vendorName")
    check: str = ""
    month: str = ""
    description: str = ""
    account: str = ""
    dept_category: str = Field(default="", alias="deptCategory")
    amount: float

    @field_validator("amount")
    @classmethod
    def positive_amount(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("amount must be positive")
        return v

    def to_record(self) -> WarrantRecord:
        return WarrantRecord(
            vendor_code=self.vendor_code,
            vendor_name=self.vendor_name,
            check_number=self.check,
            month=self.month,
            description=self.description,
            account=self.account,
            department_category=self.dept_category,
            amount=self.amount,
        )


class WarrantInfoModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    municipality: str = "Unknown"
    warrant_number: str = Field(default="Unknown", alias="warrantNumber")
    date: str = "Unknown"

    def to_info(self) -> WarrantInfo:
        return WarrantInfo(
            municipality=self.municipality,
            warrant_number=self.warrant_number,
            date=self.date,
        )


class ParseResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: List[WarrantItem] = Field(default_factory=list)
    warrant_info: WarrantInfoModel = Field(alias="warrantInfo")
    total: float
    used_fallback: bool = Field(default=False, alias="usedFallback")


class ExportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data: List[WarrantItem]
    warrant_info: WarrantInfoModel = Field(alias="warrantInfo")
    total: Optional[float] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    debug: Optional[str] = None
