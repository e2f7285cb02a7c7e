from __future__ import annotations

from io import BytesIO
from typing import Callable, List, Optional, Sequence
from urllib.parse import quote

import pandas as pd
from openpyxl.utils import get_column_letter

from warrant.assembler import compute_total
from warrant.models import WarrantInfo, WarrantRecord


XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

DETAIL_SHEET = "A-P Warrant Details"
VENDOR_SHEET = "Summary by Vendor"
DEPARTMENT_SHEET = "Summary by Department"

DETAIL_COLUMNS = [
    "Vendor Code",
    "Vendor Name",
    "Check #",
    "Month",
    "Description",
    "Account Code",
    "Department/Category",
    "Amount",
]
DETAIL_WIDTHS = [12, 40, 10, 8, 35, 14, 40, 14]
VENDOR_WIDTHS = [45, 15, 12]
DEPARTMENT_WIDTHS = [30, 15, 12]

MONEY_FORMAT = "#,##0.00"
PERCENT_FORMAT = "0.00%"


def canonical_department(value: str) -> str:
    """Budget category up to the first " - " (else " / ") separator."""
    dept = value or "Uncategorized"
    if " - " in dept:
        return dept.split(" - ", 1)[0]
    if " / " in dept:
        return dept.split(" / ", 1)[0]
    return dept


def summarize_by(
    records: Sequence[WarrantRecord],
    key_fn: Callable[[WarrantRecord], str],
    total: float,
    label: str,
) -> pd.DataFrame:
    """
    Group amounts by ``key_fn`` and sort descending.
    Ties keep the order in which groups first appear.
    """
    columns = [label, "Total Amount", "% of Total"]
    if not records:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame({"key": [key_fn(r) for r in records], "amount": [r.amount for r in records]})
    grouped = df.groupby("key", sort=False)["amount"].sum().reset_index()
    grouped = grouped.sort_values("amount", ascending=False, kind="stable").reset_index(drop=True)
    grouped["share"] = grouped["amount"] / total if total else 0.0
    grouped.columns = columns
    return grouped


def export_filename(info: WarrantInfo) -> str:
    return f"{info.municipality}_Warrant_{info.warrant_number}.xlsx"


def content_disposition(filename: str) -> str:
    """Attachment header value; names that need escaping use RFC 5987 ``filename*``."""
    quoted = quote(filename, safe="")
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


def _pad(rows: List[list], width: int) -> List[list]:
    return [list(r) + [None] * (width - len(r)) for r in rows]


def _write_sheet(
    writer: pd.ExcelWriter,
    sheet_name: str,
    rows: List[list],
    widths: List[int],
    formats: Optional[dict] = None,
    first_data_row: int = 1,
) -> None:
    frame = pd.DataFrame(_pad(rows, len(widths)))
    frame.to_excel(writer, sheet_name=sheet_name, index=False, header=False)
    ws = writer.sheets[sheet_name]
    for idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width
    for col_idx, number_format in (formats or {}).items():
        for row in ws.iter_rows(min_row=first_data_row, min_col=col_idx, max_col=col_idx):
            for cell in row:
                if isinstance(cell.value, (int, float)):
                    cell.number_format = number_format


def _summary_rows(title: str, summary: pd.DataFrame, total: float) -> List[list]:
    rows: List[list] = [[title], [], list(summary.columns)]
    rows.extend([row[0], float(row[1]), float(row[2])] for row in summary.itertuples(index=False))
    rows.append([])
    rows.append(["TOTAL", total, 1])
    return rows


def build_workbook(
    records: Sequence[WarrantRecord],
    info: WarrantInfo,
    total: Optional[float] = None,
) -> bytes:
    """
    Render records into a three-sheet xlsx: detail rows, totals by vendor and
    totals by department (both with share of the grand total).
    """
    if total is None:
        total = compute_total(records)

    detail: List[list] = [
        ["A/P Warrant Details"],
        [f"{info.municipality} - Warrant #{info.warrant_number} - {info.date}"],
        [],
        list(DETAIL_COLUMNS),
    ]
    for r in records:
        detail.append([
            r.vendor_code,
            r.vendor_name,
            r.check_number,
            r.month,
            r.description,
            r.account,
            r.department_category,
            r.amount,
        ])
    detail.append([])
    detail.append(["", "", "", "", "", "", "TOTAL:", total])

    by_vendor = summarize_by(records, lambda r: r.vendor_name, total, "Vendor")
    by_department = summarize_by(
        records, lambda r: canonical_department(r.department_category), total, "Department"
    )

    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        _write_sheet(writer, DETAIL_SHEET, detail, DETAIL_WIDTHS, {8: MONEY_FORMAT}, first_data_row=5)
        _write_sheet(
            writer,
            VENDOR_SHEET,
            _summary_rows("Summary by Vendor", by_vendor, total),
            VENDOR_WIDTHS,
            {2: MONEY_FORMAT, 3: PERCENT_FORMAT},
            first_data_row=4,
        )
        _write_sheet(
            writer,
            DEPARTMENT_SHEET,
            _summary_rows("Summary by Department", by_department, total),
            DEPARTMENT_WIDTHS,
            {2: MONEY_FORMAT, 3: PERCENT_FORMAT},
            first_data_row=4,
        )
    return buf.getvalue()
