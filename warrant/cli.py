from __future__ import annotations

import argparse
import json
import os
from typing import Any, Dict, Optional

from services.errors import WarrantError
from services.excel_export import build_workbook, export_filename
from services.text_extraction import TextExtractor
from warrant.assembler import parse


def read_text(path: str, extractor: TextExtractor, force_text: bool = False) -> str:
    if force_text or path.lower().endswith(".txt"):
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    with open(path, "rb") as f:
        content = f.read()
    return extractor.extract(content, filename=os.path.basename(path)).text


def process_path(path: str, extractor: TextExtractor, xlsx_dir: Optional[str] = None, force_text: bool = False) -> Dict[str, Any]:
    text = read_text(path, extractor, force_text=force_text)
    result = parse(text)
    summary: Dict[str, Any] = {
        "file": path,
        "municipality": result.warrant_info.municipality,
        "warrant": result.warrant_info.warrant_number,
        "date": result.warrant_info.date,
        "records": len(result.records),
        "total": round(result.total, 2),
        "used_fallback": result.used_fallback,
    }
    if xlsx_dir and result.ok:
        os.makedirs(xlsx_dir, exist_ok=True)
        out_path = os.path.join(xlsx_dir, export_filename(result.warrant_info))
        with open(out_path, "wb") as f:
            f.write(build_workbook(result.records, result.warrant_info, result.total))
        summary["xlsx"] = out_path
    return summary


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Parse A/P warrant PDFs (or OCR text dumps) and print a summary")
    parser.add_argument("paths", nargs="+", help="PDF or .txt file paths")
    parser.add_argument("--xlsx-dir", default=None, help="Write a workbook per parsed warrant into this directory")
    parser.add_argument("--text", action="store_true", help="Treat every path as already-extracted plain text")
    args = parser.parse_args(argv)

    extractor = TextExtractor()
    failures = 0
    for path in args.paths:
        if not os.path.exists(path):
            print(json.dumps({"file": path, "error": "not_found"}))
            failures += 1
            continue
        try:
            print(json.dumps(process_path(path, extractor, args.xlsx_dir, args.text)))
        except (WarrantError, OSError) as e:
            print(json.dumps({"file": path, "error": str(e)}))
            failures += 1
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
