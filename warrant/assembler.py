from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from warrant import config
from warrant.fallback_parser import FallbackLineParser
from warrant.header import extract_warrant_info
from warrant.json_logger import get_json_logger
from warrant.models import ParseResult, WarrantRecord
from warrant.normalizer import split_lines
from warrant.primary_parser import PrimaryLineParser


logger = get_json_logger("warrant.assembler")


def compute_total(records: Sequence[WarrantRecord]) -> float:
    total = 0.0
    for record in records:
        total += record.amount
    return total


def assemble(
    primary: List[WarrantRecord],
    fallback: Callable[[], List[WarrantRecord]],
    min_primary: int = config.MIN_PRIMARY_RECORDS,
) -> Tuple[List[WarrantRecord], bool]:
    """Keep primary output when it has at least ``min_primary`` records, else use the fallback's."""
    if len(primary) >= min_primary:
        return primary, False
    return fallback(), True


def parse(
    text: Optional[str],
    primary_parser: Optional[PrimaryLineParser] = None,
    fallback_parser: Optional[FallbackLineParser] = None,
) -> ParseResult:
    """
    Parse warrant text into records and header info.

    Never raises for string input. An empty ``records`` tuple means the
    document could not be parsed; mapping that to a user-facing error is the
    caller's job.
    """
    text = text or ""
    lines = split_lines(text)
    info = extract_warrant_info(text)

    primary_parser = primary_parser or PrimaryLineParser()
    fallback_parser = fallback_parser or FallbackLineParser()

    primary = primary_parser.parse(lines)
    records, used_fallback = assemble(primary, lambda: fallback_parser.parse(lines))
    if used_fallback:
        logger.info(
            "fallback_used",
            extra={"extra": {"primary_records": len(primary), "fallback_records": len(records)}},
        )

    result = ParseResult(
        records=tuple(records),
        warrant_info=info,
        total=compute_total(records),
        used_fallback=used_fallback,
    )
    logger.info(
        "warrant_parsed",
        extra={"extra": {
            "lines": len(lines),
            "records": len(result.records),
            "total": result.total,
            "used_fallback": used_fallback,
            "warrant_number": info.warrant_number,
        }},
    )
    return result
