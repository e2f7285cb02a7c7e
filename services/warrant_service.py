from __future__ import annotations

import logging
from typing import Dict, Any, Optional

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from services.errors import ExtractionError, ParseFailure, UploadRejected
from services.excel_export import build_workbook, export_filename
from services.text_extraction import TextExtractor
from settings.config import settings
from schemas.warrant import ExportRequest
from warrant.assembler import parse

logger = logging.getLogger(__name__)

UNREADABLE_MESSAGE = "Could not extract text from PDF. The file may be corrupted or empty."
OCR_FAILED_MESSAGE = "Could not extract text from PDF. Please try again or contact support."
UNPARSEABLE_MESSAGE = "Could not parse warrant data. The PDF format may not be supported."


class WarrantService:
    def __init__(self, extractor: Optional[TextExtractor] = None):
        self.extractor = extractor or TextExtractor()

    async def parse_upload(self, file: Optional[UploadFile]) -> Dict[str, Any]:
        if file is None or not (file.filename or "").strip():
            raise UploadRejected("No file provided")

        filename = file.filename or "uploaded.pdf"
        content_type = (file.content_type or "").lower()
        if "pdf" not in content_type and not filename.lower().endswith(".pdf"):
            raise UploadRejected("Only PDF files are supported")

        content = await file.read()
        if not content:
            raise UploadRejected("No file provided")
        max_bytes = settings.MAX_UPLOAD_MB * 1024 * 1024
        if len(content) > max_bytes:
            raise UploadRejected(f"File exceeds {settings.MAX_UPLOAD_MB} MB limit", status_code=413)

        return await run_in_threadpool(self.parse_document, content, filename)

    def parse_document(self, content: bytes, filename: Optional[str] = None) -> Dict[str, Any]:
        """Extract text, parse it and shape the success payload. Raises WarrantError subclasses."""
        try:
            extracted = self.extractor.extract(content, filename)
        except ExtractionError as exc:
            logger.warning("Text extraction failed for %s: %s", filename, exc.message)
            raise ExtractionError(OCR_FAILED_MESSAGE) from exc

        logger.info("Extracted %d characters from %s via %s", len(extracted.text), filename, extracted.source)
        if extracted.meaningful_chars < settings.MIN_TEXT_CHARS:
            raise ExtractionError(UNREADABLE_MESSAGE)

        return self.parse_text(extracted.text)

    def parse_text(self, text: str) -> Dict[str, Any]:
        result = parse(text)
        if not result.ok:
            raise ParseFailure(UNPARSEABLE_MESSAGE, preview=text[: settings.PARSE_DEBUG_PREVIEW_CHARS])
        payload: Dict[str, Any] = {"success": True}
        payload.update(result.to_dict())
        return payload

    def export(self, request: ExportRequest) -> tuple[bytes, str]:
        records = [item.to_record() for item in request.data]
        info = request.warrant_info.to_info()
        content = build_workbook(records, info, request.total)
        return content, export_filename(info)
