from __future__ import annotations

from typing import Optional


class WarrantError(Exception):
    """Base for failures reported to API callers as ``{"success": false, "error": ...}``."""

    status_code: int = 400

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UploadRejected(WarrantError):
    status_code = 400


class ExtractionError(WarrantError):
    """The document produced no usable text (unreadable, empty, OCR failure)."""

    status_code = 422


class ParseFailure(WarrantError):
    """Text was extracted but no warrant records could be recovered from it."""

    status_code = 422

    def __init__(self, message: str, preview: str = "") -> None:
        super().__init__(message)
        self.preview = preview
