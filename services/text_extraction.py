from __future__ import annotations

import base64
import io
from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional

import pdfplumber
import requests

from services.errors import ExtractionError
from settings.config import settings
from warrant.json_logger import get_json_logger

try:
    import pytesseract  # type: ignore
    _HAVE_TESSERACT = True
except Exception:
    _HAVE_TESSERACT = False


logger = get_json_logger("warrant.text_extraction")


def _ocr_png_to_text(png_bytes: bytes, lang: str) -> str:
    from PIL import Image
    img = Image.open(io.BytesIO(png_bytes))
    return pytesseract.image_to_string(img, lang=lang, config="--oem 1 --psm 6")


@dataclass
class ExtractedText:
    """
    Plain text recovered from an uploaded document.

    - text: page texts joined by blank lines (may be empty or noisy)
    - source: "text_layer", "ocr_space" or "tesseract"
    - pages_count: pages seen in the PDF (0 when unknown)
    """

    text: str
    source: str
    pages_count: int = 0

    @property
    def meaningful_chars(self) -> int:
        return len(self.text.strip())


class TextExtractor:
    """
    Best-effort text for a warrant PDF.

    Text-based PDFs are read from their text layer. Scanned PDFs go to
    OCR.space when an API key is configured, else to local Tesseract.
    Timeouts and retries are left to the caller.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        ocr_url: Optional[str] = None,
        timeout: Optional[float] = None,
        local_ocr: Optional[bool] = None,
        min_chars: Optional[int] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.OCR_SPACE_API_KEY
        self.ocr_url = ocr_url or settings.OCR_SPACE_URL
        self.timeout = float(timeout if timeout is not None else settings.OCR_TIMEOUT_SECONDS)
        self.local_ocr = settings.OCR_LOCAL_ENABLED if local_ocr is None else local_ocr
        self.min_chars = int(min_chars if min_chars is not None else settings.MIN_TEXT_CHARS)
        self.max_pages = settings.MAX_PAGES

    def extract(self, content: bytes, filename: Optional[str] = None) -> ExtractedText:
        try:
            layer = self.extract_text_layer(content)
        except Exception as exc:
            # scanned or malformed PDFs can still be readable by OCR.space
            logger.warning("text_layer_failed", extra={"extra": {"file": filename, "error": str(exc)}})
            layer = ExtractedText(text="", source="text_layer")

        if layer.meaningful_chars >= self.min_chars:
            result = layer
        elif self.api_key:
            result = self.extract_with_ocr_space(content, filename)
            result.pages_count = result.pages_count or layer.pages_count
        elif self.local_ocr and _HAVE_TESSERACT:
            try:
                result = self.extract_with_tesseract(content)
            except Exception as exc:
                raise ExtractionError(f"Local OCR failed: {exc}") from exc
        else:
            result = layer

        logger.info(
            "text_extracted",
            extra={"extra": {
                "file": filename,
                "source": result.source,
                "pages": result.pages_count,
                "chars": len(result.text),
            }},
        )
        return result

    def extract_text_layer(self, content: bytes) -> ExtractedText:
        page_texts: List[str] = []
        with pdfplumber.open(BytesIO(content)) as pdf:
            pages_count = len(pdf.pages)
            for page in pdf.pages[: self.max_pages]:
                page_texts.append(page.extract_text() or "")
        return ExtractedText(text="\n\n".join(page_texts), source="text_layer", pages_count=pages_count)

    def extract_with_ocr_space(self, content: bytes, filename: Optional[str] = None) -> ExtractedText:
        payload = {
            "base64Image": "data:application/pdf;base64," + base64.b64encode(content).decode("ascii"),
            "language": "eng",
            "isOverlayRequired": "false",
            "filetype": "PDF",
            "detectOrientation": "true",
            "scale": "true",
            "OCREngine": str(settings.OCR_SPACE_ENGINE),
        }
        try:
            response = requests.post(
                self.ocr_url,
                headers={"apikey": self.api_key},
                data=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ExtractionError(f"OCR request failed: {exc}") from exc

        if not response.ok:
            raise ExtractionError(f"OCR API error: {response.status_code}")

        try:
            body = response.json()
        except ValueError as exc:
            raise ExtractionError("OCR API returned a non-JSON response") from exc

        if body.get("IsErroredOnProcessing"):
            message = body.get("ErrorMessage") or "OCR processing failed"
            if isinstance(message, list):
                message = "; ".join(str(m) for m in message)
            raise ExtractionError(str(message))

        pages = body.get("ParsedResults") or []
        text = "".join(f"{page['ParsedText']}\n\n" for page in pages if page.get("ParsedText"))
        logger.info("ocr_space_done", extra={"extra": {"file": filename, "pages": len(pages)}})
        return ExtractedText(text=text, source="ocr_space", pages_count=len(pages))

    def extract_with_tesseract(self, content: bytes) -> ExtractedText:
        page_texts: List[str] = []
        dpi = max(200, min(int(settings.OCR_LOCAL_DPI), 300))
        with pdfplumber.open(BytesIO(content)) as pdf:
            pages_count = len(pdf.pages)
            for page in pdf.pages[: self.max_pages]:
                pil_img = page.to_image(resolution=dpi).original
                buf = io.BytesIO()
                pil_img.save(buf, format="PNG")
                page_texts.append(_ocr_png_to_text(buf.getvalue(), settings.TESS_LANGS))
        return ExtractedText(text="\n\n".join(page_texts), source="tesseract", pages_count=pages_count)
