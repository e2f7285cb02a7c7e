from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Text extraction
    # OCR.space is used only when a key is configured; otherwise scanned pages go to local Tesseract
    OCR_SPACE_API_KEY: str | None = None
    OCR_SPACE_URL: str = "https://api.ocr.space/parse/image"
    OCR_SPACE_ENGINE: int = 2
    OCR_TIMEOUT_SECONDS: float = 60.0
    OCR_LOCAL_ENABLED: bool = True
    OCR_LOCAL_DPI: int = 300
    TESS_LANGS: str = "eng"

    # Upload limits
    MAX_UPLOAD_MB: int = 20
    MAX_PAGES: int = 200

    # Below this many characters (after trimming) the document is treated as unreadable
    MIN_TEXT_CHARS: int = 50
    PARSE_DEBUG_PREVIEW_CHARS: int = 1000

    # API
    CORS_ALLOW_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

settings = Settings()
