"""OCR backend base class and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config import FreshtrackConfig

PROMPT = """\
This image is a photo of a shopping receipt.
Transcribe all of the printed text exactly as it appears, one receipt line
per output line, keeping item names, quantities and prices on the same line.
Return only the transcribed text with no commentary.
"""


class OCRBackend(ABC):
    """Abstract base for receipt text extraction.

    Backends name a primary model and a smaller fallback model; the
    ingestion pipeline decides which one to call.
    """

    primary_model: str
    fallback_model: str

    @abstractmethod
    async def extract_text(self, image_bytes: bytes, model: str) -> Any:
        """Return the receipt text.

        The result may be a plain string or an object (or dict) exposing a
        ``text`` field.
        """
        ...


def coerce_text(result: Any) -> str:
    """Pull plain text out of whatever shape a backend returned."""
    if result is None:
        return ""
    if isinstance(result, str):
        return result
    if isinstance(result, dict):
        value = result.get("text", result.get("generated_text"))
    else:
        value = getattr(result, "text", None)
        if value is None:
            value = getattr(result, "generated_text", None)
    return value if isinstance(value, str) else ""


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes.startswith(b"%PDF"):
        return "application/pdf"
    return "image/jpeg"


def create_backend(config: FreshtrackConfig) -> OCRBackend:
    """Create an OCR backend based on configuration."""
    backend_name = config.ocr.backend

    match backend_name:
        case "claude":
            from .claude import ClaudeOCRBackend

            return ClaudeOCRBackend(
                api_key=config.ocr.claude.api_key,
                primary_model=config.ocr.claude.primary_model,
                fallback_model=config.ocr.claude.fallback_model,
            )
        case "gemini":
            from .gemini import GeminiOCRBackend

            return GeminiOCRBackend(
                api_key=config.ocr.gemini.api_key,
                primary_model=config.ocr.gemini.primary_model,
                fallback_model=config.ocr.gemini.fallback_model,
            )
        case _:
            raise ValueError(
                f"Unknown OCR backend: {backend_name!r} (choose claude or gemini)"
            )
