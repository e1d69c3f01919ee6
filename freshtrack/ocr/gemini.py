"""Gemini API backend for receipt text extraction."""

from __future__ import annotations

from typing import Any

from . import PROMPT, OCRBackend, detect_mime_type

DEFAULT_PRIMARY_MODEL = "gemini-2.0-flash"
DEFAULT_FALLBACK_MODEL = "gemini-2.0-flash-lite"


class GeminiOCRBackend(OCRBackend):
    """Read receipt text using Google Gemini.

    Returns the SDK response object as-is; its ``text`` field holds the
    transcription.
    """

    def __init__(
        self,
        api_key: str = "",
        primary_model: str = DEFAULT_PRIMARY_MODEL,
        fallback_model: str = DEFAULT_FALLBACK_MODEL,
    ) -> None:
        self._api_key = api_key
        self.primary_model = primary_model
        self.fallback_model = fallback_model

    async def extract_text(self, image_bytes: bytes, model: str) -> Any:
        if not self._api_key:
            raise ValueError(
                "Gemini API key is not set. "
                "Check the config file or the GEMINI_API_KEY environment variable."
            )

        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai SDK is required: pip install google-generativeai"
            ) from None

        genai.configure(api_key=self._api_key)
        client = genai.GenerativeModel(model)

        parts = [
            {"mime_type": detect_mime_type(image_bytes), "data": image_bytes},
            PROMPT,
        ]
        return await client.generate_content_async(parts)
