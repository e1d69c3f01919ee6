"""Claude API backend for receipt text extraction."""

from __future__ import annotations

import base64

from . import PROMPT, OCRBackend, detect_mime_type

DEFAULT_PRIMARY_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_FALLBACK_MODEL = "claude-haiku-4-5-20251001"


class ClaudeOCRBackend(OCRBackend):
    """Read receipt text using Claude's vision capability."""

    def __init__(
        self,
        api_key: str = "",
        primary_model: str = DEFAULT_PRIMARY_MODEL,
        fallback_model: str = DEFAULT_FALLBACK_MODEL,
    ) -> None:
        self._api_key = api_key
        self.primary_model = primary_model
        self.fallback_model = fallback_model

    async def extract_text(self, image_bytes: bytes, model: str) -> str:
        if not self._api_key:
            raise ValueError(
                "Anthropic API key is not set. "
                "Check the config file or the ANTHROPIC_API_KEY environment variable."
            )

        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None

        media_type = detect_mime_type(image_bytes)
        block_type = "document" if media_type == "application/pdf" else "image"
        content = [
            {
                "type": block_type,
                "source": {
                    "type": "base64",
                    "media_type": media_type,
                    "data": base64.standard_b64encode(image_bytes).decode(),
                },
            },
            {"type": "text", "text": PROMPT},
        ]

        client = anthropic.AsyncAnthropic(api_key=self._api_key)
        response = await client.messages.create(
            model=model,
            max_tokens=4096,
            messages=[{"role": "user", "content": content}],
        )
        return response.content[0].text
