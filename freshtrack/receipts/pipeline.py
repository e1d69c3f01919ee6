"""Receipt ingestion: OCR with fallback, then text parsing."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Callable

from ..ocr import OCRBackend, coerce_text
from .fields import extract_date, extract_store_name, extract_total
from .line_items import parse_line_items
from .models import (
    MAX_RAW_TEXT_LENGTH,
    IngestionResult,
    ParsedReceipt,
    fallback_receipt,
    placeholder_item,
)
from .normalize import normalize

logger = logging.getLogger(__name__)

DEFAULT_OCR_TIMEOUT = 30.0

FALLBACK_NOTE = "Receipt processing failed, please manually add items"


def parse_receipt_text(text: str, today: date) -> ParsedReceipt:
    """Parse raw OCR text into a receipt.

    Total over its input: empty or garbage text yields a receipt with a
    single placeholder item and a zero total.
    """
    lines = normalize(text or "")
    items = parse_line_items(lines) or [placeholder_item()]
    return ParsedReceipt(
        store_name=extract_store_name(lines),
        date=extract_date("\n".join(lines), today),
        total=extract_total(lines),
        items=items,
    )


class ReceiptIngestionPipeline:
    """Turns a receipt image into a :class:`ParsedReceipt`.

    ``ingest`` never raises; OCR problems degrade to a placeholder receipt
    so the caller can continue with manual entry.
    """

    def __init__(
        self,
        backend: OCRBackend | None,
        *,
        timeout: float = DEFAULT_OCR_TIMEOUT,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._backend = backend
        self._timeout = timeout
        self._today = today

    async def ingest(self, image_bytes: bytes) -> IngestionResult:
        today = self._today()

        if not image_bytes:
            return IngestionResult(
                success=False,
                data=fallback_receipt(today),
                error="No image data provided",
            )

        try:
            text = await self._read_text(image_bytes)
        except Exception as e:
            logger.warning("Receipt OCR failed, returning fallback receipt: %s", e)
            return IngestionResult(
                success=True, data=fallback_receipt(today), note=FALLBACK_NOTE
            )

        logger.debug("OCR text length: %d", len(text))
        try:
            receipt = parse_receipt_text(text, today)
        except Exception:
            logger.exception("Receipt parsing failed, returning fallback receipt")
            return IngestionResult(
                success=True,
                data=fallback_receipt(today),
                raw_text=text[:MAX_RAW_TEXT_LENGTH] or None,
                note=FALLBACK_NOTE,
            )

        logger.info(
            "Parsed receipt from %s: %d item(s), total %s",
            receipt.store_name,
            len(receipt.items),
            receipt.total,
        )
        return IngestionResult(
            success=True,
            data=receipt,
            raw_text=text[:MAX_RAW_TEXT_LENGTH] or None,
        )

    async def _read_text(self, image_bytes: bytes) -> str:
        """Run OCR with the primary model, retrying once with the fallback model.

        Raises:
            RuntimeError: If no backend is configured.
            Exception: Whatever the fallback attempt raised.
        """
        if self._backend is None:
            raise RuntimeError("No OCR backend configured")

        try:
            return await self._call(image_bytes, self._backend.primary_model)
        except Exception as e:
            logger.warning(
                "OCR with %s failed (%s), retrying with %s",
                self._backend.primary_model,
                e,
                self._backend.fallback_model,
            )
        return await self._call(image_bytes, self._backend.fallback_model)

    async def _call(self, image_bytes: bytes, model: str) -> str:
        logger.info("Invoking OCR model %s", model)
        result = await asyncio.wait_for(
            self._backend.extract_text(image_bytes, model), timeout=self._timeout
        )
        return coerce_text(result)
