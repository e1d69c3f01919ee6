"""Turn raw OCR text into cleaned candidate lines."""

from __future__ import annotations

import re

# OCR output often loses real line breaks; wide gaps mark structure too.
_LINE_SPLIT_RE = re.compile(r"\r?\n|\s{2,}")
_SPACE_BEFORE_SYMBOL_RE = re.compile(r"\s+([$£€])")
_SPACE_AFTER_SYMBOL_RE = re.compile(r"([$£€])\s+(?=\d)")
_THOUSANDS_RE = re.compile(r"(?<=\d),(?=\d{3}(?!\d))")


def split_lines(text: str) -> list[str]:
    """Split raw text into trimmed, non-empty lines."""
    if not text:
        return []
    return [part.strip() for part in _LINE_SPLIT_RE.split(text) if part.strip()]


def clean_line(line: str) -> str:
    """Normalize whitespace, currency symbols and digit grouping in one line."""
    line = line.replace("\t", " ")
    line = _SPACE_BEFORE_SYMBOL_RE.sub(r" \1", line)
    line = _SPACE_AFTER_SYMBOL_RE.sub(r"\1", line)
    line = _THOUSANDS_RE.sub("", line)
    return line.strip()


def normalize(text: str) -> list[str]:
    """Split and clean raw OCR text into candidate lines."""
    lines = (clean_line(line) for line in split_lines(text))
    return [line for line in lines if line]
