"""TOML configuration loader."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .lifecycle.shelf_life import GLOBAL_DEFAULT_DAYS
from .ocr import claude as _claude
from .ocr import gemini as _gemini
from .receipts.pipeline import DEFAULT_OCR_TIMEOUT

_DEFAULT_DB_PATH = "~/.config/freshtrack/pantry.db"


@dataclass
class ClaudeOCRConfig:
    api_key: str = ""
    primary_model: str = _claude.DEFAULT_PRIMARY_MODEL
    fallback_model: str = _claude.DEFAULT_FALLBACK_MODEL


@dataclass
class GeminiOCRConfig:
    api_key: str = ""
    primary_model: str = _gemini.DEFAULT_PRIMARY_MODEL
    fallback_model: str = _gemini.DEFAULT_FALLBACK_MODEL


@dataclass
class OCRConfig:
    backend: str = "claude"
    timeout: float = DEFAULT_OCR_TIMEOUT
    claude: ClaudeOCRConfig = field(default_factory=ClaudeOCRConfig)
    gemini: GeminiOCRConfig = field(default_factory=GeminiOCRConfig)


@dataclass
class ShelfLifeConfig:
    global_default: int = GLOBAL_DEFAULT_DAYS
    table_path: str = ""


@dataclass
class SchedulerConfig:
    interval_seconds: int = 60


@dataclass
class DatabaseConfig:
    path: str = _DEFAULT_DB_PATH


@dataclass
class FreshtrackConfig:
    ocr: OCRConfig = field(default_factory=OCRConfig)
    shelf_life: ShelfLifeConfig = field(default_factory=ShelfLifeConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


def load_config(path: str | Path | None = None) -> FreshtrackConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys can be overridden via environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    ocr = raw.get("ocr", {})
    shl = raw.get("shelf_life", {})
    sch = raw.get("scheduler", {})
    dbs = raw.get("database", {})

    claude_cfg = ocr.get("claude", {})
    gemini_cfg = ocr.get("gemini", {})

    # Resolve API keys: config file → environment variable
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )
    gemini_api_key = gemini_cfg.get("api_key", "") or os.environ.get(
        "GEMINI_API_KEY", ""
    )

    return FreshtrackConfig(
        ocr=OCRConfig(
            backend=ocr.get("backend", "claude"),
            timeout=float(ocr.get("timeout", DEFAULT_OCR_TIMEOUT)),
            claude=ClaudeOCRConfig(
                api_key=claude_api_key,
                primary_model=claude_cfg.get(
                    "primary_model", _claude.DEFAULT_PRIMARY_MODEL
                ),
                fallback_model=claude_cfg.get(
                    "fallback_model", _claude.DEFAULT_FALLBACK_MODEL
                ),
            ),
            gemini=GeminiOCRConfig(
                api_key=gemini_api_key,
                primary_model=gemini_cfg.get(
                    "primary_model", _gemini.DEFAULT_PRIMARY_MODEL
                ),
                fallback_model=gemini_cfg.get(
                    "fallback_model", _gemini.DEFAULT_FALLBACK_MODEL
                ),
            ),
        ),
        shelf_life=ShelfLifeConfig(
            global_default=shl.get("global_default", GLOBAL_DEFAULT_DAYS),
            table_path=shl.get("table_path", ""),
        ),
        scheduler=SchedulerConfig(
            interval_seconds=sch.get("interval_seconds", 60),
        ),
        database=DatabaseConfig(
            path=dbs.get("path", _DEFAULT_DB_PATH),
        ),
    )
