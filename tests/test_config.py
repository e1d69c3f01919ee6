"""Tests for config loading."""

import os
import tempfile

from freshtrack.config import FreshtrackConfig, load_config


def test_load_config_defaults():
    """Loading with no path returns all defaults."""
    config = load_config()
    assert isinstance(config, FreshtrackConfig)
    assert config.ocr.backend == "claude"
    assert config.ocr.timeout == 30.0
    assert config.ocr.claude.primary_model.startswith("claude-")
    assert config.ocr.claude.fallback_model != config.ocr.claude.primary_model
    assert config.ocr.gemini.primary_model == "gemini-2.0-flash"
    assert config.shelf_life.global_default == 7
    assert config.shelf_life.table_path == ""
    assert config.scheduler.interval_seconds == 60
    assert config.database.path == "~/.config/freshtrack/pantry.db"


def test_load_config_nonexistent_file():
    """Loading a nonexistent file returns defaults."""
    config = load_config("/nonexistent/path.toml")
    assert config.ocr.backend == "claude"


def test_load_config_from_toml():
    """Loading a valid TOML file populates config."""
    toml_content = b"""\
[ocr]
backend = "gemini"
timeout = 12

[ocr.gemini]
api_key = "test-key-123"
primary_model = "gemini-pro"
fallback_model = "gemini-lite"

[shelf_life]
global_default = 5
table_path = "/etc/freshtrack/shelf_life.toml"

[scheduler]
interval_seconds = 300

[database]
path = "/var/lib/freshtrack/pantry.db"
"""
    with tempfile.NamedTemporaryFile(suffix=".toml", delete=False) as f:
        f.write(toml_content)
        f.flush()
        config = load_config(f.name)

    os.unlink(f.name)

    assert config.ocr.backend == "gemini"
    assert config.ocr.timeout == 12.0
    assert config.ocr.gemini.api_key == "test-key-123"
    assert config.ocr.gemini.primary_model == "gemini-pro"
    assert config.ocr.gemini.fallback_model == "gemini-lite"
    assert config.shelf_life.global_default == 5
    assert config.shelf_life.table_path == "/etc/freshtrack/shelf_life.toml"
    assert config.scheduler.interval_seconds == 300
    assert config.database.path == "/var/lib/freshtrack/pantry.db"


def test_load_config_env_override(monkeypatch):
    """Environment variables override empty API keys."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "env-anthropic-key")
    monkeypatch.setenv("GEMINI_API_KEY", "env-gemini-key")

    config = load_config()
    assert config.ocr.claude.api_key == "env-anthropic-key"
    assert config.ocr.gemini.api_key == "env-gemini-key"


def test_load_config_file_key_takes_precedence(monkeypatch, tmp_path):
    """Config file API key takes precedence over env var."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "env-key")
    path = tmp_path / "config.toml"
    path.write_text('[ocr.claude]\napi_key = "file-key"\n')

    config = load_config(path)
    assert config.ocr.claude.api_key == "file-key"


def test_load_config_partial_toml(tmp_path):
    """Partial TOML uses defaults for missing sections."""
    path = tmp_path / "config.toml"
    path.write_text("[scheduler]\ninterval_seconds = 30\n")

    config = load_config(path)
    assert config.scheduler.interval_seconds == 30
    assert config.ocr.backend == "claude"
    assert config.shelf_life.global_default == 7
