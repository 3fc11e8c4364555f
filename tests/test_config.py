"""
Tests for stuck_picker/config.py — load_config() layering and validation.

What we test
------------
1. Built-in defaults when the TOML file sets nothing.
2. Explicit missing path raises FileNotFoundError.
3. TOML values and local.toml overrides are merged.
4. STUCK_PICKER_* env vars override TOML.
5. Invalid log level fails validation.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from stuck_picker.config import AppConfig, LoggingConfig, _deep_merge, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("STUCK_PICKER_LISTS_DIR", "STUCK_PICKER_SEED",
                "STUCK_PICKER_LOG_LEVEL", "STUCK_PICKER_DEBUG"):
        monkeypatch.delenv(var, raising=False)


def _toml(tmp_path: Path, content: str, name: str = "app.toml") -> Path:
    p = tmp_path / name
    p.write_text(content, encoding="utf-8")
    return p


def test_defaults_from_empty_file(tmp_path):
    config = load_config(_toml(tmp_path, ""))
    assert config == AppConfig()
    assert config.data.lists_dir == "data"
    assert config.selection.seed is None
    assert config.logging.level == "WARNING"


def test_explicit_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.toml")


def test_toml_values_loaded(tmp_path):
    path = _toml(tmp_path, '[data]\nlists_dir = "lists"\n[selection]\nseed = 5\n'
                           '[logging]\nlevel = "debug"\njson_format = true\n')
    config = load_config(path)
    assert config.data.lists_dir == "lists"
    assert config.selection.seed == 5
    assert config.logging.level == "DEBUG"
    assert config.logging.json_format is True


def test_local_toml_overrides(tmp_path):
    path = _toml(tmp_path, '[data]\nlists_dir = "lists"\n[selection]\nseed = 5\n')
    _toml(tmp_path, "[selection]\nseed = 6\n", name="local.toml")
    config = load_config(path)
    assert config.selection.seed == 6
    assert config.data.lists_dir == "lists"


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("STUCK_PICKER_LISTS_DIR", "/tmp/elsewhere")
    monkeypatch.setenv("STUCK_PICKER_SEED", "7")
    monkeypatch.setenv("STUCK_PICKER_LOG_LEVEL", "info")
    monkeypatch.setenv("STUCK_PICKER_DEBUG", "yes")
    config = load_config(_toml(tmp_path, '[data]\nlists_dir = "lists"\n'))
    assert config.data.lists_dir == "/tmp/elsewhere"
    assert config.selection.seed == 7
    assert config.logging.level == "INFO"
    assert config.debug is True


def test_invalid_log_level(tmp_path):
    with pytest.raises(ValidationError):
        load_config(_toml(tmp_path, '[logging]\nlevel = "LOUD"\n'))


def test_config_is_frozen():
    with pytest.raises(ValidationError):
        LoggingConfig().level = "DEBUG"


def test_deep_merge_nested():
    merged = _deep_merge({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}})
    assert merged == {"a": {"x": 1, "y": 3}, "b": 1}
