"""Tests for AppConfig helpers."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from dbsniff import config as config_module
from dbsniff.config import AppConfig, load_config
from dbsniff.connstrings import ConnectionStringParser


def test_defaults_enable_every_dialect() -> None:
    config = AppConfig()

    assert config.mask_token == "****"
    assert config.disabled_dialects() == set()
    assert config.is_dialect_enabled("oracle")


def test_load_config_returns_defaults_when_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.toml")

    result = load_config()

    assert result == AppConfig()


def test_load_config_reads_values(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """
mask_token = "<redacted>"
log_level = "debug"
ddl_dialect = "mysql"

[dialects]
Oracle = false
clickhouse = true
"""
    )

    result = load_config(config_path)

    assert result.mask_token == "<redacted>"
    assert result.log_level == "DEBUG"
    assert result.ddl_dialect == "mysql"
    assert result.dialects == {"oracle": False, "clickhouse": True}
    assert not result.is_dialect_enabled("ORACLE")


def test_load_config_ignores_wrongly_typed_values(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('mask_token = 42\nlog_level = ["INFO"]\n')

    result = load_config(config_path)

    assert result == AppConfig()


def test_load_config_handles_toml_errors(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("mask_token = [unterminated")

    result = load_config(config_path)

    assert result == AppConfig()


def test_with_dialect_enabled_toggles_flags() -> None:
    config = AppConfig()

    updated = config.with_dialect_enabled("MySQL", False)
    assert updated.disabled_dialects() == {"mysql"}
    restored = updated.with_dialect_enabled("mysql", True)
    assert restored.disabled_dialects() == set()


@pytest.mark.parametrize("token", ["", "x;y", "a@b", "two words", "tab\there"])
def test_mask_token_rejects_delimiters(token: str) -> None:
    with pytest.raises(ValidationError):
        AppConfig(mask_token=token)


def test_load_config_skips_invalid_mask_token(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('mask_token = "x;y"\nlog_level = "info"\n')

    result = load_config(config_path)

    assert result.mask_token == "****"
    assert result.log_level == "INFO"


def test_valid_mask_token_keeps_masking_idempotent() -> None:
    parser = ConnectionStringParser(AppConfig(mask_token="[redacted]"))

    once = parser.mask("Server=h;Password=pw;Database=d")

    assert once == "Server=h;Password=[redacted];Database=d"
    assert parser.mask(once) == once
