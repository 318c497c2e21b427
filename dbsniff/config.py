"""Configuration loading helpers."""

from __future__ import annotations

import re
from pathlib import Path

import tomllib

from pydantic import BaseModel, Field, field_validator

CONFIG_FILE = Path.home() / ".config" / "dbsniff" / "config.toml"

DEFAULT_MASK_TOKEN = "****"

# Delimiters the masking patterns match on.
_MASK_TOKEN_FORBIDDEN = re.compile(r"[;@\s]")


class AppConfig(BaseModel):
    """Shape of the configuration file."""

    mask_token: str = DEFAULT_MASK_TOKEN
    log_level: str = "WARNING"
    dialects: dict[str, bool] = Field(default_factory=dict)
    ddl_dialect: str | None = None

    @field_validator("mask_token")
    @classmethod
    def _check_mask_token(cls, value: str) -> str:
        if not is_valid_mask_token(value):
            raise ValueError("mask_token must be non-empty and free of ';', '@' and whitespace")
        return value

    def disabled_dialects(self) -> set[str]:
        """Dialects explicitly disabled in config."""

        return {name for name, flag in self.dialects.items() if not flag}

    def is_dialect_enabled(self, name: str) -> bool:
        return name.lower() not in self.disabled_dialects()

    def with_dialect_enabled(self, name: str, enabled: bool) -> AppConfig:
        """Return a copy with the given dialect flag updated."""

        dialects = dict(self.dialects)
        if enabled:
            dialects.pop(name.lower(), None)
        else:
            dialects[name.lower()] = False
        return self.model_copy(update={"dialects": dialects})


def is_valid_mask_token(value: str) -> bool:
    return bool(value) and not _MASK_TOKEN_FORBIDDEN.search(value)


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from disk; fall back to defaults if missing."""

    try:
        data = _read_config_file(path or CONFIG_FILE)
    except FileNotFoundError:
        return AppConfig()
    except (tomllib.TOMLDecodeError, OSError):
        return AppConfig()

    return AppConfig(
        mask_token=data.get("mask_token", AppConfig.model_fields["mask_token"].default),
        log_level=data.get("log_level", AppConfig.model_fields["log_level"].default),
        dialects=data.get("dialects", {}),
        ddl_dialect=data.get("ddl_dialect"),
    )


def _read_config_file(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        raw = tomllib.load(handle)
    data: dict[str, object] = {}
    if isinstance(raw, dict):
        mask_token = raw.get("mask_token")
        if isinstance(mask_token, str) and is_valid_mask_token(mask_token):
            data["mask_token"] = mask_token
        log_level = raw.get("log_level")
        if isinstance(log_level, str):
            data["log_level"] = log_level.upper()
        ddl_dialect = raw.get("ddl_dialect")
        if isinstance(ddl_dialect, str):
            data["ddl_dialect"] = ddl_dialect
        dialects = raw.get("dialects")
        if isinstance(dialects, dict):
            parsed_dialects: dict[str, bool] = {}
            for name, enabled in dialects.items():
                parsed_dialects[str(name).lower()] = bool(enabled)
            data["dialects"] = parsed_dialects
    return data


__all__ = ["AppConfig", "CONFIG_FILE", "DEFAULT_MASK_TOKEN", "is_valid_mask_token", "load_config"]
