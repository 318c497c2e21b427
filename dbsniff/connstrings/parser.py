"""Connection string parsing, validation, and masking."""

from __future__ import annotations

import logging
import re
from typing import Sequence

from ..config import AppConfig
from ..models import (
    ConnectionDescriptor,
    DatabaseType,
    ParseOutcome,
    ParseResult,
    ValidationIssue,
    ValidationResult,
)
from .catalog import example_for
from .dialects import ATTEMPTS, DialectAttempt, run_cascade

LOG = logging.getLogger(__name__)

VALIDATION_MESSAGES: dict[ValidationIssue, str] = {
    ValidationIssue.EMPTY: "Connection string cannot be empty",
    ValidationIssue.INVALID_FORMAT: (
        "Invalid connection string format. Please check the format for your database type."
    ),
    ValidationIssue.UNSUPPORTED_DIALECT: "Connection string format recognized, but {scheme} is not supported",
    ValidationIssue.HOST_REQUIRED: "Host is required",
    ValidationIssue.DATABASE_REQUIRED: "Database name is required",
}

_URL_CREDENTIALS = re.compile(r"(://[^:@/]+:)([^@]+)(@)")
_KEY_VALUE_PASSWORD = re.compile(r"(\b(?:Password|Pwd)\s*=\s*)([^;]+)", re.IGNORECASE)
_ORACLE_CREDENTIALS = re.compile(r"^(\s*[^/:@\s]+/)([^@\s]+)(@[^:/@\s]+(?::\d+)?/)")


class ConnectionStringParser:
    """Facade over the dialect cascade that never raises to its caller."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        logger: logging.Logger | None = None,
        attempts: Sequence[tuple[str, DialectAttempt]] = ATTEMPTS,
    ) -> None:
        self._config = config or AppConfig()
        self._log = logger or LOG
        self._attempts = tuple(attempts)

    @property
    def mask_token(self) -> str:
        return self._config.mask_token

    def analyze(self, text: str) -> ParseResult:
        """Run the cascade and report parsed, unsupported, or no-match."""

        if not isinstance(text, str):
            return ParseResult.no_match()
        candidate = text.strip()
        if not candidate:
            return ParseResult.no_match()
        try:
            result = run_cascade(candidate, self._attempts)
        except Exception as exc:
            self._log.warning("Connection string parse failed: %s", type(exc).__name__, exc_info=exc)
            return ParseResult.no_match()
        if result.ok and not self._config.is_dialect_enabled(result.descriptor.database_type.value):
            self._log.debug("Dialect %s is disabled by configuration", result.scheme)
            return ParseResult.unsupported(result.descriptor.database_type.value)
        if result.outcome is ParseOutcome.UNSUPPORTED:
            self._log.debug("Recognized unsupported dialect %s", result.scheme)
        return result

    def parse(self, text: str) -> ConnectionDescriptor | None:
        """Return a descriptor for the text, or ``None`` when it cannot be used."""

        return self.analyze(text).descriptor

    def validate(self, text: str) -> ValidationResult:
        """Report the first problem with the text, if any."""

        if not isinstance(text, str) or not text.strip():
            return _invalid(ValidationIssue.EMPTY)
        result = self.analyze(text)
        if result.outcome is ParseOutcome.UNSUPPORTED:
            return _invalid(ValidationIssue.UNSUPPORTED_DIALECT, scheme=result.scheme)
        descriptor = result.descriptor
        if descriptor is None:
            return _invalid(ValidationIssue.INVALID_FORMAT)
        if not descriptor.host:
            return _invalid(ValidationIssue.HOST_REQUIRED)
        if not descriptor.database:
            return _invalid(ValidationIssue.DATABASE_REQUIRED)
        return ValidationResult(valid=True)

    def mask(self, text: str) -> str:
        """Hide embedded passwords while leaving the rest of the text intact."""

        if not isinstance(text, str):
            return ""
        token = self._config.mask_token
        masked = _URL_CREDENTIALS.sub(lambda m: f"{m.group(1)}{token}{m.group(3)}", text)
        masked = _KEY_VALUE_PASSWORD.sub(lambda m: f"{m.group(1)}{token}", masked)
        if "://" not in masked:
            masked = _ORACLE_CREDENTIALS.sub(lambda m: f"{m.group(1)}{token}{m.group(3)}", masked, count=1)
        return masked

    def example_for(self, database_type: DatabaseType | str) -> str:
        return example_for(database_type)


def _invalid(issue: ValidationIssue, **fields: object) -> ValidationResult:
    return ValidationResult(
        valid=False,
        issue=issue,
        error=VALIDATION_MESSAGES[issue].format(**fields),
    )


_DEFAULT_PARSER = ConnectionStringParser()


def analyze_connection_string(text: str) -> ParseResult:
    return _DEFAULT_PARSER.analyze(text)


def parse_connection_string(text: str) -> ConnectionDescriptor | None:
    return _DEFAULT_PARSER.parse(text)


def validate_connection_string(text: str) -> ValidationResult:
    return _DEFAULT_PARSER.validate(text)


def mask_connection_string(text: str) -> str:
    return _DEFAULT_PARSER.mask(text)


def example_connection_string_for(database_type: DatabaseType | str) -> str:
    return example_for(database_type)


__all__ = [
    "ConnectionStringParser",
    "VALIDATION_MESSAGES",
    "analyze_connection_string",
    "example_connection_string_for",
    "mask_connection_string",
    "parse_connection_string",
    "validate_connection_string",
]
