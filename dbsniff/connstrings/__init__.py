"""Connection string grammars, parsing, and masking helpers."""

from __future__ import annotations

from .catalog import EXAMPLES, example_for
from .dialects import ATTEMPTS, URL_SCHEMES, run_cascade
from .parser import (
    ConnectionStringParser,
    analyze_connection_string,
    example_connection_string_for,
    mask_connection_string,
    parse_connection_string,
    validate_connection_string,
)

__all__ = [
    "ATTEMPTS",
    "ConnectionStringParser",
    "EXAMPLES",
    "URL_SCHEMES",
    "analyze_connection_string",
    "example_connection_string_for",
    "example_for",
    "mask_connection_string",
    "parse_connection_string",
    "run_cascade",
    "validate_connection_string",
]
