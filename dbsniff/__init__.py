"""Connection string parsing and import content detection."""

from __future__ import annotations

__version__ = "0.1.0"

from .connstrings import (
    ConnectionStringParser,
    analyze_connection_string,
    example_connection_string_for,
    mask_connection_string,
    parse_connection_string,
    validate_connection_string,
)
from .detect import ContentTypeDetector, detect_content_type
from .models import (
    ConnectionDescriptor,
    ContentType,
    DatabaseType,
    ParseOutcome,
    ParseResult,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "ConnectionDescriptor",
    "ConnectionStringParser",
    "ContentType",
    "ContentTypeDetector",
    "DatabaseType",
    "ParseOutcome",
    "ParseResult",
    "ValidationIssue",
    "ValidationResult",
    "__version__",
    "analyze_connection_string",
    "detect_content_type",
    "example_connection_string_for",
    "mask_connection_string",
    "parse_connection_string",
    "validate_connection_string",
]
