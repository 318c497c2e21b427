"""Routes pasted import content to the handler that understands it."""

from __future__ import annotations

import logging
import re
from typing import Sequence

from .connstrings.parser import ConnectionStringParser
from .models import ContentType

LOG = logging.getLogger(__name__)

CONNECTION_STRING_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(postgres|postgresql|mysql|mariadb|cockroachdb)://", re.IGNORECASE),
    re.compile(r"^Server=", re.IGNORECASE),
    re.compile(r"^[^/]+/[^@]+@[^:/]+:\d+/", re.IGNORECASE),
    re.compile(r"^clickhouse://", re.IGNORECASE),
)

# Case-sensitive: DBML keywords are capitalized, SQL keywords are not.
DBML_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^Table\s+\w+\s*{", re.MULTILINE),
    re.compile(r"^Ref:\s*\w+", re.MULTILINE),
    re.compile(r"^Enum\s+\w+\s*{", re.MULTILINE),
    re.compile(r"^TableGroup\s+", re.MULTILINE),
    re.compile(r"^Note\s+\w+\s*{", re.MULTILINE),
    re.compile(r"\[pk\]"),
    re.compile(r"\[ref:\s*[<>-]"),
)

DDL_KEYWORDS: tuple[str, ...] = (
    "CREATE TABLE",
    "ALTER TABLE",
    "DROP TABLE",
    "CREATE INDEX",
    "CREATE VIEW",
    "CREATE PROCEDURE",
    "CREATE FUNCTION",
    "CREATE SCHEMA",
    "CREATE DATABASE",
)

_QUERY_SHAPES: tuple[tuple[str, str], ...] = (("{", "}"), ("[", "]"))


class ContentTypeDetector:
    """Classifies text as a connection string, DBML, DDL, or query payload."""

    def __init__(
        self,
        parser: ConnectionStringParser | None = None,
        *,
        logger: logging.Logger | None = None,
        ddl_keywords: Sequence[str] = DDL_KEYWORDS,
    ) -> None:
        self._parser = parser or ConnectionStringParser()
        self._log = logger or LOG
        self._ddl_keywords = tuple(keyword.upper() for keyword in ddl_keywords)

    def detect(self, text: str) -> ContentType:
        """Return the content type for ``text``; never raises."""

        if not isinstance(text, str) or not text.strip():
            return ContentType.NONE
        try:
            return self._detect(text)
        except Exception as exc:
            self._log.warning("Content type detection failed: %s", type(exc).__name__, exc_info=exc)
            return ContentType.NONE

    def _detect(self, text: str) -> ContentType:
        stripped = text.strip()
        if self.is_connection_string(stripped):
            return ContentType.CONNECTION_STRING
        if any(pattern.search(text) for pattern in DBML_PATTERNS):
            return ContentType.DBML
        upper = text.upper()
        if any(keyword in upper for keyword in self._ddl_keywords):
            return ContentType.DDL
        if any(stripped.startswith(start) and stripped.endswith(end) for start, end in _QUERY_SHAPES):
            return ContentType.QUERY
        return ContentType.NONE

    def is_connection_string(self, stripped: str) -> bool:
        """Shape check followed by a full parse; shape alone is not enough."""

        if not any(pattern.search(stripped) for pattern in CONNECTION_STRING_PATTERNS):
            return False
        return self._parser.parse(stripped) is not None


_DEFAULT_DETECTOR = ContentTypeDetector()


def detect_content_type(text: str) -> ContentType:
    return _DEFAULT_DETECTOR.detect(text)


__all__ = [
    "CONNECTION_STRING_PATTERNS",
    "ContentTypeDetector",
    "DBML_PATTERNS",
    "DDL_KEYWORDS",
    "detect_content_type",
]
