"""Shared dataclasses used across the parser, detector, and CLI modules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class DatabaseType(str, Enum):
    """Database dialects a connection string can resolve to."""

    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    MARIADB = "mariadb"
    COCKROACHDB = "cockroachdb"
    SQLSERVER = "sqlserver"
    ORACLE = "oracle"
    CLICKHOUSE = "clickhouse"
    SQLITE = "sqlite"

    @property
    def default_port(self) -> int:
        return DEFAULT_PORTS[self]

    @property
    def sqlglot_dialect(self) -> str:
        """Reader name sqlglot uses for this dialect."""

        return _SQLGLOT_DIALECTS[self]

    @property
    def supports_live_extraction(self) -> bool:
        """Whether the schema extractor can connect to this dialect directly."""

        return self in _LIVE_EXTRACTION


class ContentType(str, Enum):
    """Coarse classification of pasted import content."""

    CONNECTION_STRING = "connection-string"
    DDL = "ddl"
    DBML = "dbml"
    QUERY = "query"
    NONE = "none"


class ParseOutcome(str, Enum):
    """How a connection string parse attempt ended."""

    PARSED = "parsed"
    UNSUPPORTED = "unsupported"
    NO_MATCH = "no-match"


class ValidationIssue(str, Enum):
    """First problem found while validating a connection string."""

    EMPTY = "empty"
    INVALID_FORMAT = "invalid format"
    UNSUPPORTED_DIALECT = "unsupported dialect"
    HOST_REQUIRED = "host required"
    DATABASE_REQUIRED = "database required"


DEFAULT_PORTS: Mapping[DatabaseType, int] = MappingProxyType(
    {
        DatabaseType.POSTGRESQL: 5432,
        DatabaseType.COCKROACHDB: 5432,
        DatabaseType.MYSQL: 3306,
        DatabaseType.MARIADB: 3306,
        DatabaseType.SQLSERVER: 1433,
        DatabaseType.ORACLE: 1521,
        DatabaseType.CLICKHOUSE: 8123,
        DatabaseType.SQLITE: 0,
    }
)

_SQLGLOT_DIALECTS: Mapping[DatabaseType, str] = MappingProxyType(
    {
        DatabaseType.POSTGRESQL: "postgres",
        DatabaseType.COCKROACHDB: "postgres",
        DatabaseType.MYSQL: "mysql",
        DatabaseType.MARIADB: "mysql",
        DatabaseType.SQLSERVER: "tsql",
        DatabaseType.ORACLE: "oracle",
        DatabaseType.CLICKHOUSE: "clickhouse",
        DatabaseType.SQLITE: "sqlite",
    }
)

_LIVE_EXTRACTION = frozenset(
    {
        DatabaseType.POSTGRESQL,
        DatabaseType.COCKROACHDB,
        DatabaseType.MYSQL,
        DatabaseType.MARIADB,
        DatabaseType.SQLSERVER,
    }
)


@dataclass(frozen=True, slots=True)
class ConnectionDescriptor:
    """Normalized connection parameters extracted from a connection string."""

    host: str
    port: int
    database: str
    database_type: DatabaseType
    user: str | None = None
    password: str | None = None
    schema: str | None = None
    ssl: bool = False

    def redacted(self) -> dict[str, object]:
        """Fields that are safe to log or display."""

        return {
            "database_type": self.database_type.value,
            "host": self.host,
            "port": self.port,
            "database": self.database,
            "user": self.user,
            "schema": self.schema,
            "ssl": self.ssl,
            "has_password": self.password is not None,
        }


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of a parse attempt, keeping unsupported dialects distinct."""

    outcome: ParseOutcome
    descriptor: ConnectionDescriptor | None = None
    scheme: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is ParseOutcome.PARSED and self.descriptor is not None

    @classmethod
    def parsed(cls, descriptor: ConnectionDescriptor) -> "ParseResult":
        return cls(ParseOutcome.PARSED, descriptor, descriptor.database_type.value)

    @classmethod
    def unsupported(cls, scheme: str) -> "ParseResult":
        return cls(ParseOutcome.UNSUPPORTED, None, scheme)

    @classmethod
    def no_match(cls) -> "ParseResult":
        return cls(ParseOutcome.NO_MATCH)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Validation verdict with at most one reported issue."""

    valid: bool
    issue: ValidationIssue | None = None
    error: str | None = None


__all__ = [
    "ConnectionDescriptor",
    "ContentType",
    "DatabaseType",
    "DEFAULT_PORTS",
    "ParseOutcome",
    "ParseResult",
    "ValidationIssue",
    "ValidationResult",
]
