"""Tests for the shared dataclasses."""

from __future__ import annotations

from dbsniff.models import ConnectionDescriptor, DatabaseType, ParseOutcome, ParseResult


def test_default_ports() -> None:
    assert DatabaseType.POSTGRESQL.default_port == 5432
    assert DatabaseType.COCKROACHDB.default_port == 5432
    assert DatabaseType.MARIADB.default_port == 3306
    assert DatabaseType.SQLSERVER.default_port == 1433
    assert DatabaseType.ORACLE.default_port == 1521
    assert DatabaseType.CLICKHOUSE.default_port == 8123
    assert DatabaseType.SQLITE.default_port == 0


def test_live_extraction_support() -> None:
    assert DatabaseType.MARIADB.supports_live_extraction
    assert not DatabaseType.ORACLE.supports_live_extraction
    assert not DatabaseType.CLICKHOUSE.supports_live_extraction


def test_redacted_never_includes_password() -> None:
    descriptor = ConnectionDescriptor(
        host="h",
        port=5432,
        database="db",
        database_type=DatabaseType.POSTGRESQL,
        user="alice",
        password="secret",
    )

    redacted = descriptor.redacted()

    assert "secret" not in redacted.values()
    assert redacted["has_password"] is True
    assert redacted["database_type"] == "postgresql"


def test_parse_result_constructors() -> None:
    descriptor = ConnectionDescriptor(host="h", port=3306, database="d", database_type=DatabaseType.MYSQL)

    assert ParseResult.parsed(descriptor).ok
    assert ParseResult.parsed(descriptor).scheme == "mysql"
    assert not ParseResult.unsupported("mongodb").ok
    assert ParseResult.no_match().outcome is ParseOutcome.NO_MATCH
