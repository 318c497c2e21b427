"""Tests for the sqlglot-backed DDL inspector."""

from __future__ import annotations

from dbsniff.ddl import DdlInspector, inspect_ddl
from dbsniff.models import DatabaseType

SCRIPT = """
CREATE TABLE public.accounts (
    id INT PRIMARY KEY,
    email TEXT NOT NULL
);

CREATE TABLE orders (
    id INT PRIMARY KEY,
    account_id INT REFERENCES accounts (id)
);

CREATE INDEX orders_account_idx ON orders (account_id);
"""


def test_inspect_lists_created_tables() -> None:
    summary = DdlInspector().inspect(SCRIPT)

    assert summary.ok
    assert summary.statement_count == 3
    assert summary.tables == ("public.accounts", "orders")


def test_views_are_not_tables() -> None:
    summary = DdlInspector().inspect("CREATE VIEW active AS SELECT 1 AS one")

    assert summary.tables == ()
    assert summary.statement_count == 1


def test_duplicate_tables_are_reported_once() -> None:
    summary = DdlInspector().inspect("CREATE TABLE t (id INT); CREATE TABLE T (id INT);")

    assert summary.tables == ("t",)


def test_inspect_ddl_picks_dialect_from_database_type() -> None:
    summary = inspect_ddl("CREATE TABLE [dbo].[users] ([id] INT);", DatabaseType.SQLSERVER)

    assert summary.dialect == "tsql"
    assert summary.tables == ("dbo.users",)


def test_explicit_dialect_overrides_database_type() -> None:
    summary = inspect_ddl("CREATE TABLE t (id INT);", DatabaseType.SQLSERVER, dialect="mysql")

    assert summary.dialect == "mysql"


def test_parse_errors_are_collected() -> None:
    summary = DdlInspector().inspect("CREATE TABLE t (name TEXT DEFAULT 'unterminated")

    assert not summary.ok
    assert summary.tables == ()


def test_empty_script_is_empty_summary() -> None:
    summary = DdlInspector("mysql").inspect("   ")

    assert summary.statement_count == 0
    assert summary.ok
