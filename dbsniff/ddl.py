"""Summaries of pasted DDL scripts, built on sqlglot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError, TokenError

from .models import DatabaseType

LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DdlSummary:
    """Statements and tables found in a DDL script."""

    dialect: str
    statement_count: int
    tables: tuple[str, ...]
    errors: tuple[str, ...]

    @property
    def ok(self) -> bool:
        return not self.errors


class DdlInspector:
    """Parses a script with sqlglot and lists the tables it creates."""

    def __init__(self, dialect: str = "postgres") -> None:
        self._dialect = dialect

    @property
    def dialect(self) -> str:
        return self._dialect

    def inspect(self, script: str) -> DdlSummary:
        stripped = script.strip() if isinstance(script, str) else ""
        if not stripped:
            return DdlSummary(self._dialect, 0, (), ())
        try:
            statements = [stmt for stmt in sqlglot.parse(stripped, read=self._dialect) if stmt is not None]
        except (ParseError, TokenError) as exc:
            LOG.debug("DDL parse failed for dialect %s", self._dialect)
            return DdlSummary(self._dialect, 0, (), (str(exc).strip(),))
        return DdlSummary(
            dialect=self._dialect,
            statement_count=len(statements),
            tables=tuple(_created_tables(statements)),
            errors=(),
        )


def inspect_ddl(script: str, database_type: DatabaseType | None = None, *, dialect: str | None = None) -> DdlSummary:
    """Inspect ``script`` using an explicit dialect or the one matching ``database_type``."""

    if dialect is None:
        dialect = database_type.sqlglot_dialect if database_type else "postgres"
    return DdlInspector(dialect).inspect(script)


def _created_tables(statements: Iterable[exp.Expression]) -> Iterable[str]:
    tables: list[str] = []
    seen: set[str] = set()
    for statement in statements:
        for create in statement.find_all(exp.Create):
            kind = str(create.args.get("kind") or "").upper()
            if kind != "TABLE":
                continue
            table = create.this
            if isinstance(table, exp.Schema):
                table = table.this
            if not isinstance(table, exp.Table) or not table.name:
                continue
            label = f"{table.db}.{table.name}" if table.db else table.name
            norm = label.lower()
            if norm not in seen:
                tables.append(label)
                seen.add(norm)
    return tables


__all__ = ["DdlInspector", "DdlSummary", "inspect_ddl"]
