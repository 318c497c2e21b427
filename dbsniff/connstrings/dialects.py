"""Dialect grammars tried, in order, when parsing a connection string.

Each attempt function returns ``None`` when its grammar does not structurally
match the input, letting the cascade move on to the next dialect. Any other
return value ends the cascade: a parsed descriptor, an unsupported dialect, or
an explicit no-match for input that matched structurally but carried unusable
values (an out-of-range port, an empty host).
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Callable, Mapping, Sequence
from urllib.parse import parse_qs, unquote

from ..models import ConnectionDescriptor, DatabaseType, ParseResult

DialectAttempt = Callable[[str], "ParseResult | None"]

MAX_PORT = 65535

URL_SCHEMES: Mapping[str, DatabaseType | None] = MappingProxyType(
    {
        "postgres": DatabaseType.POSTGRESQL,
        "postgresql": DatabaseType.POSTGRESQL,
        "mysql": DatabaseType.MYSQL,
        "mariadb": DatabaseType.MARIADB,
        "cockroachdb": DatabaseType.COCKROACHDB,
        # Recognized so callers can report it, but never parsed.
        "mongodb": None,
    }
)


def _url_pattern(schemes: Sequence[str]) -> re.Pattern[str]:
    alternatives = "|".join(sorted(schemes, key=len, reverse=True))
    return re.compile(
        rf"({alternatives})://"
        r"(?:([^:@/]+)(?::([^@]*))?@)?"
        r"([^:/@\s]+)"
        r"(?::(\d+))?"
        r"/([^?]+)"
        r"(\?.*)?",
        re.IGNORECASE,
    )


_URL_PATTERN = _url_pattern(tuple(URL_SCHEMES))
_CLICKHOUSE_PATTERN = _url_pattern(("clickhouse",))
_ORACLE_PATTERN = re.compile(
    r"(?:([^/@\s]+)/([^@\s]+)@)?"
    r"([^:/@\s]+)"
    r"(?::(\d+))?"
    r"/([^?\s]+)"
)
_HOST_PORT_SPLIT = re.compile(r"[,:]")
_TCP_PREFIX = re.compile(r"^tcp:", re.IGNORECASE)

_DATABASE_KEYS = ("database", "initial catalog")
_USER_KEYS = ("user id", "uid", "user")
_PASSWORD_KEYS = ("password", "pwd")


def attempt_url(text: str) -> ParseResult | None:
    """``scheme://[user[:password]@]host[:port]/database[?params]``."""

    match = _URL_PATTERN.fullmatch(text)
    if not match:
        return None
    scheme, user, password, host, port, database, query = match.groups()
    database_type = URL_SCHEMES[scheme.lower()]
    if database_type is None:
        return ParseResult.unsupported(scheme.lower())
    resolved_port = _resolve_port(port, database_type)
    if resolved_port is None:
        return ParseResult.no_match()
    params = _query_params(query)
    return ParseResult.parsed(
        ConnectionDescriptor(
            host=host,
            port=resolved_port,
            database=database,
            database_type=database_type,
            user=unquote(user) if user else None,
            password=unquote(password) if password else None,
            schema=_first(params, "schema"),
            ssl=_ssl_from_params(params),
        )
    )


def attempt_key_value(text: str) -> ParseResult | None:
    """Semicolon-delimited ``Server=...;Database=...`` strings."""

    pairs = _key_values(text)
    if "server" not in pairs:
        return None
    server = _TCP_PREFIX.sub("", pairs["server"])
    parts = _HOST_PORT_SPLIT.split(server)
    host = parts[0].strip()
    raw_port = parts[1].strip() if len(parts) > 1 and parts[1].strip() else None
    if raw_port is not None and not raw_port.isdecimal():
        return ParseResult.no_match()
    port = _resolve_port(raw_port, DatabaseType.SQLSERVER)
    if not host or port is None:
        return ParseResult.no_match()
    return ParseResult.parsed(
        ConnectionDescriptor(
            host=host,
            port=port,
            database=_lookup(pairs, _DATABASE_KEYS) or "",
            database_type=DatabaseType.SQLSERVER,
            user=_lookup(pairs, _USER_KEYS),
            password=_lookup(pairs, _PASSWORD_KEYS),
        )
    )


def attempt_oracle(text: str) -> ParseResult | None:
    """``user/password@host[:port]/service`` (EZConnect style)."""

    if "://" in text:
        return None
    match = _ORACLE_PATTERN.fullmatch(text)
    if not match:
        return None
    user, password, host, port, database = match.groups()
    resolved_port = _resolve_port(port, DatabaseType.ORACLE)
    if resolved_port is None:
        return ParseResult.no_match()
    return ParseResult.parsed(
        ConnectionDescriptor(
            host=host,
            port=resolved_port,
            database=database,
            database_type=DatabaseType.ORACLE,
            user=user or None,
            password=password or None,
        )
    )


def attempt_clickhouse(text: str) -> ParseResult | None:
    """``clickhouse://`` URLs, which carry their own default port."""

    match = _CLICKHOUSE_PATTERN.fullmatch(text)
    if not match:
        return None
    _, user, password, host, port, database, query = match.groups()
    resolved_port = _resolve_port(port, DatabaseType.CLICKHOUSE)
    if resolved_port is None:
        return ParseResult.no_match()
    return ParseResult.parsed(
        ConnectionDescriptor(
            host=host,
            port=resolved_port,
            database=database,
            database_type=DatabaseType.CLICKHOUSE,
            user=unquote(user) if user else None,
            password=unquote(password) if password else None,
            ssl=_ssl_from_params(_query_params(query)),
        )
    )


ATTEMPTS: tuple[tuple[str, DialectAttempt], ...] = (
    ("url", attempt_url),
    ("key-value", attempt_key_value),
    ("oracle", attempt_oracle),
    ("clickhouse", attempt_clickhouse),
)


def run_cascade(text: str, attempts: Sequence[tuple[str, DialectAttempt]] = ATTEMPTS) -> ParseResult:
    """Return the result of the first attempt whose grammar matches."""

    for _, attempt in attempts:
        result = attempt(text)
        if result is not None:
            return result
    return ParseResult.no_match()


def _resolve_port(raw: str | None, database_type: DatabaseType) -> int | None:
    if raw is None:
        return database_type.default_port
    port = int(raw)
    if port < 1 or port > MAX_PORT:
        return None
    return port


def _query_params(query: str | None) -> dict[str, list[str]]:
    if not query:
        return {}
    return parse_qs(query.lstrip("?"), keep_blank_values=True)


def _first(params: Mapping[str, list[str]], key: str) -> str | None:
    values = params.get(key)
    if not values:
        return None
    return values[0] or None


def _ssl_from_params(params: Mapping[str, list[str]]) -> bool:
    if "ssl" in params:
        return params["ssl"][0] == "true"
    return "sslmode" in params


def _key_values(text: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for segment in text.split(";"):
        key, sep, value = segment.partition("=")
        if not sep:
            continue
        pairs.setdefault(key.strip().lower(), value.strip())
    return pairs


def _lookup(pairs: Mapping[str, str], keys: Sequence[str]) -> str | None:
    for key in keys:
        value = pairs.get(key)
        if value:
            return value
    return None


__all__ = [
    "ATTEMPTS",
    "DialectAttempt",
    "URL_SCHEMES",
    "attempt_clickhouse",
    "attempt_key_value",
    "attempt_oracle",
    "attempt_url",
    "run_cascade",
]
