"""Command line entry point for dbsniff."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TextIO

from .config import AppConfig, load_config
from .connstrings import ConnectionStringParser
from .ddl import inspect_ddl
from .detect import ContentTypeDetector
from .models import ContentType, DatabaseType

LOG = logging.getLogger(__name__)


def _read_text(value: str | None, stdin: TextIO) -> str:
    if value is None or value == "-":
        return stdin.read()
    return value


def _descriptor_payload(parser: ConnectionStringParser, text: str, *, show_password: bool) -> dict[str, object]:
    result = parser.analyze(text)
    payload: dict[str, object] = {"outcome": result.outcome.value, "scheme": result.scheme}
    if result.descriptor is not None:
        fields = result.descriptor.redacted()
        fields.pop("has_password")
        password = result.descriptor.password
        if password is not None:
            fields["password"] = password if show_password else parser.mask_token
        fields["live_extraction"] = result.descriptor.database_type.supports_live_extraction
        payload["connection"] = fields
    return payload


def cmd_detect(args: argparse.Namespace, config: AppConfig, out: TextIO, stdin: TextIO) -> int:
    text = _read_text(args.text, stdin)
    parser = ConnectionStringParser(config)
    content_type = ContentTypeDetector(parser).detect(text)
    payload: dict[str, object] = {"content_type": content_type.value}
    if content_type is ContentType.CONNECTION_STRING:
        payload.update(_descriptor_payload(parser, text, show_password=False))
    elif content_type is ContentType.DDL:
        database_type = DatabaseType(args.database_type) if args.database_type else None
        summary = inspect_ddl(text, database_type, dialect=None if database_type else config.ddl_dialect)
        payload["ddl"] = {
            "dialect": summary.dialect,
            "statements": summary.statement_count,
            "tables": list(summary.tables),
            "errors": list(summary.errors),
        }
    out.write(json.dumps(payload, indent=2) + "\n")
    return 0 if content_type is not ContentType.NONE else 1


def cmd_parse(args: argparse.Namespace, config: AppConfig, out: TextIO, stdin: TextIO) -> int:
    parser = ConnectionStringParser(config)
    payload = _descriptor_payload(parser, _read_text(args.text, stdin), show_password=args.show_password)
    out.write(json.dumps(payload, indent=2) + "\n")
    return 0 if "connection" in payload else 1


def cmd_validate(args: argparse.Namespace, config: AppConfig, out: TextIO, stdin: TextIO) -> int:
    result = ConnectionStringParser(config).validate(_read_text(args.text, stdin))
    if result.valid:
        out.write("valid\n")
        return 0
    out.write(f"{result.error}\n")
    return 1


def cmd_mask(args: argparse.Namespace, config: AppConfig, out: TextIO, stdin: TextIO) -> int:
    text = _read_text(args.text, stdin)
    out.write(ConnectionStringParser(config).mask(text.rstrip("\n")) + "\n")
    return 0


def cmd_example(args: argparse.Namespace, config: AppConfig, out: TextIO, stdin: TextIO) -> int:
    out.write(ConnectionStringParser(config).example_for(args.database_type) + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dbsniff", description="Detect and parse pasted database import content.")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.toml")
    parser.add_argument(
        "--disable-dialect",
        action="append",
        default=[],
        metavar="DIALECT",
        help="Treat a dialect as unsupported for this run (repeatable)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    dialect_choices = [item.value for item in DatabaseType]

    detect = subparsers.add_parser("detect", help="Classify pasted content")
    detect.add_argument("text", nargs="?", help="Content to classify (stdin when omitted)")
    detect.add_argument("--database-type", choices=dialect_choices, help="Dialect used to read DDL")
    detect.set_defaults(handler=cmd_detect)

    parse = subparsers.add_parser("parse", help="Parse a connection string")
    parse.add_argument("text", nargs="?", help="Connection string (stdin when omitted)")
    parse.add_argument("--show-password", action="store_true", help="Print the password unmasked")
    parse.set_defaults(handler=cmd_parse)

    validate = subparsers.add_parser("validate", help="Validate a connection string")
    validate.add_argument("text", nargs="?", help="Connection string (stdin when omitted)")
    validate.set_defaults(handler=cmd_validate)

    mask = subparsers.add_parser("mask", help="Mask passwords in a connection string")
    mask.add_argument("text", nargs="?", help="Connection string (stdin when omitted)")
    mask.set_defaults(handler=cmd_mask)

    example = subparsers.add_parser("example", help="Print an example connection string")
    example.add_argument("database_type", choices=dialect_choices)
    example.set_defaults(handler=cmd_example)
    return parser


def main(argv: list[str] | None = None, *, out: TextIO | None = None, stdin: TextIO | None = None) -> int:
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    config = load_config(args.config)
    for name in args.disable_dialect:
        config = config.with_dialect_enabled(name, False)
    logging.basicConfig(level=getattr(logging, config.log_level, logging.WARNING))
    LOG.debug("Running %s", args.command)
    return args.handler(args, config, out or sys.stdout, stdin or sys.stdin)


if __name__ == "__main__":
    raise SystemExit(main())
