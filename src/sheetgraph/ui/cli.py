from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from sheetgraph.adapters.memory import InMemoryDataLookup
from sheetgraph.app import build_lookup, import_sheet_file, import_workbook_file, load_types
from sheetgraph.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import spreadsheets as entity graphs")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Map into memory only and print the resulting entities as JSON",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    workbook = subparsers.add_parser(
        "workbook",
        help="Import a workbook (MAC sheet, Role sheet, then one sheet per type)",
    )
    workbook.add_argument("path", type=Path, help="Path to the .xlsx file")
    workbook.add_argument(
        "--types",
        type=Path,
        help="JSON type schema file to register before importing",
    )

    sheet = subparsers.add_parser("sheet", help="Import the first sheet as one type")
    sheet.add_argument("path", type=Path, help="Path to the .xlsx file")
    sheet.add_argument(
        "--type",
        dest="type_name",
        type=str,
        required=True,
        help="Entity type the rows are mapped to",
    )
    sheet.add_argument(
        "--types",
        type=Path,
        help="JSON type schema file to register before importing",
    )

    types = subparsers.add_parser("types", help="Type schema commands")
    types_sub = types.add_subparsers(dest="types_command", required=True)
    types_load = types_sub.add_parser("load", help="Register types from a JSON schema file")
    types_load.add_argument("path", type=Path, help="Path to the JSON schema file")

    return parser.parse_args(list(argv))


def _dump_entities(lookup: InMemoryDataLookup) -> None:
    documents = [entity.as_document() for entity in lookup.entities.values()]
    json.dump(documents, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "types" and parsed_args.types_command == "load":
            descriptors = load_types(parsed_args.path)
            log.info("Loaded %s types", len(descriptors))
            return

        lookup = build_lookup(dry_run=parsed_args.dry_run, types_path=parsed_args.types)
        if parsed_args.command == "workbook":
            import_workbook_file(parsed_args.path, lookup=lookup)
        elif parsed_args.command == "sheet":
            columns = import_sheet_file(parsed_args.path, parsed_args.type_name, lookup=lookup)
            log.info("Columns: %s", ", ".join(columns))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

        if isinstance(lookup, InMemoryDataLookup):
            _dump_entities(lookup)

    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
