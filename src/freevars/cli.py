"""
Command-line interface listing the free variables of JavaScript files.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

import esprima

from jsparser import parse_js

from .finder import FreeVariable, find_globals


def _format_location(line: int | None, column: int | None) -> str:
    if line is None:
        return "?"
    if column is None:
        return f"{line}"
    return f"{line}:{column}"


def _read_source(path: Path) -> str | None:
    if not path.exists():
        sys.stderr.write(f"ERROR: Input file not found: {path}\n")
        return None
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        sys.stderr.write(f"ERROR: Failed to read {path}: {exc}\n")
        return None


def _as_json(free_variables: List[FreeVariable]) -> str:
    payload = [
        {
            "name": variable.name,
            "occurrences": [
                {"line": ref.loc.line, "column": ref.loc.column}
                for ref in variable.references
            ],
        }
        for variable in free_variables
    ]
    return json.dumps(payload, indent=2)


def _as_text(free_variables: List[FreeVariable]) -> str:
    lines = []
    for variable in free_variables:
        locations = ", ".join(
            _format_location(ref.loc.line, ref.loc.column) for ref in variable.references
        )
        lines.append(f"{variable.name}\t{variable.count}\t{locations}")
    return "\n".join(lines)


def scan_command(args: argparse.Namespace) -> int:
    input_path = Path(args.input).resolve()
    source = _read_source(input_path)
    if source is None:
        return 1

    try:
        free_variables = find_globals(
            source,
            host_embedded=args.host_embedded,
            source_type="module" if args.module else "script",
            source_name=str(input_path),
        )
    except esprima.Error as exc:
        sys.stderr.write(f"ERROR: Parsing failed: {exc}\n")
        return 1

    output = _as_json(free_variables) if args.json else _as_text(free_variables)
    if output:
        sys.stdout.write(output + "\n")
    return 0


def parse_command(args: argparse.Namespace) -> int:
    input_path = Path(args.input).resolve()
    source = _read_source(input_path)
    if source is None:
        return 1

    result = parse_js(
        source,
        source_name=str(input_path),
        source_type="module" if args.module else "script",
    )
    sys.stdout.write(result.to_json() + "\n")
    for error in result.errors:
        loc = _format_location(error.line, error.column)
        sys.stderr.write(f"ERROR {input_path}:{loc}: {error.description}\n")
    return 1 if result.ast is None else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="freevars", description="List free variables referenced by JavaScript code"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command")

    scan_parser = subparsers.add_parser("scan", help="List free variables of a JS file")
    scan_parser.add_argument("input", help="Path to the JavaScript file")
    scan_parser.add_argument(
        "--module",
        action="store_true",
        help="Parse the input as an ES module (enables import/export syntax).",
    )
    scan_parser.add_argument(
        "--host-embedded",
        action="store_true",
        help="Treat top-level var and function declarations as globals, as browsers do.",
    )
    scan_parser.add_argument("--json", action="store_true", help="Emit JSON output.")
    scan_parser.set_defaults(func=scan_command)

    parse_parser = subparsers.add_parser("parse", help="Dump the parsed AST as JSON")
    parse_parser.add_argument("input", help="Path to the JavaScript file")
    parse_parser.add_argument(
        "--module",
        action="store_true",
        help="Parse the input as an ES module (enables import/export syntax).",
    )
    parse_parser.set_defaults(func=parse_command)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
