"""
JavaScript parsing utilities built on top of the Python `esprima` port.

The module exposes `parse_js`, which returns the JSON-compatible ESTree AST
along with metadata describing the parse run. Consumers can decide whether to
allow recoverable parsing via the `tolerant` flag, and choose between script /
module source types to unlock import/export.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Any, List, Optional

import esprima

SOURCE_TYPES = ("script", "module")


@dataclass(frozen=True)
class ParseError:
    """Represents a recoverable parsing issue detected by esprima."""

    description: str
    line: Optional[int]
    column: Optional[int]


@dataclass(frozen=True)
class ParseResult:
    """Aggregate of the output AST plus metadata about the parse run."""

    ast: Any
    errors: List[ParseError]
    source_hash: str
    source_name: str

    def to_json(self) -> str:
        """Serialise the parse result to JSON for debugging or caching."""
        payload = {
            "ast": self.ast,
            "errors": [error.__dict__ for error in self.errors],
            "source_hash": self.source_hash,
            "source_name": self.source_name,
        }
        return json.dumps(payload, ensure_ascii=False, indent=2)


def _hash_source(source: str) -> str:
    """Create a deterministic hash for cache keying."""
    return hashlib.sha256(source.encode("utf-8")).hexdigest()


def _error_field(error: Any, name: str) -> Any:
    if isinstance(error, dict):
        return error.get(name)
    return getattr(error, name, None)


def _strip_hashbang(source: str) -> str:
    # "#!" and "//" have the same width, so locations are preserved.
    if source.startswith("#!"):
        return "//" + source[2:]
    return source


def parse_js(
    source: str,
    *,
    source_name: str = "<input>",
    tolerant: bool = True,
    source_type: str = "script",
) -> ParseResult:
    """
    Parse JavaScript source text into an esprima AST.

    Args:
        source: Raw JavaScript source code. A leading `#!` line is ignored.
        source_name: Optional label used for diagnostics (defaults to `<input>`).
        tolerant: When True, esprima performs error recovery instead of raising.
        source_type: `"script"` or `"module"`; modules enable import/export.

    Returns:
        ParseResult containing the AST, any recoverable errors, and metadata.

    Raises:
        ValueError: If `source_type` is not one of `SOURCE_TYPES`.
        esprima.Error: If parsing fails and `tolerant` is False.
    """
    if source_type not in SOURCE_TYPES:
        raise ValueError(f"Unknown source type: {source_type!r}")
    options = dict(loc=True, range=True, comment=True, tolerant=tolerant)
    parser = esprima.parseModule if source_type == "module" else esprima.parseScript
    try:
        ast = parser(_strip_hashbang(source), **options)
    except esprima.Error as exc:
        if not tolerant:
            raise
        # When tolerant parsing fails hard, convert exception into diagnostics.
        errors = [
            ParseError(
                description=getattr(exc, "description", None) or str(exc),
                line=getattr(exc, "lineNumber", None),
                column=getattr(exc, "column", None),
            )
        ]
        return ParseResult(
            ast=None,
            errors=errors,
            source_hash=_hash_source(source),
            source_name=source_name,
        )

    errors: List[ParseError] = []
    raw_ast = ast.toDict() if hasattr(ast, "toDict") else ast

    if tolerant and isinstance(raw_ast, dict):
        # Collect recoverable errors reported by esprima in tolerant mode.
        for error in raw_ast.get("errors") or []:
            errors.append(
                ParseError(
                    description=_error_field(error, "description"),
                    line=_error_field(error, "lineNumber"),
                    column=_error_field(error, "column"),
                )
            )

    return ParseResult(
        ast=raw_ast,
        errors=errors,
        source_hash=_hash_source(source),
        source_name=source_name,
    )


__all__ = ["ParseResult", "ParseError", "SOURCE_TYPES", "parse_js"]
