"""
Entry point tying together parsing, scope binding and reference classification.

`find_globals` accepts JavaScript source text or an already parsed Program
tree and returns the free variables it references, grouped by name and sorted
alphabetically. Each group lists every occurrence in traversal order together
with the ancestor chain at the point of use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

from jsparser import ParseResult, parse_js

from .binder import bind_scopes
from .classifier import FreeReference, classify_references
from .errors import InvalidInputKind
from .modes import resolve_mode
from .walker import Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FreeVariable:
    """All free references sharing one name."""

    name: str
    references: Tuple[FreeReference, ...]

    @property
    def nodes(self) -> List[Node]:
        return [reference.node for reference in self.references]

    @property
    def count(self) -> int:
        return len(self.references)


def group_references(references: Iterable[FreeReference]) -> List[FreeVariable]:
    """Group references by name, keeping first-seen order inside each group."""
    grouped: Dict[str, List[FreeReference]] = {}
    for reference in references:
        grouped.setdefault(reference.name, []).append(reference)
    return [
        FreeVariable(name=name, references=tuple(grouped[name]))
        for name in sorted(grouped)
    ]


def parse_program(
    source: str,
    *,
    source_type: str = "script",
    source_name: str = "<input>",
) -> Node:
    """
    Parse `source` into a Program dict, raising on any syntax error.

    Raises:
        esprima.Error: If the source does not parse.
    """
    result = parse_js(
        source, source_name=source_name, tolerant=False, source_type=source_type
    )
    return result.ast


def _coerce_program(source: Any, *, source_type: str, source_name: str) -> Node:
    if isinstance(source, str):
        return parse_program(source, source_type=source_type, source_name=source_name)
    if isinstance(source, ParseResult):
        source = source.ast
    elif not isinstance(source, dict) and callable(getattr(source, "toDict", None)):
        source = source.toDict()
    if not (isinstance(source, dict) and source.get("type") == "Program"):
        raise InvalidInputKind(
            "Source must be either a string of JavaScript or a Program AST"
        )
    return source


def find_globals(
    source: Any,
    *,
    host_embedded: bool = False,
    source_type: str = "script",
    source_name: str = "<input>",
) -> List[FreeVariable]:
    """
    Find every free variable referenced by a piece of JavaScript.

    Args:
        source: Source text, a Program-rooted ESTree dict, a `ParseResult`, or
            an esprima node.
        host_embedded: Apply browser-style script semantics, where top-level
            `var` and function declarations become properties of the global
            object instead of bindings. Ignored for module code.
        source_type: `"script"` or `"module"`, used only when parsing text.
        source_name: Label for diagnostics.

    Returns:
        FreeVariable groups sorted by name; `this` is reported under `"this"`.

    Raises:
        InvalidInputKind: If `source` is neither text nor a Program tree.
        UnsupportedPatternKind: If a declaration uses an unknown pattern node.
        esprima.Error: If `source` is text that does not parse.
    """
    program = _coerce_program(source, source_type=source_type, source_name=source_name)
    mode = resolve_mode(program, host_embedded=host_embedded)
    table = bind_scopes(program, mode)
    free_variables = group_references(classify_references(program, table))
    logger.debug(
        "Found %d free variables in %s", len(free_variables), source_name
    )
    return free_variables


__all__ = ["FreeVariable", "find_globals", "group_references", "parse_program"]
