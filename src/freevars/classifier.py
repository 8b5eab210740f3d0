"""
Reference classification pass.

Every identifier reference and `this` expression is checked against the
scopes recorded by the binder on its ancestors. Those satisfied by no
ancestor are free references, resolved at runtime against the global
environment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .binder import ScopeTable
from .modes import declares_arguments
from .walker import Node, walk_ancestors

logger = logging.getLogger(__name__)

THIS = "this"

_PATTERN_TYPES = frozenset({"ObjectPattern", "ArrayPattern", "RestElement", "AssignmentPattern"})
_THIS_BINDING_TYPES = frozenset({"FunctionExpression", "FunctionDeclaration"})


@dataclass(frozen=True)
class SourcePosition:
    line: Optional[int]
    column: Optional[int]


@dataclass(frozen=True)
class FreeReference:
    """A use of `name` that no enclosing scope declares."""

    name: str
    node: Node
    parents: Tuple[Node, ...]

    @property
    def parent(self) -> Optional[Node]:
        """The node directly containing the reference."""
        return self.parents[-2] if len(self.parents) > 1 else None

    @property
    def loc(self) -> SourcePosition:
        loc = self.node.get("loc") or {}
        start = loc.get("start") or {}
        return SourcePosition(line=start.get("line"), column=start.get("column"))


class _ReferenceClassifier:
    def __init__(self, table: ScopeTable) -> None:
        self._table = table
        self._free: List[FreeReference] = []

    def classify(self, program: Node) -> List[FreeReference]:
        walk_ancestors(
            program,
            {
                "VariablePattern": self._visit_VariablePattern,
                "Identifier": self._visit_Identifier,
                "ThisExpression": self._visit_ThisExpression,
            },
        )
        return self._free

    def _is_bound(self, name: str, ancestors: List[Node]) -> bool:
        if name == "undefined":
            return True
        for ancestor in ancestors:
            if name == "arguments" and declares_arguments(ancestor):
                return True
            if self._table.declares(ancestor, name):
                return True
        return False

    def _record(self, name: str, node: Node, ancestors: List[Node]) -> None:
        self._free.append(FreeReference(name=name, node=node, parents=tuple(ancestors)))

    def _visit_Identifier(self, node: Node, ancestors: List[Node]) -> None:
        name = node["name"]
        if not self._is_bound(name, ancestors):
            self._record(name, node, ancestors)

    def _visit_VariablePattern(self, node: Node, ancestors: List[Node]) -> None:
        # Leaves of a declarator's pattern are declarations, not references.
        for index in range(len(ancestors) - 2, -1, -1):
            kind = ancestors[index].get("type")
            if kind not in _PATTERN_TYPES:
                if kind == "VariableDeclarator":
                    return
                break
        self._visit_Identifier(node, ancestors)

    def _visit_ThisExpression(self, node: Node, ancestors: List[Node]) -> None:
        for index, ancestor in enumerate(ancestors):
            kind = ancestor.get("type")
            if kind in _THIS_BINDING_TYPES:
                return
            if (
                kind == "PropertyDefinition"
                and index + 1 < len(ancestors)
                and ancestors[index + 1] is ancestor.get("value")
            ):
                # Class field initializers run with `this` bound to the instance.
                return
        self._record(THIS, node, ancestors)


def classify_references(program: Node, table: ScopeTable) -> List[FreeReference]:
    """
    Return the free references of `program` in traversal order.

    `table` must come from `bind_scopes` over the same tree so declarations
    that appear after a use (hoisting) are already known.
    """
    free = _ReferenceClassifier(table).classify(program)
    logger.debug("Classified %d free references", len(free))
    return free


__all__ = ["FreeReference", "SourcePosition", "THIS", "classify_references"]
