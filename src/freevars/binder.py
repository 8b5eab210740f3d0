"""
Scope binding pass for ESTree ASTs.

The binder walks an esprima-compatible AST once and records, for every
declaration it meets, the declared names on the node that owns them:
`var` and `let`/`const`/class names on the nearest qualifying scope,
parameters and self-names on their function or class, catch parameters on
their catch clause, and imports on the Program. Bindings are kept in a
`ScopeTable` keyed by node identity, so the tree itself is never modified.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Set

from .modes import ScopeMode, is_block_scope
from .patterns import iter_pattern_names
from .walker import Node, walk_ancestors

logger = logging.getLogger(__name__)


@dataclass
class Scope:
    """A node owning a set of locally declared names."""

    node: Node
    locals: Set[str] = field(default_factory=set)

    @property
    def node_type(self) -> Optional[str]:
        return self.node.get("type")

    def declare(self, name: str) -> None:
        self.locals.add(name)


class ScopeTable:
    """Side table mapping scope-owning nodes to their `Scope`."""

    def __init__(self) -> None:
        self._scopes: Dict[int, Scope] = {}

    def __len__(self) -> int:
        return len(self._scopes)

    def __iter__(self) -> Iterator[Scope]:
        return iter(self._scopes.values())

    def scope_for(self, node: Node) -> Scope:
        """Return the scope owned by `node`, creating an empty one if needed."""
        scope = self._scopes.get(id(node))
        if scope is None:
            scope = Scope(node=node)
            self._scopes[id(node)] = scope
        return scope

    def get(self, node: Node) -> Optional[Scope]:
        return self._scopes.get(id(node))

    def declares(self, node: Node, name: str) -> bool:
        scope = self._scopes.get(id(node))
        return scope is not None and name in scope.locals

    def locals_of(self, node: Node) -> Set[str]:
        scope = self._scopes.get(id(node))
        return set(scope.locals) if scope else set()


def _nearest(
    ancestors: List[Node], predicate: Callable[[Node], bool], *, skip_self: bool
) -> Optional[Node]:
    start = len(ancestors) - (2 if skip_self else 1)
    for index in range(start, -1, -1):
        if predicate(ancestors[index]):
            return ancestors[index]
    return None


class _ScopeBinder:
    def __init__(self, program: Node, mode: ScopeMode, table: ScopeTable) -> None:
        self._program = program
        self._mode = mode
        self._table = table

    def bind(self) -> ScopeTable:
        walk_ancestors(
            self._program,
            {
                "VariableDeclaration": self._visit_VariableDeclaration,
                "FunctionDeclaration": self._visit_FunctionDeclaration,
                "Function": self._declare_function,
                "ClassDeclaration": self._visit_ClassDeclaration,
                "Class": self._declare_class,
                "TryStatement": self._visit_TryStatement,
                "ImportDefaultSpecifier": self._declare_module_specifier,
                "ImportSpecifier": self._declare_module_specifier,
                "ImportNamespaceSpecifier": self._declare_module_specifier,
            },
        )
        return self._table

    # ------------------------------------------------------------------ helpers

    def _declare_pattern(self, pattern: Node, owner: Node) -> None:
        scope = self._table.scope_for(owner)
        for name in iter_pattern_names(pattern):
            scope.declare(name)

    # ----------------------------------------------------------------- visitors

    def _visit_VariableDeclaration(self, node: Node, ancestors: List[Node]) -> None:
        predicate = self._mode.is_var_scope if node.get("kind") == "var" else is_block_scope
        owner = _nearest(ancestors, predicate, skip_self=False)
        if owner is None:
            # Host-embedded top-level `var`: the name lives on the global object.
            return
        self._table.scope_for(owner)
        for declarator in node.get("declarations") or []:
            self._declare_pattern(declarator["id"], owner)

    def _visit_FunctionDeclaration(self, node: Node, ancestors: List[Node]) -> None:
        owner = _nearest(ancestors, self._mode.is_function_name_scope, skip_self=True)
        identifier = node.get("id")
        if owner is not None and identifier:
            self._table.scope_for(owner).declare(identifier["name"])

    def _declare_function(self, node: Node, ancestors: List[Node]) -> None:
        scope = self._table.scope_for(node)
        for param in node.get("params") or []:
            self._declare_pattern(param, node)
        identifier = node.get("id")
        if identifier:
            # Named function expressions can refer to themselves.
            scope.declare(identifier["name"])

    def _visit_ClassDeclaration(self, node: Node, ancestors: List[Node]) -> None:
        owner = _nearest(ancestors, is_block_scope, skip_self=True)
        identifier = node.get("id")
        if owner is not None and identifier:
            self._table.scope_for(owner).declare(identifier["name"])

    def _declare_class(self, node: Node, ancestors: List[Node]) -> None:
        identifier = node.get("id")
        if identifier:
            self._table.scope_for(node).declare(identifier["name"])

    def _visit_TryStatement(self, node: Node, ancestors: List[Node]) -> None:
        handler = node.get("handler")
        if not handler or not handler.get("param"):
            return
        self._declare_pattern(handler["param"], handler)

    def _declare_module_specifier(self, node: Node, ancestors: List[Node]) -> None:
        self._table.scope_for(self._program).declare(node["local"]["name"])


def bind_scopes(
    program: Node, mode: ScopeMode, table: Optional[ScopeTable] = None
) -> ScopeTable:
    """
    Record every declaration in `program` on the scope node that owns it.

    Args:
        program: Program-rooted ESTree dict.
        mode: Attachment policy from `resolve_mode`.
        table: Existing table to extend; binding is idempotent, so passing the
            table of a previous run over the same tree changes nothing.

    Returns:
        The populated `ScopeTable`.

    Raises:
        UnsupportedPatternKind: If a declaration uses an unknown pattern node.
    """
    table = table if table is not None else ScopeTable()
    _ScopeBinder(program, mode, table).bind()
    logger.debug("Bound declarations into %d scopes", len(table))
    return table


__all__ = ["Scope", "ScopeTable", "bind_scopes"]
