"""
Scope kinds and the per-call policy deciding where declarations attach.

A `ScopeMode` is resolved once per analysis from the Program node's
`sourceType`, its directive prologue, and the caller's `host_embedded` flag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .walker import FUNCTION_TYPES, Node

logger = logging.getLogger(__name__)


def is_function_scope(node: Node) -> bool:
    return node.get("type") in FUNCTION_TYPES


def is_block_level_scope(node: Node) -> bool:
    # The body of a switch statement is a block.
    return node.get("type") in ("BlockStatement", "SwitchStatement") or is_function_scope(node)


def is_scope(node: Node) -> bool:
    return node.get("type") == "Program" or is_function_scope(node)


def is_block_scope(node: Node) -> bool:
    return node.get("type") in ("BlockStatement", "SwitchStatement") or is_scope(node)


def declares_arguments(node: Node) -> bool:
    """Arrow functions see the `arguments` of their enclosing function."""
    return node.get("type") in ("FunctionDeclaration", "FunctionExpression")


def has_use_strict(program: Node) -> bool:
    """Return True if the program's directive prologue contains "use strict"."""
    for statement in program.get("body") or []:
        if statement.get("type") != "ExpressionStatement" or not statement.get("directive"):
            return False
        if statement.get("directive") == "use strict":
            return True
    return False


@dataclass(frozen=True)
class ScopeMode:
    """Attachment policy for `var` and function declarations."""

    in_module: bool
    strict: bool
    host_embedded: bool = False

    @property
    def hoists_to_program(self) -> bool:
        """Whether `var` and function names may attach to the Program node."""
        return self.in_module or not self.host_embedded

    def is_var_scope(self, node: Node) -> bool:
        if self.hoists_to_program:
            return is_scope(node)
        return is_function_scope(node)

    def is_function_name_scope(self, node: Node) -> bool:
        if self.hoists_to_program:
            return is_scope(node)
        return is_block_level_scope(node)


def resolve_mode(program: Node, *, host_embedded: bool = False) -> ScopeMode:
    """Compute the scope policy for `program`."""
    mode = ScopeMode(
        in_module=program.get("sourceType") == "module",
        strict=has_use_strict(program),
        host_embedded=host_embedded,
    )
    logger.debug(
        "Resolved scope mode: module=%s strict=%s host_embedded=%s",
        mode.in_module,
        mode.strict,
        mode.host_embedded,
    )
    return mode


__all__ = [
    "ScopeMode",
    "declares_arguments",
    "has_use_strict",
    "is_block_level_scope",
    "is_block_scope",
    "is_function_scope",
    "is_scope",
    "resolve_mode",
]
