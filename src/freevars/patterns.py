"""Flattening of binding patterns into the simple names they declare."""

from __future__ import annotations

from typing import Iterator, List

from .errors import UnsupportedPatternKind
from .walker import Node


def iter_pattern_names(node: Node) -> Iterator[str]:
    """
    Yield every name bound by a binding pattern.

    Default values and computed keys are expressions, not binding sites, and
    are never inspected. Array holes bind nothing.

    Raises:
        UnsupportedPatternKind: If a node outside the pattern grammar is found.
    """
    kind = node.get("type") if isinstance(node, dict) else None
    if kind == "Identifier":
        yield node["name"]
    elif kind == "ObjectPattern":
        for prop in node.get("properties") or []:
            yield from iter_pattern_names(prop.get("value") or prop.get("argument"))
    elif kind == "ArrayPattern":
        for element in node.get("elements") or []:
            if element is not None:
                yield from iter_pattern_names(element)
    elif kind == "RestElement":
        yield from iter_pattern_names(node.get("argument"))
    elif kind == "AssignmentPattern":
        yield from iter_pattern_names(node.get("left"))
    else:
        raise UnsupportedPatternKind(node)


def pattern_names(node: Node) -> List[str]:
    """Return the names bound by `node` in source order."""
    return list(iter_pattern_names(node))


__all__ = ["iter_pattern_names", "pattern_names"]
