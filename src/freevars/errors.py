"""Exceptions raised by the free-variable analysis."""

from __future__ import annotations

from typing import Any, Dict, Optional


def format_location(node: Optional[Dict[str, Any]]) -> str:
    if not node or not isinstance(node, dict):
        return ""
    loc_meta = node.get("loc") or {}
    start = loc_meta.get("start") or {}
    line = start.get("line")
    column = start.get("column")
    if line is None or column is None:
        return ""
    return f" (line {line}, column {column})"


class AnalysisError(RuntimeError):
    """Base class for errors that abort an analysis call."""

    def __init__(self, message: str, node: Any = None):
        super().__init__(f"{message}{format_location(node)}")
        self.node = node


class InvalidInputKind(AnalysisError, TypeError):
    """Raised when the input is neither source text nor a Program tree."""


class UnsupportedPatternKind(AnalysisError):
    """Raised when a binding pattern uses a node kind outside the ESTree pattern grammar."""

    def __init__(self, node: Dict[str, Any]):
        kind = node.get("type") if isinstance(node, dict) else type(node).__name__
        super().__init__(f"Unrecognized pattern type: {kind}", node)
        self.kind = kind


__all__ = ["AnalysisError", "InvalidInputKind", "UnsupportedPatternKind", "format_location"]
