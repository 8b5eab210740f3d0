"""
Depth-first traversal of ESTree dicts with access to the ancestor chain.

`walk_ancestors` visits every node of an esprima-compatible tree and, once a
node's children have been walked, calls the visitor registered for its kind
with the node and the chain of ancestors (root first, the node itself last).
Besides the plain node types, three synthetic kinds are reported:

* ``Function`` for function declarations, function expressions and arrows,
* ``Class`` for class declarations and class expressions,
* ``VariablePattern`` for identifiers in a binding or assignment target
  position (declarators, parameters, catch parameters, assignment targets).

Identifiers that are not references are never visited: non-computed keys of
properties, methods and class fields, non-computed member properties, labels,
import/export specifier names and meta properties such as `new.target`.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

Node = Dict[str, Any]
Visitor = Callable[[Node, List[Node]], None]

FUNCTION_TYPES = frozenset(
    {"FunctionDeclaration", "FunctionExpression", "ArrowFunctionExpression"}
)
CLASS_TYPES = frozenset({"ClassDeclaration", "ClassExpression"})

# Keys holding metadata rather than child nodes.
_SKIPPED_KEYS = frozenset(
    {
        "type",
        "loc",
        "range",
        "comments",
        "errors",
        "tokens",
        "leadingComments",
        "trailingComments",
        "innerComments",
    }
)


def _is_node(value: Any) -> bool:
    return isinstance(value, dict) and "type" in value


class AncestorWalker:
    """Visitor driving callbacks keyed by node kind, tracking the ancestor stack."""

    def __init__(self, visitors: Mapping[str, Visitor]) -> None:
        self._visitors = visitors
        self._ancestors: List[Node] = []

    def walk(self, node: Node) -> None:
        self._visit(node)

    def _visit(self, node: Optional[Node], kind: Optional[str] = None) -> None:
        if not _is_node(node):
            return
        kind = kind or node["type"]
        is_new = not self._ancestors or self._ancestors[-1] is not node
        if is_new:
            self._ancestors.append(node)
        try:
            handler = getattr(self, f"_visit_{kind}", None)
            if handler:
                handler(node)
            else:
                self._generic_visit(node)
            visitor = self._visitors.get(kind)
            if visitor:
                visitor(node, self._ancestors)
        finally:
            if is_new:
                self._ancestors.pop()

    def _visit_all(self, nodes: Any) -> None:
        for child in nodes or []:
            self._visit(child)

    def _generic_visit(self, node: Node) -> None:
        for key, value in node.items():
            if key in _SKIPPED_KEYS:
                continue
            if isinstance(value, list):
                self._visit_all(value)
            else:
                self._visit(value)

    def _visit_pattern(self, node: Optional[Node]) -> None:
        if not _is_node(node):
            return
        if node["type"] == "Identifier":
            self._visit(node, "VariablePattern")
        else:
            self._visit(node)

    # ------------------------------------------------------------------- leaves

    def _leaf(self, node: Node) -> None:
        pass

    _visit_Identifier = _leaf
    _visit_VariablePattern = _leaf
    _visit_PrivateIdentifier = _leaf
    _visit_Literal = _leaf
    _visit_ThisExpression = _leaf
    _visit_Super = _leaf
    _visit_MetaProperty = _leaf
    _visit_TemplateElement = _leaf
    _visit_BreakStatement = _leaf
    _visit_ContinueStatement = _leaf
    _visit_ImportSpecifier = _leaf
    _visit_ImportDefaultSpecifier = _leaf
    _visit_ImportNamespaceSpecifier = _leaf
    _visit_ExportSpecifier = _leaf

    # -------------------------------------------------------------- functions

    def _visit_FunctionDeclaration(self, node: Node) -> None:
        self._visit(node, "Function")

    _visit_FunctionExpression = _visit_FunctionDeclaration
    _visit_ArrowFunctionExpression = _visit_FunctionDeclaration

    def _visit_Function(self, node: Node) -> None:
        self._visit_pattern(node.get("id"))
        for param in node.get("params") or []:
            self._visit_pattern(param)
        self._visit(node.get("body"))

    def _visit_ClassDeclaration(self, node: Node) -> None:
        self._visit(node, "Class")

    _visit_ClassExpression = _visit_ClassDeclaration

    def _visit_Class(self, node: Node) -> None:
        self._visit_pattern(node.get("id"))
        self._visit(node.get("superClass"))
        self._visit(node.get("body"))

    # --------------------------------------------------------------- patterns

    def _visit_VariableDeclarator(self, node: Node) -> None:
        self._visit_pattern(node.get("id"))
        self._visit(node.get("init"))

    def _visit_CatchClause(self, node: Node) -> None:
        self._visit_pattern(node.get("param"))
        self._visit(node.get("body"))

    def _visit_AssignmentExpression(self, node: Node) -> None:
        self._visit_pattern(node.get("left"))
        self._visit(node.get("right"))

    _visit_AssignmentPattern = _visit_AssignmentExpression

    def _visit_ObjectPattern(self, node: Node) -> None:
        for prop in node.get("properties") or []:
            if not _is_node(prop):
                continue
            if prop["type"] == "Property":
                # The Property wrapper is not pushed onto the ancestor chain.
                if prop.get("computed"):
                    self._visit(prop.get("key"))
                self._visit_pattern(prop.get("value"))
            else:
                self._visit_pattern(prop.get("argument"))

    def _visit_ArrayPattern(self, node: Node) -> None:
        for element in node.get("elements") or []:
            self._visit_pattern(element)

    def _visit_RestElement(self, node: Node) -> None:
        self._visit_pattern(node.get("argument"))

    # ------------------------------------------------------ non-reference names

    def _visit_Property(self, node: Node) -> None:
        if node.get("computed"):
            self._visit(node.get("key"))
        self._visit(node.get("value"))

    _visit_MethodDefinition = _visit_Property
    _visit_PropertyDefinition = _visit_Property

    def _visit_MemberExpression(self, node: Node) -> None:
        self._visit(node.get("object"))
        if node.get("computed"):
            self._visit(node.get("property"))

    def _visit_LabeledStatement(self, node: Node) -> None:
        self._visit(node.get("body"))

    def _visit_ImportDeclaration(self, node: Node) -> None:
        self._visit_all(node.get("specifiers"))
        self._visit(node.get("source"))

    def _visit_ExportNamedDeclaration(self, node: Node) -> None:
        self._visit(node.get("declaration"))
        self._visit(node.get("source"))

    def _visit_ExportAllDeclaration(self, node: Node) -> None:
        self._visit(node.get("source"))

    def _visit_ExportDefaultDeclaration(self, node: Node) -> None:
        self._visit(node.get("declaration"))


def walk_ancestors(tree: Node, visitors: Mapping[str, Visitor]) -> None:
    """
    Walk `tree`, calling `visitors[kind](node, ancestors)` for each visited node.

    The `ancestors` list is shared and mutated as the walk proceeds; visitors
    that keep it must take a copy.
    """
    AncestorWalker(visitors).walk(tree)


__all__ = [
    "AncestorWalker",
    "CLASS_TYPES",
    "FUNCTION_TYPES",
    "Node",
    "Visitor",
    "walk_ancestors",
]
