import pytest

from estree_nodes import ident, prop
from freevars import UnsupportedPatternKind, pattern_names


def test_plain_identifier():
    assert pattern_names(ident("a")) == ["a"]


def test_nested_patterns():
    pattern = {
        "type": "ObjectPattern",
        "properties": [
            prop(ident("a"), ident("a")),
            prop(
                ident("b"),
                {
                    "type": "ArrayPattern",
                    "elements": [
                        None,
                        {"type": "AssignmentPattern", "left": ident("c"), "right": ident("dflt")},
                        {"type": "RestElement", "argument": ident("d")},
                    ],
                },
            ),
            {"type": "RestElement", "argument": ident("e")},
        ],
    }
    assert pattern_names(pattern) == ["a", "c", "d", "e"]


def test_computed_keys_and_defaults_are_not_bindings():
    pattern = {
        "type": "ObjectPattern",
        "properties": [
            prop(ident("key"), {"type": "AssignmentPattern", "left": ident("v"), "right": ident("w")}, computed=True),
        ],
    }
    assert pattern_names(pattern) == ["v"]


def test_unsupported_pattern_kind():
    node = {"type": "MemberExpression", "object": ident("a"), "property": ident("b"), "computed": False}
    with pytest.raises(UnsupportedPatternKind) as excinfo:
        pattern_names(node)
    assert excinfo.value.kind == "MemberExpression"
    assert excinfo.value.node is node


def test_unsupported_pattern_kind_reports_location():
    node = {"type": "Literal", "value": 1, "loc": {"start": {"line": 3, "column": 4}}}
    with pytest.raises(UnsupportedPatternKind, match=r"Literal \(line 3, column 4\)"):
        pattern_names(node)
