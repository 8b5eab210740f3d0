import json

import esprima
import pytest

from jsparser import parse_js


def test_parse_script():
    result = parse_js("var a = 1;", source_name="a.js")
    assert result.ast["type"] == "Program"
    assert result.ast["sourceType"] == "script"
    assert result.errors == []
    assert result.source_name == "a.js"
    assert len(result.source_hash) == 64


def test_parse_module():
    result = parse_js("import a from 'b';", source_type="module")
    assert result.ast["sourceType"] == "module"
    assert result.ast["body"][0]["type"] == "ImportDeclaration"


def test_hashbang_keeps_locations():
    result = parse_js("#!/usr/bin/env node\nrun();", tolerant=False)
    statement = result.ast["body"][0]
    assert statement["loc"]["start"]["line"] == 2


def test_unknown_source_type():
    with pytest.raises(ValueError):
        parse_js("", source_type="commonjs")


def test_strict_parse_raises():
    with pytest.raises(esprima.Error):
        parse_js("var = ;", tolerant=False)


def test_tolerant_parse_reports_failure():
    result = parse_js("var = ;")
    if result.ast is None:
        assert result.errors
    payload = json.loads(result.to_json())
    assert payload["source_name"] == "<input>"
