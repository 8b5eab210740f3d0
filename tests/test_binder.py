from freevars import ScopeTable, bind_scopes, parse_program, resolve_mode


def _bind(source, *, host_embedded=False, source_type="script"):
    tree = parse_program(source, source_type=source_type)
    table = bind_scopes(tree, resolve_mode(tree, host_embedded=host_embedded))
    return tree, table


def test_program_level_declarations():
    tree, table = _bind("var a; let b; const c = 1; function d() {} class E {}")
    assert table.locals_of(tree) == {"a", "b", "c", "d", "E"}


def test_function_scope_holds_params_and_own_name():
    tree, table = _bind("function f(p, {q, r: [s]}, t = u, ...v) { var w; }")
    fn = tree["body"][0]
    assert table.locals_of(fn) == {"f", "p", "q", "s", "t", "v", "w"}
    assert "u" not in table.locals_of(tree)


def test_var_hoists_out_of_blocks():
    tree, table = _bind("function f() { if (x) { var a; let b; } }")
    fn = tree["body"][0]
    block = fn["body"]["body"][0]["consequent"]
    assert table.locals_of(fn) == {"f", "a"}
    assert table.locals_of(block) == {"b"}


def test_catch_clause_owns_its_parameter():
    tree, table = _bind("try {} catch ({message, code}) { let inner; }")
    handler = tree["body"][0]["handler"]
    assert table.locals_of(handler) == {"message", "code"}
    assert table.locals_of(handler["body"]) == {"inner"}
    assert table.locals_of(tree) == set()


def test_named_function_expression_binds_only_itself():
    tree, table = _bind("var g = function f() {};")
    fn = tree["body"][0]["declarations"][0]["init"]
    assert table.locals_of(fn) == {"f"}
    assert table.locals_of(tree) == {"g"}


def test_anonymous_class_expression_contributes_nothing():
    tree, table = _bind("var E = class {}; var F = class G {};")
    anonymous = tree["body"][0]["declarations"][0]["init"]
    named = tree["body"][1]["declarations"][0]["init"]
    assert table.get(anonymous) is None
    assert table.locals_of(named) == {"G"}
    assert table.locals_of(tree) == {"E", "F"}


def test_imports_attach_to_program():
    tree, table = _bind(
        "import a, {b as c} from 'm'; import * as ns from 'n';", source_type="module"
    )
    assert table.locals_of(tree) == {"a", "c", "ns"}


def test_host_embedded_script_keeps_top_level_names_global():
    tree, table = _bind("var a; function b() { var c; } { function d() {} }", host_embedded=True)
    fn = tree["body"][1]
    block = tree["body"][2]
    assert table.locals_of(tree) == set()
    assert table.locals_of(fn) == {"b", "c"}
    assert table.locals_of(block) == {"d"}


def test_binding_is_idempotent():
    tree = parse_program("var a; function f(x) { let y; }")
    mode = resolve_mode(tree)
    table = bind_scopes(tree, mode)
    snapshot = {id(scope.node): set(scope.locals) for scope in table}
    again = bind_scopes(tree, mode, table)
    assert again is table
    assert {id(scope.node): set(scope.locals) for scope in table} == snapshot


def test_scope_table_lookup():
    table = ScopeTable()
    node = {"type": "BlockStatement", "body": []}
    assert not table.declares(node, "a")
    table.scope_for(node).declare("a")
    table.scope_for(node).declare("a")
    assert table.declares(node, "a")
    assert len(table) == 1
    assert table.get(node).node_type == "BlockStatement"
