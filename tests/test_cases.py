from pathlib import Path
from typing import Dict, List

import pytest

from freevars import find_globals

CASES_DIR = Path(__file__).parent / "cases"

TEST_CASES = [
    ("closures.js", "script", False, {"defaultStep": 1, "log": 1}),
    ("destructuring.js", "script", False, {"fallback": 1, "items": 1, "options": 1, "record": 1}),
    (
        "block_scope.js",
        "script",
        False,
        {"Local": 1, "branch": 1, "inner": 1, "mode": 1, "ready": 1},
    ),
    ("browser_script.js", "script", False, {"document": 1}),
    (
        "browser_script.js",
        "script",
        True,
        {"config": 1, "document": 1, "helper": 1, "init": 1},
    ),
    ("module_imports.js", "module", False, {"baseDir": 1}),
    ("this_and_arguments.js", "script", False, {"arguments": 1, "this": 2}),
]


@pytest.mark.parametrize("file_name, source_type, host_embedded, expected", TEST_CASES)
def test_fixture_globals(
    file_name: str, source_type: str, host_embedded: bool, expected: Dict[str, int]
):
    source_path = CASES_DIR / file_name
    source = source_path.read_text(encoding="utf-8")
    result = find_globals(
        source,
        host_embedded=host_embedded,
        source_type=source_type,
        source_name=str(source_path),
    )

    names: List[str] = [variable.name for variable in result]
    assert names == sorted(expected)
    assert {variable.name: variable.count for variable in result} == expected
    for variable in result:
        for reference in variable.references:
            assert reference.loc.line is not None
