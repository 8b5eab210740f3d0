"""Free variable detection for JavaScript ASTs."""

from .binder import Scope, ScopeTable, bind_scopes
from .classifier import FreeReference, SourcePosition, classify_references
from .errors import AnalysisError, InvalidInputKind, UnsupportedPatternKind
from .finder import FreeVariable, find_globals, group_references, parse_program
from .modes import ScopeMode, resolve_mode
from .patterns import pattern_names
from .walker import walk_ancestors

__all__ = [
    "AnalysisError",
    "FreeReference",
    "FreeVariable",
    "InvalidInputKind",
    "Scope",
    "ScopeMode",
    "ScopeTable",
    "SourcePosition",
    "UnsupportedPatternKind",
    "bind_scopes",
    "classify_references",
    "find_globals",
    "group_references",
    "parse_program",
    "pattern_names",
    "resolve_mode",
    "walk_ancestors",
]
