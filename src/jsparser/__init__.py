"""Interfaces for parsing JavaScript source code."""

from .esprima_parser import ParseError, ParseResult, parse_js

__all__ = ["ParseError", "ParseResult", "parse_js"]
