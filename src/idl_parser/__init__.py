"""Parser for a compact endpoint-signature DSL."""

from idl_parser.config import ParserOptions
from idl_parser.parser.base import Endpoint, Method, PathVariable, Segment, Variable, VariableType
from idl_parser.parser.errors import ParseError
from idl_parser.parser.grammar import parse_endpoint

__all__ = [
    "Endpoint",
    "Method",
    "ParseError",
    "ParserOptions",
    "PathVariable",
    "Segment",
    "Variable",
    "VariableType",
    "parse_endpoint",
]
