"""Span-tracking parser and element tree for JSON-like layout descriptions."""

import logging

from .span import SourceSpan, line_column
from .errors import (
    ElementTypeError,
    InvalidSpanError,
    LexerError,
    MissingElementError,
    OutOfRangeError,
    ParseException,
)
from .elements import Container, Element
from .nodes import Array, Boolean, Key, Null, Number, Object, String, Value
from .lexer import Lexer, LexerConfig, Token, TokenType
from .parser import Parser, ParserConfig, parse

__all__ = [
    "SourceSpan",
    "line_column",
    "ElementTypeError",
    "InvalidSpanError",
    "LexerError",
    "MissingElementError",
    "OutOfRangeError",
    "ParseException",
    "Container",
    "Element",
    "Array",
    "Boolean",
    "Key",
    "Null",
    "Number",
    "Object",
    "String",
    "Value",
    "Lexer",
    "LexerConfig",
    "Token",
    "TokenType",
    "Parser",
    "ParserConfig",
    "parse",
]

# silent unless a lexer or parser is built with enable_logger
logging.getLogger(__name__).addHandler(logging.NullHandler())
