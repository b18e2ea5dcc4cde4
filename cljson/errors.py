"""Exceptions raised while building, reading and parsing element trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .elements import Element


class ParseException(Exception):
    def __init__(self, message: str, element: Element | None = None):
        self.message = message
        self.element = element
        if element is not None:
            message = f"{message} ({element.kind}"
            if element.is_started():
                message += f" at line {element.line}"
            message += ")"
        super().__init__(message)


class LexerError(ParseException):
    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} at {line}:{column}")
        self.line = line
        self.column = column


class OutOfRangeError(ParseException, IndexError):
    """Index outside ``[0, size)`` of a container."""


class InvalidSpanError(ParseException, ValueError):
    """Span bounds that are negative, reversed or past the end of the buffer."""


class MissingElementError(ParseException, LookupError):
    """No member with the requested name."""


class ElementTypeError(ParseException, TypeError):
    """A typed accessor found an element of another kind."""
