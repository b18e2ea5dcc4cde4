"""Node kinds of the element tree."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .elements import BASE_INDENT, MAX_LINE, Container, Element
from .errors import ElementTypeError, ParseException

# Keys whose values are always laid out one member per line.
SECTIONS = frozenset(
    {
        "ConstraintSets",
        "Variables",
        "Generate",
        "Transitions",
        "KeyFrames",
        "KeyAttributes",
        "KeyPositions",
        "KeyCycles",
    }
)


@dataclass(eq=False, repr=False)
class Array(Container):
    """Ordered, unnamed values serialized between brackets."""

    def to_json(self) -> str:
        return self.debug_name + "[" + ", ".join(element.to_json() for element in self.elements) + "]"

    def to_formatted_json(self, indent: int = 0, force_indent: int = 0) -> str:
        compact = self.to_json()
        if not self.elements or (force_indent <= 0 and len(compact) + indent < MAX_LINE):
            return compact
        inner = indent + BASE_INDENT
        lines = [
            self.indentation(inner) + element.to_formatted_json(inner, force_indent - 1)
            for element in self.elements
        ]
        return self.debug_name + "[\n" + ",\n".join(lines) + "\n" + self.indentation(indent) + "]"


@dataclass(eq=False, repr=False)
class Object(Container):
    """Named members, each held by a Key, in declaration order."""

    def add(self, element: Element) -> None:
        if not isinstance(element, Key):
            raise ElementTypeError(f"object members must be keys, got {element.kind}", element)
        super().add(element)

    def to_json(self) -> str:
        if not self.elements:
            return self.debug_name + "{}"
        return self.debug_name + "{ " + ", ".join(element.to_json() for element in self.elements) + " }"

    def to_formatted_json(self, indent: int = 0, force_indent: int = 0) -> str:
        if not self.elements:
            return self.to_json()
        inner = indent + BASE_INDENT
        lines = [
            self.indentation(inner) + element.to_formatted_json(inner, force_indent - 1)
            for element in self.elements
        ]
        return self.debug_name + "{\n" + ",\n".join(lines) + "\n" + self.indentation(indent) + "}"


@dataclass(eq=False, repr=False)
class Key(Container):
    """A named member of an Object, holding at most one value."""

    @property
    def value(self) -> Element | None:
        return self.elements[0] if self.elements else None

    def add(self, element: Element) -> None:
        if self.elements:
            raise ParseException(f"key <{self.name}> already has a value", self)
        super().add(element)

    def to_json(self) -> str:
        if self.value is None:
            return f'"{self.debug_name}": <>'
        return f'"{self.debug_name}": {self.value.to_json()}'

    def to_formatted_json(self, indent: int = 0, force_indent: int = 0) -> str:
        if self.value is None:
            return self.to_json()
        prefix = f'"{self.debug_name}": '
        if self.name in SECTIONS:
            force_indent = 3
        if force_indent > 0:
            return prefix + self.value.to_formatted_json(indent, force_indent - 1)
        compact = self.value.to_json()
        if len(prefix) + len(compact) + indent < MAX_LINE:
            return prefix + compact
        # too wide after the name: break the value's outer level
        return prefix + self.value.to_formatted_json(indent, max(force_indent - 1, 1))


@dataclass(eq=False, repr=False)
class String(Element):
    @property
    def value(self) -> str:
        return self.content()

    def to_json(self) -> str:
        return "'" + self.content() + "'"


@dataclass(eq=False, repr=False)
class Number(Element):
    @property
    def value(self) -> float:
        text = self.content()
        try:
            value = float(text)
        except ValueError as exc:
            raise ElementTypeError(f"invalid number <{text}>", self) from exc
        if not math.isfinite(value):
            raise ElementTypeError(f"number out of range <{text}>", self)
        return value

    @property
    def int_value(self) -> int:
        return int(self.value)

    def is_int(self) -> bool:
        return self.value.is_integer()

    def to_json(self) -> str:
        value = self.value
        if value.is_integer():
            return str(int(value))
        return repr(value)


@dataclass(eq=False, repr=False)
class Boolean(Element):
    @property
    def value(self) -> bool:
        return self.content() == "true"

    def to_json(self) -> str:
        return "true" if self.value else "false"


@dataclass(eq=False, repr=False)
class Null(Element):
    @property
    def value(self) -> None:
        return None

    def to_json(self) -> str:
        return "null"


Value = Array | Object | String | Number | Boolean | Null
