"""Element base contract and the ordered, owning Container."""

from __future__ import annotations

import math
import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Self

from pydantic import ValidationError

from .errors import ElementTypeError, InvalidSpanError, MissingElementError, OutOfRangeError, ParseException
from .span import SourceSpan, line_column

if TYPE_CHECKING:
    from .nodes import Array, Key, Object

MAX_LINE = 80
BASE_INDENT = 2


@dataclass(eq=False, repr=False)
class Element:
    """One parsed value and where it came from.

    ``buffer`` is the whole source text, shared by every node of a tree.
    ``start``/``end`` stay ``None`` until the parser records them.
    """

    buffer: str
    start: int | None = None
    end: int | None = None
    name: str | None = None
    _container: weakref.ReferenceType[Container] | None = field(default=None, init=False)

    @classmethod
    def allocate(cls, buffer: str) -> Self:
        """Create an empty node of this kind over ``buffer``, span unset."""
        return cls(buffer)

    @property
    def kind(self) -> str:
        return type(self).__name__

    @property
    def debug_name(self) -> str:
        return self.name or ""

    @property
    def container(self) -> Container | None:
        if self._container is None:
            return None
        return self._container()

    @property
    def span(self) -> SourceSpan | None:
        if self.start is None or self.end is None:
            return None
        return SourceSpan(start=self.start, end=self.end)

    @property
    def line(self) -> int:
        return line_column(self.buffer, self.start or 0)[0]

    def is_started(self) -> bool:
        return self.start is not None

    def is_done(self) -> bool:
        return self.end is not None

    def set_start(self, start: int) -> None:
        if start < 0 or start > len(self.buffer):
            raise InvalidSpanError(f"start {start} outside buffer of length {len(self.buffer)}", self)
        if self.end is not None:
            self._check_span(start, self.end)
        self.start = start

    def set_end(self, end: int) -> None:
        if self.start is None:
            raise InvalidSpanError("end set before start", self)
        if end > len(self.buffer):
            raise InvalidSpanError(f"end {end} outside buffer of length {len(self.buffer)}", self)
        self._check_span(self.start, end)
        self.end = end

    def set_span(self, start: int, end: int) -> None:
        self.set_start(start)
        self.set_end(end)

    def _check_span(self, start: int, end: int) -> None:
        try:
            SourceSpan(start=start, end=end)
        except ValidationError as exc:
            raise InvalidSpanError(f"invalid span [{start}, {end})", self) from exc

    def content(self) -> str:
        if self.start is None:
            return ""
        if self.end is None:
            return self.buffer[self.start : self.start + 1]
        return self.buffer[self.start : self.end]

    def to_json(self) -> str:
        """Compact serialization. Every concrete kind overrides this."""
        raise NotImplementedError(f"{self.kind} does not serialize")

    def to_formatted_json(self, indent: int = 0, force_indent: int = 0) -> str:
        return self.to_json()

    @staticmethod
    def indentation(indent: int) -> str:
        return " " * indent

    def __repr__(self) -> str:
        if self.start is None or self.end is None:
            return f"{self.kind} (INVALID, {self.start}-{self.end})"
        return f"{self.kind} ({self.start} : {self.end}) <<{self.content()}>>"


@dataclass(eq=False, repr=False)
class Container(Element):
    """Element owning an ordered sequence of children."""

    elements: list[Element] = field(default_factory=list)

    def add(self, element: Element) -> None:
        if element.container is not None:
            raise ParseException("element already belongs to a container", element)
        node: Container | None = self
        while node is not None:
            if node is element:
                raise ParseException("adding element would create a cycle", element)
            node = node.container
        self.elements.append(element)
        element._container = weakref.ref(self)

    def size(self) -> int:
        return len(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements)

    def get(self, index: int) -> Element:
        if 0 <= index < len(self.elements):
            return self.elements[index]
        raise OutOfRangeError(f"no element at index {index}", self)

    # Member lookups ----------------------------------------------------------
    def _keys(self) -> Iterator[Key]:
        from .nodes import Key

        for element in self.elements:
            if isinstance(element, Key):
                yield element

    def names(self) -> list[str]:
        return [key.debug_name for key in self._keys()]

    def has(self, name: str) -> bool:
        return any(key.name == name for key in self._keys())

    def lookup_or_none(self, name: str) -> Element | None:
        for key in self._keys():
            if key.name == name:
                return key.value
        return None

    def lookup(self, name: str) -> Element:
        for key in self._keys():
            if key.name == name:
                if key.value is None:
                    raise MissingElementError(f"key <{name}> has no value", key)
                return key.value
        raise MissingElementError(f"no element for key <{name}>", self)

    def _resolve(self, key: str | int) -> Element:
        from .nodes import Key

        if isinstance(key, str):
            return self.lookup(key)
        element = self.get(key)
        if isinstance(element, Key):
            if element.value is None:
                raise MissingElementError(f"key <{element.name}> has no value", element)
            return element.value
        return element

    def _resolve_or_none(self, key: str | int) -> Element | None:
        try:
            return self._resolve(key)
        except (MissingElementError, OutOfRangeError):
            return None

    # Typed accessors ---------------------------------------------------------
    def get_string(self, key: str | int) -> str:
        from .nodes import String

        element = self._resolve(key)
        if isinstance(element, String):
            return element.value
        raise ElementTypeError(f"no string found for <{key}>, found {element.kind}", element)

    def get_float(self, key: str | int) -> float:
        from .nodes import Number

        element = self._resolve(key)
        if isinstance(element, Number):
            return element.value
        raise ElementTypeError(f"no float found for <{key}>, found {element.kind}", element)

    def get_int(self, key: str | int) -> int:
        from .nodes import Number

        element = self._resolve(key)
        if isinstance(element, Number):
            return element.int_value
        raise ElementTypeError(f"no int found for <{key}>, found {element.kind}", element)

    def get_boolean(self, key: str | int) -> bool:
        from .nodes import Boolean

        element = self._resolve(key)
        if isinstance(element, Boolean):
            return element.value
        raise ElementTypeError(f"no boolean found for <{key}>, found {element.kind}", element)

    def get_array(self, key: str | int) -> Array:
        from .nodes import Array

        element = self._resolve(key)
        if isinstance(element, Array):
            return element
        raise ElementTypeError(f"no array found for <{key}>, found {element.kind}", element)

    def get_object(self, key: str | int) -> Object:
        from .nodes import Object

        element = self._resolve(key)
        if isinstance(element, Object):
            return element
        raise ElementTypeError(f"no object found for <{key}>, found {element.kind}", element)

    def get_string_or_none(self, key: str | int) -> str | None:
        from .nodes import String

        element = self._resolve_or_none(key)
        return element.value if isinstance(element, String) else None

    def get_float_or_nan(self, key: str | int) -> float:
        from .nodes import Number

        element = self._resolve_or_none(key)
        return element.value if isinstance(element, Number) else math.nan

    def get_array_or_none(self, key: str | int) -> Array | None:
        from .nodes import Array

        element = self._resolve_or_none(key)
        return element if isinstance(element, Array) else None

    def get_object_or_none(self, key: str | int) -> Object | None:
        from .nodes import Object

        element = self._resolve_or_none(key)
        return element if isinstance(element, Object) else None

    def __repr__(self) -> str:
        children = "; ".join(repr(element) for element in self.elements)
        return f"{super().__repr__()} = <{children} >"
