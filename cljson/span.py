"""Source spans: half-open character ranges into the parsed buffer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SourceSpan(BaseModel):
    """Half-open span ``[start, end)`` of a node in its source buffer."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "SourceSpan":
        if self.end < self.start:
            raise ValueError(f"span end {self.end} is before start {self.start}")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def slice(self, buffer: str) -> str:
        return buffer[self.start : self.end]


def line_column(buffer: str, offset: int) -> tuple[int, int]:
    """Return the 1-based (line, column) of ``offset`` in ``buffer``."""
    offset = max(0, min(offset, len(buffer)))
    line = buffer.count("\n", 0, offset) + 1
    line_start = buffer.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1
