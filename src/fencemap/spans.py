from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A concrete document position.

    Line/column are 1-based; the offset is 0-based and only known for
    positions read straight from the parsed document.
    """

    line: int
    column: int
    offset: int | None = None

    def key(self) -> tuple[int, int]:
        return (self.line, self.column)


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open range [start, end) in a single text."""

    start: Position
    end: Position

    def format(self, file: str = "<memory>") -> str:
        return f"{file}:{self.start.line}:{self.start.column}"
