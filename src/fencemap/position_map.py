from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field

from .errors import MappingFrozenError, MappingOrderError
from .spans import Position, Range


# At equal generated positions a terminator sorts after the mapping it ends,
# so the end position of a range still resolves to that range.
_MAPPING = 0
_TERMINATOR = 1


@dataclass(frozen=True, slots=True)
class Segment:
    """One mapping unit: a generated position and its original counterpart.

    A segment without an original position is a terminator.
    """

    generated: Position
    original: Position | None = None

    @property
    def terminator(self) -> bool:
        return self.original is None

    def key(self) -> tuple[int, int, int]:
        kind = _TERMINATOR if self.original is None else _MAPPING
        return (*self.generated.key(), kind)


@dataclass(frozen=True, slots=True)
class PositionMap:
    """Immutable generated -> original coordinate translator for one fragment."""

    source: str
    origin: Position | None
    segments: tuple[Segment, ...]
    _keys: tuple[tuple[int, int, int], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_keys", tuple(s.key() for s in self.segments))

    def __len__(self) -> int:
        return len(self.segments)

    def map_position(self, generated: Position) -> Position | None:
        """Translate a generated position, or return None when it is unmapped.

        The line delta of the governing mapping is always carried. The column
        delta only applies on the mapping's own line; later lines of a
        multi-line mapping keep their column.
        """
        i = bisect_right(self._keys, (generated.line, generated.column, _MAPPING)) - 1
        if i < 0:
            return None
        seg = self.segments[i]
        if seg.original is None:
            return None

        line = seg.original.line + (generated.line - seg.generated.line)
        if generated.line == seg.generated.line:
            column = seg.original.column + (generated.column - seg.generated.column)
        else:
            column = generated.column
        return Position(line=line, column=column)


@dataclass(slots=True)
class PositionMapBuilder:
    """Insert-only side of a PositionMap; ``build()`` freezes it."""

    source: str = "<memory>"
    origin: Position | None = None
    _segments: list[Segment] = field(default_factory=list)
    _built: bool = False

    @property
    def built(self) -> bool:
        return self._built

    def add_mapping(self, original: Range, generated: Range) -> None:
        if self._built:
            raise MappingFrozenError(f"{self.source}: cannot add mappings after build()")

        head = Segment(generated=generated.start, original=original.start)
        # Terminator at the generated end so positions past the range stay unmapped.
        tail = Segment(generated=generated.end)
        if tail.key() < head.key():
            raise MappingOrderError(
                f"{self.source}: generated range ends before it starts "
                f"({generated.start.line}:{generated.start.column} > {generated.end.line}:{generated.end.column})"
            )
        if self._segments and head.key() <= self._segments[-1].key():
            last = self._segments[-1].generated
            raise MappingOrderError(
                f"{self.source}: mapping at {generated.start.line}:{generated.start.column} "
                f"does not follow {last.line}:{last.column}"
            )
        self._segments.append(head)
        self._segments.append(tail)

    def build(self) -> PositionMap:
        self._built = True
        return PositionMap(source=self.source, origin=self.origin, segments=tuple(self._segments))
