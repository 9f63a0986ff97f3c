from __future__ import annotations

from dataclasses import dataclass, field

from .errors import TranslationError
from .position_map import PositionMap
from .spans import Range


@dataclass(frozen=True, slots=True)
class SynthesisFailure:
    """A fragment that was left out of the extraction output."""

    fragment: int  # ordinal among the tagged fragments of the document
    span: Range
    message: str


@dataclass(slots=True)
class _Entry:
    maps: list[PositionMap] = field(default_factory=list)
    failures: list[SynthesisFailure] = field(default_factory=list)


@dataclass(slots=True)
class MapRegistry:
    """Position maps per document, in the order their fragments were produced.

    One registry belongs to one processing context; the caller passes the same
    instance to extraction and to translation.
    """

    _entries: dict[str, _Entry] = field(default_factory=dict)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._entries

    def register(self, identifier: str, position_map: PositionMap) -> None:
        self._entries.setdefault(identifier, _Entry()).maps.append(position_map)

    def record_failure(self, identifier: str, failure: SynthesisFailure) -> None:
        self._entries.setdefault(identifier, _Entry()).failures.append(failure)

    def get(self, identifier: str, index: int) -> PositionMap:
        maps = self.maps(identifier)
        if not 0 <= index < len(maps):
            raise TranslationError(
                f"{identifier}: no position map for fragment {index} ({len(maps)} registered)"
            )
        return maps[index]

    def find(self, identifier: str, source: str) -> PositionMap:
        for m in self.maps(identifier):
            if m.source == source:
                return m
        raise TranslationError(f"{identifier}: no position map for source {source!r}")

    def maps(self, identifier: str) -> tuple[PositionMap, ...]:
        entry = self._entries.get(identifier)
        if entry is None:
            raise TranslationError(f"{identifier}: document was never extracted")
        return tuple(entry.maps)

    def failures(self, identifier: str) -> tuple[SynthesisFailure, ...]:
        entry = self._entries.get(identifier)
        return tuple(entry.failures) if entry is not None else ()

    def reset(self, identifier: str) -> None:
        self._entries[identifier] = _Entry()

    def discard(self, identifier: str) -> None:
        self._entries.pop(identifier, None)
