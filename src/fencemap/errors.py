from __future__ import annotations

from dataclasses import dataclass

from .spans import Range


class FencemapError(Exception):
    """Base class for every error raised by fencemap."""


@dataclass(slots=True)
class SynthesisError(FencemapError):
    span: Range
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        base = f"{self.span.format()}: {self.message}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base


class MappingError(FencemapError):
    pass


class MappingFrozenError(MappingError):
    """A mapping was added to a builder that already produced its map."""


class MappingOrderError(MappingError):
    """A mapping would not keep segments in increasing generated order."""


class TranslationError(FencemapError):
    pass


class ConfigError(FencemapError):
    pass
