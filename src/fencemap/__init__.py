from __future__ import annotations

from .api import SUPPORTS_AUTOFIX, Processor, extract, extract_file, translate, translate_sources
from .config import FencemapConfig, load_config
from .errors import (
    ConfigError,
    FencemapError,
    MappingFrozenError,
    MappingOrderError,
    SynthesisError,
    TranslationError,
)
from .position_map import PositionMap, PositionMapBuilder
from .registry import MapRegistry, SynthesisFailure
from .spans import Position, Range
from .synthesize import SynthesizedSource

__all__ = [
    "ConfigError",
    "FencemapConfig",
    "FencemapError",
    "MapRegistry",
    "MappingFrozenError",
    "MappingOrderError",
    "Position",
    "PositionMap",
    "PositionMapBuilder",
    "Processor",
    "Range",
    "SUPPORTS_AUTOFIX",
    "SynthesisError",
    "SynthesisFailure",
    "SynthesizedSource",
    "TranslationError",
    "extract",
    "extract_file",
    "load_config",
    "translate",
    "translate_sources",
]
