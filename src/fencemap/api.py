from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from .config import FencemapConfig
from .directives import DirectiveCollector
from .document import iter_nodes, parse_document
from .errors import MappingOrderError, SynthesisError, TranslationError
from .registry import MapRegistry, SynthesisFailure
from .synthesize import SynthesizedSource, language_tag, synthesize_block
from .translate import Message, translate_messages


logger = logging.getLogger(__name__)

# Translated messages keep their fixes (unless they cross original lines).
SUPPORTS_AUTOFIX = True

_DEFAULT_CONFIG = FencemapConfig()

_BOM = "\ufeff"


def extract(
    text: str,
    identifier: str,
    registry: MapRegistry,
    *,
    config: FencemapConfig | None = None,
) -> list[SynthesizedSource]:
    """Synthesize one source per tagged fenced fragment, in document order.

    Registers one position map per returned source under ``identifier``.
    Fragments that cannot be synthesized are left out and recorded in
    ``registry.failures(identifier)``.
    """
    cfg = config or _DEFAULT_CONFIG
    registry.reset(identifier)
    # Positions are reported against the text after the byte order mark.
    text = text.removeprefix(_BOM)
    directives = DirectiveCollector(skip_directive=cfg.skip_directive)
    sources: list[SynthesizedSource] = []
    seen = 0

    for node in iter_nodes(parse_document(text)):
        if node.type == "html":
            directives.add(node)
        elif node.type == "code" and node.lang:
            pending = directives.consume()
            fragment = seen
            seen += 1
            tag = language_tag(node.lang)
            if tag is None or not cfg.wants(tag):
                continue
            name = f"{len(sources)}.{tag}"
            try:
                block = synthesize_block(text, name, node, pending)
            except (SynthesisError, MappingOrderError) as e:
                logger.warning(
                    "%s: skipping fragment at line %d: %s", identifier, node.position.start.line, e
                )
                registry.record_failure(
                    identifier,
                    SynthesisFailure(fragment=fragment, span=node.position, message=str(e)),
                )
                continue
            registry.register(identifier, block.position_map)
            sources.append(block.source)
            logger.debug(
                "%s: fragment %s at line %d (%d directives)",
                identifier,
                name,
                node.position.start.line,
                len(pending),
            )
        else:
            directives.clear()

    return sources


def extract_file(
    path: str | Path,
    registry: MapRegistry,
    *,
    config: FencemapConfig | None = None,
) -> tuple[str, list[SynthesizedSource]]:
    p = Path(path).expanduser().resolve()
    identifier = str(p)
    return identifier, extract(p.read_text(encoding="utf-8"), identifier, registry, config=config)


def translate(
    batches: Iterable[Iterable[Mapping[str, Any]]],
    identifier: str,
    registry: MapRegistry,
    *,
    config: FencemapConfig | None = None,
) -> list[Message]:
    """Translate one message batch per extracted source, flattened in order."""
    cfg = config or _DEFAULT_CONFIG
    maps = registry.maps(identifier)
    batches = list(batches)
    if len(batches) != len(maps):
        raise TranslationError(
            f"{identifier}: got {len(batches)} message batches for {len(maps)} extracted sources"
        )

    out: list[Message] = []
    for messages, position_map in zip(batches, maps):
        out.extend(translate_messages(messages, position_map, cfg.unsatisfiable_rules))
    return out


def translate_sources(
    by_source: Mapping[str, Iterable[Mapping[str, Any]]],
    identifier: str,
    registry: MapRegistry,
    *,
    config: FencemapConfig | None = None,
) -> list[Message]:
    """Translate message batches keyed by synthesized source identifier.

    Output follows document order regardless of the mapping's order.
    """
    cfg = config or _DEFAULT_CONFIG
    for source in by_source:
        registry.find(identifier, source)

    out: list[Message] = []
    for position_map in registry.maps(identifier):
        messages = by_source.get(position_map.source)
        if messages is not None:
            out.extend(translate_messages(messages, position_map, cfg.unsatisfiable_rules))
    return out


class Processor:
    """Preprocess/postprocess pair for linters that lint embedded code.

    Owns its registry, so two processors never share position maps.
    """

    supports_autofix = SUPPORTS_AUTOFIX

    def __init__(self, config: FencemapConfig | None = None, registry: MapRegistry | None = None) -> None:
        self.config = config or _DEFAULT_CONFIG
        self.registry = registry if registry is not None else MapRegistry()

    def preprocess(self, text: str, filename: str) -> list[SynthesizedSource]:
        return extract(text, filename, self.registry, config=self.config)

    def postprocess(self, messages: Sequence[Iterable[Mapping[str, Any]]], filename: str) -> list[Message]:
        try:
            return translate(messages, filename, self.registry, config=self.config)
        finally:
            self.registry.discard(filename)

    def failures(self, filename: str) -> tuple[SynthesisFailure, ...]:
        return self.registry.failures(filename)
