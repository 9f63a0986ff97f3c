from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from .directives import Directive
from .document import Node
from .errors import SynthesisError
from .indent import base_indent
from .position_map import PositionMap, PositionMapBuilder
from .spans import Position, Range


_NEWLINE_RE = re.compile(r"\r\n|\n|\r")

# Directive text starts right after the two-character comment opener.
_DIRECTIVE_COLUMN = 3


@dataclass(frozen=True, slots=True)
class SynthesizedSource:
    identifier: str  # e.g. "0.js", the extension drives downstream tooling
    text: str


@dataclass(frozen=True, slots=True)
class SynthesizedBlock:
    source: SynthesizedSource
    position_map: PositionMap


def language_tag(lang: str | None) -> str | None:
    """First whitespace-delimited token of a fence's info string."""
    if not lang:
        return None
    parts = lang.split()
    return parts[0] if parts else None


def synthesize_block(
    text: str,
    name: str,
    node: Node,
    directives: Sequence[Directive] = (),
) -> SynthesizedBlock:
    """Build the standalone source for one fenced fragment and its position map.

    Directives become ``/*...*/`` lines at the top; the fragment's content
    lines follow with the shared indentation prefix removed.
    """
    start, end = node.position.start, node.position.end
    if start.offset is None or end.offset is None:
        raise SynthesisError(
            span=node.position,
            message="fragment position has no offsets",
            hint="parse the document with parse_document() so positions carry offsets",
        )

    builder = PositionMapBuilder(source=name, origin=start)
    out: list[str] = []

    line = 1
    for d in directives:
        parts = d.text.split("\n")
        starts = _line_starts(d, len(parts))
        for j, (part, orig) in enumerate(zip(parts, starts)):
            # Only the first line follows the ``/*`` opener.
            column = _DIRECTIVE_COLUMN if j == 0 else 1
            builder.add_mapping(
                Range(start=orig, end=Position(line=orig.line, column=orig.column + len(part))),
                Range(
                    start=Position(line=line + j, column=column),
                    end=Position(line=line + j, column=column + len(part)),
                ),
            )
        out.append(f"/*{d.text}*/")
        line += len(parts)

    indent = base_indent(text, node)
    # Drop the opening fence, and the closing fence when there is one.
    content = _NEWLINE_RE.split(text[start.offset : end.offset])[1:]
    if node.closed and content:
        content.pop()

    for k, raw in enumerate(content):
        stripped = raw[indent:]
        original_line = start.line + 1 + k
        builder.add_mapping(
            Range(
                start=Position(line=original_line, column=indent + 1),
                end=Position(line=original_line, column=indent + len(stripped) + 1),
            ),
            Range(
                start=Position(line=line + k, column=1),
                end=Position(line=line + k, column=len(stripped) + 1),
            ),
        )
        out.append(stripped)

    source = SynthesizedSource(identifier=name, text="\n".join(out))
    return SynthesizedBlock(source=source, position_map=builder.build())


def _line_starts(d: Directive, count: int) -> tuple[Position, ...]:
    if len(d.line_starts) == count:
        return d.line_starts
    # Without per-line starts, continuation lines are assumed to begin at column 1.
    first = d.location.start
    return (first, *(Position(line=first.line + j, column=1) for j in range(1, count)))
