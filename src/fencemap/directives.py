from __future__ import annotations

import re
from dataclasses import dataclass, field

from .document import Node
from .spans import Position, Range


_DIRECTIVE_RE = re.compile(
    r"(?P<prefix><!--\s*)(?P<directive>eslint\b.+?|global\s.+?)(?P<postfix>\s*-->)"
)

SKIP_DIRECTIVE = "eslint-skip"


@dataclass(frozen=True, slots=True)
class Directive:
    text: str
    location: Range  # the directive text only, without the comment markers
    # Document position where each line of ``text`` begins.
    line_starts: tuple[Position, ...] = ()


def extract_directive(node: Node) -> Directive | None:
    """Return the ``eslint*`` / ``global`` directive held by an HTML comment."""
    raw = node.value or ""
    m = _DIRECTIVE_RE.fullmatch(raw.strip())
    if m is None:
        return None

    text = m.group("directive")
    base = len(raw) - len(raw.lstrip()) + m.start("directive")
    breaks = [i + 1 for i, ch in enumerate(text) if ch == "\n"]
    line_starts = tuple(_locate(node, raw, base + i) for i in [0, *breaks])
    end = _locate(node, raw, base + len(text))
    return Directive(
        text=text,
        location=Range(start=line_starts[0], end=end),
        line_starts=line_starts,
    )


def _locate(node: Node, value: str, index: int) -> Position:
    line = value.count("\n", 0, index)
    line_start = value.rfind("\n", 0, index) + 1
    if line < len(node.value_columns):
        base = node.value_columns[line]
    else:
        base = node.position.start.column if line == 0 else 1
    return Position(line=node.position.start.line + line, column=base + index - line_start)


@dataclass(slots=True)
class DirectiveCollector:
    """Directive comments waiting for the fragment that immediately follows.

    Anything other than a directive comment between the comments and the
    fragment breaks the association (``clear``).
    """

    skip_directive: str = SKIP_DIRECTIVE
    _pending: list[Directive] = field(default_factory=list)
    _ignore: bool = False

    @property
    def ignoring(self) -> bool:
        return self._ignore

    @property
    def pending(self) -> tuple[Directive, ...]:
        return tuple(self._pending)

    def add(self, node: Node) -> None:
        directive = extract_directive(node)
        if directive is None:
            self.clear()
        elif directive.text == self.skip_directive:
            self._ignore = True
            self._pending.clear()
        elif not self._ignore:
            self._pending.append(directive)

    def clear(self) -> None:
        self._pending.clear()
        self._ignore = False

    def consume(self) -> list[Directive]:
        out = list(self._pending)
        self.clear()
        return out
