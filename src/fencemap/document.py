from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from .spans import Position, Range


_NEWLINE_RE = re.compile(r"\r\n|\n|\r")

_MARKDOWN: MarkdownIt | None = None


def _get_markdown() -> MarkdownIt:
    global _MARKDOWN
    if _MARKDOWN is None:
        _MARKDOWN = MarkdownIt("commonmark")
    return _MARKDOWN


@dataclass(frozen=True, slots=True)
class Node:
    """A read-only document node carrying its position in the document.

    ``lang`` is set on code fragments, ``value`` on html comment-like nodes.
    ``value_columns`` holds the 1-based document column where each line of
    ``value`` begins (blockquote markers are not part of ``value``).
    """

    type: str
    position: Range
    lang: str | None = None
    value: str | None = None
    closed: bool = True
    value_columns: tuple[int, ...] = ()
    children: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class _Lines:
    lines: tuple[str, ...]
    starts: tuple[int, ...]

    @classmethod
    def of(cls, text: str) -> "_Lines":
        lines: list[str] = []
        starts = [0]
        pos = 0
        for m in _NEWLINE_RE.finditer(text):
            lines.append(text[pos : m.start()])
            pos = m.end()
            starts.append(pos)
        lines.append(text[pos:])
        return cls(lines=tuple(lines), starts=tuple(starts))

    def clamp(self, index: int) -> int:
        return max(0, min(index, len(self.lines) - 1))

    def position(self, index: int, column: int) -> Position:
        # 0-based line index and column in, 1-based position out.
        index = self.clamp(index)
        return Position(line=index + 1, column=column + 1, offset=self.starts[index] + column)

    def line_end(self, index: int) -> Position:
        index = self.clamp(index)
        return self.position(index, len(self.lines[index]))


def parse_document(text: str) -> Node:
    """Parse Markdown text into a tree of position-carrying nodes."""
    lines = _Lines.of(text)
    tree = SyntaxTreeNode(_get_markdown().parse(text))
    whole = Range(start=lines.position(0, 0), end=lines.line_end(len(lines.lines) - 1))
    children = tuple(_convert(child, lines, whole) for child in tree.children)
    return Node(type="root", position=whole, children=children)


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield ``root`` and its descendants depth-first, in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _convert(st: SyntaxTreeNode, lines: _Lines, enclosing: Range) -> Node:
    # Fences and HTML blocks take their mdast names, "code" and "html".
    if st.type == "fence":
        return _fence(st, lines)
    if st.type == "html_block":
        return _html(st, lines)

    # Inline tokens carry no line map; they inherit the enclosing block's range.
    position = _block_range(st.map, lines) if st.map else enclosing
    children = tuple(_convert(c, lines, position) for c in st.children)
    return Node(type=st.type, position=position, children=children)


def _block_range(line_map: tuple[int, int] | list[int], lines: _Lines) -> Range:
    first, stop = line_map[0], line_map[1]
    return Range(start=lines.position(first, 0), end=lines.line_end(max(first, stop - 1)))


def _count_lines(content: str) -> int:
    if not content:
        return 0
    return content.count("\n") + (0 if content.endswith("\n") else 1)


def _fence(st: SyntaxTreeNode, lines: _Lines) -> Node:
    first = st.map[0]
    column = max(lines.lines[lines.clamp(first)].find(st.markup), 0)
    count = _count_lines(st.content)
    # map[1] is exclusive and covers the closing fence line when there is one.
    closed = st.map[1] - first - 1 > count
    last = first + count + (1 if closed else 0)
    info = st.info.strip()
    return Node(
        type="code",
        position=Range(start=lines.position(first, column), end=lines.line_end(last)),
        lang=info or None,
        closed=closed,
    )


def _html(st: SyntaxTreeNode, lines: _Lines) -> Node:
    first = st.map[0]
    value = st.content.rstrip("\n")
    value_lines = value.split("\n")
    columns: list[int] = []
    for j, text in enumerate(value_lines):
        raw = lines.lines[lines.clamp(first + j)]
        columns.append(max(len(raw) - len(text), 0) + 1)
    last = first + len(value_lines) - 1
    return Node(
        type="html",
        position=Range(start=lines.position(first, columns[0] - 1), end=lines.line_end(last)),
        value=value,
        value_columns=tuple(columns),
    )
