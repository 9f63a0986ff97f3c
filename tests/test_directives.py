from __future__ import annotations

from fencemap.directives import DirectiveCollector, extract_directive
from fencemap.document import Node, iter_nodes, parse_document
from fencemap.spans import Position


def _html_nodes(text: str) -> list[Node]:
    return [n for n in iter_nodes(parse_document(text)) if n.type == "html"]


def _comment(text: str) -> Node:
    return _html_nodes(text)[0]


def test_directive_location_points_at_directive_text() -> None:
    d = extract_directive(_comment("<!-- eslint-disable no-alert -->\n"))
    assert d is not None
    assert d.text == "eslint-disable no-alert"
    assert d.location.start == Position(line=1, column=6)
    assert d.location.end == Position(line=1, column=29)


def test_directive_location_inside_blockquote() -> None:
    d = extract_directive(_comment("Intro.\n\n> <!-- global foo -->\n"))
    assert d is not None
    assert d.text == "global foo"
    assert d.location.start == Position(line=3, column=8)
    assert d.location.end == Position(line=3, column=18)


def test_multiline_directive() -> None:
    d = extract_directive(_comment("<!-- global\n  foo -->\n"))
    assert d is not None
    assert d.text == "global\n  foo"
    assert d.location.start == Position(line=1, column=6)
    assert d.location.end == Position(line=2, column=6)
    assert d.line_starts == (Position(line=1, column=6), Position(line=2, column=1))


def test_multiline_directive_line_starts_skip_list_indent() -> None:
    d = extract_directive(_comment("- <!-- global\n  foo -->\n"))
    assert d is not None
    assert d.text == "global\nfoo"
    assert d.line_starts == (Position(line=1, column=8), Position(line=2, column=3))
    assert d.location.end == Position(line=2, column=6)


def test_directive_grammar() -> None:
    matching = [
        "<!-- eslint-disable -->",
        "<!--eslint-env browser-->",
        "<!-- eslint no-console: 'off' -->",
        "<!-- global foo, bar -->",
        "<!-- eslint-skip -->",
    ]
    for text in matching:
        assert extract_directive(_comment(text + "\n")) is not None, text

    not_matching = [
        "<!-- eslintrc -->",
        "<!-- global-foo -->",
        "<!-- ESLint-disable -->",
        "<!-- just a note -->",
    ]
    for text in not_matching:
        assert extract_directive(_comment(text + "\n")) is None, text


def test_collector_keeps_directives_until_consumed() -> None:
    c = DirectiveCollector()
    c.add(_comment("<!-- eslint-disable no-alert -->\n"))
    c.add(_comment("<!-- global foo -->\n"))
    out = c.consume()
    assert [d.text for d in out] == ["eslint-disable no-alert", "global foo"]
    assert c.consume() == []


def test_non_directive_comment_clears_pending() -> None:
    c = DirectiveCollector()
    c.add(_comment("<!-- eslint-disable no-alert -->\n"))
    c.add(_comment("<!-- a note -->\n"))
    assert c.consume() == []


def test_skip_discards_and_suppresses_until_cleared() -> None:
    c = DirectiveCollector()
    c.add(_comment("<!-- eslint-disable no-alert -->\n"))
    c.add(_comment("<!-- eslint-skip -->\n"))
    c.add(_comment("<!-- global foo -->\n"))
    assert c.ignoring
    assert c.pending == ()

    c.clear()
    assert not c.ignoring
    c.add(_comment("<!-- global foo -->\n"))
    assert [d.text for d in c.pending] == ["global foo"]


def test_consume_resets_skip() -> None:
    c = DirectiveCollector()
    c.add(_comment("<!-- eslint-skip -->\n"))
    assert c.consume() == []
    c.add(_comment("<!-- global foo -->\n"))
    assert len(c.consume()) == 1


def test_custom_skip_directive() -> None:
    c = DirectiveCollector(skip_directive="eslint-ignore-block")
    c.add(_comment("<!-- eslint-skip -->\n"))
    c.add(_comment("<!-- eslint-ignore-block -->\n"))
    c.add(_comment("<!-- global foo -->\n"))
    assert c.consume() == []
