from __future__ import annotations

from fencemap.document import iter_nodes, parse_document
from fencemap.spans import Position


DOC = "# T\n\n> quote\n\n<!-- global a -->\n```js\nx\n```\n"


def test_nodes_are_yielded_depth_first_in_document_order() -> None:
    types = [n.type for n in iter_nodes(parse_document(DOC))]
    assert types == [
        "root",
        "heading",
        "inline",
        "text",
        "blockquote",
        "paragraph",
        "inline",
        "text",
        "html",
        "code",
    ]


def test_walk_is_restartable() -> None:
    root = parse_document(DOC)
    first = [(n.type, n.position) for n in iter_nodes(root)]
    second = [(n.type, n.position) for n in iter_nodes(root)]
    assert first == second


def test_walk_is_lazy() -> None:
    it = iter_nodes(parse_document(DOC))
    assert next(it).type == "root"
    assert next(it).type == "heading"


def test_fence_position_and_fields() -> None:
    doc = "Intro\n\n> ```js title=x\n> a\n> ```\n"
    code = next(n for n in iter_nodes(parse_document(doc)) if n.type == "code")
    assert code.lang == "js title=x"
    assert code.closed
    assert code.position.start == Position(line=3, column=3, offset=9)
    assert code.position.end == Position(line=5, column=6, offset=doc.index("> ```\n") + 5)


def test_html_position_and_value() -> None:
    html = next(n for n in iter_nodes(parse_document(DOC)) if n.type == "html")
    assert html.value == "<!-- global a -->"
    assert html.position.start == Position(line=5, column=1, offset=DOC.index("<!--"))
    assert html.value_columns == (1,)


def test_empty_document() -> None:
    assert [n.type for n in iter_nodes(parse_document(""))] == ["root"]
