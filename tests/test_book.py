"""Tests for mdbook book JSON conversion."""

from chapterlib.book import ChapterNode, load_book, store_book, walk


def test_load_book_shapes(mdbook_book):
    intro, part, guide, separator = load_book(mdbook_book)

    assert (intro.name, intro.path) == ("Introduction", "intro.md")
    assert (part.name, part.path, part.children) == ("Reference", None, [])
    assert separator == ChapterNode()
    assert [c.name for c in guide.children] == ["Draft", "Options"]
    assert guide.children[0].path is None


def test_structural_flags(mdbook_book):
    intro, part, guide, separator = load_book(mdbook_book)

    assert not intro.is_structural
    assert part.is_structural
    assert separator.is_structural
    assert guide.children[0].is_structural


def test_walk_is_document_order(mdbook_book):
    names = [node.name for node in walk(load_book(mdbook_book))]
    assert names == ["Introduction", "Reference", "Guide", "Draft", "Options", None]


def test_store_book_writes_content_back(mdbook_book):
    nodes = load_book(mdbook_book)
    nodes[2].children[1].content = "rewritten"

    store_book(nodes)

    options = mdbook_book["sections"][2]["Chapter"]["sub_items"][1]["Chapter"]
    assert options["content"] == "rewritten"
    assert mdbook_book["sections"][1] == {"PartTitle": "Reference"}
    assert mdbook_book["sections"][3] == "Separator"


def test_legacy_items_key():
    book = {"items": [{"Chapter": {"name": "A", "path": "a.md", "content": "x", "sub_items": []}}]}
    (node,) = load_book(book)
    assert (node.name, node.path, node.content) == ("A", "a.md", "x")
