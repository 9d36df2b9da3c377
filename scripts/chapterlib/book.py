"""
Chapter tree model and mdbook book JSON conversion.

mdbook hands preprocessors the book as JSON. Its ``sections`` (older
releases: ``items``) hold one of three item shapes:

    {"Chapter": {"name": ..., "content": ..., "path": ..., "sub_items": [...]}}
    {"PartTitle": "Part I"}
    "Separator"

load_book() turns those into ChapterNode trees; store_book() writes the
(possibly rewritten) content back into the same JSON objects.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ChapterNode:
    """One entry in the table of contents."""

    name: Optional[str] = None
    path: Optional[str] = None
    content: str = ""
    children: List["ChapterNode"] = field(default_factory=list)
    source: Optional[dict] = field(default=None, repr=False, compare=False)

    @property
    def is_structural(self):
        """True for part titles, separators and draft chapters."""
        return not (self.name and self.path)


def walk(nodes):
    """Yield every node in document order (pre-order, depth first)."""
    for node in nodes:
        yield node
        yield from walk(node.children)


# ── mdbook JSON → nodes ────────────────────────────────────────────────


def _items(book):
    if "sections" in book:
        return book["sections"]
    return book.get("items", [])


def _load_item(item):
    if isinstance(item, dict) and "Chapter" in item:
        chapter = item["Chapter"]
        return ChapterNode(
            name=chapter.get("name"),
            path=chapter.get("path"),
            content=chapter.get("content") or "",
            children=[_load_item(sub) for sub in chapter.get("sub_items", [])],
            source=chapter,
        )
    if isinstance(item, dict) and "PartTitle" in item:
        return ChapterNode(name=item["PartTitle"])
    # "Separator"
    return ChapterNode()


def load_book(book):
    """Build the ChapterNode forest for an mdbook book JSON object."""
    return [_load_item(item) for item in _items(book)]


# ── nodes → mdbook JSON ────────────────────────────────────────────────


def store_book(nodes):
    """Copy node content back into the chapter dicts it was loaded from."""
    for node in walk(nodes):
        if node.source is not None:
            node.source["content"] = node.content
