"""
Chapter name → path index.

Walks the table of contents once, in document order, and records the
path of every chapter that has both a name and a path. Names are
case-folded so lookups are case-insensitive; paths are kept as declared.
"""

from collections.abc import Mapping

from chapterlib.book import walk
from chapterlib.console import warn
from chapterlib.errors import DuplicateChapterName


def normalize_name(name):
    """Key used for chapter name lookups."""
    return name.casefold()


class ChapterIndex(Mapping):
    """
    Read-only mapping of case-folded chapter names to paths.

    Usage:
        index = build_index(nodes)
        index["Getting Started"]    # "intro/getting-started.md"
        "getting started" in index  # True
    """

    def __init__(self, entries=None):
        self._entries = dict(entries or {})

    def __getitem__(self, name):
        return self._entries[normalize_name(name)]

    def __contains__(self, name):
        return isinstance(name, str) and normalize_name(name) in self._entries

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"ChapterIndex({self._entries!r})"


def build_index(nodes, strict=False):
    """
    Map every named chapter to its path.

    When two chapters share a name the later one wins, with a warning.
    In strict mode the second one raises DuplicateChapterName instead.
    Part titles, separators and draft chapters (no path) are skipped,
    but the chapters nested under them are still indexed.
    """
    entries = {}

    for node in walk(nodes):
        if node.is_structural:
            continue

        key = normalize_name(node.name)
        existing = entries.get(key)
        if existing is not None:
            if strict:
                raise DuplicateChapterName(node.name, node.path, existing)
            warn(
                f"Found duplicate chapter name {node.name} at {node.path} "
                f"(existing chapter at {existing})"
            )

        entries[key] = node.path

    return ChapterIndex(entries)
