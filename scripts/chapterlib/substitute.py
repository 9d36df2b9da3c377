"""
Placeholder substitution.

Rewrites every

    {{#path_for Chapter Name}}
    {{#path_for Chapter Name#anchor}}

in chapter content to the chapter's path under the configured base path,
e.g. ``/docs/guide/chapter-name.md#anchor``. An unknown chapter name
fails the build; placeholders are never left in place.
"""

from dataclasses import dataclass
from typing import Optional

from chapterlib.book import walk
from chapterlib.errors import UnknownChapterName
from chapterlib.index import normalize_name


MARKER = "{{#path_for "
CLOSE = "}}"


@dataclass(frozen=True)
class Placeholder:
    """A parsed ``{{#path_for ...}}`` occurrence. start/end index the content."""

    start: int
    end: int
    reference: str
    name: str
    anchor: Optional[str]


def split_reference(reference):
    """
    Split ``Name#anchor`` on the first '#'.

    Any later '#' is kept in the anchor verbatim.
    Returns (name, anchor) with anchor None when there is no '#'.
    """
    name, sep, anchor = reference.partition("#")
    return name, (anchor if sep else None)


def find_placeholders(content):
    """
    Yield each placeholder in content, left to right, non-overlapping.

    The reference runs from the marker to the first ``}}`` after at least
    one character, and never across a line break. A marker without a
    valid reference is ordinary text.
    """
    pos = 0
    line_end = None
    while True:
        start = content.find(MARKER, pos)
        if start == -1:
            return

        ref_start = start + len(MARKER)
        if line_end is None or (line_end != -1 and line_end < ref_start):
            line_end = content.find("\n", ref_start)
        limit = len(content) if line_end == -1 else line_end
        close = content.find(CLOSE, ref_start + 1, limit)

        if close == -1:
            # No marker later on this line can close either.
            if line_end == -1:
                return
            pos = line_end + 1
            continue

        reference = content[ref_start:close]
        name, anchor = split_reference(reference)
        yield Placeholder(start, close + len(CLOSE), reference, name, anchor)
        pos = close + len(CLOSE)


def join_base_path(base_path, path):
    """
    Prefix a chapter path with the base path using exactly one '/'.

        join_base_path("/", "foo/a.md")      -> "/foo/a.md"
        join_base_path("/docs", "foo/a.md")  -> "/docs/foo/a.md"
        join_base_path("/docs/", "/foo/a.md") -> "/docs/foo/a.md"
    """
    path = path.replace("\\", "/")
    base_path = base_path.replace("\\", "/")
    if base_path.endswith("/") and path.startswith("/"):
        return base_path + path[1:]
    if base_path.endswith("/") or path.startswith("/"):
        return base_path + path
    return f"{base_path}/{path}"


def resolve(placeholder, index, base_path):
    """Replacement text for one placeholder. Raises KeyError if unknown."""
    link = join_base_path(base_path, index[normalize_name(placeholder.name)])
    if placeholder.anchor is not None:
        link += "#" + placeholder.anchor
    return link


def rewrite_content(content, index, base_path="/", chapter=None):
    """
    Return content with every placeholder replaced.

    Text outside placeholders is copied unchanged. ``chapter`` is only
    used to say where an unknown reference came from.
    """
    if MARKER not in content:
        return content

    parts = []
    last = 0
    for placeholder in find_placeholders(content):
        try:
            link = resolve(placeholder, index, base_path)
        except KeyError:
            raise UnknownChapterName(
                placeholder.name,
                reference=placeholder.reference,
                chapter_name=chapter.name if chapter else None,
                chapter_path=chapter.path if chapter else None,
            ) from None
        parts.append(content[last:placeholder.start])
        parts.append(link)
        last = placeholder.end

    parts.append(content[last:])
    return "".join(parts)


def rewrite(nodes, index, base_path="/"):
    """
    Rewrite placeholders in every chapter of the tree, in place.

    All chapters are processed before any content is replaced, so an
    UnknownChapterName leaves the tree untouched.
    """
    updates = []
    for node in walk(nodes):
        if not node.content:
            continue
        new_content = rewrite_content(node.content, index, base_path, chapter=node)
        if new_content != node.content:
            updates.append((node, new_content))

    for node, new_content in updates:
        node.content = new_content

    return len(updates)
