"""
Errors raised while resolving chapter paths.

Both kinds abort the whole run. The CLI turns them into a one-line
message on stderr and a non-zero exit.
"""


class ChapterPathError(Exception):
    """Base class for chapter-path build failures."""
    pass


class DuplicateChapterName(ChapterPathError):
    """Two chapters share a (case-folded) name while strict mode is on."""

    def __init__(self, name, path, existing_path):
        self.name = name
        self.path = path
        self.existing_path = existing_path
        super().__init__(
            f"Duplicate chapter name '{name}' at {path} "
            f"(existing chapter at {existing_path})"
        )


class UnknownChapterName(ChapterPathError):
    """A placeholder references a chapter name that is not in the book."""

    def __init__(self, name, reference=None, chapter_name=None, chapter_path=None):
        self.name = name
        self.reference = reference if reference is not None else name
        self.chapter_name = chapter_name
        self.chapter_path = chapter_path

        location = ""
        if chapter_name or chapter_path:
            location = f" in chapter '{chapter_name or '?'}'"
            if chapter_path:
                location += f" ({chapter_path})"

        super().__init__(
            f"No chapter named '{name}' for {{{{#path_for {self.reference}}}}}{location}"
        )
