"""
mdbook preprocessors.

Subclasses implement `process()` and set `name`. The shared logic
(renderer support, config loading, book JSON round trip, logging)
lives in BasePreprocessor.
"""

from abc import ABC, abstractmethod

from chapterlib import console
from chapterlib.book import load_book, store_book
from chapterlib.config import PREPROCESSOR_NAME, PathConfig
from chapterlib.index import build_index
from chapterlib.substitute import rewrite


# mdbook release series the book JSON layout was written against
MDBOOK_SERIES = "0.4"


class BasePreprocessor(ABC):
    """
    Abstract base for mdbook preprocessors.

    Subclasses must define:
        name:       str    — the [preprocessor.<name>] table in book.toml
        process():  method — transform the ChapterNode forest in place
    """

    name = None  # Override in subclass

    def __init__(self, overrides=None, verbose=False):
        self.overrides = overrides or {}
        self.verbose = verbose

    # ── Logging ────────────────────────────────────────────

    def log(self, msg):
        console.log(msg, self.verbose)

    def warn(self, msg):
        console.warn(msg)

    # ── Configuration ──────────────────────────────────────

    def config_for(self, context):
        """Context config with any command line overrides applied."""
        return PathConfig.from_context(context).merged(self.overrides)

    def supports_renderer(self, renderer, config=None):
        config = config or PathConfig().merged(self.overrides)
        return renderer in config.renderers

    def check_version(self, context):
        version = (context or {}).get("mdbook_version")
        if version and not (version == MDBOOK_SERIES or version.startswith(MDBOOK_SERIES + ".")):
            self.warn(
                f"The {self.name} preprocessor was written for mdbook {MDBOOK_SERIES}.x, "
                f"but is being called from version {version}"
            )

    # ── mdbook protocol ────────────────────────────────────

    def run(self, context, book):
        """
        Process an mdbook book JSON object and return it.

        Content is only written back once the whole book processed
        successfully; on error the book is left as it was.
        """
        self.check_version(context)
        config = self.config_for(context)

        renderer = (context or {}).get("renderer")
        if renderer and not self.supports_renderer(renderer, config):
            self.log(f"  Skipping {self.name}: renderer '{renderer}' not supported")
            return book

        nodes = load_book(book)
        self.process(nodes, config)
        store_book(nodes)
        return book

    # ── Abstract interface ─────────────────────────────────

    @abstractmethod
    def process(self, nodes, config):
        """Transform the chapter tree in place."""
        ...


class PathPreprocessor(BasePreprocessor):
    """Replaces {{#path_for Chapter Name}} with the chapter's path."""

    name = PREPROCESSOR_NAME

    def process(self, nodes, config):
        index = build_index(nodes, strict=config.strict)
        self.log(f"  Indexed {len(index)} chapters")
        self.log(f"  Base path: {config.base_path}")

        changed = rewrite(nodes, index, base_path=config.base_path)
        self.log(f"  Rewrote {changed} chapters")
        return index
