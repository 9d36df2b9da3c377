"""
chapterlib — chapter name to path resolution for mdbook.

Public API:
    from chapterlib.book import ChapterNode, load_book, store_book
    from chapterlib.index import build_index, ChapterIndex
    from chapterlib.substitute import rewrite, rewrite_content, join_base_path
    from chapterlib.config import PathConfig, ConfigError
    from chapterlib.preprocessor import PathPreprocessor
    from chapterlib.errors import DuplicateChapterName, UnknownChapterName
"""
