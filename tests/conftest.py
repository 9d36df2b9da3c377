"""Pytest configuration and shared fixtures."""

import pytest

from chapterlib.book import ChapterNode


@pytest.fixture
def sample_tree():
    """Intro, a part title holding two chapters (one nested), and a separator."""
    return [
        ChapterNode("Introduction", "intro.md", "Start with {{#path_for Whatever}}.\n"),
        ChapterNode(
            "Part I",
            children=[
                ChapterNode(
                    "Whatever",
                    "foo/whatever.md",
                    "# Whatever\n",
                    children=[
                        ChapterNode("Details", "foo/details.md", "See [intro]({{#path_for introduction}})."),
                    ],
                ),
            ],
        ),
        ChapterNode(),
        ChapterNode("Appendix", "appendix.md", ""),
    ]


def chapter(name, path, content="", sub_items=None, number=None):
    return {
        "Chapter": {
            "name": name,
            "content": content,
            "number": number,
            "sub_items": sub_items or [],
            "path": path,
            "source_path": path,
            "parent_names": [],
        }
    }


@pytest.fixture
def mdbook_book():
    """Book JSON in the shape mdbook 0.4 sends to preprocessors."""
    return {
        "sections": [
            chapter("Introduction", "intro.md", "[guide]({{#path_for Guide#setup}})\n", number=[1]),
            {"PartTitle": "Reference"},
            chapter(
                "Guide",
                "guide/index.md",
                "# Guide\n",
                number=[2],
                sub_items=[
                    chapter("Draft", None, ""),
                    chapter("Options", "guide\\options.md", "Back to {{#path_for GUIDE}}", number=[2, 1]),
                ],
            ),
            "Separator",
        ],
        "__non_exhaustive": None,
    }


@pytest.fixture
def mdbook_context():
    return {
        "root": "/book",
        "config": {
            "book": {"title": "Test", "src": "src"},
            "output": {"html": {"site-url": "/docs/"}},
            "preprocessor": {"chapter-path": {"command": "mdbook-chapter-path"}},
        },
        "renderer": "html",
        "mdbook_version": "0.4.40",
    }
