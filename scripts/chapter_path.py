#!/usr/bin/env python3
"""
mdbook preprocessor: link to chapters by name.

Replaces {{#path_for Chapter Name}} and {{#path_for Chapter Name#anchor}}
in chapter content with the chapter's path under the site base path.

Usage (mdbook calls these itself once configured in book.toml):
    python chapter_path.py supports html        Exit 0 if html is supported
    python chapter_path.py < input.json         Process [context, book] JSON
    python chapter_path.py index < input.json   Print the name → path table
    python chapter_path.py --config ci.yaml     Apply YAML setting overrides

book.toml:
    [preprocessor.chapter-path]
    command = "mdbook-chapter-path"
    strict = true

Requires: PyYAML
"""

import os
import sys
import json
import argparse

# Ensure chapterlib is importable from the scripts/ directory
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from chapterlib.book import load_book
from chapterlib.config import PathConfig, ConfigError
from chapterlib.errors import ChapterPathError
from chapterlib.index import build_index
from chapterlib.preprocessor import PathPreprocessor


class InputError(Exception):
    """Raised when stdin does not hold a [context, book] JSON pair."""
    pass


# ── Input ──────────────────────────────────────────────────────────────


def read_input(stream):
    """Parse the [context, book] pair mdbook writes to stdin."""
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise InputError(f"Could not parse preprocessor input: {e}") from e

    if not isinstance(data, list) or len(data) != 2:
        raise InputError("Preprocessor input must be a JSON array [context, book]")

    context, book = data
    if not isinstance(context, dict) or not isinstance(book, dict):
        raise InputError("Preprocessor input must be a JSON array [context, book]")
    return context, book


def make_preprocessor(args):
    overrides = PathConfig.read_overrides(args.config) if args.config else None
    return PathPreprocessor(overrides=overrides, verbose=args.verbose)


# ── Supports command ───────────────────────────────────────────────────


def cmd_supports(args):
    """Tell mdbook whether this renderer is supported (exit code only)."""
    preprocessor = make_preprocessor(args)
    return 0 if preprocessor.supports_renderer(args.renderer) else 1


# ── Run (default) ──────────────────────────────────────────────────────


def cmd_run(args):
    """Process the book from stdin and write it to stdout."""
    preprocessor = make_preprocessor(args)
    context, book = read_input(sys.stdin)

    processed = preprocessor.run(context, book)

    json.dump(processed, sys.stdout)
    sys.stdout.flush()
    return 0


# ── Index command ──────────────────────────────────────────────────────


def cmd_index(args):
    """Print every chapter name and the path it resolves to."""
    preprocessor = make_preprocessor(args)
    context, book = read_input(sys.stdin)
    config = preprocessor.config_for(context)

    index = build_index(load_book(book), strict=config.strict)

    print(f"\n  Chapters: {len(index)}")
    print(f"  Base:     {config.base_path}")
    print(f"{'─' * 60}")
    if not index:
        print("  No named chapters found.")
        return 0

    width = max(len(name) for name in index)
    for name in sorted(index):
        print(f"  {name:<{width}}  →  {index[name]}")
    return 0


# ── Argument Parser ────────────────────────────────────────────────────


def build_parser():
    parser = argparse.ArgumentParser(
        prog="mdbook-chapter-path",
        description="A preprocessor that provides paths to chapters based on "
        "the name of the chapter.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s supports html            Check whether a renderer is supported
  %(prog)s < input.json             Run as an mdbook preprocessor
  %(prog)s index < input.json       List chapter names and their paths
        """,
    )
    parser.add_argument("--config", help="YAML file with setting overrides")
    parser.add_argument("--verbose", "-v", action="store_true")

    sub = parser.add_subparsers(dest="command")

    # ── supports ───────────────────────────────────────────
    supports_p = sub.add_parser(
        "supports", help="Check whether a renderer is supported by this preprocessor"
    )
    supports_p.add_argument("renderer")

    # ── index ──────────────────────────────────────────────
    sub.add_parser("index", help="Print the chapter name → path table")

    return parser


# ── Main ───────────────────────────────────────────────────────────────


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    dispatch = {
        "supports": cmd_supports,
        "index": cmd_index,
        None: cmd_run,
    }

    try:
        return dispatch[args.command](args)
    except (ChapterPathError, ConfigError, InputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)
