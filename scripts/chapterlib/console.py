"""
Console output.

stdout carries the book JSON back to mdbook, so every message goes to
stderr.
"""

import sys


def log(msg, verbose=True):
    if verbose:
        print(msg, file=sys.stderr)


def warn(msg):
    print(f"  Warning: {msg}", file=sys.stderr)
