"""
Dot-path normalization.

Keys are normalized before every lookup so that "a..b", " a.b. " and
".a.b" all address the same location:

    >>> normalize_key("  a..b. .c. ")
    'a.b.c'
    >>> split_key("a.b.c")
    ('a', 'b', 'c')
"""

from __future__ import annotations

import re as _re

import nestmap.nested_map._types as _types

_WHITESPACE = _re.compile(r"\s")
_DOT_RUNS = _re.compile(r"\.{2,}")

SEPARATOR = "."


def normalize_key(key: str) -> str:
    """
    Normalize a dot-path.

    Removes all whitespace, strips leading and trailing dots and collapses
    runs of dots into one. Never fails; an empty or all-dot key gives "".
    """
    return _DOT_RUNS.sub(SEPARATOR, _WHITESPACE.sub("", key).strip(SEPARATOR))


def split_key(key: str) -> _types.Path:
    """Normalize a dot-path and split it into segments."""
    return tuple(normalize_key(key).split(SEPARATOR))


def join_key(parts: _types.Path) -> str:
    """Join segments back into a dot-path."""
    return SEPARATOR.join(parts)


def is_descendant(path: str, ancestor: str) -> bool:
    """
    Check whether a normalized path equals or lies below another.

    Both arguments must already be normalized.
    """
    return path == ancestor or path.startswith(ancestor + SEPARATOR)
