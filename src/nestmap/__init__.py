"""
nestmap - nested mappings with dot-path access

Read, write, test and delete deeply nested values with a single "a.b.c"
path, and edit nested sub-mappings through live views.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("nestmap")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "nestmap Contributors"

from nestmap.config import Settings  # noqa: E402
from nestmap.nested_map import (  # noqa: E402
    InvalidAccessError,
    NestedMap,
    NestedMapError,
    normalize_key,
)

__all__ = [
    "__version__",
    "__version_info__",
    "InvalidAccessError",
    "NestedMap",
    "NestedMapError",
    "Settings",
    "normalize_key",
]
