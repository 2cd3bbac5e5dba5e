"""
Type aliases for NestedMap.

- Path: Tuple of strings representing the segments of a dot-path
- Storage: The mutable mapping a NestedMap owns or aliases
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

# Example: ("config", "model", "name") represents "config.model.name"
Path: _typing.TypeAlias = tuple[str, ...]

Storage: _typing.TypeAlias = _abc.MutableMapping[str, _typing.Any]
