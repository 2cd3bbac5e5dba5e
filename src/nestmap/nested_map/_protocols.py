"""
Capability protocols implemented by NestedMap.

These let embedding code accept "anything that can look up a key" or
"anything that can render itself as JSON" without depending on NestedMap.
"""

from __future__ import annotations

import typing as _typing


@_typing.runtime_checkable
class KeyLookup(_typing.Protocol):
    """Minimal container-lookup contract: get an entry by id, test for one."""

    def get(self, id: str, default: _typing.Any = None) -> _typing.Any: ...

    def has(self, id: str) -> bool: ...


@_typing.runtime_checkable
class JsonSerializable(_typing.Protocol):
    """Produces a JSON text representation of itself."""

    def to_json(self, **kwargs: _typing.Any) -> str: ...


@_typing.runtime_checkable
class Countable(_typing.Protocol):
    """Reports the number of top-level entries."""

    def count(self) -> int: ...

    def __len__(self) -> int: ...
