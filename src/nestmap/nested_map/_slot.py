"""
Slot and Generation: aliasable entry references and the cache-validity counter.

Python has no references to dict entries, so a resolved path is cached as
the pair (parent container, key). Reading and writing through a slot goes
straight to the parent container, which is the same object the owning
NestedMap (and any view sharing it) sees.

Example:
    >>> data = {"a": {"b": 1}}
    >>> slot = Slot(data["a"], "b")
    >>> slot.value = 2
    >>> data
    {'a': {'b': 2}}
"""

from __future__ import annotations

import typing as _typing

import nestmap.nested_map._types as _types


class Slot:
    """Reference to ``container[key]``."""

    __slots__ = ("_container", "_key")

    def __init__(self, container: _types.Storage, key: str) -> None:
        self._container = container
        self._key = key

    @property
    def container(self) -> _types.Storage:
        """The parent container holding the entry."""
        return self._container

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> _typing.Any:
        """
        Current value of the entry.

        Raises:
            KeyError: If the entry was removed from the container.
        """
        return self._container[self._key]

    @value.setter
    def value(self, value: _typing.Any) -> None:
        self._container[self._key] = value

    def exists(self) -> bool:
        """Check whether the entry is still present in its container."""
        return self._key in self._container

    def __repr__(self) -> str:
        return f"Slot(key={self._key!r})"


class Generation:
    """
    Structure counter shared by a root NestedMap and all of its views.

    Bumped whenever a nested mapping is replaced or an entry is deleted, so
    every instance sharing it knows its cached slots may point into a
    detached subtree.
    """

    __slots__ = ("value",)

    def __init__(self) -> None:
        self.value = 0

    def bump(self) -> int:
        self.value += 1
        return self.value

    def __repr__(self) -> str:
        return f"Generation({self.value})"
