"""Exceptions raised by NestedMap."""

from __future__ import annotations


class NestedMapError(Exception):
    """Base class for NestedMap errors."""

    pass


class InvalidAccessError(NestedMapError):
    """Raised when a write would have to descend through a non-mapping value."""

    def __init__(self, path: str, prefix: str) -> None:
        self.path = path
        self.prefix = prefix
        super().__init__(
            f'Invalid property access for "{path}", '
            f'property "{prefix}" is not a mapping.'
        )
