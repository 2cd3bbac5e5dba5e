"""
NestedMap: dot-path access over a nested mapping, with live sub-views.

A NestedMap wraps an ordinary dict of dicts. Values are addressed with a
single dot-separated path instead of manual traversal:

    >>> nm = NestedMap({"model": {"name": "llama"}})
    >>> nm.get("model.name")
    'llama'
    >>> nm.set("model.size", "70b")
    >>> nm.snapshot()
    {'model': {'name': 'llama', 'size': '70b'}}

Read semantics:
- Nested mappings: Returns a new NestedMap view aliasing the subtree
- Everything else: Returns the value directly

Views share storage with the instance they came from; only the resolution
cache is per instance:

    >>> view = nm.get("model")
    >>> view.set("name", "mistral")
    >>> nm.get("model.name")
    'mistral'

Cache consistency: a root and every view derived from it share one
structure generation. Any write that replaces a nested mapping, and any
delete, bumps it; each instance clears its cache before its next lookup once
it sees a newer generation. The instance making the change drops only its
own entries for the affected path and everything below it. Separate roots
built over the same dict do not share a generation.

Thread safety: NOT thread-safe. Guard a root and all of its views with a
single external lock if they are shared between threads.
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import json as _json
import logging as _logging
import typing as _typing

import yaml as _yaml

import nestmap.config.settings as settings_mod
import nestmap.nested_map._errors as _errors
import nestmap.nested_map._paths as _paths
import nestmap.nested_map._slot as _slot
import nestmap.nested_map._types as _types

_logger = _logging.getLogger(__name__)

_MISSING = object()


def _is_container(value: _typing.Any) -> bool:
    """Check whether a value is a nested mapping that paths can descend into."""
    return isinstance(value, _abc.MutableMapping)


def _to_plain(value: _typing.Any) -> _typing.Any:
    """Convert nested mappings (of any MutableMapping type) to plain dicts."""
    if isinstance(value, _abc.Mapping):
        return {key: _to_plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_to_plain(item) for item in value]
    return value


class NestedMap:
    """
    A nested mapping addressed by dot-paths.

    Args:
        data: Mapping to adopt as storage. It is used by reference, not
            copied, so the caller and the NestedMap see the same object.
            Defaults to a new empty dict.
        settings: Settings for diagnostics and export formatting. Defaults
            to the process-wide settings.

    Raises:
        TypeError: If data is not a mutable mapping.
    """

    def __init__(
        self,
        data: _types.Storage | None = None,
        *,
        settings: settings_mod.Settings | None = None,
        _generation: _slot.Generation | None = None,
    ) -> None:
        if data is None:
            data = {}
        if not _is_container(data):
            raise TypeError(
                f"NestedMap data must be a mutable mapping, got {type(data).__name__}"
            )
        self._data: _types.Storage = data
        self._cache: dict[str, _slot.Slot] = {}
        self._settings = settings
        if _generation is None:
            _generation = _slot.Generation()
        self._generation = _generation
        self._seen_generation = _generation.value

    @property
    def settings(self) -> settings_mod.Settings:
        """Settings in effect for this instance."""
        if self._settings is None:
            return settings_mod.get_settings()
        return self._settings

    # =========================================================================
    # Construction helpers
    # =========================================================================

    @classmethod
    def from_json(
        cls,
        text: str,
        *,
        settings: settings_mod.Settings | None = None,
    ) -> NestedMap:
        """
        Create a NestedMap from JSON text.

        Raises:
            NestedMapError: If the text is not valid JSON or its top level
                is not an object.
        """
        try:
            data = _json.loads(text)
        except ValueError as e:
            raise _errors.NestedMapError(f"invalid JSON: {e}") from e
        return cls._from_parsed(data, "JSON", settings)

    @classmethod
    def from_yaml(
        cls,
        text: str,
        *,
        settings: settings_mod.Settings | None = None,
    ) -> NestedMap:
        """
        Create a NestedMap from YAML text. An empty document gives an empty map.

        Raises:
            NestedMapError: If the text is not valid YAML or its top level
                is not a mapping.
        """
        try:
            data = _yaml.safe_load(text)
        except _yaml.YAMLError as e:
            raise _errors.NestedMapError(f"invalid YAML: {e}") from e
        return cls._from_parsed(data, "YAML", settings)

    @classmethod
    def _from_parsed(
        cls,
        data: _typing.Any,
        fmt: str,
        settings: settings_mod.Settings | None,
    ) -> NestedMap:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise _errors.NestedMapError(
                f"{fmt} top level must be a mapping, got {type(data).__name__}"
            )
        return cls(data, settings=settings)

    def _create_view(self, data: _types.Storage) -> NestedMap:
        """
        Create a view aliasing a subtree of this instance's storage.

        The view gets its own empty cache. Storage and the structure
        generation are shared.
        """
        return type(self)(data, settings=self._settings, _generation=self._generation)

    def _wrap(self, value: _typing.Any) -> _typing.Any:
        """Wrap nested mappings in views, return anything else unchanged."""
        if _is_container(value):
            return self._create_view(value)
        return value

    # =========================================================================
    # Resolution
    # =========================================================================

    def _sync_cache(self) -> None:
        """Clear the cache if a related instance changed the structure."""
        if self._seen_generation != self._generation.value:
            if self._cache:
                _logger.debug(
                    "Structure changed elsewhere, clearing %d cache entries",
                    len(self._cache),
                )
                self._cache.clear()
            self._seen_generation = self._generation.value

    def _bump_generation(self) -> None:
        self._seen_generation = self._generation.bump()

    def _cached_slot(self, key: str) -> _slot.Slot | None:
        """Return the cached slot for a normalized key, dropping it if stale."""
        slot = self._cache.get(key)
        if slot is not None and not slot.exists():
            _logger.debug("Dropping stale cache entry for %r", key)
            del self._cache[key]
            return None
        return slot

    def _resolve(self, key: str, *, report: bool) -> _slot.Slot | None:
        """
        Walk storage along a normalized key.

        Args:
            key: Normalized dot-path.
            report: Whether to log a diagnostic for a mid-path miss.

        Returns:
            Slot aliasing the resolved entry, or None if the path is missing.
        """
        if _paths.SEPARATOR not in key:
            if key in self._data:
                return _slot.Slot(self._data, key)
            return None

        parts = key.split(_paths.SEPARATOR)
        container: _typing.Any = self._data
        for part in parts[:-1]:
            if not _is_container(container) or part not in container:
                if report:
                    self._report_miss(part, key)
                return None
            container = container[part]

        last = parts[-1]
        if not _is_container(container) or last not in container:
            if report:
                self._report_miss(last, key)
            return None
        return _slot.Slot(container, last)

    def _report_miss(self, segment: str, key: str) -> None:
        settings = self.settings
        if settings.warn_on_miss:
            _logger.log(
                settings.miss_log_levelno,
                'Undefined key "%s" in "%s".',
                segment,
                key,
            )

    def _ensure_slot(self, key: str) -> _slot.Slot:
        """
        Return a slot for a normalized key, creating missing containers.

        The existing part of the path is validated before anything is
        created, so a failing write leaves storage untouched.

        Raises:
            InvalidAccessError: If a non-terminal segment holds a non-mapping.
        """
        parts = key.split(_paths.SEPARATOR)
        parents = parts[:-1]

        container = self._data
        depth = 0
        while depth < len(parents) and parents[depth] in container:
            child = container[parents[depth]]
            if not _is_container(child):
                raise _errors.InvalidAccessError(
                    key, _paths.join_key(tuple(parents[: depth + 1]))
                )
            container = child
            depth += 1

        for part in parents[depth:]:
            container[part] = {}
            container = container[part]

        return _slot.Slot(container, parts[-1])

    def _invalidate(self, key: str, *, include_self: bool = True) -> None:
        """Drop cache entries for a normalized key and everything below it."""
        stale = [
            path
            for path in self._cache
            if _paths.is_descendant(path, key) and (include_self or path != key)
        ]
        for path in stale:
            del self._cache[path]
        if stale:
            _logger.debug("Invalidated %d cache entries under %r", len(stale), key)

    def _get(self, key: str, default: _typing.Any, *, report: bool) -> _typing.Any:
        key = _paths.normalize_key(key)
        self._sync_cache()

        slot = self._cached_slot(key)
        if slot is None:
            slot = self._resolve(key, report=report)
            if slot is None:
                return default
            self._cache[key] = slot

        return self._wrap(slot.value)

    # =========================================================================
    # Public API
    # =========================================================================

    def get(self, key: str, default: _typing.Any = None) -> _typing.Any:
        """
        Get the value at a dot-path.

        Nested mappings are returned as a new NestedMap view aliasing the
        subtree, so writes through the view show up here. Never raises: a
        missing path returns ``default``, and a miss in the middle of a
        dotted path is logged.

        Args:
            key: Dot-path, normalized before lookup.
            default: Value returned when the path does not exist.
        """
        return self._get(key, default, report=True)

    def set(self, key: str, value: _typing.Any) -> None:
        """
        Set the value at a dot-path, creating intermediate mappings.

        A NestedMap value is stored as its underlying storage, so the new
        entry aliases the same data rather than wrapping a view.

        Raises:
            InvalidAccessError: If the path descends through a non-mapping
                value. Storage is left unchanged.
        """
        key = _paths.normalize_key(key)
        if isinstance(value, NestedMap):
            value = value._data
        self._sync_cache()

        slot = self._cached_slot(key)
        if slot is None:
            slot = self._ensure_slot(key)
            self._cache[key] = slot

        previous = slot.container.get(slot.key, _MISSING)
        slot.value = value
        # Anything cached below the key pointed into the replaced value
        self._invalidate(key, include_self=False)
        if _is_container(previous):
            self._bump_generation()

    def has(self, key: str) -> bool:
        """
        Check whether a dot-path exists.

        Read-only: does not populate the cache or create views.
        """
        key = _paths.normalize_key(key)
        self._sync_cache()
        if self._cached_slot(key) is not None or key in self._data:
            return True
        return self._resolve(key, report=False) is not None

    def delete(self, key: str) -> None:
        """
        Remove the entry at a dot-path. Missing paths are ignored.

        Cached slots for the path and everything below it are dropped, and
        views sharing this structure clear their caches on next use.
        """
        key = _paths.normalize_key(key)
        self._sync_cache()

        removed = False
        if key in self._data:
            del self._data[key]
            removed = True
        else:
            slot = self._resolve(key, report=False)
            if slot is not None:
                del slot.container[slot.key]
                removed = True

        self._invalidate(key)
        if removed:
            self._bump_generation()

    def count(self) -> int:
        """Return the number of top-level entries."""
        return len(self._data)

    def snapshot(self) -> _types.Storage:
        """
        Return the underlying storage by reference.

        Mutating the returned mapping mutates this NestedMap. Use copy()
        for an independent structure.
        """
        return self._data

    def copy(self) -> NestedMap:
        """Return a new root NestedMap over a deep copy of the storage."""
        return NestedMap(_copy.deepcopy(self._data), settings=self._settings)

    def to_json(self, **kwargs: _typing.Any) -> str:
        """
        Serialize the storage to JSON text.

        Keyword arguments are passed to ``json.dumps``; ``indent`` and
        ``sort_keys`` default to the settings.
        """
        settings = self.settings
        kwargs.setdefault("indent", settings.json_indent)
        kwargs.setdefault("sort_keys", settings.json_sort_keys)
        return _json.dumps(_to_plain(self._data), **kwargs)

    def to_yaml(self) -> str:
        """Serialize the storage to YAML text."""
        return _typing.cast(
            str,
            _yaml.safe_dump(
                _to_plain(self._data),
                default_flow_style=False,
                sort_keys=self.settings.yaml_sort_keys,
                allow_unicode=True,
            ),
        )

    def keys(self) -> _typing.Iterator[str]:
        """Iterate over top-level keys."""
        yield from list(self._data)

    def items(self) -> _typing.Iterator[tuple[str, _typing.Any]]:
        """
        Iterate over top-level (key, value) pairs.

        Nested mappings are yielded as views. The entries are captured when
        iteration starts, not when this is called.
        """
        entries = list(self._data.items())
        for key, value in entries:
            yield key, self._wrap(value)

    def values(self) -> _typing.Iterator[_typing.Any]:
        """Iterate over top-level values, nested mappings as views."""
        return (value for _, value in self.items())

    # =========================================================================
    # Python protocols
    # =========================================================================

    def __iter__(self) -> _typing.Iterator[tuple[str, _typing.Any]]:
        """Iterate over top-level (key, value) pairs, like items()."""
        return self.items()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self.has(key)

    def __getitem__(self, key: str) -> _typing.Any:
        """
        Get the value at a dot-path.

        Raises:
            KeyError: If the path does not exist.
        """
        value = self._get(key, _MISSING, report=False)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: _typing.Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        """
        Remove the entry at a dot-path.

        Raises:
            KeyError: If the path does not exist.
        """
        if not self.has(key):
            raise KeyError(key)
        self.delete(key)

    def __eq__(self, other: object) -> bool:
        """Compare storage with another NestedMap or any Mapping."""
        if isinstance(other, NestedMap):
            return bool(self._data == other._data)
        if isinstance(other, _abc.Mapping):
            return bool(self._data == other)
        return NotImplemented

    def __hash__(self) -> int:
        """Not hashable."""
        raise TypeError(f"unhashable type: '{type(self).__name__}'")

    def __reduce__(self) -> tuple[type[NestedMap], tuple[_types.Storage]]:
        """Pickle support: only storage is kept, the cache starts empty."""
        return (type(self), (self._data,))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(data={self._data!r}, cache={list(self._cache)!r})"
