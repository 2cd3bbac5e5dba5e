"""
NestedMap: nested mapping with dot-path access and live sub-views.

This package provides a mapping wrapper that addresses nested values with a
single dot-separated path. Nested mappings are returned as views that share
storage with their parent, so writes through a view are visible everywhere.

Example:
    >>> from nestmap.nested_map import NestedMap
    >>> nm = NestedMap({"server": {"port": 8080}})
    >>> nm.get("server.port")
    8080
    >>> nm.get("server").set("host", "localhost")
    >>> nm.get("server.host")
    'localhost'
"""

from nestmap.nested_map._core import NestedMap
from nestmap.nested_map._errors import InvalidAccessError, NestedMapError
from nestmap.nested_map._paths import normalize_key, split_key
from nestmap.nested_map._protocols import Countable, JsonSerializable, KeyLookup

__all__ = [
    "Countable",
    "InvalidAccessError",
    "JsonSerializable",
    "KeyLookup",
    "NestedMap",
    "NestedMapError",
    "normalize_key",
    "split_key",
]
