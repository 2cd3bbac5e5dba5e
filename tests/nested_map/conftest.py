"""
Shared fixtures for NestedMap tests.
"""

import typing as _typing

import pytest as _pytest

import nestmap.nested_map as nested_map


@_pytest.fixture
def layered_data() -> dict[str, _typing.Any]:
    """Three levels of nesting, one value per level."""
    return {
        "first": "1",
        "second": {"first": "2.1"},
        "third": {"first": {"first": "3.1.1"}},
    }


@_pytest.fixture
def layered_map(layered_data: dict[str, _typing.Any]) -> nested_map.NestedMap:
    """NestedMap over layered_data (shares the dict)."""
    return nested_map.NestedMap(layered_data)
