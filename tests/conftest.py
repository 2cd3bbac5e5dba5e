"""
Shared pytest fixtures for nestmap tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import typing as _typing

import pytest as _pytest

import nestmap.config as config


@_pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: _pytest.MonkeyPatch) -> _typing.Iterator[None]:
    """Clear NESTMAP_* environment variables and the cached settings."""
    for key in list(_os.environ):
        if key.startswith("NESTMAP_"):
            monkeypatch.delenv(key)
    config.reset_settings()
    yield
    config.reset_settings()
