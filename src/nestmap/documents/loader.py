"""
Load and save NestedMap documents as JSON or YAML files.

The format is chosen from the file suffix:
- .json: JSON object
- .yaml / .yml: YAML mapping
"""

import json as _json
import logging as _logging
import pathlib as _pathlib

import yaml as _yaml

import nestmap.nested_map as nested_map

_logger = _logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


class DocumentError(Exception):
    """Error loading, parsing or saving a document file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in document {path}: {message}")


def _format_for(path: _pathlib.Path) -> str:
    suffix = path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        return "json"
    if suffix in YAML_SUFFIXES:
        return "yaml"
    raise DocumentError(
        path,
        f"unsupported file type {suffix or '(none)'!r}, expected .json, .yaml or .yml",
    )


def load_document(path: _pathlib.Path | str) -> nested_map.NestedMap:
    """
    Load a JSON or YAML file into a NestedMap.

    An empty YAML file gives an empty NestedMap.

    Raises:
        DocumentError: If the file cannot be read, is malformed, has an
            unsupported suffix, or does not contain a mapping at the top level.
    """
    path = _pathlib.Path(path)
    fmt = _format_for(path)

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise DocumentError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise DocumentError(path, f"cannot read file: {e}") from e

    try:
        if fmt == "json":
            data = _json.loads(content)
        else:
            data = _yaml.safe_load(content)
    except ValueError as e:
        raise DocumentError(path, f"invalid JSON: {e}") from e
    except _yaml.YAMLError as e:
        raise DocumentError(path, f"invalid YAML: {e}") from e

    if data is None and fmt == "yaml":
        data = {}

    if not isinstance(data, dict):
        raise DocumentError(
            path,
            f"document must be a mapping at the top level, got {type(data).__name__}",
        )

    _logger.debug("Loaded %s document %s (%d top-level keys)", fmt, path, len(data))
    return nested_map.NestedMap(data)


def dump_document(document: nested_map.NestedMap, path: _pathlib.Path | str) -> None:
    """
    Write a NestedMap to a JSON or YAML file, replacing its contents.

    Raises:
        DocumentError: If the suffix is unsupported or the file cannot be written.
    """
    path = _pathlib.Path(path)
    fmt = _format_for(path)

    if fmt == "json":
        text = document.to_json(indent=2) + "\n"
    else:
        text = document.to_yaml()

    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise DocumentError(path, f"cannot write file: {e}") from e

    _logger.debug("Saved %s document %s", fmt, path)
