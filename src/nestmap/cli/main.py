"""
Main CLI entry point for nestmap.

Provides the command-line interface using Click. Every command operates on a
JSON or YAML document file and addresses values with dot-paths.
"""

import json as _json
import logging as _logging
import os as _os
import sys as _sys
import typing as _typing

import click as _click

import nestmap
import nestmap.documents as documents
import nestmap.nested_map as nested_map

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_DOCUMENT_ARG = _click.Path(dir_okay=False, path_type=str)


def _load(path: str) -> nested_map.NestedMap:
    """Load a document, turning loader errors into click errors."""
    try:
        return documents.load_document(path)
    except documents.DocumentError as e:
        raise _click.ClickException(str(e)) from e


def _save(document: nested_map.NestedMap, path: str) -> None:
    try:
        documents.dump_document(document, path)
    except documents.DocumentError as e:
        raise _click.ClickException(str(e)) from e


def _require(document: nested_map.NestedMap, key: str) -> _typing.Any:
    """Return the value at key, failing with a click error when absent."""
    if not document.has(key):
        raise _click.ClickException(f"Key not found: {nested_map.normalize_key(key)}")
    return document[key]


def _format_value(value: _typing.Any, *, as_json: bool) -> str:
    """Render a value for output: views as a document, scalars as text."""
    if isinstance(value, nested_map.NestedMap):
        return value.to_json(indent=2) if as_json else value.to_yaml().rstrip("\n")
    if as_json:
        return _json.dumps(value)
    if value is None:
        return "null"
    return str(value)


def _echo_yaml(text: str, use_color: bool | None) -> None:
    """Print YAML text, highlighted with rich when colour is on.

    An explicit --color/--no-color wins. Otherwise colour is off when
    NO_COLOR is set and on only when stdout is a terminal. An explicit
    --color forces ANSI output even into a pipe.
    """
    forced = use_color is True
    if use_color is None:
        use_color = _os.environ.get("NO_COLOR") is None and _sys.stdout.isatty()

    if not use_color:
        _click.echo(text, nl=False)
        return

    import rich.console as _rich_console
    import rich.syntax as _rich_syntax

    console = _rich_console.Console(
        force_terminal=forced or None,
        no_color=False if forced else None,
        color_system="truecolor" if forced else "auto",
    )
    console.print(_rich_syntax.Syntax(text, "yaml", theme="monokai", background_color="default"))


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(nestmap.__version__, "-v", "--version", prog_name="nestmap")
@_click.option(
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
def cli(verbose: bool) -> None:
    """
    nestmap - read and edit nested JSON/YAML documents with dot-paths.

    \b
    Examples:
        nestmap get config.yaml server.port
        nestmap set config.yaml server.host localhost
        nestmap set config.json server.ports '[80, 443]' --json-value
        nestmap has config.yaml server.tls
        nestmap delete config.yaml server.debug
        nestmap show config.yaml server
    """
    _logging.basicConfig(
        level=_logging.DEBUG if verbose else _logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@_click.argument("file", type=_DOCUMENT_ARG)
@_click.argument("path")
@_click.option("--default", "default", type=str, default=None, help="Value to print when the path is missing")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def get(file: str, path: str, default: str | None, as_json: bool) -> None:
    """Print the value at PATH.

    Nested mappings are printed as YAML (or JSON with --json).
    Exits with status 1 when PATH is missing and no --default is given.
    """
    document = _load(file)
    if default is not None and not document.has(path):
        _click.echo(default)
        return
    _click.echo(_format_value(_require(document, path), as_json=as_json))


@cli.command(name="set")
@_click.argument("file", type=_DOCUMENT_ARG)
@_click.argument("path")
@_click.argument("value")
@_click.option("--json-value", is_flag=True, help="Parse VALUE as JSON instead of a plain string")
def set_cmd(file: str, path: str, value: str, json_value: bool) -> None:
    """Set PATH to VALUE and save the document.

    Missing intermediate mappings are created.
    """
    parsed: _typing.Any = value
    if json_value:
        try:
            parsed = _json.loads(value)
        except ValueError as e:
            raise _click.BadParameter(f"not valid JSON: {e}", param_hint="VALUE") from e

    document = _load(file)
    try:
        document.set(path, parsed)
    except nested_map.InvalidAccessError as e:
        raise _click.ClickException(str(e)) from e
    _save(document, file)


@cli.command()
@_click.argument("file", type=_DOCUMENT_ARG)
@_click.argument("path")
@_click.pass_context
def has(ctx: _click.Context, file: str, path: str) -> None:
    """Print whether PATH exists; exit status 0 if it does, 1 if not."""
    found = _load(file).has(path)
    _click.echo("true" if found else "false")
    ctx.exit(0 if found else 1)


@cli.command()
@_click.argument("file", type=_DOCUMENT_ARG)
@_click.argument("path")
def delete(file: str, path: str) -> None:
    """Delete PATH and save the document."""
    document = _load(file)
    _require(document, path)
    document.delete(path)
    _save(document, file)


@cli.command()
@_click.argument("file", type=_DOCUMENT_ARG)
@_click.argument("path", required=False)
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Enable/disable syntax highlighting (default: auto-detect TTY)",
)
def show(file: str, path: str | None, as_json: bool, use_color: bool | None) -> None:
    """Show the document, or the subtree at PATH.

    \b
    Examples:
        nestmap show config.yaml              # Whole document as YAML
        nestmap show config.yaml server       # One subtree
        nestmap show config.yaml --json       # As JSON
    """
    document = _load(file)
    value: _typing.Any = document if path is None else _require(document, path)

    if not isinstance(value, nested_map.NestedMap):
        _click.echo(_format_value(value, as_json=as_json))
        return

    if as_json:
        _click.echo(value.to_json(indent=2))
        return

    _echo_yaml(value.to_yaml(), use_color)


@cli.command()
@_click.argument("file", type=_DOCUMENT_ARG)
@_click.argument("path", required=False)
def count(file: str, path: str | None) -> None:
    """Print the number of top-level keys of the document or of PATH."""
    document = _load(file)
    value: _typing.Any = document if path is None else _require(document, path)
    if not isinstance(value, nested_map.NestedMap):
        raise _click.ClickException(f"Not a mapping: {nested_map.normalize_key(path or '')}")
    _click.echo(str(value.count()))


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="nestmap")


if __name__ == "__main__":
    main()
