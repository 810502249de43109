"""`validate` command: schema and formula checks for a module library."""

from pathlib import Path
from typing import Annotated

import typer

from casework.application import ValidateLibraryCommand
from casework.application.config import ConfigError, config_to_library, load_library
from casework.infrastructure import ValidationReportFormatter


def _config_error_lines(error: ConfigError) -> list[str]:
    if error.error_type == "file_not_found":
        return [f"File not found: {error.path}"]
    if error.error_type == "json_parse":
        return ["Invalid JSON syntax"] + [
            f"  Line {d.get('line', '?')}, column {d.get('column', '?')}: {d.get('message')}"
            for d in error.details
        ]
    if error.error_type == "validation":
        return [f"{d['path']}: {d['message']}" for d in error.details]
    return [error.message]


def display_config_error(error: ConfigError) -> None:
    """Print a ConfigError to stderr, one problem per line."""
    typer.echo("Errors:", err=True)
    for line in _config_error_lines(error):
        typer.echo(f"  {line}", err=True)


def validate_command(
    library_file: Annotated[
        Path,
        typer.Argument(help="Module library JSON file"),
    ],
) -> None:
    """Check a module library without calculating anything.

    The file is validated against the library schema, then every dimension
    and hardware formula is parsed and its variables are resolved against
    the names available to it. Exits with 1 when anything is wrong.

    Example:
        casework validate kitchen.json
    """
    typer.echo(f"Validating {library_file}...")
    try:
        library = config_to_library(load_library(library_file))
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    output = ValidateLibraryCommand().execute(library)
    typer.echo(ValidationReportFormatter().format(output), err=not output.is_valid)
    if not output.is_valid:
        raise typer.Exit(code=1)
