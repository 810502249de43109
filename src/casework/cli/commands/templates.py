"""`templates` command group: list the bundled files and copy them to disk."""

from pathlib import Path
from typing import Annotated, NoReturn

import typer

from casework.application.templates import (
    TEMPLATE_KINDS,
    TemplateManager,
    TemplateNotFoundError,
)

templates_app = typer.Typer(
    name="templates",
    help="List and copy the bundled module library, project and price list.",
)


def _fail(message: str, hint: str | None = None) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    if hint:
        typer.echo(hint, err=True)
    raise typer.Exit(code=1)


@templates_app.command(name="list")
def list_templates(
    kind: Annotated[
        str | None,
        typer.Option("--kind", "-k", help="Only one kind: library, project, prices"),
    ] = None,
) -> None:
    """List bundled templates grouped by kind.

    Example:
        casework templates list --kind library
    """
    templates = TemplateManager().list_templates(kind)
    if not templates:
        _fail(f"No templates of kind {kind!r}", f"Kinds: {', '.join(TEMPLATE_KINDS)}")

    width = max(len(info.name) for info in templates)
    typer.echo("Available templates:")
    for group in TEMPLATE_KINDS:
        members = [info for info in templates if info.kind == group]
        if not members:
            continue
        typer.echo()
        typer.echo(f"  {group}:")
        for info in members:
            typer.echo(f"    {info.name:<{width}}  {info.description}")

    typer.echo()
    typer.echo(
        "Copy one with 'casework templates init <name>' "
        "or a full set with 'casework templates starter'."
    )


@templates_app.command(name="init")
def init_template(
    name: Annotated[
        str,
        typer.Argument(help="Template to copy"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path (default: <name>.json)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing file"),
    ] = False,
) -> None:
    """Copy one bundled template to a file.

    Examples:
        casework templates init kitchen-basic
        casework templates init price-list --output prices.json
    """
    manager = TemplateManager()
    try:
        written = manager.init_template(name, output or Path(f"{name}.json"), overwrite=force)
    except TemplateNotFoundError:
        names = ", ".join(info.name for info in manager.list_templates())
        _fail(f"Template not found: {name}", f"Available templates: {names}")
    except FileExistsError as e:
        _fail(str(e), "Use --force to overwrite.")
    except OSError as e:
        _fail(f"Could not write file: {e}")
    typer.echo(f"Created: {written}")


@templates_app.command(name="starter")
def init_starter(
    directory: Annotated[
        Path,
        typer.Argument(help="Target directory, created when missing"),
    ] = Path("."),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing files"),
    ] = False,
) -> None:
    """Copy a matching library, project and price list into DIRECTORY.

    The files are named library.json, project.json and prices.json, ready for:

        casework project project.json --library library.json --prices prices.json
    """
    try:
        written = TemplateManager().init_starter(directory, overwrite=force)
    except FileExistsError as e:
        _fail(str(e), "Use --force to overwrite.")
    except OSError as e:
        _fail(f"Could not write files: {e}")
    for path in written:
        typer.echo(f"Created: {path}")
