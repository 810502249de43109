"""Typer CLI for module and project estimation."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from casework.application import (
    CalculateCatalogCommand,
    CalculateModuleCommand,
    CalculateProjectCommand,
    SizesInput,
)
from casework.application.config import (
    ConfigError,
    LibraryConfiguration,
    config_to_library,
    config_to_price_mapping,
    config_to_project,
    config_to_sheet_stock,
    load_library,
    load_prices,
    load_project,
)
from casework.cli.commands import templates_app, validate_command
from casework.cli.commands.validate import display_config_error
from casework.domain import CalculationError, ModuleCalculator
from casework.domain.services import MaterialAggregator
from casework.infrastructure import (
    CatalogFormatter,
    DictPriceList,
    InMemoryTemplateLibrary,
    JsonExporter,
    ModuleReportFormatter,
    ProjectReportFormatter,
)

OUTPUT_FORMATS = ("text", "json")


app = typer.Typer(
    name="casework",
    help="Estimate parts, materials, hardware and costs of furniture modules.",
)

app.command(name="validate")(validate_command)
app.add_typer(templates_app, name="templates")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log calculation steps to stderr"),
    ] = False,
) -> None:
    """Casework module estimator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_library(path: Path) -> tuple[LibraryConfiguration, InMemoryTemplateLibrary]:
    try:
        config = load_library(path)
        return config, config_to_library(config)
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _load_prices(path: Path | None) -> DictPriceList | None:
    if path is None:
        return None
    try:
        return DictPriceList(config_to_price_mapping(load_prices(path)))
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)


def _module_calculator(config: LibraryConfiguration) -> ModuleCalculator:
    return ModuleCalculator(
        material_aggregator=MaterialAggregator(
            sheet_stock=config_to_sheet_stock(config),
            waste_factor=config.waste_factor,
        )
    )


def _check_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Error: Unknown format {output_format!r} (expected: {', '.join(OUTPUT_FORMATS)})",
            err=True,
        )
        raise typer.Exit(code=1)


def _emit(content: str, output: Path | None) -> None:
    if output is None:
        typer.echo(content)
        return
    try:
        output.write_text(content + "\n", encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: Could not write file: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Written: {output}")


@app.command()
def module(
    library_file: Annotated[
        Path,
        typer.Argument(help="Path to the module library JSON file"),
    ],
    module_id: Annotated[
        str,
        typer.Argument(help="Module id or code"),
    ],
    width: Annotated[
        float | None,
        typer.Option("--width", "-w", help="Module width in mm"),
    ] = None,
    height: Annotated[
        float | None,
        typer.Option("--height", "-h", help="Module height in mm"),
    ] = None,
    depth: Annotated[
        float | None,
        typer.Option("--depth", "-d", help="Module depth in mm"),
    ] = None,
    prices_file: Annotated[
        Path | None,
        typer.Option("--prices", "-p", help="Price list JSON file"),
    ] = None,
    exclude_optional: Annotated[
        bool,
        typer.Option("--exclude-optional", help="Leave optional parts and hardware out"),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report to a file"),
    ] = None,
) -> None:
    """Calculate one module of a library.

    Examples:
        casework module kitchen.json module_001
        casework module kitchen.json N1D --width 450 --prices prices.json
    """
    _check_format(output_format)
    config, library = _load_library(library_file)
    prices = _load_prices(prices_file)

    template = library.get(module_id) or library.find_by_code(module_id)
    if template is None:
        typer.echo(f"Error: Module not found: {module_id}", err=True)
        raise typer.Exit(code=1)

    command = CalculateModuleCommand(prices=prices, module_calculator=_module_calculator(config))
    try:
        calculation = command.execute(
            library,
            template.id,
            SizesInput(width=width, height=height, depth=depth),
            include_optional=not exclude_optional,
        )
    except (CalculationError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output_format == "json":
        _emit(JsonExporter().export_module(calculation), output)
    else:
        _emit(ModuleReportFormatter().format(calculation), output)


@app.command()
def project(
    project_file: Annotated[
        Path,
        typer.Argument(help="Path to the project JSON file"),
    ],
    library_file: Annotated[
        Path,
        typer.Option("--library", "-l", help="Module library JSON file"),
    ],
    prices_file: Annotated[
        Path | None,
        typer.Option("--prices", "-p", help="Price list JSON file"),
    ] = None,
    exclude_optional: Annotated[
        bool,
        typer.Option("--exclude-optional", help="Leave optional parts and hardware out"),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report to a file"),
    ] = None,
) -> None:
    """Calculate a project and print the merged totals.

    Modules the library does not hold are skipped with a warning.

    Example:
        casework project kitchen-project.json --library kitchen.json
    """
    _check_format(output_format)
    config, library = _load_library(library_file)
    prices = _load_prices(prices_file)
    try:
        project_config = load_project(project_file)
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)

    command = CalculateProjectCommand(prices=prices, module_calculator=_module_calculator(config))
    try:
        calculation = command.execute(
            config_to_project(project_config),
            library,
            include_optional=not exclude_optional,
        )
    except CalculationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output_format == "json":
        _emit(JsonExporter().export_project(calculation), output)
    else:
        _emit(ProjectReportFormatter().format(calculation), output)
    for warning in calculation.warnings:
        typer.echo(f"Warning: {warning.message}", err=True)


@app.command()
def catalog(
    library_file: Annotated[
        Path,
        typer.Argument(help="Path to the module library JSON file"),
    ],
    prices_file: Annotated[
        Path | None,
        typer.Option("--prices", "-p", help="Price list JSON file"),
    ] = None,
    workers: Annotated[
        int,
        typer.Option("--workers", help="Modules calculated in parallel", min=1),
    ] = 4,
) -> None:
    """Price every module of a library at its default sizes.

    Example:
        casework catalog kitchen.json --prices prices.json
    """
    config, library = _load_library(library_file)
    prices = _load_prices(prices_file)
    entries = CalculateCatalogCommand(
        prices=prices,
        module_calculator=_module_calculator(config),
        max_workers=workers,
    ).execute(library)
    typer.echo(CatalogFormatter().format(entries))
    if not all(entry.ok for entry in entries):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
