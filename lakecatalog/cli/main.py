"""Main CLI entry point for lakecatalog."""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from lakecatalog import __version__
from lakecatalog.catalog.manager import Catalog, create_catalog
from lakecatalog.config import Settings, get_settings
from lakecatalog.exceptions import LakeCatalogError
from lakecatalog.logging_config import get_logger, setup_logging

app = typer.Typer(
    name="lakecatalog",
    help="lakecatalog - Metadata catalog for databases, tables, views and partitions",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=False,
)

console = Console()
console_err = Console(stderr=True)
logger = get_logger(__name__)

OUTPUT_FORMATS = ["table", "json"]


class CLIState:
    """Global CLI state."""

    output_format: str = "table"
    verbose: bool = False
    settings: Optional[Settings] = None


state = CLIState()


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"lakecatalog version: {__version__}")
        console.print(f"Python: {sys.version.split()[0]}")
        raise typer.Exit(0)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version information and exit",
        callback=version_callback,
        is_eager=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output: str = typer.Option(
        "table",
        "--output",
        "-o",
        help="Output format: table, json",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """
    lakecatalog - Metadata catalog

    Browse and manage databases, tables, views and partitions stored in the
    configured metadata backend.
    """
    state.output_format = output
    state.verbose = verbose

    state.settings = get_settings(config_path=config, reload=config is not None)

    if verbose:
        state.settings.log_level = "DEBUG"

    setup_logging(state.settings)

    if output not in OUTPUT_FORMATS:
        console_err.print(f"[red]Error:[/red] Invalid output format: {output}")
        console_err.print(f"Valid formats: {', '.join(OUTPUT_FORMATS)}")
        raise typer.Exit(1)

    ctx.obj = state


def open_catalog() -> Catalog:
    """Open the catalog described by the current settings."""
    return create_catalog(state.settings or get_settings())


def parse_key_values(values: Optional[list[str]], option: str) -> dict[str, str]:
    """Parse repeated ``key=value`` options into an ordered dict.

    Raises:
        typer.BadParameter: If an entry has no ``=`` or an empty key
    """
    parsed: dict[str, str] = {}
    for entry in values or []:
        key, sep, value = entry.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{entry}'", param_hint=option)
        parsed[key] = value
    return parsed


def handle_error(error: Exception) -> None:
    """Handle CLI errors with user-friendly messages.

    Args:
        error: Exception to handle
    """
    logger.debug("CLI command failed", error_type=type(error).__name__, error=str(error))

    if isinstance(error, LakeCatalogError):
        console_err.print(f"\n[red]Error:[/red] {error.message}")

        if state.verbose and error.context:
            console_err.print("\n[yellow]Context:[/yellow]")
            for key, value in error.context.items():
                console_err.print(f"  {key}: {value}")
    else:
        console_err.print(f"\n[red]Unexpected Error:[/red] {str(error)}")

        if state.verbose:
            import traceback

            console_err.print("\n[yellow]Traceback:[/yellow]")
            console_err.print(traceback.format_exc())

    raise typer.Exit(1)


from lakecatalog.cli import database, partition, table  # noqa: E402

app.add_typer(database.app, name="db", help="Manage databases")
app.add_typer(table.app, name="table", help="Manage tables and views")
app.add_typer(partition.app, name="partition", help="Inspect partitions")


def main_cli() -> None:
    """Entry point for CLI application with error handling."""
    try:
        app()
    except LakeCatalogError as e:
        handle_error(e)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)
    except Exception as e:
        handle_error(e)


if __name__ == "__main__":
    main_cli()
