"""Database management commands for lakecatalog."""

from typing import Optional

import typer

from lakecatalog.catalog.schemas import CatalogDatabase
from lakecatalog.cli.main import handle_error, open_catalog, parse_key_values, state
from lakecatalog.cli.output import (
    format_properties,
    print_info,
    print_result,
    print_success,
    print_warning,
)
from lakecatalog.exceptions import LakeCatalogError

app = typer.Typer(help="Manage databases")


@app.command("list")
def list_databases() -> None:
    """List all databases in the catalog."""
    try:
        with open_catalog() as catalog:
            rows = []
            for name in catalog.list_databases():
                database = catalog.get_database(name)
                rows.append(
                    {
                        "Name": name,
                        "Comment": database.comment or "—",
                        "Tables": len(catalog.list_tables(name)),
                        "Default": "✓" if name == catalog.default_database else "",
                    }
                )
    except LakeCatalogError as e:
        handle_error(e)
        return

    print_result(rows, state.output_format, title=f"Databases in catalog '{catalog.name}'")


@app.command()
def create(
    name: str = typer.Argument(..., help="Database name"),
    comment: Optional[str] = typer.Option(None, "--comment", help="Database comment"),
    properties: Optional[list[str]] = typer.Option(
        None, "--property", "-p", help="Database property as key=value (repeatable)"
    ),
    if_not_exists: bool = typer.Option(
        False, "--if-not-exists", help="Do nothing if the database already exists"
    ),
) -> None:
    """Create a database."""
    database = CatalogDatabase(
        properties=parse_key_values(properties, "--property"), comment=comment
    )

    try:
        with open_catalog() as catalog:
            existed = catalog.database_exists(name)
            catalog.create_database(name, database, ignore_if_exists=if_not_exists)
    except LakeCatalogError as e:
        handle_error(e)
        return

    if existed:
        print_warning(f"Database '{name}' already exists")
    else:
        print_success(f"Created database '{name}'")


@app.command()
def get(
    name: str = typer.Argument(..., help="Database name"),
) -> None:
    """Show a database with its tables and functions."""
    try:
        with open_catalog() as catalog:
            database = catalog.get_database(name)
            tables = catalog.list_tables(name)
            functions = catalog.list_functions(name)
    except LakeCatalogError as e:
        handle_error(e)
        return

    if state.output_format == "json":
        print_result(
            {"name": name, **database.model_dump(), "tables": tables, "functions": functions},
            "json",
        )
        return

    print_result(
        {
            "Name": name,
            "Comment": database.comment or "—",
            "Properties": format_properties(database.properties),
            "Tables": ", ".join(tables) or "—",
            "Functions": ", ".join(functions) or "—",
        },
        state.output_format,
        title=f"Database '{name}'",
    )


@app.command()
def drop(
    name: str = typer.Argument(..., help="Database name"),
    if_exists: bool = typer.Option(
        False, "--if-exists", help="Do nothing if the database does not exist"
    ),
    cascade: bool = typer.Option(
        False, "--cascade", help="Also drop every table, view and function in it"
    ),
) -> None:
    """Drop a database."""
    try:
        with open_catalog() as catalog:
            existed = catalog.database_exists(name)
            catalog.drop_database(name, ignore_if_not_exists=if_exists, cascade=cascade)
    except LakeCatalogError as e:
        handle_error(e)
        return

    if existed:
        print_success(f"Dropped database '{name}'")
    else:
        print_info(f"Database '{name}' does not exist, nothing to drop")
