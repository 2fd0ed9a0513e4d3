"""Table and view commands for lakecatalog."""

import typer

from lakecatalog.catalog.identity import ObjectPath
from lakecatalog.catalog.schemas import CatalogTable, CatalogView
from lakecatalog.cli.main import handle_error, open_catalog, state
from lakecatalog.cli.output import (
    format_properties,
    print_info,
    print_result,
    print_success,
)
from lakecatalog.exceptions import LakeCatalogError

app = typer.Typer(help="Manage tables and views")


def _format_count(value: int) -> str:
    return f"{value:,}" if value >= 0 else "unknown"


@app.command("list")
def list_tables(
    database: str = typer.Argument(..., help="Database name"),
    views: bool = typer.Option(False, "--views", help="List only views"),
) -> None:
    """List the tables and views of a database."""
    try:
        with open_catalog() as catalog:
            names = catalog.list_views(database) if views else catalog.list_tables(database)
            rows = []
            for name in names:
                entry = catalog.get_table(ObjectPath(database_name=database, object_name=name))
                rows.append(
                    {
                        "Name": name,
                        "Kind": entry.kind,
                        "Partition Keys": ", ".join(getattr(entry, "partition_keys", [])) or "—",
                        "Description": entry.description or "—",
                    }
                )
    except LakeCatalogError as e:
        handle_error(e)
        return

    kind = "Views" if views else "Tables"
    print_result(rows, state.output_format, title=f"{kind} in database '{database}'")


@app.command()
def get(
    path: str = typer.Argument(..., help="Table path as database.name"),
) -> None:
    """Show a table or view with its schema and statistics."""
    try:
        object_path = ObjectPath.parse(path)
        with open_catalog() as catalog:
            entry = catalog.get_table(object_path)
            statistics = catalog.get_table_statistics(object_path)
    except LakeCatalogError as e:
        handle_error(e)
        return

    if state.output_format == "json":
        print_result(
            {
                "path": object_path.full_name,
                **entry.model_dump(),
                "statistics": statistics.model_dump(),
            },
            "json",
        )
        return

    details = {
        "Path": object_path.full_name,
        "Kind": entry.kind,
        "Description": entry.description or "—",
        "Columns": ", ".join(f"{c.name} {c.type}" for c in entry.table_schema.columns) or "—",
        "Properties": format_properties(entry.properties),
    }
    if isinstance(entry, CatalogTable):
        details["Partition Keys"] = ", ".join(entry.partition_keys) or "—"
        details["Streaming"] = "yes" if entry.is_streaming else "no"
        details["Row Count"] = _format_count(statistics.row_count)
    elif isinstance(entry, CatalogView):
        details["Original Query"] = entry.original_query
        details["Expanded Query"] = entry.expanded_query

    print_result(details, state.output_format, title=f"{entry.kind.capitalize()} '{path}'")


@app.command()
def drop(
    path: str = typer.Argument(..., help="Table path as database.name"),
    if_exists: bool = typer.Option(
        False, "--if-exists", help="Do nothing if the table does not exist"
    ),
) -> None:
    """Drop a table or view with its partitions."""
    try:
        object_path = ObjectPath.parse(path)
        with open_catalog() as catalog:
            existed = catalog.table_exists(object_path)
            catalog.drop_table(object_path, ignore_if_not_exists=if_exists)
    except LakeCatalogError as e:
        handle_error(e)
        return

    if existed:
        print_success(f"Dropped '{object_path}'")
    else:
        print_info(f"Table '{object_path}' does not exist, nothing to drop")


@app.command()
def rename(
    path: str = typer.Argument(..., help="Table path as database.name"),
    new_name: str = typer.Argument(..., help="New object name in the same database"),
    if_exists: bool = typer.Option(
        False, "--if-exists", help="Do nothing if the table does not exist"
    ),
) -> None:
    """Rename a table or view within its database."""
    try:
        object_path = ObjectPath.parse(path)
        with open_catalog() as catalog:
            existed = catalog.table_exists(object_path)
            catalog.rename_table(object_path, new_name, ignore_if_not_exists=if_exists)
    except LakeCatalogError as e:
        handle_error(e)
        return

    if existed:
        print_success(f"Renamed '{object_path}' to '{object_path.with_object_name(new_name)}'")
    else:
        print_info(f"Table '{object_path}' does not exist, nothing to rename")
