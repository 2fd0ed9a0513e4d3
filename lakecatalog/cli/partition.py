"""Partition commands for lakecatalog."""

from typing import Optional

import typer

from lakecatalog.catalog.identity import ObjectPath
from lakecatalog.catalog.partitions import CatalogPartitionSpec
from lakecatalog.cli.main import handle_error, open_catalog, parse_key_values, state
from lakecatalog.cli.output import format_properties, print_info, print_result
from lakecatalog.exceptions import LakeCatalogError

app = typer.Typer(help="Inspect partitions")


@app.command("list")
def list_partitions(
    path: str = typer.Argument(..., help="Table path as database.name"),
    filters: Optional[list[str]] = typer.Option(
        None, "--filter", "-f", help="Partial partition spec as key=value (repeatable)"
    ),
) -> None:
    """List the partitions of a partitioned table in creation order."""
    partial_spec = CatalogPartitionSpec(parse_key_values(filters, "--filter"))

    try:
        object_path = ObjectPath.parse(path)
        with open_catalog() as catalog:
            rows = []
            for spec in catalog.list_partitions(object_path, partial_spec):
                partition = catalog.get_partition(object_path, spec)
                statistics = catalog.get_partition_statistics(object_path, spec)
                rows.append(
                    {
                        "Partition": str(spec),
                        "Rows": statistics.row_count if statistics.row_count >= 0 else "unknown",
                        "Properties": format_properties(partition.properties),
                    }
                )
    except LakeCatalogError as e:
        handle_error(e)
        return

    if state.output_format == "json":
        print_result(
            [{"spec": row["Partition"], "rows": row["Rows"]} for row in rows], "json"
        )
        return

    if not rows:
        print_info(f"No partitions of '{object_path}' match {partial_spec}")
        return

    print_result(rows, state.output_format, title=f"Partitions of '{object_path}'")
