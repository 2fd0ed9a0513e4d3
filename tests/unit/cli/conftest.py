"""Pytest fixtures for CLI tests."""

import logging

import pytest
import structlog

from lakecatalog.catalog.identity import ObjectPath
from lakecatalog.catalog.manager import Catalog
from lakecatalog.catalog.partitions import CatalogPartitionSpec
from lakecatalog.catalog.schemas import (
    CatalogDatabase,
    CatalogPartition,
    CatalogTable,
    CatalogTableStatistics,
    CatalogView,
    TableSchema,
)
from lakecatalog.config import reset_settings
from lakecatalog.storage.local_backend import LocalBackend


@pytest.fixture(autouse=True)
def metadata_path(tmp_path, monkeypatch):
    """Point CLI commands at a local backend in a temporary directory."""
    path = tmp_path / "metadata"
    monkeypatch.setenv("LAKECATALOG_METADATA_BACKEND", "local")
    monkeypatch.setenv("LAKECATALOG_LOCAL_METADATA_PATH", str(path))
    monkeypatch.setenv("LAKECATALOG_LOG_LEVEL", "WARNING")
    reset_settings()

    yield path

    reset_settings()
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def populated(metadata_path):
    """Catalog holding db1 with a partitioned table, a plain table and a view."""
    schema = TableSchema.of(("first", "STRING"), ("second", "INT"), ("third", "STRING"))
    sales = ObjectPath.parse("db1.sales")

    with Catalog("default_catalog", backend=LocalBackend(metadata_path)) as catalog:
        catalog.create_database("db1", CatalogDatabase(comment="first db"))
        catalog.create_table(
            sales,
            CatalogTable(table_schema=schema, partition_keys=["second", "third"]),
        )
        catalog.create_table(
            ObjectPath.parse("db1.plain"),
            CatalogTable(table_schema=schema, comment="plain table"),
        )
        catalog.create_table(
            ObjectPath.parse("db1.recent"),
            CatalogView(
                table_schema=schema,
                original_query="select * from sales",
                expanded_query="select * from db1.sales",
            ),
        )
        catalog.alter_table_statistics(
            ObjectPath.parse("db1.plain"), CatalogTableStatistics(row_count=1234)
        )
        for third in ("2000", "2010"):
            catalog.create_partition(
                sales,
                CatalogPartitionSpec({"second": "bob", "third": third}),
                CatalogPartition(properties={"year": third}),
            )
    return metadata_path
