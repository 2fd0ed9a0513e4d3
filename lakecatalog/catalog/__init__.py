"""Catalog contract: identifiers, descriptors and the Catalog facade."""

from lakecatalog.catalog.identity import ObjectPath
from lakecatalog.catalog.manager import Catalog, CatalogState, create_catalog
from lakecatalog.catalog.partitions import CatalogPartitionSpec
from lakecatalog.catalog.schemas import (
    UNKNOWN_COLUMN_STATISTICS,
    UNKNOWN_TABLE_STATISTICS,
    CatalogBaseTable,
    CatalogColumnStatistics,
    CatalogDatabase,
    CatalogFunction,
    CatalogPartition,
    CatalogTable,
    CatalogTableStatistics,
    CatalogView,
    ColumnSchema,
    ColumnStatisticsData,
    TableSchema,
)

__all__ = [
    "Catalog",
    "CatalogState",
    "create_catalog",
    "ObjectPath",
    "CatalogPartitionSpec",
    "CatalogBaseTable",
    "CatalogColumnStatistics",
    "CatalogDatabase",
    "CatalogFunction",
    "CatalogPartition",
    "CatalogTable",
    "CatalogTableStatistics",
    "CatalogView",
    "ColumnSchema",
    "ColumnStatisticsData",
    "TableSchema",
    "UNKNOWN_COLUMN_STATISTICS",
    "UNKNOWN_TABLE_STATISTICS",
]
