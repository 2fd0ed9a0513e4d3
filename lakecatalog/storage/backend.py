"""Metadata backend interface for lakecatalog.

This module provides the abstract interface the catalog delegates durable
effects to, plus an in-memory reference implementation.

Key Design Principles:
- Backends store and return entity records; they never validate catalog
  rules (existence conflicts, partition keys, kind mismatches)
- Per entity kind: exists, get, put (create or overwrite), delete, list
- Partitions of a table are listed in creation order
- Dropping a table or database removes everything stored under it
- Backend failures raise StorageBackendError
"""

from abc import ABC, abstractmethod

import structlog

from lakecatalog.catalog.identity import ObjectPath
from lakecatalog.catalog.partitions import CatalogPartitionSpec
from lakecatalog.catalog.schemas import (
    CatalogBaseTable,
    CatalogColumnStatistics,
    CatalogDatabase,
    CatalogFunction,
    CatalogPartition,
    CatalogTableStatistics,
)
from lakecatalog.exceptions import StorageBackendError

logger = structlog.get_logger(__name__)


def _copy_or_none(record):
    return record.model_copy(deep=True) if record is not None else None


class MetadataBackend(ABC):
    """Abstract base class for metadata backends.

    Implementations hold entity records keyed by database name,
    ObjectPath, or (ObjectPath, CatalogPartitionSpec). The catalog facade
    checks existence before every get, so ``get_*`` methods return None
    for missing records instead of raising.
    """

    name: str = "abstract"

    # ------ databases ------

    @abstractmethod
    def database_exists(self, name: str) -> bool:
        """Check if a database record exists."""
        pass

    @abstractmethod
    def get_database(self, name: str) -> CatalogDatabase | None:
        """Get a database record, or None if absent."""
        pass

    @abstractmethod
    def put_database(self, name: str, database: CatalogDatabase) -> None:
        """Create or overwrite a database record."""
        pass

    @abstractmethod
    def delete_database(self, name: str) -> None:
        """Delete a database and every table, view, function, partition and
        statistics record stored under it."""
        pass

    @abstractmethod
    def list_databases(self) -> list[str]:
        """List database names."""
        pass

    # ------ tables and views ------

    @abstractmethod
    def table_exists(self, path: ObjectPath) -> bool:
        """Check if a table or view record exists."""
        pass

    @abstractmethod
    def get_table(self, path: ObjectPath) -> CatalogBaseTable | None:
        """Get a table or view record, or None if absent."""
        pass

    @abstractmethod
    def put_table(self, path: ObjectPath, table: CatalogBaseTable) -> None:
        """Create or overwrite a table or view record."""
        pass

    @abstractmethod
    def delete_table(self, path: ObjectPath) -> None:
        """Delete a table or view with its partitions and statistics."""
        pass

    @abstractmethod
    def list_tables(self, database_name: str) -> list[str]:
        """List object names of the tables and views in a database."""
        pass

    # ------ functions ------

    @abstractmethod
    def function_exists(self, path: ObjectPath) -> bool:
        """Check if a function record exists."""
        pass

    @abstractmethod
    def get_function(self, path: ObjectPath) -> CatalogFunction | None:
        """Get a function record, or None if absent."""
        pass

    @abstractmethod
    def put_function(self, path: ObjectPath, function: CatalogFunction) -> None:
        """Create or overwrite a function record."""
        pass

    @abstractmethod
    def delete_function(self, path: ObjectPath) -> None:
        """Delete a function record."""
        pass

    @abstractmethod
    def list_functions(self, database_name: str) -> list[str]:
        """List object names of the functions in a database."""
        pass

    # ------ partitions ------

    @abstractmethod
    def list_partition_specs(self, path: ObjectPath) -> list[CatalogPartitionSpec]:
        """List the full specs of a table's partitions in creation order."""
        pass

    @abstractmethod
    def get_partition(
        self, path: ObjectPath, spec: CatalogPartitionSpec
    ) -> CatalogPartition | None:
        """Get a partition record, or None if absent."""
        pass

    @abstractmethod
    def put_partition(
        self, path: ObjectPath, spec: CatalogPartitionSpec, partition: CatalogPartition
    ) -> None:
        """Create or overwrite a partition record.

        Overwriting keeps the partition's position in creation order.
        """
        pass

    @abstractmethod
    def delete_partition(self, path: ObjectPath, spec: CatalogPartitionSpec) -> None:
        """Delete a partition record and its statistics."""
        pass

    # ------ statistics ------

    @abstractmethod
    def get_statistics(
        self, path: ObjectPath, spec: CatalogPartitionSpec | None = None
    ) -> CatalogTableStatistics | None:
        """Get table statistics, or partition statistics when spec is given."""
        pass

    @abstractmethod
    def put_statistics(
        self,
        path: ObjectPath,
        statistics: CatalogTableStatistics,
        spec: CatalogPartitionSpec | None = None,
    ) -> None:
        """Store table statistics, or partition statistics when spec is given."""
        pass

    @abstractmethod
    def get_column_statistics(
        self, path: ObjectPath, spec: CatalogPartitionSpec | None = None
    ) -> CatalogColumnStatistics | None:
        """Get column statistics of a table or partition."""
        pass

    @abstractmethod
    def put_column_statistics(
        self,
        path: ObjectPath,
        statistics: CatalogColumnStatistics,
        spec: CatalogPartitionSpec | None = None,
    ) -> None:
        """Store column statistics of a table or partition."""
        pass

    # ------ lifecycle ------

    def close(self) -> None:
        """Release backend resources."""
        pass


class InMemoryBackend(MetadataBackend):
    """In-memory metadata backend.

    Reference implementation used by tests and by catalogs configured with
    ``metadata_backend="memory"``. Records are deep-copied on the way in
    and out, so callers never share state with the store.
    """

    name = "memory"

    def __init__(self) -> None:
        """Initialize empty in-memory stores."""
        self._databases: dict[str, CatalogDatabase] = {}
        self._tables: dict[ObjectPath, CatalogBaseTable] = {}
        self._functions: dict[ObjectPath, CatalogFunction] = {}
        self._partitions: dict[ObjectPath, dict[CatalogPartitionSpec, CatalogPartition]] = {}
        self._table_stats: dict[ObjectPath, CatalogTableStatistics] = {}
        self._table_column_stats: dict[ObjectPath, CatalogColumnStatistics] = {}
        self._partition_stats: dict[
            tuple[ObjectPath, CatalogPartitionSpec], CatalogTableStatistics
        ] = {}
        self._partition_column_stats: dict[
            tuple[ObjectPath, CatalogPartitionSpec], CatalogColumnStatistics
        ] = {}
        self._closed = False

    def _check_open(self, operation: str) -> None:
        if self._closed:
            raise StorageBackendError(self.name, operation, "backend is closed")

    def database_exists(self, name: str) -> bool:
        self._check_open("database_exists")
        return name in self._databases

    def get_database(self, name: str) -> CatalogDatabase | None:
        self._check_open("get_database")
        database = self._databases.get(name)
        return database.copy() if database is not None else None

    def put_database(self, name: str, database: CatalogDatabase) -> None:
        self._check_open("put_database")
        self._databases[name] = database.copy()

    def delete_database(self, name: str) -> None:
        self._check_open("delete_database")
        for path in [p for p in self._tables if p.database_name == name]:
            self.delete_table(path)
        for path in [p for p in self._functions if p.database_name == name]:
            del self._functions[path]
        self._databases.pop(name, None)

    def list_databases(self) -> list[str]:
        self._check_open("list_databases")
        return list(self._databases)

    def table_exists(self, path: ObjectPath) -> bool:
        self._check_open("table_exists")
        return path in self._tables

    def get_table(self, path: ObjectPath) -> CatalogBaseTable | None:
        self._check_open("get_table")
        table = self._tables.get(path)
        return table.copy() if table is not None else None

    def put_table(self, path: ObjectPath, table: CatalogBaseTable) -> None:
        self._check_open("put_table")
        self._tables[path] = table.copy()

    def delete_table(self, path: ObjectPath) -> None:
        self._check_open("delete_table")
        self._tables.pop(path, None)
        self._partitions.pop(path, None)
        self._table_stats.pop(path, None)
        self._table_column_stats.pop(path, None)
        for store in (self._partition_stats, self._partition_column_stats):
            for key in [k for k in store if k[0] == path]:
                del store[key]

    def list_tables(self, database_name: str) -> list[str]:
        self._check_open("list_tables")
        return [p.object_name for p in self._tables if p.database_name == database_name]

    def function_exists(self, path: ObjectPath) -> bool:
        self._check_open("function_exists")
        return path in self._functions

    def get_function(self, path: ObjectPath) -> CatalogFunction | None:
        self._check_open("get_function")
        function = self._functions.get(path)
        return function.copy() if function is not None else None

    def put_function(self, path: ObjectPath, function: CatalogFunction) -> None:
        self._check_open("put_function")
        self._functions[path] = function.copy()

    def delete_function(self, path: ObjectPath) -> None:
        self._check_open("delete_function")
        self._functions.pop(path, None)

    def list_functions(self, database_name: str) -> list[str]:
        self._check_open("list_functions")
        return [p.object_name for p in self._functions if p.database_name == database_name]

    def list_partition_specs(self, path: ObjectPath) -> list[CatalogPartitionSpec]:
        self._check_open("list_partition_specs")
        return [spec.model_copy(deep=True) for spec in self._partitions.get(path, {})]

    def get_partition(
        self, path: ObjectPath, spec: CatalogPartitionSpec
    ) -> CatalogPartition | None:
        self._check_open("get_partition")
        partition = self._partitions.get(path, {}).get(spec)
        return partition.copy() if partition is not None else None

    def put_partition(
        self, path: ObjectPath, spec: CatalogPartitionSpec, partition: CatalogPartition
    ) -> None:
        self._check_open("put_partition")
        partitions = self._partitions.setdefault(path, {})
        if spec in partitions:
            partitions[spec] = partition.copy()
        else:
            partitions[spec.model_copy(deep=True)] = partition.copy()

    def delete_partition(self, path: ObjectPath, spec: CatalogPartitionSpec) -> None:
        self._check_open("delete_partition")
        self._partitions.get(path, {}).pop(spec, None)
        self._partition_stats.pop((path, spec), None)
        self._partition_column_stats.pop((path, spec), None)

    def get_statistics(
        self, path: ObjectPath, spec: CatalogPartitionSpec | None = None
    ) -> CatalogTableStatistics | None:
        self._check_open("get_statistics")
        if spec is None:
            return _copy_or_none(self._table_stats.get(path))
        return _copy_or_none(self._partition_stats.get((path, spec)))

    def put_statistics(
        self,
        path: ObjectPath,
        statistics: CatalogTableStatistics,
        spec: CatalogPartitionSpec | None = None,
    ) -> None:
        self._check_open("put_statistics")
        if spec is None:
            self._table_stats[path] = statistics.model_copy(deep=True)
        else:
            self._partition_stats[(path, spec)] = statistics.model_copy(deep=True)

    def get_column_statistics(
        self, path: ObjectPath, spec: CatalogPartitionSpec | None = None
    ) -> CatalogColumnStatistics | None:
        self._check_open("get_column_statistics")
        if spec is None:
            return _copy_or_none(self._table_column_stats.get(path))
        return _copy_or_none(self._partition_column_stats.get((path, spec)))

    def put_column_statistics(
        self,
        path: ObjectPath,
        statistics: CatalogColumnStatistics,
        spec: CatalogPartitionSpec | None = None,
    ) -> None:
        self._check_open("put_column_statistics")
        if spec is None:
            self._table_column_stats[path] = statistics.model_copy(deep=True)
        else:
            self._partition_column_stats[(path, spec)] = statistics.model_copy(deep=True)

    def close(self) -> None:
        """Drop all records and refuse further calls."""
        if self._closed:
            return
        logger.debug(
            "Closing in-memory metadata backend",
            databases=len(self._databases),
            tables=len(self._tables),
        )
        self.clear_all()
        self._closed = True

    def clear_all(self) -> None:
        """Clear all records (for testing)."""
        self._databases.clear()
        self._tables.clear()
        self._functions.clear()
        self._partitions.clear()
        self._table_stats.clear()
        self._table_column_stats.clear()
        self._partition_stats.clear()
        self._partition_column_stats.clear()
