"""Catalog facade: validation, ignore flags and delegation to a metadata backend."""

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog

from lakecatalog.catalog.identity import ObjectPath
from lakecatalog.catalog.partitions import (
    CatalogPartitionSpec,
    filter_partition_specs,
    matches_partition_keys,
)
from lakecatalog.catalog.policy import should_proceed
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
)
from lakecatalog.exceptions import (
    CatalogError,
    DatabaseAlreadyExistError,
    DatabaseNotEmptyError,
    DatabaseNotExistError,
    FunctionAlreadyExistError,
    FunctionNotExistError,
    PartitionAlreadyExistsError,
    PartitionNotExistError,
    PartitionSpecInvalidError,
    StorageError,
    TableAlreadyExistError,
    TableNotExistError,
    TableNotPartitionedError,
)
from lakecatalog.logging_config import log_error, log_operation

if TYPE_CHECKING:
    from lakecatalog.config import Settings
    from lakecatalog.storage.backend import MetadataBackend

logger = structlog.get_logger(__name__)


class CatalogState(str, Enum):
    """Lifecycle state of a catalog."""

    CREATED = "created"
    OPEN = "open"
    CLOSED = "closed"


def _check_name(value: str, what: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{what} cannot be empty")


def _check_type(value: Any, expected: type, what: str) -> None:
    if not isinstance(value, expected):
        raise TypeError(f"{what} must be a {expected.__name__}, got {type(value).__name__}")


def _check_kind(label: str, existing: Any, new: Any) -> None:
    if existing.kind != new.kind:
        raise CatalogError(
            f"{label.capitalize()} types don't match. "
            f"Existing {label} is '{existing.kind}' and new {label} is '{new.kind}'.",
            existing_kind=existing.kind,
            new_kind=new.kind,
        )


def _is_partitioned(table: CatalogBaseTable | None) -> bool:
    return isinstance(table, CatalogTable) and table.is_partitioned


class Catalog:
    """
    Namespace of databases holding tables, views, functions and partitions.

    This class provides:
    - Create/get/alter/drop/exists/list for every entity kind
    - Ignore flags that turn existence conflicts into no-ops
    - Partition spec validation and partial-spec listing
    - Table and partition statistics

    Every operation runs under a re-entrant lock: validation and mutation
    are applied together or not at all. Backend failures surface as
    CatalogError.

    Usage:
        with Catalog("prod", backend=InMemoryBackend()) as catalog:
            catalog.create_database("sales", CatalogDatabase(comment="Sales"))
            catalog.create_table(
                ObjectPath.parse("sales.orders"),
                CatalogTable(table_schema=schema, partition_keys=["day"]),
            )
    """

    def __init__(
        self,
        name: str,
        default_database: str = "default",
        backend: "MetadataBackend | None" = None,
    ) -> None:
        """
        Initialize the catalog. Call ``open()`` (or use it as a context
        manager) before issuing operations.

        Args:
            name: Catalog name, used in error messages
            default_database: Database created on open; cannot be dropped
            backend: Metadata backend (in-memory when omitted)
        """
        _check_name(name, "Catalog name")
        _check_name(default_database, "Default database name")

        if backend is None:
            from lakecatalog.storage.backend import InMemoryBackend

            backend = InMemoryBackend()

        self.name = name
        self.default_database = default_database
        self._backend = backend
        self._lock = threading.RLock()
        self._state = CatalogState.CREATED

        logger.debug(
            "Initialized catalog",
            catalog_name=name,
            default_database=default_database,
            backend=backend.name,
        )

    def __repr__(self) -> str:
        return f"Catalog(name={self.name!r}, backend={self._backend.name!r}, state={self._state.value!r})"

    # ------ lifecycle ------

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is CatalogState.OPEN

    def open(self) -> "Catalog":
        """
        Open the catalog, creating the default database if it is missing.

        Opening an open catalog is a no-op.

        Raises:
            CatalogError: If the catalog was closed or the backend fails
        """
        with self._lock:
            if self._state is CatalogState.CLOSED:
                raise CatalogError(f"Catalog {self.name} is closed.", catalog_name=self.name)
            if self._state is CatalogState.OPEN:
                return self

            try:
                if not self._backend.database_exists(self.default_database):
                    self._backend.put_database(
                        self.default_database, CatalogDatabase(comment="Default database")
                    )
            except StorageError as e:
                log_error(logger, e, "open", catalog_name=self.name)
                raise CatalogError(
                    f"Failed to open catalog {self.name}: {e}", catalog_name=self.name
                ) from e

            self._state = CatalogState.OPEN
            logger.info("Opened catalog", catalog_name=self.name, backend=self._backend.name)
            return self

    def close(self) -> None:
        """Release the backend. Terminal; closing twice is a no-op."""
        with self._lock:
            if self._state is CatalogState.CLOSED:
                return
            self._state = CatalogState.CLOSED
            try:
                self._backend.close()
            except StorageError as e:
                log_error(logger, e, "close", catalog_name=self.name)
                raise CatalogError(
                    f"Failed to close catalog {self.name}: {e}", catalog_name=self.name
                ) from e
            logger.info("Closed catalog", catalog_name=self.name)

    def __enter__(self) -> "Catalog":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @contextmanager
    def _operation(self, operation: str, **context: Any) -> Iterator[None]:
        """Serialize one operation, reject it outside the open state and wrap
        backend failures."""
        with self._lock:
            if self._state is not CatalogState.OPEN:
                raise CatalogError(
                    f"Catalog {self.name} is {'closed' if self._state is CatalogState.CLOSED else 'not open'}.",
                    catalog_name=self.name,
                    operation=operation,
                )
            try:
                yield
            except StorageError as e:
                log_error(logger, e, operation, catalog_name=self.name, **context)
                raise CatalogError(
                    f"Failed to {operation.replace('_', ' ')} in catalog {self.name}: {e.message}",
                    catalog_name=self.name,
                    operation=operation,
                    **context,
                ) from e

    # ------ databases ------

    def create_database(
        self, name: str, database: CatalogDatabase, ignore_if_exists: bool = False
    ) -> None:
        """
        Create a database.

        Args:
            name: Database name
            database: Database descriptor
            ignore_if_exists: Do nothing if the database already exists

        Raises:
            DatabaseAlreadyExistError: If the database exists and
                ignore_if_exists is False
        """
        _check_name(name, "Database name")
        _check_type(database, CatalogDatabase, "database")

        with self._operation("create_database", database_name=name):
            if not should_proceed(
                self._backend.database_exists(name),
                ignore_if_exists,
                lambda: DatabaseAlreadyExistError(self.name, name),
            ):
                logger.debug("Database already exists, skipping creation", database_name=name)
                return

            self._backend.put_database(name, database)
            log_operation(logger, "create_database", self.name, database_name=name)

    def get_database(self, name: str) -> CatalogDatabase:
        """
        Get a database descriptor.

        Raises:
            DatabaseNotExistError: If the database does not exist
        """
        with self._operation("get_database", database_name=name):
            database = self._backend.get_database(name)
            if database is None:
                raise DatabaseNotExistError(self.name, name)
            return database

    def alter_database(
        self, name: str, new_database: CatalogDatabase, ignore_if_not_exists: bool = False
    ) -> None:
        """
        Replace a database descriptor.

        Raises:
            DatabaseNotExistError: If the database does not exist and
                ignore_if_not_exists is False
        """
        _check_type(new_database, CatalogDatabase, "new_database")

        with self._operation("alter_database", database_name=name):
            if not should_proceed(
                not self._backend.database_exists(name),
                ignore_if_not_exists,
                lambda: DatabaseNotExistError(self.name, name),
            ):
                return

            self._backend.put_database(name, new_database)
            log_operation(logger, "alter_database", self.name, database_name=name)

    def drop_database(
        self, name: str, ignore_if_not_exists: bool = False, cascade: bool = False
    ) -> None:
        """
        Drop a database.

        A database holding tables or views is only dropped with ``cascade``;
        the ignore flag does not bypass that check. Functions are removed
        with their database.

        Args:
            name: Database name
            ignore_if_not_exists: Do nothing if the database does not exist
            cascade: Also drop every table, view, partition and function

        Raises:
            DatabaseNotExistError: If the database does not exist and
                ignore_if_not_exists is False
            DatabaseNotEmptyError: If the database holds tables or views and
                cascade is False
            CatalogError: If name is the default database
        """
        with self._operation("drop_database", database_name=name):
            if not should_proceed(
                not self._backend.database_exists(name),
                ignore_if_not_exists,
                lambda: DatabaseNotExistError(self.name, name),
            ):
                return

            if name == self.default_database:
                raise CatalogError(
                    f"Cannot drop the default database {name} of catalog {self.name}.",
                    catalog_name=self.name,
                    database_name=name,
                )

            tables = self._backend.list_tables(name)
            if tables and not cascade:
                raise DatabaseNotEmptyError(self.name, name)

            self._backend.delete_database(name)
            log_operation(
                logger,
                "drop_database",
                self.name,
                database_name=name,
                cascade=cascade,
                dropped_tables=len(tables),
            )

    def database_exists(self, name: str) -> bool:
        with self._operation("database_exists", database_name=name):
            return self._backend.database_exists(name)

    def list_databases(self) -> list[str]:
        """List database names, the default database included."""
        with self._operation("list_databases"):
            return self._backend.list_databases()

    def _require_database(self, name: str) -> None:
        if not self._backend.database_exists(name):
            raise DatabaseNotExistError(self.name, name)

    # ------ tables and views ------

    def create_table(
        self, path: ObjectPath, table: CatalogBaseTable, ignore_if_exists: bool = False
    ) -> None:
        """
        Create a table or view.

        Args:
            path: Table path
            table: CatalogTable or CatalogView
            ignore_if_exists: Do nothing if an object already exists at path

        Raises:
            DatabaseNotExistError: If the owning database does not exist
            TableAlreadyExistError: If an object exists at path and
                ignore_if_exists is False
        """
        _check_type(path, ObjectPath, "path")
        _check_type(table, CatalogBaseTable, "table")

        with self._operation("create_table", table_path=path.full_name):
            self._require_database(path.database_name)

            if not should_proceed(
                self._backend.table_exists(path),
                ignore_if_exists,
                lambda: TableAlreadyExistError(self.name, path),
            ):
                logger.debug("Table already exists, skipping creation", table_path=path.full_name)
                return

            self._backend.put_table(path, table)
            log_operation(
                logger, "create_table", self.name, table_path=path.full_name, kind=table.kind
            )

    def get_table(self, path: ObjectPath) -> CatalogBaseTable:
        """
        Get a table or view.

        Raises:
            TableNotExistError: If nothing exists at path
        """
        with self._operation("get_table", table_path=str(path)):
            table = self._backend.get_table(path)
            if table is None:
                raise TableNotExistError(self.name, path)
            return table

    def alter_table(
        self, path: ObjectPath, new_table: CatalogBaseTable, ignore_if_not_exists: bool = False
    ) -> None:
        """
        Replace a table or view with a value of the same kind.

        Raises:
            TableNotExistError: If nothing exists at path and
                ignore_if_not_exists is False
            CatalogError: If the stored and new values differ in kind
        """
        _check_type(new_table, CatalogBaseTable, "new_table")

        with self._operation("alter_table", table_path=str(path)):
            if not should_proceed(
                not self._backend.table_exists(path),
                ignore_if_not_exists,
                lambda: TableNotExistError(self.name, path),
            ):
                return

            _check_kind("table", self._backend.get_table(path), new_table)

            self._backend.put_table(path, new_table)
            log_operation(logger, "alter_table", self.name, table_path=path.full_name)

    def drop_table(self, path: ObjectPath, ignore_if_not_exists: bool = False) -> None:
        """
        Drop a table or view with its partitions and statistics.

        Raises:
            TableNotExistError: If nothing exists at path and
                ignore_if_not_exists is False
        """
        with self._operation("drop_table", table_path=str(path)):
            if not should_proceed(
                not self._backend.table_exists(path),
                ignore_if_not_exists,
                lambda: TableNotExistError(self.name, path),
            ):
                return

            self._backend.delete_table(path)
            log_operation(logger, "drop_table", self.name, table_path=path.full_name)

    def rename_table(
        self, path: ObjectPath, new_object_name: str, ignore_if_not_exists: bool = False
    ) -> None:
        """
        Move a table or view to a new name in the same database.

        Partitions and statistics move with it.

        Args:
            path: Current path
            new_object_name: New object name
            ignore_if_not_exists: Do nothing if nothing exists at path

        Raises:
            TableNotExistError: If nothing exists at path and
                ignore_if_not_exists is False
            TableAlreadyExistError: If an object exists at the new path
        """
        _check_name(new_object_name, "New table name")

        with self._operation("rename_table", table_path=str(path), new_name=new_object_name):
            if not should_proceed(
                not self._backend.table_exists(path),
                ignore_if_not_exists,
                lambda: TableNotExistError(self.name, path),
            ):
                return

            new_path = path.with_object_name(new_object_name)
            if self._backend.table_exists(new_path):
                raise TableAlreadyExistError(self.name, new_path)

            try:
                self._copy_table(path, new_path)
            except StorageError:
                self._backend.delete_table(new_path)
                raise
            self._backend.delete_table(path)

            log_operation(
                logger,
                "rename_table",
                self.name,
                table_path=path.full_name,
                new_table_path=new_path.full_name,
            )

    def _copy_table(self, source: ObjectPath, target: ObjectPath) -> None:
        backend = self._backend
        backend.put_table(target, backend.get_table(source))

        statistics = backend.get_statistics(source)
        if statistics is not None:
            backend.put_statistics(target, statistics)
        column_statistics = backend.get_column_statistics(source)
        if column_statistics is not None:
            backend.put_column_statistics(target, column_statistics)

        for spec in backend.list_partition_specs(source):
            backend.put_partition(target, spec, backend.get_partition(source, spec))
            statistics = backend.get_statistics(source, spec)
            if statistics is not None:
                backend.put_statistics(target, statistics, spec)
            column_statistics = backend.get_column_statistics(source, spec)
            if column_statistics is not None:
                backend.put_column_statistics(target, column_statistics, spec)

    def table_exists(self, path: ObjectPath) -> bool:
        with self._operation("table_exists", table_path=str(path)):
            return self._backend.table_exists(path)

    def list_tables(self, database_name: str) -> list[str]:
        """
        List the names of all tables and views in a database.

        Raises:
            DatabaseNotExistError: If the database does not exist
        """
        with self._operation("list_tables", database_name=database_name):
            self._require_database(database_name)
            return self._backend.list_tables(database_name)

    def list_views(self, database_name: str) -> list[str]:
        """
        List the names of the views in a database.

        Raises:
            DatabaseNotExistError: If the database does not exist
        """
        with self._operation("list_views", database_name=database_name):
            self._require_database(database_name)
            return [
                name
                for name in self._backend.list_tables(database_name)
                if isinstance(
                    self._backend.get_table(ObjectPath(database_name=database_name, object_name=name)),
                    CatalogView,
                )
            ]

    # ------ functions ------

    def create_function(
        self, path: ObjectPath, function: CatalogFunction, ignore_if_exists: bool = False
    ) -> None:
        """
        Create a function.

        Raises:
            DatabaseNotExistError: If the owning database does not exist
            FunctionAlreadyExistError: If a function exists at path and
                ignore_if_exists is False
        """
        _check_type(path, ObjectPath, "path")
        _check_type(function, CatalogFunction, "function")

        with self._operation("create_function", function_path=path.full_name):
            self._require_database(path.database_name)

            if not should_proceed(
                self._backend.function_exists(path),
                ignore_if_exists,
                lambda: FunctionAlreadyExistError(self.name, path),
            ):
                return

            self._backend.put_function(path, function)
            log_operation(
                logger,
                "create_function",
                self.name,
                function_path=path.full_name,
                class_name=function.class_name,
            )

    def get_function(self, path: ObjectPath) -> CatalogFunction:
        with self._operation("get_function", function_path=str(path)):
            function = self._backend.get_function(path)
            if function is None:
                raise FunctionNotExistError(self.name, path)
            return function

    def alter_function(
        self, path: ObjectPath, new_function: CatalogFunction, ignore_if_not_exists: bool = False
    ) -> None:
        """
        Replace a function with a value of the same kind.

        Raises:
            FunctionNotExistError: If no function exists at path and
                ignore_if_not_exists is False
            CatalogError: If the stored and new values differ in kind
        """
        _check_type(new_function, CatalogFunction, "new_function")

        with self._operation("alter_function", function_path=str(path)):
            if not should_proceed(
                not self._backend.function_exists(path),
                ignore_if_not_exists,
                lambda: FunctionNotExistError(self.name, path),
            ):
                return

            _check_kind("function", self._backend.get_function(path), new_function)

            self._backend.put_function(path, new_function)
            log_operation(logger, "alter_function", self.name, function_path=path.full_name)

    def drop_function(self, path: ObjectPath, ignore_if_not_exists: bool = False) -> None:
        with self._operation("drop_function", function_path=str(path)):
            if not should_proceed(
                not self._backend.function_exists(path),
                ignore_if_not_exists,
                lambda: FunctionNotExistError(self.name, path),
            ):
                return

            self._backend.delete_function(path)
            log_operation(logger, "drop_function", self.name, function_path=path.full_name)

    def function_exists(self, path: ObjectPath) -> bool:
        with self._operation("function_exists", function_path=str(path)):
            return self._backend.function_exists(path)

    def list_functions(self, database_name: str) -> list[str]:
        """
        List the names of the functions in a database.

        Raises:
            DatabaseNotExistError: If the database does not exist
        """
        with self._operation("list_functions", database_name=database_name):
            self._require_database(database_name)
            return self._backend.list_functions(database_name)

    # ------ partitions ------

    def create_partition(
        self,
        table_path: ObjectPath,
        partition_spec: CatalogPartitionSpec,
        partition: CatalogPartition,
        ignore_if_exists: bool = False,
    ) -> None:
        """
        Create a partition of a partitioned table.

        Checks run in order: table exists, table is partitioned, spec keys
        equal the partition keys, partition is new. The ignore flag only
        covers the last check.

        Args:
            table_path: Path of the owning table
            partition_spec: Full spec naming every partition key
            partition: Partition descriptor
            ignore_if_exists: Do nothing if the partition already exists

        Raises:
            TableNotExistError: If the table does not exist
            TableNotPartitionedError: If the table is not partitioned
            PartitionSpecInvalidError: If the spec keys differ from the
                table's partition keys
            PartitionAlreadyExistsError: If the partition exists and
                ignore_if_exists is False
        """
        _check_type(partition_spec, CatalogPartitionSpec, "partition_spec")
        _check_type(partition, CatalogPartition, "partition")

        with self._operation(
            "create_partition", table_path=str(table_path), partition_spec=str(partition_spec)
        ):
            table = self._backend.get_table(table_path)
            if table is None:
                raise TableNotExistError(self.name, table_path)
            if not _is_partitioned(table):
                raise TableNotPartitionedError(self.name, table_path)
            if not matches_partition_keys(partition_spec, table.partition_keys):
                raise PartitionSpecInvalidError(
                    self.name, table.partition_keys, table_path, partition_spec
                )

            if not should_proceed(
                self._backend.get_partition(table_path, partition_spec) is not None,
                ignore_if_exists,
                lambda: PartitionAlreadyExistsError(self.name, table_path, partition_spec),
            ):
                return

            self._backend.put_partition(table_path, partition_spec, partition)
            log_operation(
                logger,
                "create_partition",
                self.name,
                table_path=table_path.full_name,
                partition_spec=str(partition_spec),
            )

    def _find_partition(
        self, table_path: ObjectPath, partition_spec: CatalogPartitionSpec
    ) -> CatalogPartition | None:
        """
        Resolve a full spec to its stored partition.

        A missing table, an unpartitioned table, a spec whose keys differ
        from the partition keys and an absent partition all resolve to None.
        """
        table = self._backend.get_table(table_path)
        if not _is_partitioned(table):
            return None
        if not matches_partition_keys(partition_spec, table.partition_keys):
            return None
        return self._backend.get_partition(table_path, partition_spec)

    def _partition_guard(
        self,
        table_path: ObjectPath,
        partition_spec: CatalogPartitionSpec,
        ignore_if_not_exists: bool,
    ) -> CatalogPartition | None:
        """Stored partition, None for an ignored miss, PartitionNotExistError otherwise."""
        partition = self._find_partition(table_path, partition_spec)
        if not should_proceed(
            partition is None,
            ignore_if_not_exists,
            lambda: PartitionNotExistError(self.name, table_path, partition_spec),
        ):
            return None
        return partition

    def get_partition(
        self, table_path: ObjectPath, partition_spec: CatalogPartitionSpec
    ) -> CatalogPartition:
        """
        Get a partition.

        Raises:
            PartitionNotExistError: If the spec does not resolve to a stored
                partition, whatever the reason
        """
        with self._operation(
            "get_partition", table_path=str(table_path), partition_spec=str(partition_spec)
        ):
            return self._partition_guard(table_path, partition_spec, False)

    def alter_partition(
        self,
        table_path: ObjectPath,
        partition_spec: CatalogPartitionSpec,
        new_partition: CatalogPartition,
        ignore_if_not_exists: bool = False,
    ) -> None:
        """
        Replace a partition with a value of the same kind.

        Raises:
            PartitionNotExistError: If the spec does not resolve and
                ignore_if_not_exists is False
            CatalogError: If the stored and new values differ in kind
        """
        _check_type(new_partition, CatalogPartition, "new_partition")

        with self._operation(
            "alter_partition", table_path=str(table_path), partition_spec=str(partition_spec)
        ):
            existing = self._partition_guard(table_path, partition_spec, ignore_if_not_exists)
            if existing is None:
                return

            _check_kind("partition", existing, new_partition)

            self._backend.put_partition(table_path, partition_spec, new_partition)
            log_operation(
                logger,
                "alter_partition",
                self.name,
                table_path=table_path.full_name,
                partition_spec=str(partition_spec),
            )

    def drop_partition(
        self,
        table_path: ObjectPath,
        partition_spec: CatalogPartitionSpec,
        ignore_if_not_exists: bool = False,
    ) -> None:
        """
        Drop a partition and its statistics.

        Raises:
            PartitionNotExistError: If the spec does not resolve and
                ignore_if_not_exists is False
        """
        with self._operation(
            "drop_partition", table_path=str(table_path), partition_spec=str(partition_spec)
        ):
            if self._partition_guard(table_path, partition_spec, ignore_if_not_exists) is None:
                return

            self._backend.delete_partition(table_path, partition_spec)
            log_operation(
                logger,
                "drop_partition",
                self.name,
                table_path=table_path.full_name,
                partition_spec=str(partition_spec),
            )

    def partition_exists(
        self, table_path: ObjectPath, partition_spec: CatalogPartitionSpec
    ) -> bool:
        with self._operation(
            "partition_exists", table_path=str(table_path), partition_spec=str(partition_spec)
        ):
            return self._find_partition(table_path, partition_spec) is not None

    def list_partitions(
        self,
        table_path: ObjectPath,
        partition_spec: CatalogPartitionSpec | None = None,
    ) -> list[CatalogPartitionSpec]:
        """
        List the full specs of a table's partitions in creation order.

        Args:
            table_path: Path of the owning table
            partition_spec: Optional partial spec; only partitions holding
                every one of its key/value pairs are listed

        Returns:
            Matching full specs

        Raises:
            TableNotExistError: If the table does not exist
            TableNotPartitionedError: If the table is not partitioned
        """
        with self._operation("list_partitions", table_path=str(table_path)):
            table = self._backend.get_table(table_path)
            if table is None:
                raise TableNotExistError(self.name, table_path)
            if not _is_partitioned(table):
                raise TableNotPartitionedError(self.name, table_path)

            return filter_partition_specs(
                self._backend.list_partition_specs(table_path), partition_spec
            )

    # ------ statistics ------

    def _table_statistics(
        self, operation: str, path: ObjectPath, getter: Callable[..., Any], unknown: Any
    ) -> Any:
        with self._operation(operation, table_path=str(path)):
            table = self._backend.get_table(path)
            if table is None:
                raise TableNotExistError(self.name, path)
            if _is_partitioned(table):
                return unknown.model_copy(deep=True)
            stored = getter(path)
            return stored if stored is not None else unknown.model_copy(deep=True)

    def _alter_table_statistics(
        self,
        operation: str,
        path: ObjectPath,
        statistics: Any,
        setter: Callable[..., None],
        ignore_if_not_exists: bool,
    ) -> None:
        with self._operation(operation, table_path=str(path)):
            table = self._backend.get_table(path)
            if not should_proceed(
                table is None,
                ignore_if_not_exists,
                lambda: TableNotExistError(self.name, path),
            ):
                return
            if _is_partitioned(table):
                logger.debug(
                    "Skipping table-level statistics for partitioned table",
                    table_path=path.full_name,
                )
                return

            setter(path, statistics)
            log_operation(logger, operation, self.name, table_path=path.full_name)

    def _partition_statistics(
        self,
        operation: str,
        path: ObjectPath,
        spec: CatalogPartitionSpec,
        getter: Callable[..., Any],
        unknown: Any,
    ) -> Any:
        with self._operation(operation, table_path=str(path), partition_spec=str(spec)):
            self._partition_guard(path, spec, False)
            stored = getter(path, spec)
            return stored if stored is not None else unknown.model_copy(deep=True)

    def _alter_partition_statistics(
        self,
        operation: str,
        path: ObjectPath,
        spec: CatalogPartitionSpec,
        statistics: Any,
        setter: Callable[..., None],
        ignore_if_not_exists: bool,
    ) -> None:
        with self._operation(operation, table_path=str(path), partition_spec=str(spec)):
            if self._partition_guard(path, spec, ignore_if_not_exists) is None:
                return

            setter(path, statistics, spec)
            log_operation(
                logger,
                operation,
                self.name,
                table_path=path.full_name,
                partition_spec=str(spec),
            )

    def get_table_statistics(self, path: ObjectPath) -> CatalogTableStatistics:
        """
        Get table statistics; unknown for partitioned tables or when none
        were stored.

        Raises:
            TableNotExistError: If nothing exists at path
        """
        return self._table_statistics(
            "get_table_statistics", path, self._backend.get_statistics, UNKNOWN_TABLE_STATISTICS
        )

    def get_table_column_statistics(self, path: ObjectPath) -> CatalogColumnStatistics:
        return self._table_statistics(
            "get_table_column_statistics",
            path,
            self._backend.get_column_statistics,
            UNKNOWN_COLUMN_STATISTICS,
        )

    def alter_table_statistics(
        self,
        path: ObjectPath,
        statistics: CatalogTableStatistics,
        ignore_if_not_exists: bool = False,
    ) -> None:
        """
        Store table statistics. Partitioned tables keep statistics per
        partition, so the call is a no-op for them.

        Raises:
            TableNotExistError: If nothing exists at path and
                ignore_if_not_exists is False
        """
        _check_type(statistics, CatalogTableStatistics, "statistics")
        self._alter_table_statistics(
            "alter_table_statistics",
            path,
            statistics,
            self._backend.put_statistics,
            ignore_if_not_exists,
        )

    def alter_table_column_statistics(
        self,
        path: ObjectPath,
        statistics: CatalogColumnStatistics,
        ignore_if_not_exists: bool = False,
    ) -> None:
        _check_type(statistics, CatalogColumnStatistics, "statistics")
        self._alter_table_statistics(
            "alter_table_column_statistics",
            path,
            statistics,
            self._backend.put_column_statistics,
            ignore_if_not_exists,
        )

    def get_partition_statistics(
        self, path: ObjectPath, partition_spec: CatalogPartitionSpec
    ) -> CatalogTableStatistics:
        """
        Get partition statistics.

        Raises:
            PartitionNotExistError: If the spec does not resolve
        """
        return self._partition_statistics(
            "get_partition_statistics",
            path,
            partition_spec,
            self._backend.get_statistics,
            UNKNOWN_TABLE_STATISTICS,
        )

    def get_partition_column_statistics(
        self, path: ObjectPath, partition_spec: CatalogPartitionSpec
    ) -> CatalogColumnStatistics:
        return self._partition_statistics(
            "get_partition_column_statistics",
            path,
            partition_spec,
            self._backend.get_column_statistics,
            UNKNOWN_COLUMN_STATISTICS,
        )

    def alter_partition_statistics(
        self,
        path: ObjectPath,
        partition_spec: CatalogPartitionSpec,
        statistics: CatalogTableStatistics,
        ignore_if_not_exists: bool = False,
    ) -> None:
        _check_type(statistics, CatalogTableStatistics, "statistics")
        self._alter_partition_statistics(
            "alter_partition_statistics",
            path,
            partition_spec,
            statistics,
            self._backend.put_statistics,
            ignore_if_not_exists,
        )

    def alter_partition_column_statistics(
        self,
        path: ObjectPath,
        partition_spec: CatalogPartitionSpec,
        statistics: CatalogColumnStatistics,
        ignore_if_not_exists: bool = False,
    ) -> None:
        _check_type(statistics, CatalogColumnStatistics, "statistics")
        self._alter_partition_statistics(
            "alter_partition_column_statistics",
            path,
            partition_spec,
            statistics,
            self._backend.put_column_statistics,
            ignore_if_not_exists,
        )


def create_catalog(
    settings: "Settings | None" = None,
    backend: "MetadataBackend | None" = None,
) -> Catalog:
    """
    Create and open a Catalog from settings.

    Args:
        settings: lakecatalog settings (uses get_settings() if not provided)
        backend: Explicit backend; built from settings when omitted

    Returns:
        Opened Catalog

    Example:
        with create_catalog() as catalog:
            databases = catalog.list_databases()
    """
    if settings is None:
        from lakecatalog.config import get_settings

        settings = get_settings()

    if backend is None:
        from lakecatalog.storage import get_metadata_backend

        backend = get_metadata_backend(settings.metadata_backend, settings.backend_config)

    catalog = Catalog(
        settings.catalog_name,
        default_database=settings.default_database,
        backend=backend,
    )
    return catalog.open()
