"""Custom exceptions for lakecatalog."""

from typing import Any


class LakeCatalogError(Exception):
    """Base exception for all lakecatalog errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(LakeCatalogError):
    """Configuration-related errors."""

    pass


class InvalidIdentifierError(LakeCatalogError, ValueError):
    """Object path could not be parsed."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid object path: {text}", text=text)


class StorageError(LakeCatalogError):
    """Storage-related errors."""

    pass


class StorageBackendError(StorageError):
    """Storage backend operation failed."""

    def __init__(self, backend: str, operation: str, details: str) -> None:
        super().__init__(
            f"Storage backend error ({backend}): {operation} - {details}",
            backend=backend,
            operation=operation,
            details=details,
        )


class CatalogError(LakeCatalogError):
    """Catalog-related errors.

    Raised directly for entity kind mismatches on alter and for wrapped
    backend failures; every more specific catalog condition derives from it.
    """

    pass


class DatabaseAlreadyExistError(CatalogError):
    """Database already exists in the catalog."""

    def __init__(self, catalog_name: str, database_name: str) -> None:
        super().__init__(
            f"Database {database_name} already exists in Catalog {catalog_name}.",
            catalog_name=catalog_name,
            database_name=database_name,
        )


class DatabaseNotExistError(CatalogError):
    """Database does not exist in the catalog."""

    def __init__(self, catalog_name: str, database_name: str) -> None:
        super().__init__(
            f"Database {database_name} does not exist in Catalog {catalog_name}.",
            catalog_name=catalog_name,
            database_name=database_name,
        )


class DatabaseNotEmptyError(CatalogError):
    """Database still holds tables or views."""

    def __init__(self, catalog_name: str, database_name: str) -> None:
        super().__init__(
            f"Database {database_name} in catalog {catalog_name} is not empty.",
            catalog_name=catalog_name,
            database_name=database_name,
        )


class TableAlreadyExistError(CatalogError):
    """Table or view already exists at the given path."""

    def __init__(self, catalog_name: str, table_path: Any) -> None:
        super().__init__(
            f"Table (or view) {table_path} already exists in Catalog {catalog_name}.",
            catalog_name=catalog_name,
            table_path=str(table_path),
        )


class TableNotExistError(CatalogError):
    """Table or view does not exist at the given path."""

    def __init__(self, catalog_name: str, table_path: Any) -> None:
        super().__init__(
            f"Table (or view) {table_path} does not exist in Catalog {catalog_name}.",
            catalog_name=catalog_name,
            table_path=str(table_path),
        )


class TableNotPartitionedError(CatalogError):
    """Partition operation requested on a non-partitioned table."""

    def __init__(self, catalog_name: str, table_path: Any) -> None:
        super().__init__(
            f"Table {table_path} in catalog {catalog_name} is not partitioned.",
            catalog_name=catalog_name,
            table_path=str(table_path),
        )


class FunctionAlreadyExistError(CatalogError):
    """Function already exists at the given path."""

    def __init__(self, catalog_name: str, function_path: Any) -> None:
        super().__init__(
            f"Function {function_path} already exists in Catalog {catalog_name}.",
            catalog_name=catalog_name,
            function_path=str(function_path),
        )


class FunctionNotExistError(CatalogError):
    """Function does not exist at the given path."""

    def __init__(self, catalog_name: str, function_path: Any) -> None:
        super().__init__(
            f"Function {function_path} does not exist in Catalog {catalog_name}.",
            catalog_name=catalog_name,
            function_path=str(function_path),
        )


class PartitionAlreadyExistsError(CatalogError):
    """Partition with an equal full spec already exists."""

    def __init__(self, catalog_name: str, table_path: Any, partition_spec: Any) -> None:
        super().__init__(
            f"Partition {partition_spec} of table {table_path} "
            f"in catalog {catalog_name} already exists.",
            catalog_name=catalog_name,
            table_path=str(table_path),
            partition_spec=str(partition_spec),
        )


class PartitionNotExistError(CatalogError):
    """Partition spec does not resolve to a stored partition."""

    def __init__(self, catalog_name: str, table_path: Any, partition_spec: Any) -> None:
        super().__init__(
            f"Partition {partition_spec} of table {table_path} "
            f"in catalog {catalog_name} does not exist.",
            catalog_name=catalog_name,
            table_path=str(table_path),
            partition_spec=str(partition_spec),
        )


class PartitionSpecInvalidError(CatalogError):
    """Partition spec keys differ from the table's partition keys."""

    def __init__(
        self,
        catalog_name: str,
        partition_keys: list[str],
        table_path: Any,
        partition_spec: Any,
    ) -> None:
        super().__init__(
            f"PartitionSpec {partition_spec} does not match partition keys "
            f"{partition_keys} of table {table_path} in catalog {catalog_name}.",
            catalog_name=catalog_name,
            partition_keys=list(partition_keys),
            table_path=str(table_path),
            partition_spec=str(partition_spec),
        )
