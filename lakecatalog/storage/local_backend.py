"""Local filesystem metadata backend for lakecatalog.

This module provides a filesystem implementation of the MetadataBackend
interface with support for:
- One directory per database
- One JSON document per table, view and function
- One JSON document per partitioned table holding its partitions in
  creation order
- Atomic document replacement and path validation
"""

import os
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, Field, ValidationError

from lakecatalog.catalog.identity import ObjectPath
from lakecatalog.catalog.partitions import CatalogPartitionSpec
from lakecatalog.catalog.schemas import (
    BaseTable,
    CatalogBaseTable,
    CatalogColumnStatistics,
    CatalogDatabase,
    CatalogFunction,
    CatalogPartition,
    CatalogTableStatistics,
)
from lakecatalog.exceptions import StorageBackendError
from lakecatalog.storage.backend import MetadataBackend

logger = structlog.get_logger(__name__)

DocumentT = TypeVar("DocumentT", bound=BaseModel)

DATABASE_FILE = "database.json"
TABLES_DIR = "tables"
FUNCTIONS_DIR = "functions"
PARTITIONS_DIR = "partitions"


class TableDocument(BaseModel):
    """Stored form of a table or view with its statistics."""

    table: BaseTable
    statistics: CatalogTableStatistics | None = None
    column_statistics: CatalogColumnStatistics | None = None


class PartitionRecord(BaseModel):
    """Stored form of one partition."""

    spec: dict[str, str]
    partition: CatalogPartition
    statistics: CatalogTableStatistics | None = None
    column_statistics: CatalogColumnStatistics | None = None


class PartitionsDocument(BaseModel):
    """All partitions of a table, in creation order."""

    partitions: list[PartitionRecord] = Field(default_factory=list)

    def find(self, spec: CatalogPartitionSpec) -> PartitionRecord | None:
        for record in self.partitions:
            if record.spec == spec.partition_spec:
                return record
        return None


class LocalBackend(MetadataBackend):
    """Local filesystem metadata backend.

    Stores records at:
        {base_path}/{database}/database.json
        {base_path}/{database}/tables/{object}.json
        {base_path}/{database}/partitions/{object}.json
        {base_path}/{database}/functions/{object}.json

    Example:
        backend = LocalBackend(Path("~/.lakecatalog/metadata"))
        backend.put_database("sales", CatalogDatabase(comment="Sales data"))
    """

    name = "local"

    def __init__(self, base_path: Path) -> None:
        """Initialize local filesystem backend.

        Args:
            base_path: Root directory for all catalog metadata
        """
        self.base_path = Path(base_path).expanduser().resolve()
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageBackendError(self.name, "init", str(e)) from e

    # ------ paths ------

    def _resolve(self, *segments: str) -> Path:
        """
        Build a path under the base directory.

        Raises:
            StorageBackendError: If a segment is unsafe or the path would
                escape the base directory
        """
        for segment in segments:
            if not segment or segment in (".", "..") or "/" in segment or "\\" in segment:
                raise StorageBackendError(
                    self.name, "path_validation", f"Invalid name: {segment!r}"
                )

        full_path = self.base_path.joinpath(*segments).resolve()
        try:
            full_path.relative_to(self.base_path)
        except ValueError:
            raise StorageBackendError(
                self.name,
                "path_validation",
                f"Invalid path: {'/'.join(segments)} would escape base directory",
            )
        return full_path

    def _locate(self, build: Callable[..., Path], *args: Any) -> Path | None:
        """Path of a record, or None when its name cannot be stored here."""
        try:
            return build(*args)
        except StorageBackendError as e:
            if e.context.get("operation") != "path_validation":
                raise
            return None

    def _database_file(self, name: str) -> Path:
        return self._database_dir(name) / DATABASE_FILE

    def _database_dir(self, name: str) -> Path:
        return self._resolve(name)

    def _table_file(self, path: ObjectPath) -> Path:
        return self._resolve(path.database_name, TABLES_DIR, f"{path.object_name}.json")

    def _partitions_file(self, path: ObjectPath) -> Path:
        return self._resolve(path.database_name, PARTITIONS_DIR, f"{path.object_name}.json")

    def _function_file(self, path: ObjectPath) -> Path:
        return self._resolve(path.database_name, FUNCTIONS_DIR, f"{path.object_name}.json")

    # ------ document I/O ------

    def _read(self, file_path: Path | None, model: type[DocumentT]) -> DocumentT | None:
        if file_path is None or not file_path.exists():
            return None
        try:
            return model.model_validate_json(file_path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.error("Failed to read metadata document", path=str(file_path), error=str(e))
            raise StorageBackendError(self.name, "read", f"{file_path}: {e}") from e

    def _write(self, file_path: Path, document: BaseModel) -> None:
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(document.model_dump_json(indent=2))
                os.replace(tmp_name, file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error("Failed to write metadata document", path=str(file_path), error=str(e))
            raise StorageBackendError(self.name, "write", f"{file_path}: {e}") from e

    def _remove(self, file_path: Path) -> None:
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageBackendError(self.name, "delete", f"{file_path}: {e}") from e

    def _list_names(self, directory: Path) -> list[str]:
        if not directory.is_dir():
            return []
        try:
            return sorted(
                entry.stem
                for entry in directory.iterdir()
                if entry.suffix == ".json"
            )
        except OSError as e:
            raise StorageBackendError(self.name, "list", f"{directory}: {e}") from e

    # ------ databases ------

    def database_exists(self, name: str) -> bool:
        file_path = self._locate(self._database_file, name)
        return file_path is not None and file_path.exists()

    def get_database(self, name: str) -> CatalogDatabase | None:
        return self._read(self._locate(self._database_file, name), CatalogDatabase)

    def put_database(self, name: str, database: CatalogDatabase) -> None:
        self._write(self._database_file(name), database)

    def delete_database(self, name: str) -> None:
        directory = self._database_dir(name)
        if not directory.exists():
            return
        try:
            shutil.rmtree(directory)
        except OSError as e:
            raise StorageBackendError(self.name, "delete", f"{directory}: {e}") from e

    def list_databases(self) -> list[str]:
        try:
            return sorted(
                entry.name
                for entry in self.base_path.iterdir()
                if entry.is_dir() and (entry / DATABASE_FILE).exists()
            )
        except OSError as e:
            raise StorageBackendError(self.name, "list", str(e)) from e

    # ------ tables and views ------

    def table_exists(self, path: ObjectPath) -> bool:
        file_path = self._locate(self._table_file, path)
        return file_path is not None and file_path.exists()

    def get_table(self, path: ObjectPath) -> CatalogBaseTable | None:
        document = self._read(self._locate(self._table_file, path), TableDocument)
        return document.table if document is not None else None

    def put_table(self, path: ObjectPath, table: CatalogBaseTable) -> None:
        file_path = self._table_file(path)
        stored = self._read(file_path, TableDocument)
        try:
            document = TableDocument(
                table=table,
                statistics=stored.statistics if stored else None,
                column_statistics=stored.column_statistics if stored else None,
            )
        except ValidationError as e:
            raise StorageBackendError(
                self.name, "write", f"{path}: unsupported table kind '{table.kind}'"
            ) from e
        self._write(file_path, document)

    def delete_table(self, path: ObjectPath) -> None:
        self._remove(self._table_file(path))
        self._remove(self._partitions_file(path))

    def list_tables(self, database_name: str) -> list[str]:
        return self._list_names(self._database_dir(database_name) / TABLES_DIR)

    # ------ functions ------

    def function_exists(self, path: ObjectPath) -> bool:
        file_path = self._locate(self._function_file, path)
        return file_path is not None and file_path.exists()

    def get_function(self, path: ObjectPath) -> CatalogFunction | None:
        return self._read(self._locate(self._function_file, path), CatalogFunction)

    def put_function(self, path: ObjectPath, function: CatalogFunction) -> None:
        self._write(self._function_file(path), function)

    def delete_function(self, path: ObjectPath) -> None:
        self._remove(self._function_file(path))

    def list_functions(self, database_name: str) -> list[str]:
        return self._list_names(self._database_dir(database_name) / FUNCTIONS_DIR)

    # ------ partitions ------

    def _partitions(self, path: ObjectPath) -> PartitionsDocument:
        return self._read(self._partitions_file(path), PartitionsDocument) or PartitionsDocument()

    def list_partition_specs(self, path: ObjectPath) -> list[CatalogPartitionSpec]:
        return [CatalogPartitionSpec(record.spec) for record in self._partitions(path).partitions]

    def get_partition(
        self, path: ObjectPath, spec: CatalogPartitionSpec
    ) -> CatalogPartition | None:
        record = self._partitions(path).find(spec)
        return record.partition if record is not None else None

    def put_partition(
        self, path: ObjectPath, spec: CatalogPartitionSpec, partition: CatalogPartition
    ) -> None:
        document = self._partitions(path)
        record = document.find(spec)
        if record is None:
            document.partitions.append(
                PartitionRecord(spec=dict(spec.partition_spec), partition=partition)
            )
        else:
            record.partition = partition
        self._write(self._partitions_file(path), document)

    def delete_partition(self, path: ObjectPath, spec: CatalogPartitionSpec) -> None:
        document = self._partitions(path)
        document.partitions = [
            record for record in document.partitions if record.spec != spec.partition_spec
        ]
        self._write(self._partitions_file(path), document)

    # ------ statistics ------

    def _get_stat(self, path: ObjectPath, spec: CatalogPartitionSpec | None, field: str):
        if spec is None:
            document = self._read(self._table_file(path), TableDocument)
        else:
            document = self._partitions(path).find(spec)
        return getattr(document, field) if document is not None else None

    def _put_stat(
        self, path: ObjectPath, spec: CatalogPartitionSpec | None, field: str, value: BaseModel
    ) -> None:
        if spec is None:
            file_path = self._table_file(path)
            document = self._read(file_path, TableDocument)
            if document is None:
                raise StorageBackendError(self.name, "put_statistics", f"no table at {path}")
            self._write(file_path, document.model_copy(update={field: value}))
            return

        partitions = self._partitions(path)
        record = partitions.find(spec)
        if record is None:
            raise StorageBackendError(
                self.name, "put_statistics", f"no partition {spec} of table {path}"
            )
        setattr(record, field, value)
        self._write(self._partitions_file(path), partitions)

    def get_statistics(
        self, path: ObjectPath, spec: CatalogPartitionSpec | None = None
    ) -> CatalogTableStatistics | None:
        return self._get_stat(path, spec, "statistics")

    def put_statistics(
        self,
        path: ObjectPath,
        statistics: CatalogTableStatistics,
        spec: CatalogPartitionSpec | None = None,
    ) -> None:
        self._put_stat(path, spec, "statistics", statistics)

    def get_column_statistics(
        self, path: ObjectPath, spec: CatalogPartitionSpec | None = None
    ) -> CatalogColumnStatistics | None:
        return self._get_stat(path, spec, "column_statistics")

    def put_column_statistics(
        self,
        path: ObjectPath,
        statistics: CatalogColumnStatistics,
        spec: CatalogPartitionSpec | None = None,
    ) -> None:
        self._put_stat(path, spec, "column_statistics", statistics)
