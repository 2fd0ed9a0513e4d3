"""Tests for Catalog open/close, locking and backend failure handling."""

import threading
from unittest.mock import patch

import pytest

from lakecatalog.catalog.manager import Catalog, CatalogState, create_catalog
from lakecatalog.config import Settings
from lakecatalog.exceptions import CatalogError, DatabaseAlreadyExistError, StorageBackendError
from lakecatalog.storage.backend import InMemoryBackend
from lakecatalog.storage.local_backend import LocalBackend

from factories import DB1, create_db


class TestOpenClose:
    """Tests for the catalog lifecycle."""

    def test_open_creates_default_database(self):
        catalog = Catalog("c", default_database="main")

        assert catalog.state is CatalogState.CREATED
        catalog.open()

        assert catalog.is_open
        assert catalog.list_databases() == ["main"]

    def test_open_is_idempotent(self):
        catalog = Catalog("c").open()

        assert catalog.open() is catalog
        assert catalog.list_databases() == ["default"]

    def test_operation_before_open(self):
        catalog = Catalog("c")

        with pytest.raises(CatalogError, match="Catalog c is not open."):
            catalog.list_databases()

    def test_operation_after_close(self):
        """Test every operation is rejected once closed."""
        with Catalog("c") as catalog:
            catalog.create_database(DB1, create_db())

        assert catalog.state is CatalogState.CLOSED
        with pytest.raises(CatalogError) as exc_info:
            catalog.database_exists(DB1)

        assert exc_info.value.message == "Catalog c is closed."

    def test_close_twice(self):
        catalog = Catalog("c").open()

        catalog.close()
        catalog.close()

        assert catalog.state is CatalogState.CLOSED

    def test_reopen_after_close(self):
        catalog = Catalog("c").open()
        catalog.close()

        with pytest.raises(CatalogError, match="is closed"):
            catalog.open()

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            Catalog("")


class TestBackendFailures:
    """Tests for wrapping backend failures."""

    def test_storage_error_wrapped(self):
        """Test backend errors surface as CatalogError chained to the cause."""
        backend = InMemoryBackend()
        catalog = Catalog("c", backend=backend).open()

        with patch.object(
            backend,
            "put_database",
            side_effect=StorageBackendError("memory", "put_database", "disk full"),
        ):
            with pytest.raises(CatalogError) as exc_info:
                catalog.create_database(DB1, create_db())

        assert "Failed to create database in catalog c" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, StorageBackendError)
        assert not catalog.database_exists(DB1)

    def test_rename_rolls_back_on_failure(self, path1, path3):
        """Test a failed rename leaves the source in place and no target."""
        from lakecatalog.catalog.schemas import CatalogTable, CatalogTableStatistics

        backend = InMemoryBackend()
        catalog = Catalog("c", backend=backend).open()
        catalog.create_database(DB1, create_db())
        catalog.create_table(path1, CatalogTable())
        catalog.alter_table_statistics(path1, CatalogTableStatistics(row_count=1))

        with patch.object(
            backend,
            "put_statistics",
            side_effect=StorageBackendError("memory", "put_statistics", "boom"),
        ):
            with pytest.raises(CatalogError):
                catalog.rename_table(path1, path3.object_name)

        assert catalog.table_exists(path1)
        assert not catalog.table_exists(path3)


class TestConcurrency:
    """Tests for serialized operations."""

    def test_concurrent_create_single_winner(self):
        """Test only one of several concurrent creates succeeds."""
        catalog = Catalog("c").open()
        errors = []
        barrier = threading.Barrier(8)

        def create():
            barrier.wait()
            try:
                catalog.create_database(DB1, create_db())
            except DatabaseAlreadyExistError as e:
                errors.append(e)

        threads = [threading.Thread(target=create) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(errors) == 7
        assert catalog.database_exists(DB1)


class TestCreateCatalog:
    """Tests for the create_catalog factory."""

    def test_from_settings_memory(self):
        settings = Settings(catalog_name="prod", default_database="main")

        with create_catalog(settings) as catalog:
            assert catalog.name == "prod"
            assert catalog.default_database == "main"
            assert catalog.list_databases() == ["main"]

    def test_from_settings_local(self, tmp_path):
        settings = Settings(metadata_backend="local", local_metadata_path=tmp_path)

        catalog = create_catalog(settings)

        assert isinstance(catalog._backend, LocalBackend)
        assert (tmp_path / "default" / "database.json").exists()
        catalog.close()
