"""Tests for the exception hierarchy."""

import pytest

from lakecatalog.catalog.identity import ObjectPath
from lakecatalog.catalog.partitions import CatalogPartitionSpec
from lakecatalog.exceptions import (
    CatalogError,
    DatabaseAlreadyExistError,
    DatabaseNotEmptyError,
    DatabaseNotExistError,
    FunctionAlreadyExistError,
    FunctionNotExistError,
    InvalidIdentifierError,
    LakeCatalogError,
    PartitionAlreadyExistsError,
    PartitionNotExistError,
    PartitionSpecInvalidError,
    StorageBackendError,
    StorageError,
    TableAlreadyExistError,
    TableNotExistError,
    TableNotPartitionedError,
)

PATH = ObjectPath.parse("db1.t1")
SPEC = CatalogPartitionSpec({"second": "bob"})


class TestCatalogErrors:
    """Tests for catalog condition errors."""

    @pytest.mark.parametrize(
        "error",
        [
            DatabaseAlreadyExistError("c", "db1"),
            DatabaseNotExistError("c", "db1"),
            DatabaseNotEmptyError("c", "db1"),
            TableAlreadyExistError("c", PATH),
            TableNotExistError("c", PATH),
            TableNotPartitionedError("c", PATH),
            FunctionAlreadyExistError("c", PATH),
            FunctionNotExistError("c", PATH),
            PartitionAlreadyExistsError("c", PATH, SPEC),
            PartitionNotExistError("c", PATH, SPEC),
            PartitionSpecInvalidError("c", ["second", "third"], PATH, SPEC),
        ],
    )
    def test_all_are_catalog_errors(self, error):
        """Test every condition can be caught as CatalogError."""
        assert isinstance(error, CatalogError)
        assert isinstance(error, LakeCatalogError)
        assert error.context["catalog_name"] == "c"
        assert error.message.endswith(".")

    def test_to_dict(self):
        error = TableNotExistError("c", PATH)

        assert error.to_dict() == {
            "error_type": "TableNotExistError",
            "message": "Table (or view) db1.t1 does not exist in Catalog c.",
            "context": {"catalog_name": "c", "table_path": "db1.t1"},
        }

    def test_partition_context_is_rendered(self):
        error = PartitionNotExistError("c", PATH, SPEC)

        assert error.context["partition_spec"] == "{second=bob}"
        assert str(error) == "Partition {second=bob} of table db1.t1 in catalog c does not exist."


class TestOtherErrors:
    """Tests for non-catalog errors."""

    def test_storage_backend_error(self):
        error = StorageBackendError("local", "write", "disk full")

        assert isinstance(error, StorageError)
        assert not isinstance(error, CatalogError)
        assert error.message == "Storage backend error (local): write - disk full"
        assert error.context["operation"] == "write"

    def test_invalid_identifier(self):
        error = InvalidIdentifierError("a.b.c")

        assert isinstance(error, ValueError)
        assert error.context == {"text": "a.b.c"}
