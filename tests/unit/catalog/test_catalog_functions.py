"""Tests for function operations of the Catalog."""

import pytest

from lakecatalog.catalog.schemas import CatalogFunction
from lakecatalog.exceptions import (
    CatalogError,
    DatabaseNotExistError,
    FunctionAlreadyExistError,
    FunctionNotExistError,
)

from factories import DB1, create_another_function, create_db, create_function, create_table


class ScalarFunction(CatalogFunction):
    """Function subtype with its own kind."""

    kind: str = "scalar_function"


@pytest.fixture
def db1(catalog):
    catalog.create_database(DB1, create_db())
    return DB1


class TestFunctionLifecycle:
    """Tests for function create/get/alter/drop."""

    def test_create_and_get(self, catalog, db1, path1):
        catalog.create_function(path1, create_function())

        assert catalog.get_function(path1) == create_function()
        assert catalog.function_exists(path1)
        assert catalog.list_functions(DB1) == ["t1"]

    def test_create_in_missing_database(self, catalog, non_exist_db_path):
        with pytest.raises(DatabaseNotExistError):
            catalog.create_function(non_exist_db_path, create_function())

    def test_create_existing(self, catalog, db1, path1):
        catalog.create_function(path1, create_function())

        with pytest.raises(FunctionAlreadyExistError) as exc_info:
            catalog.create_function(path1, create_function())

        assert exc_info.value.message == "Function db1.t1 already exists in Catalog test-catalog."

    def test_create_existing_ignored(self, catalog, db1, path1):
        catalog.create_function(path1, create_function())
        catalog.create_function(path1, create_another_function(), ignore_if_exists=True)

        assert catalog.get_function(path1) == create_function()

    def test_functions_independent_of_tables(self, catalog, db1, path1):
        """Test a function and a table can share a name."""
        catalog.create_table(path1, create_table())
        catalog.create_function(path1, create_function())

        assert catalog.table_exists(path1)
        assert catalog.function_exists(path1)
        assert catalog.list_tables(DB1) == ["t1"]

    def test_get_missing(self, catalog, db1, non_exist_object_path):
        with pytest.raises(FunctionNotExistError) as exc_info:
            catalog.get_function(non_exist_object_path)

        assert exc_info.value.message == (
            "Function db1.nonexist does not exist in Catalog test-catalog."
        )

    def test_alter(self, catalog, db1, path1):
        catalog.create_function(path1, create_function())
        catalog.alter_function(path1, create_another_function())

        assert catalog.get_function(path1).class_name == "com.example.MyOtherScalarFunction"

    def test_alter_missing(self, catalog, db1, non_exist_object_path):
        with pytest.raises(FunctionNotExistError):
            catalog.alter_function(non_exist_object_path, create_function())

        catalog.alter_function(non_exist_object_path, create_function(), ignore_if_not_exists=True)
        assert not catalog.function_exists(non_exist_object_path)

    def test_alter_kind_mismatch(self, catalog, db1, path1):
        catalog.create_function(path1, create_function())

        with pytest.raises(CatalogError) as exc_info:
            catalog.alter_function(path1, ScalarFunction(class_name="x.Y"))

        assert exc_info.value.message == (
            "Function types don't match. "
            "Existing function is 'function' and new function is 'scalar_function'."
        )

    def test_drop(self, catalog, db1, path1):
        catalog.create_function(path1, create_function())
        catalog.drop_function(path1)

        assert not catalog.function_exists(path1)

    def test_drop_missing(self, catalog, db1, non_exist_object_path):
        with pytest.raises(FunctionNotExistError):
            catalog.drop_function(non_exist_object_path)

        catalog.drop_function(non_exist_object_path, ignore_if_not_exists=True)

    def test_list_missing_database(self, catalog):
        with pytest.raises(DatabaseNotExistError):
            catalog.list_functions("nonexistent")
