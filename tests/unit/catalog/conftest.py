"""Pytest fixtures for catalog tests."""

import pytest

from lakecatalog.catalog.identity import ObjectPath
from lakecatalog.catalog.manager import Catalog
from lakecatalog.storage.backend import InMemoryBackend
from lakecatalog.storage.local_backend import LocalBackend


@pytest.fixture(params=["memory", "local"])
def backend(request, tmp_path):
    """Fresh metadata backend, once per backend type."""
    if request.param == "local":
        return LocalBackend(tmp_path / "metadata")
    return InMemoryBackend()


@pytest.fixture
def catalog(backend):
    """Open catalog named 'test-catalog'."""
    with Catalog("test-catalog", backend=backend) as catalog:
        yield catalog


@pytest.fixture
def path1():
    return ObjectPath(database_name="db1", object_name="t1")


@pytest.fixture
def path2():
    return ObjectPath(database_name="db2", object_name="t2")


@pytest.fixture
def path3():
    return ObjectPath(database_name="db1", object_name="t2")


@pytest.fixture
def path4():
    return ObjectPath(database_name="db1", object_name="t3")


@pytest.fixture
def non_exist_db_path():
    return ObjectPath.parse("non.exist")


@pytest.fixture
def non_exist_object_path():
    return ObjectPath.parse("db1.nonexist")
