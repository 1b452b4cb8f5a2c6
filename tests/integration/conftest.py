"""
Integration test fixtures.

Provides a Database on a real PostgreSQL server named by TEST_DATABASE_URL.
Every test in this package is skipped when the variable is not set.
"""

import os

import pytest

from db.access import Database
from db.connection import ConnectionPool
from db.init_db import create_tables

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

_INVENTORY_TABLES = (
    "license_assignments, licenses, pc_software, vm_software, software, "
    "hardware_installation, hil_operation, hil_technology, test_bench_project_overview, "
    "wetbenches, pc_overview, vm_instances, model_stands, test_benches, projects"
)


def pytest_collection_modifyitems(config, items):
    if TEST_DATABASE_URL:
        return
    skip = pytest.mark.skip(reason="TEST_DATABASE_URL not set")
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def pool():
    with ConnectionPool(TEST_DATABASE_URL, 1, 4) as pool:
        yield pool


@pytest.fixture
def db(pool):
    """A Database over empty inventory tables."""
    database = Database(pool)
    create_tables(database)
    database.update(f"TRUNCATE {_INVENTORY_TABLES} RESTART IDENTITY CASCADE;")
    yield database
    database.update(f"TRUNCATE {_INVENTORY_TABLES} RESTART IDENTITY CASCADE;")
