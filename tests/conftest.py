#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
import sqlite3

import pytest

from distributed_dbapi import DataSource
from distributed_dbapi._internal.utils import warning_dict

TABLE_NAME = "orders"


def sqlite_connection(source):
    """Connection factory of the tests, every data source url is a SQLite database file."""
    return sqlite3.connect(source.url)


@pytest.fixture
def create_sqlite_source(tmp_path):
    """Creates a SQLite database file holding ``TABLE_NAME`` with the given keys and returns its data source."""
    counter = iter(range(1_000_000))

    def create(keys, name=None):
        path = tmp_path / f"{name or 'db'}_{next(counter)}.db"
        conn = sqlite3.connect(str(path))
        try:
            conn.execute(f"CREATE TABLE {TABLE_NAME} (id INTEGER, val TEXT)")
            conn.executemany(
                f"INSERT INTO {TABLE_NAME} VALUES (?, ?)",
                [(key, f"{name or 'row'}_{key}") for key in keys],
            )
            conn.commit()
        finally:
            conn.close()
        return DataSource(str(path), table=TABLE_NAME)

    return create


@pytest.fixture
def table_sources():
    """Five data sources which are never connected to."""
    return [
        DataSource(f"postgresql://host/db{i}", table=f"T{i}") for i in range(1, 6)
    ]


@pytest.fixture
def connection_factory():
    return sqlite_connection


@pytest.fixture(autouse=True)
def clear_warning_dict():
    yield
    # clear the warning dict so that warnings from one test don't affect
    # warnings from other tests.
    warning_dict.clear()
