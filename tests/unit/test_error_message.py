#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#

import pytest

from distributed_dbapi._internal.error_message import (
    DataSourceReaderExceptionMessages,
)
from distributed_dbapi.exceptions import (
    ConfigurationError,
    DataSourceReaderException,
    QueryError,
    ResourceError,
)


def test_plan_split_key_required():
    ex = DataSourceReaderExceptionMessages.PLAN_SPLIT_KEY_REQUIRED(1, 3)
    assert type(ex) == ConfigurationError
    assert ex.error_code == "1102"
    assert (
        ex.message
        == "split key required when source count < partition count (sources: 1, partitions: 3)."
    )
    assert str(ex) == f"(1102): {ex.message}"


def test_plan_key_range_count_mismatch():
    ex = DataSourceReaderExceptionMessages.PLAN_KEY_RANGE_COUNT_MISMATCH(3, 2)
    assert type(ex) == ConfigurationError
    assert ex.error_code == "1104"
    assert ex.message == (
        "Key range generator returned 2 filter parameter sets, "
        "expected one per partition (3)."
    )


def test_config_invalid_setting():
    ex = DataSourceReaderExceptionMessages.CONFIG_INVALID_SETTING(
        "page_size", 0, "must be greater than or equal to 1"
    )
    assert type(ex) == ConfigurationError
    assert ex.error_code == "1105"
    assert ex.message == "Invalid value 0 for page_size: must be greater than or equal to 1."


def test_source_connection_failed():
    cause = OSError("connection refused")
    ex = DataSourceReaderExceptionMessages.SOURCE_CONNECTION_FAILED(
        "postgresql://host/db", "orders", cause
    )
    assert type(ex) == ResourceError
    assert ex.error_code == "1200"
    assert ex.url == "postgresql://host/db"
    assert ex.table == "orders"
    assert ex.message == (
        "Failed to open a connection to postgresql://host/db for table orders: "
        "OSError('connection refused')"
    )


def test_query_execution_failed():
    ex = DataSourceReaderExceptionMessages.QUERY_EXECUTION_FAILED(
        "SELECT * FROM orders", RuntimeError("boom")
    )
    assert type(ex) == QueryError
    assert ex.error_code == "1300"
    assert ex.query == "SELECT * FROM orders"
    assert ex.message == (
        "Failed to execute page query 'SELECT * FROM orders' due to exception RuntimeError('boom')"
    )
    assert repr(ex) == f"QueryError({ex.message!r}, '1300', 'SELECT * FROM orders')"


def test_query_row_fetch_failed():
    ex = DataSourceReaderExceptionMessages.QUERY_ROW_FETCH_FAILED(
        "SELECT 1", RuntimeError("reset")
    )
    assert type(ex) == QueryError
    assert ex.error_code == "1301"


def test_partition_read_failed():
    ex = DataSourceReaderExceptionMessages.PARTITION_READ_FAILED(
        2, ValueError("bad row")
    )
    assert type(ex) == DataSourceReaderException
    assert ex.error_code == "1400"
    assert str(ex) == "(1400): Partition 2 data fetching thread failed with error: bad row"


@pytest.mark.parametrize(
    "error_class", [ConfigurationError, ResourceError, QueryError]
)
def test_exception_hierarchy(error_class):
    ex = error_class("message", "1000")
    assert isinstance(ex, DataSourceReaderException)
    assert str(ex) == "(1000): message"
    assert str(error_class("message")) == "message"
