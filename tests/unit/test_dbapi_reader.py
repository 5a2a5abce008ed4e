#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#

import threading
from collections import defaultdict
from unittest.mock import Mock

import pytest

from distributed_dbapi import (
    DataSource,
    DistributedDbapiReader,
    PagedSourceCursor,
    read_partitions_with_threads,
)
from distributed_dbapi.exceptions import (
    ConfigurationError,
    DataSourceReaderException,
    ResourceError,
)


class FakeReader:
    """Stands in for a partition cursor, yields ``rows`` then raises ``error`` if given."""

    def __init__(self, rows, error=None) -> None:
        self.rows = rows
        self.error = error
        self.closed = threading.Event()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.closed.set()

    def __iter__(self):
        yield from self.rows
        if self.error is not None:
            raise self.error


def _rows_by_partition(pairs):
    result = defaultdict(list)
    for partition_idx, row in pairs:
        result[partition_idx].append(row)
    return result


def test_read_all_partitions(create_sqlite_source, connection_factory):
    sources = [create_sqlite_source(range(i * 10, i * 10 + 7), f"s{i}") for i in range(4)]
    reader = DistributedDbapiReader(
        connection_factory, sources, 2, order_by="id", page_size=3
    )

    rows = _rows_by_partition(reader.read())

    assert [len(p) for p in reader.partitions] == [2, 2]
    assert [row[0] for row in rows[0]] == list(range(0, 7)) + list(range(10, 17))
    assert [row[0] for row in rows[1]] == list(range(20, 27)) + list(range(30, 37))


def test_read_split_source(create_sqlite_source, connection_factory):
    source = create_sqlite_source(range(100))
    reader = DistributedDbapiReader(
        connection_factory, [source], 4, split_key="id", page_size=7
    )

    rows = _rows_by_partition(reader.read(max_workers=2))

    assert sorted(row[0] for part in rows.values() for row in part) == list(range(100))
    for partition_idx, part in rows.items():
        assert all(row[0] % 4 == partition_idx for row in part)


def test_configuration_error_before_any_read(table_sources):
    create_connection = Mock()
    with pytest.raises(ConfigurationError, match="split key required"):
        DistributedDbapiReader(create_connection, table_sources[:1], 2)
    with pytest.raises(ConfigurationError, match="page_size"):
        DistributedDbapiReader(create_connection, table_sources, 2, page_size=0)
    create_connection.assert_not_called()


def test_readers(table_sources):
    reader = DistributedDbapiReader(
        Mock(), table_sources, 2, split_key="id", where="id > 0", page_size=50
    )

    cursors = reader.readers()

    assert len(cursors) == reader.num_partitions == 2
    assert all(isinstance(cursor, PagedSourceCursor) for cursor in cursors)
    assert [cursor.partition for cursor in cursors] == reader.partitions
    assert all(cursor.page_size == 50 for cursor in cursors)
    assert all(cursor.where == "id > 0" for cursor in cursors)


def test_partition_failure_does_not_cancel_others(
    create_sqlite_source, connection_factory
):
    healthy = [create_sqlite_source(range(5)), create_sqlite_source(range(5, 10))]
    broken = DataSource("missing.db", table="broken")

    def create_connection(source):
        if source.table == "broken":
            raise OSError("unreachable")
        return connection_factory(source)

    reader = DistributedDbapiReader(
        create_connection, [*healthy, broken, create_sqlite_source([42])], 2
    )

    rows = []
    with pytest.raises(ResourceError, match="unreachable"):
        for pair in reader.read():
            rows.append(pair)

    assert sorted(row[0] for _, row in rows) == list(range(10))
    assert all(partition_idx == 0 for partition_idx, _ in rows)


def test_lowest_partition_error_is_raised():
    readers = [
        FakeReader([1, 2]),
        FakeReader([3], error=ValueError("partition 1 failed")),
        FakeReader([4], error=KeyError("partition 2 failed")),
        FakeReader([5, 6]),
    ]

    rows = []
    with pytest.raises(DataSourceReaderException) as exc_info:
        for pair in read_partitions_with_threads(readers):
            rows.append(pair)

    assert exc_info.value.error_code == "1400"
    assert "Partition 1" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, ValueError)
    assert sorted(rows) == [(0, 1), (0, 2), (1, 3), (2, 4), (3, 5), (3, 6)]
    assert all(reader.closed.is_set() for reader in readers)


def test_reader_errors_are_raised_unwrapped():
    error = ResourceError("cannot connect", "1200")
    with pytest.raises(ResourceError) as exc_info:
        list(read_partitions_with_threads([FakeReader([], error=error)]))
    assert exc_info.value is error


class WorkerAborted(BaseException):
    pass


@pytest.mark.timeout(60)
def test_base_exception_in_partition_is_reported():
    readers = [FakeReader([1], error=WorkerAborted("aborted")), FakeReader([2, 3])]

    rows = []
    with pytest.raises(DataSourceReaderException) as exc_info:
        for pair in read_partitions_with_threads(readers):
            rows.append(pair)

    assert exc_info.value.error_code == "1400"
    assert isinstance(exc_info.value.__cause__, WorkerAborted)
    assert sorted(rows) == [(0, 1), (1, 2), (1, 3)]
    assert all(reader.closed.is_set() for reader in readers)


def test_no_readers():
    assert list(read_partitions_with_threads([])) == []


@pytest.mark.timeout(60)
def test_consumer_stops_early():
    readers = [FakeReader(range(1000)) for _ in range(3)]
    pairs = read_partitions_with_threads(readers, queue_size=1)

    first = [next(pairs) for _ in range(3)]
    pairs.close()

    assert len(first) == 3
    # workers blocked on the full queue are released and close their readers
    assert all(reader.closed.wait(10) for reader in readers)


def test_from_yaml(tmp_path, create_sqlite_source, connection_factory):
    first = create_sqlite_source(range(4))
    second = create_sqlite_source(range(4, 6))
    path = tmp_path / "sources.yaml"
    path.write_text(
        "sources:\n"
        f"  - url: {first.url}\n"
        "    table: orders\n"
        f"  - url: {second.url}\n"
        "    table: orders\n"
        "column: [id]\n"
        "order_by: id\n"
        "page_size: 2\n"
        "num_partitions: 2\n"
    )

    reader = DistributedDbapiReader.from_yaml(str(path), connection_factory)
    assert reader.num_partitions == 2
    assert reader.page_size == 2
    assert sorted(row for _, row in reader.read()) == [(i,) for i in range(6)]

    reader = DistributedDbapiReader.from_yaml(
        str(path), connection_factory, num_partitions=1, page_size=3
    )
    assert reader.num_partitions == 1
    assert reader.page_size == 3
