#!/usr/bin/env python3
#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
import logging
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from typing_extensions import Self

from distributed_dbapi._internal.config import (
    FETCH_SIZE,
    GLOBAL_SETTINGS,
    PAGE_SIZE,
    QUERY_TIMEOUT,
    READ_QUEUE_SIZE,
    resolve_reader_option,
)
from distributed_dbapi._internal.data_source.datasource import DataSource, Partition
from distributed_dbapi._internal.data_source.datasource_partitioner import (
    DataSourcePartitioner,
)
from distributed_dbapi._internal.data_source.datasource_reader import (
    PagedSourceCursor,
)
from distributed_dbapi._internal.data_source.datasource_typing import (
    ConnectionFactory,
)
from distributed_dbapi._internal.data_source.key_range import KeyRangeGenerator
from distributed_dbapi._internal.data_source.registry import (
    load_data_source_config,
)
from distributed_dbapi._internal.data_source.utils import (
    read_partitions_with_threads,
)

logger = logging.getLogger(__name__)


class DistributedDbapiReader:
    """
    Reads many tables, possibly spread over many databases, with a fixed number of parallel
    partitions and a fixed page size per query.

    The data sources are assigned to ``num_partitions`` partitions when the reader is created, so an
    invalid combination of data sources, partition count and split key fails before anything is read.
    Each partition is then read by its own :class:`PagedSourceCursor`, either in this process through
    :meth:`read`, or anywhere else by shipping the cursors returned by :meth:`readers`.

    Usage Notes:
        - With fewer data sources than partitions, ``split_key`` is required. Every data source is
          then read by every partition, each partition reading the rows where
          ``MOD(ABS(split_key), num_partitions)`` equals its index. Rows with a NULL key are read by
          partition 0.
        - ``page_size`` bounds the rows requested by one query. Pages are addressed by offset, so
          ``order_by`` should name a unique column when the source tables change while being read.
        - A connection or query failure ends the partition it happened in. Other partitions are not
          cancelled and nothing is retried.

    Example::

        >>> import sqlite3
        >>> def create_connection(source):  # doctest: +SKIP
        ...     return sqlite3.connect(source.url)
        >>> reader = DistributedDbapiReader(  # doctest: +SKIP
        ...     create_connection,
        ...     [DataSource("a.db", table="orders"), DataSource("b.db", table="orders")],
        ...     num_partitions=2,
        ... )
        >>> rows = [row for _, row in reader.read()]  # doctest: +SKIP

    Args:
        create_connection: Called with a :class:`DataSource`, returns a DBAPI2 connection to it.
        sources: The data sources to read.
        num_partitions: Number of partitions read in parallel.
        split_key: Integer column the data sources are split on when they cannot be assigned whole.
        column: Columns to read from sources which do not list their own, all columns by default.
        where: Filter condition applied to every data source.
        order_by: Column the pages of every data source are ordered by.
        page_size: Number of rows requested by one page query.
        fetch_size: Advisory number of rows fetched from the driver at once.
        query_timeout: Timeout of one query in seconds, 0 disables it.
        key_range_generator: Splits the data sources by key, modulo of the split key by default.
    """

    def __init__(
        self,
        create_connection: ConnectionFactory,
        sources: Sequence[DataSource],
        num_partitions: int,
        *,
        split_key: Optional[str] = None,
        column: Optional[Sequence[str]] = None,
        where: Optional[str] = None,
        order_by: Optional[str] = None,
        page_size: Optional[int] = None,
        fetch_size: Optional[int] = None,
        query_timeout: Optional[int] = None,
        key_range_generator: Optional[KeyRangeGenerator] = None,
    ) -> None:
        self.create_connection = create_connection
        self.split_key = split_key
        self.column = column
        self.where = where
        self.order_by = order_by
        self.page_size = resolve_reader_option(PAGE_SIZE, page_size)
        self.fetch_size = resolve_reader_option(FETCH_SIZE, fetch_size)
        self.query_timeout = resolve_reader_option(QUERY_TIMEOUT, query_timeout)
        self._partitioner = DataSourcePartitioner(
            sources, num_partitions, split_key, key_range_generator
        )
        self.key_range_generator = self._partitioner.key_range_generator
        # planned eagerly so configuration errors surface before any partition starts
        self._partitioner.partitions

    @classmethod
    def from_yaml(
        cls,
        file_path: str,
        create_connection: ConnectionFactory,
        num_partitions: Optional[int] = None,
        **kwargs: Any,
    ) -> Self:
        """
        Creates a reader of the data sources listed in a YAML file. Reader options found in the file
        are used unless given as keyword arguments.
        """
        sources, options = load_data_source_config(file_path)
        options.update(kwargs)
        if num_partitions is not None:
            options["num_partitions"] = num_partitions
        num_partitions = options.pop("num_partitions", None)
        return cls(create_connection, sources, num_partitions, **options)

    @property
    def num_partitions(self) -> int:
        return self._partitioner.num_partitions

    @property
    def partitions(self) -> List[Partition]:
        return self._partitioner.partitions

    def reader(self, partition: Partition) -> PagedSourceCursor:
        return PagedSourceCursor(
            partition,
            self.create_connection,
            split_key=self.split_key,
            column=self.column,
            where=self.where,
            order_by=self.order_by,
            page_size=self.page_size,
            fetch_size=self.fetch_size,
            query_timeout=self.query_timeout,
            key_range_generator=self.key_range_generator,
        )

    def readers(self) -> List[PagedSourceCursor]:
        """One new cursor per partition, in partition order."""
        return [self.reader(partition) for partition in self.partitions]

    def read(
        self,
        max_workers: Optional[int] = None,
        queue_size: Optional[int] = None,
    ) -> Iterator[Tuple[int, Any]]:
        """
        Reads every partition in a thread of its own and returns an iterator of
        ``(partition index, row)`` pairs. Rows of one partition keep their order, rows of different
        partitions interleave.

        Raises:
            DataSourceReaderException: While iterating, once every partition has stopped, if any
                partition failed.
        """
        queue_size = resolve_reader_option(READ_QUEUE_SIZE, queue_size, GLOBAL_SETTINGS)
        readers = self.readers()
        logger.info(
            f"Reading {len(readers)} partitions with page size {self.page_size}"
        )
        return read_partitions_with_threads(readers, max_workers, queue_size)
