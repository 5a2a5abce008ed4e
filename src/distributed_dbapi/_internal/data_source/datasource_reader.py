#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
import pickle
from enum import Enum
from typing import Any, Iterator, List, Optional, Sequence, Tuple
import logging

import cloudpickle

from distributed_dbapi._internal.config import (
    FETCH_SIZE,
    PAGE_SIZE,
    QUERY_TIMEOUT,
    GLOBAL_SETTINGS,
    SettingStore,
    resolve_reader_option,
)
from distributed_dbapi._internal.data_source.datasource import (
    DataSource,
    Partition,
    QueryWindow,
    column_names,
)
from distributed_dbapi._internal.data_source.datasource_typing import (
    Connection,
    ConnectionFactory,
)
from distributed_dbapi._internal.data_source.dbms_dialects import BaseDialect
from distributed_dbapi._internal.data_source.drivers import BaseDriver, PageResult
from distributed_dbapi._internal.data_source.key_range import (
    KeyRangeGenerator,
    ModuloKeyRangeGenerator,
)
from distributed_dbapi._internal.data_source.utils import (
    DBMS_MAP,
    DRIVER_MAP,
    detect_dbms,
)
from distributed_dbapi._internal.error_message import (
    DataSourceReaderExceptionMessages,
)
from distributed_dbapi._internal.utils import mask_url

logger = logging.getLogger(__name__)


class CursorState(Enum):
    AWAITING_SOURCE = "AWAITING_SOURCE"
    PAGING = "PAGING"
    ALL_EXHAUSTED = "ALL_EXHAUSTED"
    FAILED = "FAILED"


class PagedSourceCursor:
    """
    Reads the data sources of one partition, one after another, through offset bounded pages.

    The cursor is driven by a pull protocol: :meth:`reached_end` tells whether the partition has
    more rows, opening the next page of the current source when the open page is consumed, and
    :meth:`produce_next` returns the next row. A source is finished, and the cursor moves to the
    next one, only when a page query for it returns zero rows.

    A connection or query failure is final: the cursor moves to ``FAILED``, keeps the data source
    unfinished and never queries again. A closed cursor does not query again either.

    A cursor is owned by a single worker and is not thread safe.

    Args:
        partition: The partition whose data sources are read, in order.
        create_connection: Called with a :class:`DataSource`, returns a DBAPI2 connection to it.
        split_key: Column the key range split sources of the partition are filtered on.
        column: Columns read from sources which do not list their own. All columns when empty.
        where: Filter condition applied to every source.
        order_by: Column the pages are ordered by.
        page_size: Number of rows of one page query.
        fetch_size: Advisory number of rows fetched from the driver at once, 0 fetches whole pages.
        query_timeout: Timeout of one query in seconds, 0 disables it.
        key_range_generator: Renders the filter of key range split sources.
        settings: Setting store the options default to.
    """

    def __init__(
        self,
        partition: Partition,
        create_connection: ConnectionFactory,
        split_key: Optional[str] = None,
        column: Optional[Sequence[str]] = None,
        where: Optional[str] = None,
        order_by: Optional[str] = None,
        page_size: Optional[int] = None,
        fetch_size: Optional[int] = None,
        query_timeout: Optional[int] = None,
        key_range_generator: Optional[KeyRangeGenerator] = None,
        settings: SettingStore = GLOBAL_SETTINGS,
    ) -> None:
        self.partition = partition
        self.create_connection = create_connection
        self.split_key = split_key or None
        self.column = column_names(column)
        self.where = where
        self.order_by = order_by
        self.page_size = resolve_reader_option(PAGE_SIZE, page_size, settings)
        self.fetch_size = resolve_reader_option(FETCH_SIZE, fetch_size, settings)
        self.query_timeout = resolve_reader_option(
            QUERY_TIMEOUT, query_timeout, settings
        )
        self.key_range_generator = key_range_generator or ModuloKeyRangeGenerator()
        if self.split_key is None and any(
            source.split_by_key for source in partition
        ):
            raise DataSourceReaderExceptionMessages.CONFIG_INVALID_SETTING(
                "split_key",
                split_key,
                "a split key is required to read key range split data sources",
            )

        self._finished: List[bool] = [False] * len(partition)
        self._state = CursorState.AWAITING_SOURCE
        self._opened = False
        self._closed = False
        self._has_more = False
        self._source_index: Optional[int] = None
        self._offset = 0
        self._conn: Optional[Connection] = None
        self._driver: Optional[BaseDriver] = None
        self._dialect: Optional[BaseDialect] = None
        self._page: Optional[PageResult] = None
        self._raw_schema = None

    def __getstate__(self):
        if self._conn is not None:
            raise TypeError(
                f"Cannot serialize {type(self).__name__} of partition {self.partition.index} while a source is open"
            )
        state = self.__dict__.copy()
        # we use cloudpickle to pickle the callback function so that local function and function defined in
        # __main__ can be pickled and unpickled in another process
        state["create_connection"] = cloudpickle.dumps(
            self.create_connection, protocol=pickle.HIGHEST_PROTOCOL
        )
        return state

    def __setstate__(self, state):
        state["create_connection"] = cloudpickle.loads(state["create_connection"])
        self.__dict__.update(state)

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def current_offset(self) -> int:
        return self._offset

    @property
    def current_source(self) -> Optional[DataSource]:
        if self._source_index is None:
            return None
        return self.partition[self._source_index]

    @property
    def finished(self) -> Tuple[bool, ...]:
        """Whether each data source of the partition has been completely read."""
        return tuple(self._finished)

    @property
    def raw_schema(self):
        """The ``cursor.description`` of the first non-empty page read by this cursor."""
        return self._raw_schema

    def open(self) -> None:
        if self._opened or self._closed:
            return
        self._opened = True
        logger.debug(
            f"Partition {self.partition.index} open with {len(self.partition)} data sources"
        )
        self.open_next_page()

    def open_next_source(self) -> bool:
        """
        Make the first unfinished data source current and open its connection.
        Returns False, and ends the partition, when every data source is finished.
        """
        index = next(
            (i for i, finished in enumerate(self._finished) if not finished), None
        )
        if index is None:
            self._state = CursorState.ALL_EXHAUSTED
            self._has_more = False
            logger.info(f"Partition {self.partition.index} read all data sources")
            return False

        source = self.partition[index]
        self._source_index = index
        self._offset = 0
        try:
            conn = self.create_connection(source)
        except Exception as exc:
            self._source_index = None
            self._state = CursorState.FAILED
            raise DataSourceReaderExceptionMessages.SOURCE_CONNECTION_FAILED(
                mask_url(source.url), source.table, exc
            ) from exc
        self._conn = conn
        try:
            dbms_type, driver_type = detect_dbms(conn)
            self._driver = DRIVER_MAP.get(driver_type, BaseDriver)(dbms_type)
            self._dialect = DBMS_MAP.get(dbms_type, BaseDialect)()
            self._conn = self._driver.prepare_connection(conn, self.query_timeout)
        except Exception as exc:
            self._fail()
            raise DataSourceReaderExceptionMessages.SOURCE_CONNECTION_PREPARE_FAILED(
                mask_url(source.url), source.table, exc
            ) from exc
        self._state = CursorState.PAGING
        logger.info(f"Partition {self.partition.index} open source: {source}")
        return True

    def open_next_page(self) -> None:
        """
        Query the page of the current data source at the current offset. When the page is empty the
        data source is finished and the following data sources are tried, until a page has rows or
        every data source of the partition is finished.
        """
        # each empty page finishes one data source, which bounds the loop by the partition size
        while True:
            if self._source_index is None and not self.open_next_source():
                return
            self._close_page()
            self._execute_current_window()
            if self._has_more:
                return
            self._finish_current_source()

    def advance(self) -> None:
        """Move to the next row of the open page. The next page is not opened here."""
        if self._page is None:
            self._has_more = False
            return
        try:
            self._has_more = self._page.has_next()
        except BaseException:
            self._fail()
            raise

    def reached_end(self) -> bool:
        """
        Returns True when the partition has no more rows. When the open page is consumed, the next
        page of the same data source is queried first. Always True once the cursor failed or was
        closed.
        """
        if self._closed or self._state is CursorState.FAILED:
            self._has_more = False
            return True
        if not self._opened:
            self.open()
        elif not self._has_more and self._state is not CursorState.ALL_EXHAUSTED:
            self._offset += self.page_size
            self.open_next_page()
        return not self._has_more

    def produce_next(self) -> Optional[Any]:
        """
        Returns the next row, or None when there is no row to read. Call :meth:`reached_end` first.
        """
        if not self._has_more:
            return None
        try:
            row = next(self._page)
        except BaseException:
            self._fail()
            raise
        self.advance()
        return row

    def close(self) -> None:
        self._closed = True
        self._release_current_source()

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __iter__(self) -> Iterator[Any]:
        while not self.reached_end():
            yield self.produce_next()

    def _build_page_query(
        self, source: DataSource, window: QueryWindow
    ) -> Tuple[str, List[Any]]:
        split_predicate, params = None, []
        if source.split_by_key:
            split_predicate, params = self.key_range_generator.bind_filter(
                self.split_key,
                window.filter_params,
                self._dialect,
                self._driver.param_markers,
            )
        select_query = self._dialect.generate_select_query(
            source.table,
            source.column or self.column,
            self.where,
            split_predicate,
        )
        return (
            self._dialect.generate_page_query(select_query, window, self.order_by),
            params,
        )

    def _execute_current_window(self) -> None:
        source = self.current_source
        window = QueryWindow(
            self._offset,
            self.page_size,
            source.filter_params if source.split_by_key else None,
        )
        try:
            query, params = self._build_page_query(source, window)
            logger.debug(
                f"Partition {self.partition.index} executing '{query}' with parameters {params}"
            )
            self._page = self._driver.execute_page(
                self._conn, query, params, self.fetch_size
            )
            self._has_more = self._page.has_next()
        except BaseException:
            self._fail()
            raise
        if self._has_more and self._raw_schema is None:
            self._raw_schema = self._page.description

    def _finish_current_source(self) -> None:
        source = self.current_source
        self._finished[self._source_index] = True
        logger.info(
            f"Partition {self.partition.index} finished source: {source}, last offset {self._offset}"
        )
        self._release_current_source()

    def _fail(self) -> None:
        self._release_current_source()
        self._state = CursorState.FAILED

    def _close_page(self) -> None:
        if self._page is not None:
            self._page.close()
            self._page = None

    def _release_current_source(self) -> None:
        self._close_page()
        self._has_more = False
        if self._conn is not None:
            # Best effort to close connection; failures are non-critical and can be ignored.
            try:
                self._conn.close()
            except BaseException as exc:
                logger.debug(
                    f"Failed to close connection after reading data due to error: {exc!r}"
                )
            self._conn = None
        self._driver = None
        self._dialect = None
        self._source_index = None
        self._offset = 0
        if self._state is CursorState.PAGING:
            self._state = CursorState.AWAITING_SOURCE
