#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
from collections import deque
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple
import logging

from distributed_dbapi._internal.data_source.datasource_typing import (
    Connection,
    Cursor,
)
from distributed_dbapi._internal.error_message import (
    DataSourceReaderExceptionMessages,
)

logger = logging.getLogger(__name__)


class PageResult:
    """
    Forward-only, read-only row stream over the result of one page query.

    Rows are buffered ``fetch_size`` at a time with ``fetchmany``. When the fetch size is 0 the whole
    page is fetched at once, which is bounded by the page size of the query.
    """

    def __init__(self, cursor: "Cursor", query: str, fetch_size: int = 0) -> None:
        self.cursor = cursor
        self.query = query
        self.fetch_size = fetch_size
        self._rows = deque()
        self._exhausted = False

    @property
    def description(self) -> Optional[Sequence[Tuple]]:
        return self.cursor.description

    def _fetch(self) -> None:
        try:
            if self.fetch_size > 0:
                rows = self.cursor.fetchmany(self.fetch_size)
            else:
                rows = self.cursor.fetchall()
                self._exhausted = True
        except Exception as exc:
            raise DataSourceReaderExceptionMessages.QUERY_ROW_FETCH_FAILED(
                self.query, exc
            ) from exc
        if not rows:
            self._exhausted = True
        self._rows.extend(rows)

    def has_next(self) -> bool:
        if not self._rows and not self._exhausted:
            self._fetch()
        return bool(self._rows)

    def __iter__(self):
        return self

    def __next__(self) -> Any:
        if not self.has_next():
            raise StopIteration
        return self._rows.popleft()

    def close(self) -> None:
        self._rows.clear()
        self._exhausted = True
        # Best effort to close cursor; failures are non-critical and can be ignored.
        try:
            self.cursor.close()
        except BaseException as exc:
            logger.debug(f"Failed to close cursor after reading page due to error: {exc!r}")


class BaseDriver:
    def __init__(self, dbms_type: Enum) -> None:
        self.dbms_type = dbms_type

    @staticmethod
    def prepare_connection(
        conn: "Connection",
        query_timeout: int = 0,
    ) -> "Connection":
        return conn

    @staticmethod
    def param_markers(count: int) -> List[str]:
        """Bind parameter placeholders in the paramstyle of the driver, qmark by default."""
        return ["?"] * count

    def get_server_cursor_if_supported(self, conn: "Connection") -> "Cursor":
        """
        This method is used to get a server cursor if the driver and the DBMS supports it.
        It can be overridden by the driver to return a server cursor if supported.
        Otherwise, it will return the default cursor supported by the driver and the DBMS.

        - python-oracledb: default to the server cursor, no need to override
        - psycopg2: default to the client cursor which needs to be overridden to return the server cursor
        - pymysql: default to the client cursor which needs to be overridden to return the server cursor
        - pyodbc, sqlite3: no server cursor, the page size bounds what the client holds
        """
        return conn.cursor()

    def execute_page(
        self,
        conn: "Connection",
        query: str,
        params: Optional[List[Any]] = None,
        fetch_size: int = 0,
    ) -> PageResult:
        cursor = self.get_server_cursor_if_supported(conn)
        try:
            if fetch_size > 0:
                cursor.arraysize = fetch_size
            if params:
                cursor.execute(query, params)
            else:
                cursor.execute(query)
        except Exception as exc:
            try:
                cursor.close()
            except BaseException as close_exc:
                logger.debug(
                    f"Failed to close cursor after query failure due to error: {close_exc!r}"
                )
            raise DataSourceReaderExceptionMessages.QUERY_EXECUTION_FAILED(
                query, exc
            ) from exc
        return PageResult(cursor, query, fetch_size)
