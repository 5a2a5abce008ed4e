#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
import itertools
import logging
from enum import Enum
from typing import List, TYPE_CHECKING

from distributed_dbapi._internal.data_source.datasource_typing import Connection
from distributed_dbapi._internal.data_source.drivers.base_driver import BaseDriver

if TYPE_CHECKING:
    from distributed_dbapi._internal.data_source.datasource_typing import (
        Cursor,
    )  # pragma: no cover

logger = logging.getLogger(__name__)


class Psycopg2Driver(BaseDriver):
    def __init__(self, dbms_type: Enum) -> None:
        super().__init__(dbms_type)
        self._cursor_ids = itertools.count(1)

    @staticmethod
    def prepare_connection(
        conn: "Connection",
        query_timeout: int = 0,
    ) -> "Connection":
        if query_timeout:
            # https://www.postgresql.org/docs/current/runtime-config-client.html#GUC-STATEMENT-TIMEOUT
            # postgres default uses milliseconds
            conn.cursor().execute(f"SET STATEMENT_TIMEOUT = {query_timeout * 1000}")
        return conn

    @staticmethod
    def param_markers(count: int) -> List[str]:
        return ["%s"] * count

    def get_server_cursor_if_supported(self, conn: "Connection") -> "Cursor":
        # a named cursor lives on the server and executes a single query
        return conn.cursor(f"DISTRIBUTED_DBAPI_CURSOR_{next(self._cursor_ids)}")
