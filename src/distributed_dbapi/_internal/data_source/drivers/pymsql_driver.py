#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
import logging
from typing import List, TYPE_CHECKING

from distributed_dbapi._internal.data_source.datasource_typing import Connection
from distributed_dbapi._internal.data_source.drivers.base_driver import BaseDriver

if TYPE_CHECKING:
    from distributed_dbapi._internal.data_source.datasource_typing import (
        Cursor,
    )  # pragma: no cover

logger = logging.getLogger(__name__)


class PymysqlDriver(BaseDriver):
    @staticmethod
    def prepare_connection(
        conn: "Connection",
        query_timeout: int = 0,
    ) -> "Connection":
        if query_timeout:
            # https://dev.mysql.com/doc/refman/8.0/en/server-system-variables.html#sysvar_max_execution_time
            # mysql uses milliseconds
            conn.cursor().execute(
                f"SET SESSION MAX_EXECUTION_TIME = {query_timeout * 1000}"
            )
        return conn

    @staticmethod
    def param_markers(count: int) -> List[str]:
        return ["%s"] * count

    def get_server_cursor_if_supported(self, conn: "Connection") -> "Cursor":
        import pymysql

        return pymysql.cursors.SSCursor(conn)
