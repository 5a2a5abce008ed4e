#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
import logging

from distributed_dbapi._internal.data_source.datasource_typing import Connection
from distributed_dbapi._internal.data_source.drivers.base_driver import BaseDriver

logger = logging.getLogger(__name__)


class PyodbcDriver(BaseDriver):
    @staticmethod
    def prepare_connection(
        conn: "Connection",
        query_timeout: int = 0,
    ) -> "Connection":
        if query_timeout:
            # https://github.com/mkleehammer/pyodbc/wiki/Connection#timeout
            conn.timeout = query_timeout
        return conn
