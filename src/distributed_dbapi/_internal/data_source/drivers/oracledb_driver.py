#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
import logging
from typing import List

from distributed_dbapi._internal.data_source.datasource_typing import Connection
from distributed_dbapi._internal.data_source.drivers.base_driver import BaseDriver

logger = logging.getLogger(__name__)


class OracledbDriver(BaseDriver):
    @staticmethod
    def prepare_connection(
        conn: "Connection",
        query_timeout: int = 0,
    ) -> "Connection":
        if query_timeout > 0:
            # call_timeout is in milliseconds
            conn.call_timeout = query_timeout * 1000
        return conn

    @staticmethod
    def param_markers(count: int) -> List[str]:
        return [f":{position}" for position in range(1, count + 1)]
