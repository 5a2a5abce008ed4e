#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
from distributed_dbapi._internal.data_source.drivers.base_driver import BaseDriver


class SqliteDriver(BaseDriver):
    """sqlite3 uses the qmark paramstyle and has no statement timeout, the defaults apply."""
