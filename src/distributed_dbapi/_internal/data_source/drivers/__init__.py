#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#

__all__ = [
    "BaseDriver",
    "PageResult",
    "OracledbDriver",
    "SqliteDriver",
    "PyodbcDriver",
    "Psycopg2Driver",
    "PymysqlDriver",
]

from distributed_dbapi._internal.data_source.drivers.base_driver import (
    BaseDriver,
    PageResult,
)
from distributed_dbapi._internal.data_source.drivers.oracledb_driver import (
    OracledbDriver,
)
from distributed_dbapi._internal.data_source.drivers.sqlite_driver import SqliteDriver
from distributed_dbapi._internal.data_source.drivers.pyodbc_driver import PyodbcDriver
from distributed_dbapi._internal.data_source.drivers.psycopg2_driver import (
    Psycopg2Driver,
)
from distributed_dbapi._internal.data_source.drivers.pymsql_driver import PymysqlDriver
