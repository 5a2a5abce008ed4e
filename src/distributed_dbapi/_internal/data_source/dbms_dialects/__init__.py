#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
__all__ = [
    "BaseDialect",
    "Sqlite3Dialect",
    "SqlServerDialect",
    "OracledbDialect",
    "PostgresDialect",
    "MysqlDialect",
]

from distributed_dbapi._internal.data_source.dbms_dialects.base_dialect import (
    BaseDialect,
)
from distributed_dbapi._internal.data_source.dbms_dialects.oracledb_dialect import (
    OracledbDialect,
)
from distributed_dbapi._internal.data_source.dbms_dialects.sqlite3_dialect import (
    Sqlite3Dialect,
)
from distributed_dbapi._internal.data_source.dbms_dialects.sqlserver_dialect import (
    SqlServerDialect,
)
from distributed_dbapi._internal.data_source.dbms_dialects.postgresql_dialect import (
    PostgresDialect,
)
from distributed_dbapi._internal.data_source.dbms_dialects.mysql_dialect import (
    MysqlDialect,
)
