#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#

from distributed_dbapi._internal.data_source.dbms_dialects.base_dialect import (
    BaseDialect,
)


class PostgresDialect(BaseDialect):
    pass
