#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#

__all__ = [
    "DataSource",
    "Partition",
    "QueryWindow",
    "DataSourcePartitioner",
    "PagedSourceCursor",
    "CursorState",
    "plan",
]

from distributed_dbapi._internal.data_source.datasource import (
    DataSource,
    Partition,
    QueryWindow,
)
from distributed_dbapi._internal.data_source.datasource_partitioner import (
    DataSourcePartitioner,
    plan,
)
from distributed_dbapi._internal.data_source.datasource_reader import (
    CursorState,
    PagedSourceCursor,
)
