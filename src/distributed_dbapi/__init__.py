#!/usr/bin/env python3
#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#

"""
Reads many DBAPI2 tables with a fixed number of parallel partitions and offset bounded pages.
"""

__all__ = [
    "DataSource",
    "Partition",
    "QueryWindow",
    "DataSourcePartitioner",
    "PagedSourceCursor",
    "CursorState",
    "DistributedDbapiReader",
    "KeyRangeGenerator",
    "ModuloKeyRangeGenerator",
    "plan",
    "load_data_sources",
    "data_sources_from_dict",
    "read_partitions_with_threads",
]

from distributed_dbapi.version import VERSION

__version__ = ".".join(str(x) for x in VERSION if x is not None)


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
from distributed_dbapi._internal.data_source.key_range import (
    KeyRangeGenerator,
    ModuloKeyRangeGenerator,
)
from distributed_dbapi._internal.data_source.registry import (
    data_sources_from_dict,
    load_data_sources,
)
from distributed_dbapi._internal.data_source.utils import (
    read_partitions_with_threads,
)
from distributed_dbapi.dbapi_reader import DistributedDbapiReader
