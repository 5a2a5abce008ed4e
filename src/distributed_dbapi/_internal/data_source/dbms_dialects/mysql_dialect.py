#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
from typing import Optional, TYPE_CHECKING

from distributed_dbapi._internal.data_source.dbms_dialects.base_dialect import (
    BaseDialect,
)

if TYPE_CHECKING:
    from distributed_dbapi._internal.data_source.datasource import (
        QueryWindow,
    )  # pragma: no cover


class MysqlDialect(BaseDialect):
    def generate_page_query(
        self,
        select_query: str,
        window: "QueryWindow",
        order_by: Optional[str] = None,
    ) -> str:
        order_clause = f" ORDER BY {order_by}" if order_by else ""
        return f"{select_query}{order_clause} LIMIT {window.offset}, {window.page_size}"
