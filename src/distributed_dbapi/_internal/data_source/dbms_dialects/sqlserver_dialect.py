#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
from typing import Optional, TYPE_CHECKING

from distributed_dbapi._internal.data_source.dbms_dialects.base_dialect import (
    BaseDialect,
)
import logging

if TYPE_CHECKING:
    from distributed_dbapi._internal.data_source.datasource import (
        QueryWindow,
    )  # pragma: no cover

logger = logging.getLogger(__name__)


class SqlServerDialect(BaseDialect):
    @staticmethod
    def generate_mod_expression(expression: str, divisor: str) -> str:
        return f"({expression} % {divisor})"

    def generate_page_query(
        self,
        select_query: str,
        window: "QueryWindow",
        order_by: Optional[str] = None,
    ) -> str:
        # OFFSET ... FETCH is only valid after an ORDER BY clause
        if not order_by:
            logger.debug(
                "No order by column for SQL Server page query, pages are read in an unspecified order"
            )
        return (
            f"{select_query} ORDER BY {order_by or '(SELECT NULL)'} "
            f"OFFSET {window.offset} ROWS FETCH NEXT {window.page_size} ROWS ONLY"
        )
