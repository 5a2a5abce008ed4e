#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
from typing import Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from distributed_dbapi._internal.data_source.datasource import (
        QueryWindow,
    )  # pragma: no cover


QUERY_TEMPLATE = "SELECT {cols} FROM {table}"


class BaseDialect:
    """
    Builds the paged queries of one DBMS. The default implementation pages with
    ``LIMIT <page_size> OFFSET <offset>``, understood by SQLite, PostgreSQL, MySQL and Databricks.
    """

    @staticmethod
    def generate_select_query(
        table: str,
        column: Sequence[str],
        where: Optional[str] = None,
        split_predicate: Optional[str] = None,
    ) -> str:
        query = QUERY_TEMPLATE.format(
            cols=", ".join(column) if column else "*",
            table=table,
        )
        conditions = []
        if where:
            conditions.append(f"({where})")
        if split_predicate:
            conditions.append(split_predicate)
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        return query

    @staticmethod
    def generate_mod_expression(expression: str, divisor: str) -> str:
        return f"MOD({expression}, {divisor})"

    def generate_page_query(
        self,
        select_query: str,
        window: "QueryWindow",
        order_by: Optional[str] = None,
    ) -> str:
        order_clause = f" ORDER BY {order_by}" if order_by else ""
        return f"{select_query}{order_clause} LIMIT {window.page_size} OFFSET {window.offset}"
