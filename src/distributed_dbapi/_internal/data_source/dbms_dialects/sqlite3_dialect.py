#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#

from distributed_dbapi._internal.data_source.dbms_dialects.base_dialect import (
    BaseDialect,
)


class Sqlite3Dialect(BaseDialect):
    @staticmethod
    def generate_mod_expression(expression: str, divisor: str) -> str:
        # MOD() only exists when SQLite is compiled with the math functions
        return f"({expression} % {divisor})"
