#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
import queue
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING
import logging

from distributed_dbapi._internal.data_source.dbms_dialects import (
    Sqlite3Dialect,
    OracledbDialect,
    SqlServerDialect,
    PostgresDialect,
    MysqlDialect,
)
from distributed_dbapi._internal.data_source.drivers import (
    SqliteDriver,
    OracledbDriver,
    PyodbcDriver,
    Psycopg2Driver,
    PymysqlDriver,
)
from distributed_dbapi._internal.error_message import (
    DataSourceReaderExceptionMessages,
)
from distributed_dbapi.exceptions import DataSourceReaderException

if TYPE_CHECKING:
    from distributed_dbapi._internal.data_source.datasource_reader import (
        PagedSourceCursor,
    )  # pragma: no cover

logger = logging.getLogger(__name__)

PARTITION_TASK_ROW_SIGNAL = "ROW"
PARTITION_TASK_COMPLETE_SIGNAL = "COMPLETE"
PARTITION_TASK_ERROR_SIGNAL = "ERROR"
_QUEUE_POLL_INTERVAL = 0.1


class DBMS_TYPE(Enum):
    SQL_SERVER_DB = "SQL_SERVER_DB"
    ORACLE_DB = "ORACLE_DB"
    SQLITE_DB = "SQLITE3_DB"
    POSTGRES_DB = "POSTGRES_DB"
    MYSQL_DB = "MYSQL_DB"
    UNKNOWN = "UNKNOWN"


class DRIVER_TYPE(str, Enum):
    PYODBC = "pyodbc"
    ORACLEDB = "oracledb"
    SQLITE3 = "sqlite3"
    PSYCOPG2 = "psycopg2.extensions"
    PYMYSQL = "pymysql.connections"
    UNKNOWN = "unknown"


DBMS_MAP = {
    DBMS_TYPE.SQL_SERVER_DB: SqlServerDialect,
    DBMS_TYPE.ORACLE_DB: OracledbDialect,
    DBMS_TYPE.SQLITE_DB: Sqlite3Dialect,
    DBMS_TYPE.POSTGRES_DB: PostgresDialect,
    DBMS_TYPE.MYSQL_DB: MysqlDialect,
}

DRIVER_MAP = {
    DRIVER_TYPE.PYODBC: PyodbcDriver,
    DRIVER_TYPE.ORACLEDB: OracledbDriver,
    DRIVER_TYPE.SQLITE3: SqliteDriver,
    DRIVER_TYPE.PSYCOPG2: Psycopg2Driver,
    DRIVER_TYPE.PYMYSQL: PymysqlDriver,
}


# drivers which only ever talk to one DBMS
_SINGLE_DBMS_DRIVERS = {
    DRIVER_TYPE.ORACLEDB: DBMS_TYPE.ORACLE_DB,
    DRIVER_TYPE.SQLITE3: DBMS_TYPE.SQLITE_DB,
    DRIVER_TYPE.PSYCOPG2: DBMS_TYPE.POSTGRES_DB,
    DRIVER_TYPE.PYMYSQL: DBMS_TYPE.MYSQL_DB,
}

# ODBC SQL_DBMS_NAME info type, used instead of importing pyodbc for the constant
_ODBC_SQL_DBMS_NAME = 17
_SQL_SERVER_NAMES = ("sql server", "sqlserver", "mssql")


def _driver_type_of(dbapi2_conn) -> DRIVER_TYPE:
    module_name = type(dbapi2_conn).__module__.lower()
    if module_name.startswith("oracledb."):
        module_name = DRIVER_TYPE.ORACLEDB.value
    try:
        return DRIVER_TYPE(module_name)
    except ValueError:
        logger.debug(f"Unsupported database driver: {module_name}")
        return DRIVER_TYPE.UNKNOWN


def detect_dbms(dbapi2_conn) -> Tuple[DBMS_TYPE, DRIVER_TYPE]:
    """
    Detects the DBMS and the Python driver behind a DBAPI2 connection, from the module the
    connection class is defined in. ODBC connections are asked for the name of the DBMS.
    """
    driver_type = _driver_type_of(dbapi2_conn)
    if driver_type in _SINGLE_DBMS_DRIVERS:
        return _SINGLE_DBMS_DRIVERS[driver_type], driver_type
    if driver_type == DRIVER_TYPE.PYODBC:
        dbms_name = dbapi2_conn.getinfo(_ODBC_SQL_DBMS_NAME).lower()
        if any(name in dbms_name for name in _SQL_SERVER_NAMES):
            return DBMS_TYPE.SQL_SERVER_DB, driver_type
        logger.debug(f"Unsupported DBMS behind pyodbc: {dbms_name}")
    return DBMS_TYPE.UNKNOWN, driver_type


def _put_until_stopped(
    row_queue: queue.Queue, item: Tuple[str, int, Any], stop_event: threading.Event
) -> bool:
    """Blocks on the bounded queue until the item is accepted or the consumer has stopped."""
    while not stop_event.is_set():
        try:
            row_queue.put(item, timeout=_QUEUE_POLL_INTERVAL)
            return True
        except queue.Full:
            continue
    return False


def _task_read_partition(
    reader: "PagedSourceCursor",
    partition_idx: int,
    row_queue: queue.Queue,
    stop_event: threading.Event,
) -> None:
    """
    Drive one partition cursor to completion and put its rows into the queue.
    Any failure, BaseException included, is put into the queue as well so the consumer always
    gets one final signal per partition. It never stops the other partitions.
    """
    start = time.perf_counter()
    logger.debug(f"Partition {partition_idx} fetch start")
    try:
        with reader:
            for row in reader:
                if not _put_until_stopped(
                    row_queue,
                    (PARTITION_TASK_ROW_SIGNAL, partition_idx, row),
                    stop_event,
                ):
                    # the consumer has gone away, exit gracefully
                    return
    except BaseException as exc:
        _put_until_stopped(
            row_queue, (PARTITION_TASK_ERROR_SIGNAL, partition_idx, exc), stop_event
        )
        return
    _put_until_stopped(
        row_queue, (PARTITION_TASK_COMPLETE_SIGNAL, partition_idx, None), stop_event
    )
    end = time.perf_counter()
    logger.debug(
        f"Partition {partition_idx} fetch finished, used {end - start} seconds"
    )


def read_partitions_with_threads(
    readers: List["PagedSourceCursor"],
    max_workers: Optional[int] = None,
    queue_size: int = 1000,
) -> Iterator[Tuple[int, Any]]:
    """
    Read every partition cursor in its own worker thread and yield ``(partition index, row)`` pairs.

    Rows travel through a bounded queue so memory stays fixed however many rows the sources hold.
    A failing partition does not cancel the others; once all partitions have stopped, the failure
    of the lowest partition index is raised.

    Args:
        readers: One cursor per partition, in partition order.
        max_workers: Maximum number of partitions read at the same time, defaults to one thread
            per partition.
        queue_size: Maximum number of rows buffered between the worker threads and the consumer.

    Raises:
        DataSourceReaderException: If any partition fails.
    """
    if not readers:
        return
    row_queue = queue.Queue(maxsize=queue_size)
    stop_event = threading.Event()
    errors: Dict[int, BaseException] = {}
    with ThreadPoolExecutor(max_workers=max_workers or len(readers)) as executor:
        futures = []
        try:
            for partition_idx, reader in enumerate(readers):
                futures.append(
                    executor.submit(
                        _task_read_partition,
                        reader,
                        partition_idx,
                        row_queue,
                        stop_event,
                    )
                )
            pending = len(readers)
            while pending:
                signal, partition_idx, payload = row_queue.get()
                if signal == PARTITION_TASK_ROW_SIGNAL:
                    yield partition_idx, payload
                elif signal == PARTITION_TASK_COMPLETE_SIGNAL:
                    pending -= 1
                    logger.debug(f"Partition {partition_idx} completed.")
                else:
                    pending -= 1
                    errors[partition_idx] = payload
                    logger.error(
                        f"Error in data fetching of partition {partition_idx}: {payload!r}"
                    )
        finally:
            # releases workers blocked on a full queue when the consumer stops early
            stop_event.set()
            for future in futures:
                future.cancel()

    if errors:
        partition_idx = min(errors)
        error = errors[partition_idx]
        if isinstance(error, DataSourceReaderException):
            raise error
        raise DataSourceReaderExceptionMessages.PARTITION_READ_FAILED(
            partition_idx, error
        ) from error
