#!/usr/bin/env python3
#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#

from typing import Any

from distributed_dbapi.exceptions import (
    ConfigurationError,
    DataSourceReaderException,
    QueryError,
    ResourceError,
)


class DataSourceReaderExceptionMessages:
    """Holds all of the error messages that could be used in the DataSourceReaderException Class.

    IMPORTANT: keep this file in numerical order of the error-code."""

    # Planning and configuration Error Messages 11XX

    @staticmethod
    def PLAN_INVALID_NUM_PARTITIONS(num_partitions: Any) -> ConfigurationError:
        return ConfigurationError(
            f"num_partitions must be a positive integer, got {num_partitions!r}.",
            error_code="1100",
        )

    @staticmethod
    def PLAN_NO_DATA_SOURCES() -> ConfigurationError:
        return ConfigurationError(
            "At least one data source is required to plan partitions.",
            error_code="1101",
        )

    @staticmethod
    def PLAN_SPLIT_KEY_REQUIRED(
        num_sources: int, num_partitions: int
    ) -> ConfigurationError:
        return ConfigurationError(
            "split key required when source count < partition count "
            f"(sources: {num_sources}, partitions: {num_partitions}).",
            error_code="1102",
        )

    @staticmethod
    def PLAN_REMAINDER_EXCEEDS_PARTITIONS(
        num_remainder: int, num_partitions: int
    ) -> ConfigurationError:
        return ConfigurationError(
            f"Cannot assign {num_remainder} remaining data sources directly to "
            f"{num_partitions} partitions, each partition takes at most one of them.",
            error_code="1103",
        )

    @staticmethod
    def PLAN_KEY_RANGE_COUNT_MISMATCH(expected: int, actual: int) -> ConfigurationError:
        return ConfigurationError(
            f"Key range generator returned {actual} filter parameter sets, "
            f"expected one per partition ({expected}).",
            error_code="1104",
        )

    @staticmethod
    def CONFIG_INVALID_SETTING(name: str, value: Any, reason: str) -> ConfigurationError:
        return ConfigurationError(
            f"Invalid value {value!r} for {name}: {reason}.",
            error_code="1105",
        )

    @staticmethod
    def CONFIG_INVALID_SOURCES_FILE(file_path: str, reason: str) -> ConfigurationError:
        return ConfigurationError(
            f"Unable to load data sources from {file_path}: {reason}",
            error_code="1106",
        )

    @staticmethod
    def CONFIG_INVALID_SOURCE_ENTRY(index: int, reason: str) -> ConfigurationError:
        return ConfigurationError(
            f"Invalid data source entry at position {index}: {reason}",
            error_code="1107",
        )

    # Resource Error Messages 12XX

    @staticmethod
    def SOURCE_CONNECTION_FAILED(url: str, table: str, exc: Exception) -> ResourceError:
        return ResourceError(
            f"Failed to open a connection to {url} for table {table}: {exc!r}",
            error_code="1200",
            url=url,
            table=table,
        )

    @staticmethod
    def SOURCE_CONNECTION_PREPARE_FAILED(
        url: str, table: str, exc: Exception
    ) -> ResourceError:
        return ResourceError(
            f"Failed to prepare the connection to {url} for table {table}: {exc!r}",
            error_code="1201",
            url=url,
            table=table,
        )

    # Query Error Messages 13XX

    @staticmethod
    def QUERY_EXECUTION_FAILED(query: str, exc: Exception) -> QueryError:
        return QueryError(
            f"Failed to execute page query '{query}' due to exception {exc!r}",
            error_code="1300",
            query=query,
        )

    @staticmethod
    def QUERY_ROW_FETCH_FAILED(query: str, exc: Exception) -> QueryError:
        return QueryError(
            f"Couldn't read data of page query '{query}' due to exception {exc!r}",
            error_code="1301",
            query=query,
        )

    # Partition Error Messages 14XX

    @staticmethod
    def PARTITION_READ_FAILED(
        partition_idx: int, exc: BaseException
    ) -> DataSourceReaderException:
        return DataSourceReaderException(
            f"Partition {partition_idx} data fetching thread failed with error: {exc}",
            error_code="1400",
        )
