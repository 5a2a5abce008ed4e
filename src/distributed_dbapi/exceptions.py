#!/usr/bin/env python3
#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
"""This package contains all client-side exceptions raised while planning and reading partitions."""
from typing import Optional


class DataSourceReaderException(Exception):
    """Base exception class"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
    ) -> None:
        self.message: str = message
        self.error_code: Optional[str] = error_code

        self._pretty_msg = (
            f"({self.error_code}): {self.message}" if self.error_code else self.message
        )

    def __repr__(self):
        return f"{self.__class__.__name__}({self.message!r}, {self.error_code!r})"

    def __str__(self):
        return self._pretty_msg


class ConfigurationError(DataSourceReaderException):
    """Exception for invalid partition, split key or reader settings.

    Raised while planning partitions, never while reading them.

    Includes all error codes in range 11XX (where XX is 0-9).
    """

    pass


class ResourceError(DataSourceReaderException):
    """Exception for failures acquiring a connection or session to a source.

    Includes all error codes in range 12XX (where XX is 0-9).
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        url: Optional[str] = None,
        table: Optional[str] = None,
    ) -> None:
        super().__init__(message, error_code)
        self.url: Optional[str] = url
        self.table: Optional[str] = table


class QueryError(DataSourceReaderException):
    """Exception for errors executing a page query or fetching its rows.

    Includes all error codes in range 13XX (where XX is 0-9).
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        query: Optional[str] = None,
    ) -> None:
        super().__init__(message, error_code)
        self.query: Optional[str] = query

    def __repr__(self):
        return f"{self.__class__.__name__}({self.message!r}, {self.error_code!r}, {self.query!r})"
