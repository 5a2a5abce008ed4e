#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
"""
Loads data source descriptors from YAML documents of the form::

    sources:
      - url: postgresql://db1.example.com/sales
        username: reader
        password: secret
        table: public.orders
      - url: postgresql://db2.example.com/sales
        table: public.orders
        column: [id, amount, created_at]
    column: [id, amount]
    split_key: id
    page_size: 10000

``column`` at the top level is shared by the sources which do not list their own columns. The other
top-level keys are reader options, returned next to the data sources.
"""
from typing import Any, Dict, List, Tuple
import logging

import yaml

from distributed_dbapi._internal.data_source.datasource import DataSource
from distributed_dbapi._internal.error_message import (
    DataSourceReaderExceptionMessages,
)

logger = logging.getLogger(__name__)

SOURCES_KEY = "sources"
COLUMN_KEY = "column"
SOURCE_KEYS = frozenset(["url", "username", "password", "table", COLUMN_KEY])
OPTION_KEYS = frozenset(
    [
        "num_partitions",
        "split_key",
        "where",
        "order_by",
        "page_size",
        "fetch_size",
        "query_timeout",
    ]
)


def _parse_column(value: Any, index: int) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(col, str) for col in value
    ):
        raise DataSourceReaderExceptionMessages.CONFIG_INVALID_SOURCE_ENTRY(
            index, f"column must be a list of column names, got {value!r}"
        )
    return tuple(value)


def _parse_source(entry: Any, index: int, shared_column: Tuple[str, ...]) -> DataSource:
    if not isinstance(entry, dict):
        raise DataSourceReaderExceptionMessages.CONFIG_INVALID_SOURCE_ENTRY(
            index, f"expected a mapping, got {type(entry).__name__}"
        )
    unknown = set(entry) - SOURCE_KEYS
    if unknown:
        raise DataSourceReaderExceptionMessages.CONFIG_INVALID_SOURCE_ENTRY(
            index, f"unknown keys {sorted(unknown)}"
        )
    for key in ("url", "table"):
        if not isinstance(entry.get(key), str) or not entry[key]:
            raise DataSourceReaderExceptionMessages.CONFIG_INVALID_SOURCE_ENTRY(
                index, f"'{key}' is required"
            )
    column = _parse_column(entry.get(COLUMN_KEY), index) or shared_column
    return DataSource(
        url=entry["url"],
        username=entry.get("username"),
        password=entry.get("password"),
        table=entry["table"],
        column=column,
    )


def parse_data_source_config(
    config: Any,
) -> Tuple[List[DataSource], Dict[str, Any]]:
    """
    Returns the data sources and the reader options of a parsed data source document.

    Raises:
        ConfigurationError: If the document or one of its entries is malformed.
    """
    if not isinstance(config, dict):
        raise DataSourceReaderExceptionMessages.CONFIG_INVALID_SOURCE_ENTRY(
            0, "the document must be a mapping with a 'sources' list"
        )
    entries = config.get(SOURCES_KEY)
    if not isinstance(entries, list) or not entries:
        raise DataSourceReaderExceptionMessages.CONFIG_INVALID_SOURCE_ENTRY(
            0, "'sources' must be a non-empty list"
        )
    unknown = set(config) - OPTION_KEYS - {SOURCES_KEY, COLUMN_KEY}
    if unknown:
        # unknown options are most likely typos, keep going with the known ones
        logger.warning(f"Ignoring unknown data source options {sorted(unknown)}")
    shared_column = _parse_column(config.get(COLUMN_KEY), 0)
    sources = [
        _parse_source(entry, index, shared_column)
        for index, entry in enumerate(entries)
    ]
    options = {key: config[key] for key in OPTION_KEYS if key in config}
    return sources, options


def data_sources_from_dict(config: Dict[str, Any]) -> List[DataSource]:
    return parse_data_source_config(config)[0]


def load_data_source_config(
    file_path: str,
) -> Tuple[List[DataSource], Dict[str, Any]]:
    try:
        with open(file_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise DataSourceReaderExceptionMessages.CONFIG_INVALID_SOURCES_FILE(
            file_path, repr(exc)
        ) from exc
    sources, options = parse_data_source_config(config)
    logger.debug(f"Loaded {len(sources)} data sources from {file_path}")
    return sources, options


def load_data_sources(file_path: str) -> List[DataSource]:
    """Returns the data sources listed in the YAML file at ``file_path``."""
    return load_data_source_config(file_path)[0]
