#!/usr/bin/env python3
#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#

"""
Package wide defaults of the partition readers.

A :class:`Setting` holds one integer option of a reader together with its default and the smallest
value accepted for it. A :class:`SettingStore` holds a collection of settings and can fall back to
another store, so a caller may override a few reader options for a set of readers while the rest
keep the values of ``GLOBAL_SETTINGS``.

Explicit arguments always win over configured values, see :func:`resolve_reader_option`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from distributed_dbapi._internal.error_message import (
    DataSourceReaderExceptionMessages,
)
from distributed_dbapi._internal.utils import warning

PAGE_SIZE = "page_size"
FETCH_SIZE = "fetch_size"
QUERY_TIMEOUT = "query_timeout"
READ_QUEUE_SIZE = "read_queue_size"


@dataclass
class Setting:
    """
    A single reader option.

    Attributes:
        name (str): The name the option is referenced by.
        description (str): What the option controls.
        default (int): The value used when the option is not configured.
        minimum (int): The smallest accepted value.
        read_only (bool): Disallows changing the configured value when set to True.
        experimental_since (str): When set, configuring a non-default value warns once that the
            option is experimental.
    """

    name: str
    description: str | None = field(default=None)
    default: int | None = field(default=None)
    minimum: int = field(default=0)
    read_only: bool = field(default=False)
    experimental_since: str | None = field(default=None)

    def __post_init__(self):
        self._value = None

    @property
    def value(self) -> int | None:
        return self.default if self._value is None else self._value

    @value.setter
    def value(self, new_value: int):
        if self.read_only:
            raise DataSourceReaderExceptionMessages.CONFIG_INVALID_SETTING(
                self.name, new_value, "the setting is read only"
            )
        self._value = self.validate(new_value)
        if self.experimental_since and new_value != self.default:
            warning(
                self.name,
                f"Setting {self.name} is experimental since {self.experimental_since}. "
                "Do not use it in production.",
            )

    def validate(self, value: Any) -> int:
        # bool is an int subclass but never a row count or a timeout
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataSourceReaderExceptionMessages.CONFIG_INVALID_SETTING(
                self.name, value, "expected an integer"
            )
        if value < self.minimum:
            raise DataSourceReaderExceptionMessages.CONFIG_INVALID_SETTING(
                self.name, value, f"must be greater than or equal to {self.minimum}"
            )
        return value


class SettingStore:
    def __init__(
        self, settings: Iterable[Setting], extend_from: SettingStore | None = None
    ) -> None:
        """
        Stores reader settings by name.

        Args:
            settings (Iterable[Setting]): The settings owned by this store.
            extend_from (SettingStore | None, optional): Store consulted for settings this one does
                not own. Changing such a setting through this store changes it in ``extend_from``.
        """
        self._settings = {setting.name: setting for setting in settings}
        self._parent = extend_from

    def setting(self, name: str) -> Setting:
        if name in self._settings:
            return self._settings[name]
        if self._parent is not None:
            return self._parent.setting(name)
        raise DataSourceReaderExceptionMessages.CONFIG_INVALID_SETTING(
            name, None, "unknown setting"
        )

    def get(self, name: str) -> int | None:
        return self.setting(name).value

    def set(self, name: str, value: int) -> None:
        self.setting(name).value = value

    def update(self, options: dict[str, int]) -> None:
        """Sets several settings at once, failing on the first unknown or invalid one."""
        for name, value in options.items():
            self.set(name, value)

    def __contains__(self, name: str) -> bool:
        return name in self._settings or (
            self._parent is not None and name in self._parent
        )

    def __getitem__(self, name: str) -> int | None:
        return self.get(name)

    def __setitem__(self, name: str, value: int) -> None:
        self.set(name, value)


GLOBAL_SETTINGS = SettingStore(
    [
        Setting(
            PAGE_SIZE,
            "Number of rows requested by one page query against a data source.",
            default=5000,
            minimum=1,
        ),
        Setting(
            FETCH_SIZE,
            "Advisory number of rows the driver fetches per round trip. 0 uses the driver default.",
            default=0,
        ),
        Setting(
            QUERY_TIMEOUT,
            "Timeout of one page query in seconds. 0 disables the timeout.",
            default=0,
        ),
        Setting(
            READ_QUEUE_SIZE,
            "Maximum number of rows buffered between partition worker threads and the consumer.",
            default=1000,
            minimum=1,
        ),
    ]
)


def resolve_reader_option(
    name: str, value: int | None, settings: SettingStore = GLOBAL_SETTINGS
) -> int:
    """
    Returns ``value`` when given, otherwise the configured value of ``name``. Either is checked
    against the accepted range of the option.

    Raises:
        ConfigurationError: If the value is not an integer or is below the minimum of the option.
    """
    setting = settings.setting(name)
    return setting.validate(setting.value if value is None else value)
