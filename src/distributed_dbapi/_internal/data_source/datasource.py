#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
"""Descriptors of the data sources, partitions and page windows read by the partition cursors."""
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Sequence, Tuple, Union

from typing_extensions import Self

from distributed_dbapi._internal.utils import mask_url, next_source_id


def column_names(column: Union[str, Sequence[str], None]) -> Tuple[str, ...]:
    """A single column name or a sequence of them, as a tuple of column names."""
    if isinstance(column, str):
        return (column,)
    return tuple(column or ())


@dataclass(frozen=True)
class DataSource:
    """
    One source table and the credentials to access it.

    Attributes:
        url (str): Connection endpoint of the database holding the table.
        username (str): Principal used to connect.
        password (str): Secret used to connect.
        table (str): Table identifier, used verbatim in the generated queries.
        column (tuple[str]): Ordered target column names. Empty selects all columns.
        split_by_key (bool): Whether this instance only covers one key range of the table.
        filter_params (Any): Opaque key range parameters, only set when ``split_by_key`` is True.
        source_id (int): Identity of the instance. Key-range clones of one table have distinct ids.
    """

    url: str
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    table: str = ""
    column: Tuple[str, ...] = ()
    split_by_key: bool = False
    filter_params: Any = None
    source_id: int = field(default_factory=next_source_id, compare=False)

    def __post_init__(self):
        # accept one name or any sequence of names while keeping the instance hashable
        object.__setattr__(self, "column", column_names(self.column))

    def clone(self) -> Self:
        """Copies every field into a new instance with a fresh identity."""
        return replace(self, source_id=next_source_id())

    def with_key_range(self, filter_params: Any) -> Self:
        """Returns a clone restricted to the key range described by ``filter_params``."""
        return replace(
            self,
            split_by_key=True,
            filter_params=filter_params,
            source_id=next_source_id(),
        )

    def __str__(self) -> str:
        key_range = f", key range {self.filter_params}" if self.split_by_key else ""
        return f"{mask_url(self.url)} table {self.table}{key_range}"


@dataclass(frozen=True)
class Partition:
    """The ordered data sources assigned to one parallel worker."""

    index: int
    num_partitions: int
    sources: Tuple[DataSource, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "sources", tuple(self.sources))

    def __len__(self) -> int:
        return len(self.sources)

    def __iter__(self):
        return iter(self.sources)

    def __getitem__(self, item):
        return self.sources[item]


@dataclass(frozen=True)
class QueryWindow:
    """Bounds of one page request: ``page_size`` rows starting at ``offset``."""

    offset: int
    page_size: int
    filter_params: Any = None
