#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#

from functools import cached_property
from typing import Any, List, Optional, Sequence
import logging

from distributed_dbapi._internal.data_source.datasource import DataSource, Partition
from distributed_dbapi._internal.data_source.key_range import (
    KeyRangeGenerator,
    ModuloKeyRangeGenerator,
)
from distributed_dbapi._internal.error_message import (
    DataSourceReaderExceptionMessages,
)

logger = logging.getLogger(__name__)


class DataSourcePartitioner:
    """
    Assigns data sources to a fixed number of partitions.

    Whole data sources are the unit of assignment while there are at least as many data sources as
    partitions. The data sources which do not divide evenly are either handed out one per partition,
    or, with a split key, cloned into every partition with one key range each. With fewer data
    sources than partitions every data source is split by key range across all partitions.
    """

    def __init__(
        self,
        sources: Sequence[DataSource],
        num_partitions: int,
        split_key: Optional[str] = None,
        key_range_generator: Optional[KeyRangeGenerator] = None,
    ) -> None:
        if (
            isinstance(num_partitions, bool)
            or not isinstance(num_partitions, int)
            or num_partitions < 1
        ):
            raise DataSourceReaderExceptionMessages.PLAN_INVALID_NUM_PARTITIONS(
                num_partitions
            )
        if not sources:
            raise DataSourceReaderExceptionMessages.PLAN_NO_DATA_SOURCES()
        self.sources = tuple(sources)
        self.num_partitions = num_partitions
        self.split_key = split_key or None
        self.key_range_generator = key_range_generator or ModuloKeyRangeGenerator()
        if self.split_key is None and len(self.sources) < num_partitions:
            raise DataSourceReaderExceptionMessages.PLAN_SPLIT_KEY_REQUIRED(
                len(self.sources), num_partitions
            )

    @cached_property
    def partitions(self) -> List[Partition]:
        source_lists = self.generate_partitions(
            self.sources,
            self.num_partitions,
            self.split_key,
            self.key_range_generator,
        )
        partitions = [
            Partition(index, self.num_partitions, tuple(assigned))
            for index, assigned in enumerate(source_lists)
        ]
        logger.debug(
            f"Planned {len(self.sources)} data sources into {self.num_partitions} partitions "
            f"with sizes {[len(p) for p in partitions]}"
        )
        return partitions

    @staticmethod
    def generate_partitions(
        sources: Sequence[DataSource],
        num_partitions: int,
        split_key: Optional[str],
        key_range_generator: KeyRangeGenerator,
    ) -> List[List[DataSource]]:
        if len(sources) < num_partitions:
            filter_params = DataSourcePartitioner.generate_key_ranges(
                key_range_generator, num_partitions
            )
            return DataSourcePartitioner.assign_key_range_clones(
                [[] for _ in range(num_partitions)], sources, filter_params
            )

        base = len(sources) // num_partitions
        source_lists = [
            list(sources[j * base : (j + 1) * base]) for j in range(num_partitions)
        ]
        remainder = sources[num_partitions * base :]
        if not remainder:
            return source_lists
        if split_key is None:
            return DataSourcePartitioner.assign_remainder_directly(
                source_lists, remainder
            )
        filter_params = DataSourcePartitioner.generate_key_ranges(
            key_range_generator, num_partitions
        )
        return DataSourcePartitioner.assign_key_range_clones(
            source_lists, remainder, filter_params
        )

    @staticmethod
    def assign_remainder_directly(
        source_lists: List[List[DataSource]], remainder: Sequence[DataSource]
    ) -> List[List[DataSource]]:
        """Appends ``remainder[i]`` to partition ``i``, at most one data source per partition."""
        if len(remainder) > len(source_lists):
            raise DataSourceReaderExceptionMessages.PLAN_REMAINDER_EXCEEDS_PARTITIONS(
                len(remainder), len(source_lists)
            )
        for index, source in enumerate(remainder):
            source_lists[index].append(source)
        return source_lists

    @staticmethod
    def assign_key_range_clones(
        source_lists: List[List[DataSource]],
        sources: Sequence[DataSource],
        filter_params: Sequence[Any],
    ) -> List[List[DataSource]]:
        """Appends a clone of every data source to every partition, restricted to the key range of the partition."""
        for assigned, params in zip(source_lists, filter_params):
            assigned.extend(source.with_key_range(params) for source in sources)
        return source_lists

    @staticmethod
    def generate_key_ranges(
        key_range_generator: KeyRangeGenerator, num_partitions: int
    ) -> List[Any]:
        filter_params = list(key_range_generator.generate(num_partitions))
        if len(filter_params) != num_partitions:
            raise DataSourceReaderExceptionMessages.PLAN_KEY_RANGE_COUNT_MISMATCH(
                num_partitions, len(filter_params)
            )
        return filter_params


def plan(
    sources: Sequence[DataSource],
    num_partitions: int,
    split_key: Optional[str] = None,
    key_range_generator: Optional[KeyRangeGenerator] = None,
) -> List[Partition]:
    """
    Assigns ``sources`` to ``num_partitions`` partitions.

    Raises:
        ConfigurationError: If the partition count, the data sources or the split key do not allow a
            valid assignment. No partition is created in that case.
    """
    return DataSourcePartitioner(
        sources, num_partitions, split_key, key_range_generator
    ).partitions
