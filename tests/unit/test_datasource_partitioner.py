#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#

import pytest

from distributed_dbapi import DataSource, DataSourcePartitioner, plan
from distributed_dbapi.exceptions import ConfigurationError


def _tables(partition):
    return [source.table for source in partition]


def test_plan_assigns_remainder_directly(table_sources):
    partitions = plan(table_sources, 2)

    assert len(partitions) == 2
    assert [p.index for p in partitions] == [0, 1]
    assert all(p.num_partitions == 2 for p in partitions)
    assert _tables(partitions[0]) == ["T1", "T2", "T5"]
    assert _tables(partitions[1]) == ["T3", "T4"]
    # whole data sources are assigned, not clones
    assert partitions[0][2] is table_sources[4]
    assert not any(source.split_by_key for p in partitions for source in p)


def test_plan_splits_remainder_with_split_key(table_sources):
    partitions = plan(table_sources, 2, split_key="id")

    assert _tables(partitions[0]) == ["T1", "T2", "T5"]
    assert _tables(partitions[1]) == ["T3", "T4", "T5"]
    first_clone, second_clone = partitions[0][2], partitions[1][2]
    assert first_clone.split_by_key and second_clone.split_by_key
    assert first_clone.filter_params == (2, 0)
    assert second_clone.filter_params == (2, 1)
    assert first_clone.source_id != second_clone.source_id
    # sources which divide evenly are never split
    assert not any(source.split_by_key for source in partitions[0][:2])
    # the original descriptor is untouched
    assert not table_sources[4].split_by_key
    assert table_sources[4].filter_params is None


def test_plan_single_source_with_split_key():
    source = DataSource("postgresql://host/db", table="T1", column=("id", "val"))
    partitions = plan([source], 3, split_key="id")

    assert len(partitions) == 3
    assert all(len(p) == 1 for p in partitions)
    clones = [p[0] for p in partitions]
    assert [clone.filter_params for clone in clones] == [(3, 0), (3, 1), (3, 2)]
    assert len({clone.source_id for clone in clones}) == 3
    for clone in clones:
        assert clone.split_by_key
        assert clone.table == "T1"
        assert clone.url == source.url
        assert clone.column == ("id", "val")


def test_plan_every_source_cloned_when_sources_are_scarce(table_sources):
    partitions = plan(table_sources[:2], 4, split_key="id")

    assert len(partitions) == 4
    for j, partition in enumerate(partitions):
        assert _tables(partition) == ["T1", "T2"]
        assert all(source.filter_params == (4, j) for source in partition)
    assert sum(len(p) for p in partitions) == 4 * 2


@pytest.mark.parametrize(
    "num_sources,num_partitions",
    [(1, 1), (4, 1), (4, 2), (4, 4), (6, 3), (12, 4)],
)
def test_plan_reconstructs_sources_without_remainder(num_sources, num_partitions):
    sources = [
        DataSource(f"sqlite:///{i}.db", table=f"T{i}") for i in range(num_sources)
    ]
    partitions = plan(sources, num_partitions, split_key="")

    flattened = [source for partition in partitions for source in partition]
    assert flattened == sources
    assert [s.source_id for s in flattened] == [s.source_id for s in sources]
    assert not any(source.split_by_key for source in flattened)


@pytest.mark.parametrize("num_partitions", [0, -1, True, 2.0, "2", None])
def test_plan_invalid_num_partitions(table_sources, num_partitions):
    with pytest.raises(ConfigurationError, match="num_partitions") as exc_info:
        plan(table_sources, num_partitions)
    assert exc_info.value.error_code == "1100"


def test_plan_no_sources():
    with pytest.raises(ConfigurationError) as exc_info:
        plan([], 2)
    assert exc_info.value.error_code == "1101"


@pytest.mark.parametrize("split_key", [None, ""])
def test_plan_split_key_required(table_sources, split_key):
    with pytest.raises(
        ConfigurationError,
        match="split key required when source count < partition count",
    ) as exc_info:
        plan(table_sources[:2], 3, split_key=split_key)
    assert exc_info.value.error_code == "1102"


def test_assign_remainder_directly_exceeding_partitions(table_sources):
    with pytest.raises(ConfigurationError) as exc_info:
        DataSourcePartitioner.assign_remainder_directly([[], []], table_sources[:3])
    assert exc_info.value.error_code == "1103"


def test_plan_key_range_count_mismatch(table_sources):
    class ShortKeyRangeGenerator:
        def generate(self, num_partitions):
            return list(range(num_partitions - 1))

        def bind_filter(self, split_key, filter_params, dialect, param_markers):
            raise NotImplementedError

    with pytest.raises(ConfigurationError) as exc_info:
        plan([table_sources[0]], 3, "id", ShortKeyRangeGenerator())
    assert exc_info.value.error_code == "1104"


def test_partitioner_plans_once(table_sources):
    partitioner = DataSourcePartitioner(table_sources, 2, split_key="id")

    assert partitioner.partitions is partitioner.partitions


def test_partitioner_validates_before_planning(table_sources):
    # configuration errors are raised when the partitioner is created
    with pytest.raises(ConfigurationError):
        DataSourcePartitioner(table_sources[:1], 2)
