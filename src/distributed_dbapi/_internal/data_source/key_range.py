#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
from typing import Any, Callable, List, Protocol, Tuple, runtime_checkable

from distributed_dbapi._internal.data_source.dbms_dialects import BaseDialect


@runtime_checkable
class KeyRangeGenerator(Protocol):
    """
    Divides the rows of a table into disjoint key ranges, one per partition.

    ``generate(n)`` must be deterministic and return ``n`` opaque filter parameter values whose
    predicates are pairwise disjoint and together cover every row of any table they are applied to.
    ``bind_filter`` renders the predicate of one value for a given split key.
    """

    def generate(self, num_partitions: int) -> List[Any]:
        ...

    def bind_filter(
        self,
        split_key: str,
        filter_params: Any,
        dialect: BaseDialect,
        param_markers: Callable[[int], List[str]],
    ) -> Tuple[str, List[Any]]:
        ...


class ModuloKeyRangeGenerator:
    """
    Splits rows by the remainder of the split key modulo the partition count.

    Partition ``j`` of ``n`` reads the rows where ``MOD(ABS(split_key), n) = j``, the absolute value keeps
    negative keys in range. Rows with a NULL key have no remainder and are read by partition 0.
    """

    def generate(self, num_partitions: int) -> List[Tuple[int, int]]:
        return [(num_partitions, index) for index in range(num_partitions)]

    def bind_filter(
        self,
        split_key: str,
        filter_params: Tuple[int, int],
        dialect: BaseDialect,
        param_markers: Callable[[int], List[str]],
    ) -> Tuple[str, List[Any]]:
        modulus, remainder = filter_params
        divisor, expected = param_markers(2)
        mod_expression = dialect.generate_mod_expression(f"ABS({split_key})", divisor)
        predicate = f"{mod_expression} = {expected}"
        if remainder == 0:
            predicate = f"({predicate} OR {split_key} IS NULL)"
        return predicate, [modulus, remainder]
