"""
Все разбиения множества {1..k} на непустые группы, k ≤ 7.

Разбиение задаётся вектором меток групп в канонической форме
(restricted growth string): метки 1, 2, … идут в порядке первого появления.
Например, для k = 3: (1,1,1), (1,1,2), (1,2,1), (1,2,2), (1,2,3).
Таблица строится лениво и кэшируется на весь процесс.
"""
from __future__ import annotations
from functools import lru_cache
from typing import Tuple

MAX_PARTITION_SIZE = 7

Partition = Tuple[int, ...]


class CapacityExceededError(RuntimeError):
    """Слишком много особей без родителя – перебор невозможен."""


def _extend(prefix: Partition, k: int):
    if len(prefix) == k:
        yield prefix
        return
    top = max(prefix, default=0)
    for g in range(1, top + 2):
        yield from _extend(prefix + (g,), k)


@lru_cache(maxsize=None)
def partitions_of(k: int) -> Tuple[Partition, ...]:
    if k < 0:
        raise ValueError(f"Partition size must be non-negative, got {k}")
    if k > MAX_PARTITION_SIZE:
        raise CapacityExceededError(
            f"Cannot enumerate partitions of {k} elements (max {MAX_PARTITION_SIZE})"
        )
    return tuple(_extend((), k))


def bell(k: int) -> int:
    """Число Белла B(k) = число разбиений k-элементного множества."""
    return len(partitions_of(k))


def n_groups(p: Partition) -> int:
    return max(p, default=0)
