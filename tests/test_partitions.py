import pytest

from pedbuild.partitions import (
    MAX_PARTITION_SIZE,
    CapacityExceededError,
    bell,
    n_groups,
    partitions_of,
)


def test_bell_numbers():
    assert [bell(k) for k in range(8)] == [1, 1, 2, 5, 15, 52, 203, 877]


def test_empty_partition():
    assert partitions_of(0) == ((),)
    assert n_groups(partitions_of(0)[0]) == 0


def test_canonical_order():
    assert partitions_of(3) == (
        (1, 1, 1),
        (1, 1, 2),
        (1, 2, 1),
        (1, 2, 2),
        (1, 2, 3),
    )


@pytest.mark.parametrize("k", range(1, 6))
def test_restricted_growth(k):
    parts = partitions_of(k)
    assert len(set(parts)) == len(parts)
    for p in parts:
        assert len(p) == k
        assert p[0] == 1
        for i in range(1, k):
            # новая метка – только следующая по порядку
            assert p[i] <= max(p[:i]) + 1


def test_cached():
    assert partitions_of(5) is partitions_of(5)


def test_capacity():
    with pytest.raises(CapacityExceededError):
        partitions_of(MAX_PARTITION_SIZE + 1)
    with pytest.raises(ValueError):
        partitions_of(-1)
