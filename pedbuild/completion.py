"""
Достройка недостающих родителей:
    * add_missing_parents  – полный перебор (разбиения отцов × разбиения матерей)
    * add_missing_parents1 – быстрый путь, когда у каждой особи не хватает
                             ровно одного родителя
"""
from __future__ import annotations
import itertools
import logging
import math
from typing import List

import numpy as np
from tqdm import tqdm

from .adjacency import PedigreeGraph, fresh_labels
from .kinship import creates_linear_inbreeding, descendant_matrix
from .partitions import (
    MAX_PARTITION_SIZE,
    CapacityExceededError,
    Partition,
    n_groups,
    partitions_of,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
LOGGER = logging.getLogger(__name__)


def add_missing_parents(
    graph: PedigreeGraph,
    max_linear_inb: float | None = math.inf,
    sex_symmetry: bool = False,
    progress: bool = False,
) -> List[PedigreeGraph]:
    """
    Все способы достроить родителей так, чтобы каждый столбец давал 0 или 2.

    ``max_linear_inb`` – запрет спаривания с линейным потомком на расстоянии
    больше заданного (0 – запрещены и родитель-ребёнок; inf/None – без
    ограничений). ``sex_symmetry`` – родословные, различающиеся только полом
    добавленных родителей (отцовские vs материнские полусибсы), считаются
    одинаковыми.
    """
    if max_linear_inb is None:
        max_linear_inb = math.inf
    if max_linear_inb < 0:
        raise ValueError(f"max_linear_inb must be non-negative, got {max_linear_inb}")

    n = graph.n
    missing_fa = graph.missing_fathers()
    missing_mo = graph.missing_mothers()

    if missing_fa.size > MAX_PARTITION_SIZE:
        raise CapacityExceededError(
            f"More than {MAX_PARTITION_SIZE} extra fathers needed: too many possible combinations"
        )
    if missing_mo.size > MAX_PARTITION_SIZE:
        raise CapacityExceededError(
            f"More than {MAX_PARTITION_SIZE} extra mothers needed: too many possible combinations"
        )

    if missing_fa.size == 0 and missing_mo.size == 0:
        return [graph]

    # основатели нужны для последующей чистки
    founders = graph.founders()

    check_inb = max_linear_inb != math.inf
    if check_inb:
        desc = descendant_matrix(graph, min_dist=int(max_linear_inb) + 1)

    p_fa = partitions_of(missing_fa.size)
    p_mo = partitions_of(missing_mo.size)
    LOGGER.info(
        "🔍  %d missing fathers, %d missing mothers → %d candidates",
        missing_fa.size, missing_mo.size, len(p_fa) * len(p_mo),
    )

    seen: set[str] = set()
    res: List[PedigreeGraph] = []
    n_sym = n_inb = 0
    for pf, pm in tqdm(
        itertools.product(p_fa, p_mo),
        total=len(p_fa) * len(p_mo),
        desc="candidates",
        disable=not progress,
    ):
        bottom = _bottom_block(n, pf, missing_fa, pm, missing_mo)

        if sex_symmetry and bottom.shape[0] > 1:
            inv = sex_invariant(bottom)
            if inv in seen:
                LOGGER.debug("skip %s × %s: symmetric to %s", pf, pm, inv)
                n_sym += 1
                continue
            seen.add(inv)

        if check_inb and creates_linear_inbreeding(bottom, desc):
            LOGGER.debug("skip %s × %s: linear inbreeding", pf, pm)
            n_inb += 1
            continue

        expanded = graph.with_added_parents(bottom, n_groups(pf))
        pruned = remove_founder_parents(expanded, founders)
        res.append(_relabel_added(pruned, graph.labels))

    LOGGER.info(
        "✅  %d pedigrees (%d symmetric, %d inbred skipped)", len(res), n_sym, n_inb
    )
    return res


def _bottom_block(
    n: int,
    pf: Partition,
    missing_fa: np.ndarray,
    pm: Partition,
    missing_mo: np.ndarray,
) -> np.ndarray:
    """Строки добавленных родителей: сначала отцы, потом матери."""
    n_fa = n_groups(pf)
    bottom = np.zeros((n_fa + n_groups(pm), n), dtype=bool)
    for g, child in zip(pf, missing_fa):
        bottom[g - 1, child] = True
    for g, child in zip(pm, missing_mo):
        bottom[n_fa + g - 1, child] = True
    return bottom


def _relabel_added(graph: PedigreeGraph, base: tuple) -> PedigreeGraph:
    # после чистки метки добавленных снова идут подряд: _n+1, _n+2, …
    k = graph.n - len(base)
    if k == 0:
        return graph
    labels = base + tuple(fresh_labels(base, k))
    if labels == graph.labels:
        return graph
    return PedigreeGraph._trusted(graph.adj, graph.sex, labels)


def sex_invariant(bottom: np.ndarray) -> str:
    """Каждая строка как битовая маска детей; маски по возрастанию через '-'."""
    codes = sorted(sum(1 << int(j) for j in np.flatnonzero(row)) for row in bottom)
    return "-".join(str(c) for c in codes)


def remove_founder_parents(graph: PedigreeGraph, founders) -> PedigreeGraph:
    """
    Удаляет родителей исходных основателей, если у этих родителей нет
    других детей: такие предки ничего не объясняют.
    """
    remov: list[int] = []
    for fid in founders:
        pars = graph.parents(fid)
        if pars.size == 0:
            continue
        others = graph.adj[pars].copy()
        others[:, fid] = False
        if not others.any():
            remov.extend(pars.tolist())

    if not remov:
        return graph
    return graph.remove(remov)


def add_missing_parents1(graph: PedigreeGraph) -> PedigreeGraph:
    """
    Каждой особи, у которой нет ровно одного родителя, добавляется новый
    несвязанный родитель недостающего пола. Особи без обоих родителей не
    трогаются.
    """
    miss_fa = np.zeros(graph.n, dtype=bool)
    miss_fa[graph.missing_fathers()] = True
    miss_mo = np.zeros(graph.n, dtype=bool)
    miss_mo[graph.missing_mothers()] = True

    need_fa = np.flatnonzero(miss_fa & ~miss_mo)
    need_mo = np.flatnonzero(miss_mo & ~miss_fa)
    n_add = need_fa.size + need_mo.size
    if n_add == 0:
        return graph

    # тот же порядок, что и у разбиения на одиночки в add_missing_parents
    bottom = np.zeros((n_add, graph.n), dtype=bool)
    bottom[np.arange(n_add), np.concatenate([need_fa, need_mo])] = True
    LOGGER.debug("fast path: %d fathers, %d mothers added", need_fa.size, need_mo.size)
    return graph.with_added_parents(bottom, need_fa.size)
