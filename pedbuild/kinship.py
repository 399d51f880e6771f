"""
Линейное родство: потомки по прямым цепочкам родитель → ребёнок.

Спаривание добавленного родителя P с его собственным линейным потомком
возникает, когда P назначен двум детям a и b, причём b – потомок a:
второй родитель b лежит на пути a → … → b, т.е. сам потомок P.
Расстояние между партнёрами при этом равно dist(a, b).
"""
from __future__ import annotations

import numpy as np
from numba import njit

from .adjacency import PedigreeGraph


@njit(cache=True)
def _descendants_from(adj: np.ndarray, src: int, min_dist: int) -> np.ndarray:
    n = adj.shape[0]
    out = np.zeros(n, dtype=np.bool_)
    frontier = np.zeros(n, dtype=np.bool_)
    frontier[src] = True
    # в ацикличном графе путь не длиннее n - 1
    for depth in range(1, n):
        nxt = np.zeros(n, dtype=np.bool_)
        found = False
        for i in range(n):
            if frontier[i]:
                for j in range(n):
                    if adj[i, j]:
                        nxt[j] = True
                        found = True
        if not found:
            break
        if depth >= min_dist:
            for j in range(n):
                if nxt[j]:
                    out[j] = True
        frontier = nxt
    return out


@njit(cache=True)
def _descendants_numba(adj: np.ndarray, min_dist: int) -> np.ndarray:
    n = adj.shape[0]
    out = np.zeros((n, n), dtype=np.bool_)
    for src in range(n):
        out[src] = _descendants_from(adj, src, min_dist)
    return out


def descendant_matrix(graph: PedigreeGraph, min_dist: int = 1) -> np.ndarray:
    """
    D[a, d] == True ⇔ d достижим из a по пути длины ≥ ``min_dist``.

    ``min_dist = 1`` – все потомки, ``2`` – начиная с внуков и т.д.
    """
    if min_dist < 0:
        raise ValueError(f"min_dist must be non-negative, got {min_dist}")
    adj = np.ascontiguousarray(graph.adj, dtype=np.bool_)
    return _descendants_numba(adj, int(min_dist))


def descendants(graph: PedigreeGraph, i: int, min_dist: int = 1) -> np.ndarray:
    """Потомки одной особи: один обход из ``i``, без полной матрицы."""
    if min_dist < 0:
        raise ValueError(f"min_dist must be non-negative, got {min_dist}")
    adj = np.ascontiguousarray(graph.adj, dtype=np.bool_)
    return np.flatnonzero(_descendants_from(adj, int(i), int(min_dist)))


def creates_linear_inbreeding(bottom: np.ndarray, desc: np.ndarray) -> bool:
    """
    ``bottom`` – строки добавленных родителей (n столбцов исходного графа),
    ``desc`` – матрица потомков исходного графа на запрещённом расстоянии.
    """
    for row in bottom:
        kids = np.flatnonzero(row)
        if kids.size > 1 and desc[np.ix_(kids, kids)].any():
            return True
    return False
