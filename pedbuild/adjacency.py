"""
Родословная как матрица смежности.

adj[i, j] == True  ⇔  i – родитель j.
Пол кодируется как обычно в родословных: 1 – самец, 2 – самка.
Граф неизменяем: любая операция возвращает новый объект.
"""
from __future__ import annotations
from enum import IntEnum
from typing import Iterable, Sequence

import numpy as np
import pandas as pd


class Sex(IntEnum):
    MALE = 1
    FEMALE = 2


class InvalidGraphError(ValueError):
    """Некорректная матрица смежности / вектор пола."""


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


def _has_cycle(adj: np.ndarray) -> bool:
    # Кан: по одному снимаем вершины без родителей
    indeg = adj.sum(axis=0).astype(np.int64)
    alive = np.ones(adj.shape[0], dtype=bool)
    while True:
        roots = np.flatnonzero(alive & (indeg == 0))
        if roots.size == 0:
            break
        alive[roots] = False
        indeg -= adj[roots].sum(axis=0)
    return bool(alive.any())


def _id_key(val) -> str | None:
    # числовые id с пропусками pandas хранит как float: 1.0 → "1"
    if pd.isna(val):
        return None
    if isinstance(val, (float, np.floating)) and float(val).is_integer():
        return str(int(val))
    return str(val)


def fresh_labels(existing: Iterable[str], count: int) -> list[str]:
    """``count`` новых меток вида ``_k`` (k ≥ n+1), не занятых в ``existing``."""
    taken = set(existing)
    out: list[str] = []
    k = len(taken) + 1
    while len(out) < count:
        lab = f"_{k}"
        if lab not in taken:
            out.append(lab)
        k += 1
    return out


class PedigreeGraph:
    """
    Родословная из ``n`` особей, индексы 0..n-1.

    Инвариант целевого состояния: в каждом столбце 0 (основатель) или 2
    родителя разного пола. Промежуточные графы допускают 1 родителя.
    """

    __slots__ = ("adj", "sex", "labels")

    def __init__(self, adj, sex, labels: Sequence[str] | None = None):
        adj = np.array(adj)
        sex = np.array(sex).ravel()

        if adj.ndim != 2 or adj.shape[0] != adj.shape[1]:
            raise InvalidGraphError(f"Adjacency matrix must be square, got shape {adj.shape}")
        n = adj.shape[0]
        if not np.isin(adj, (0, 1)).all():
            raise InvalidGraphError("Adjacency matrix must be binary")
        adj = adj.astype(bool)

        if sex.shape[0] != n:
            raise InvalidGraphError(f"Sex vector has length {sex.shape[0]}, expected {n}")
        if not np.isin(sex, (Sex.MALE, Sex.FEMALE)).all():
            raise InvalidGraphError("Sex codes must be 1 (male) or 2 (female)")
        sex = sex.astype(np.int8)

        if labels is None:
            labels = [str(i + 1) for i in range(n)]
        labels = tuple(str(x) for x in labels)
        if len(labels) != n:
            raise InvalidGraphError(f"Got {len(labels)} labels for {n} individuals")
        if len(set(labels)) != n:
            raise InvalidGraphError("Labels must be unique")

        if adj.diagonal().any():
            raise InvalidGraphError("An individual cannot be its own parent")
        male = sex == Sex.MALE
        n_fa = adj[male].sum(axis=0)
        n_mo = adj[~male].sum(axis=0)
        if ((n_fa + n_mo) > 2).any():
            raise InvalidGraphError("Every column must sum to 0, 1 or 2")
        if (n_fa > 1).any() or (n_mo > 1).any():
            raise InvalidGraphError("Two parents of the same sex")
        if _has_cycle(adj):
            raise InvalidGraphError("Pedigree contains a parent cycle")

        self.adj = _frozen(adj)
        self.sex = _frozen(sex)
        self.labels = labels

    # ------------------------------------------------------------------ #
    # Конструкторы
    # ------------------------------------------------------------------ #
    @classmethod
    def _trusted(cls, adj: np.ndarray, sex: np.ndarray, labels: Sequence[str]) -> "PedigreeGraph":
        # без проверок: только для графов, выведенных из уже проверенного
        self = object.__new__(cls)
        self.adj = _frozen(adj)
        self.sex = _frozen(np.asarray(sex, dtype=np.int8))
        self.labels = tuple(labels)
        return self

    @classmethod
    def from_parents(
        cls,
        fathers: Sequence[int | None],
        mothers: Sequence[int | None],
        sex: Sequence[int],
        labels: Sequence[str] | None = None,
    ) -> "PedigreeGraph":
        """Из списков индексов отцов/матерей (None – неизвестен)."""
        n = len(sex)
        if len(fathers) != n or len(mothers) != n:
            raise InvalidGraphError("fathers/mothers/sex must have equal length")
        adj = np.zeros((n, n), dtype=bool)
        for child, (fa, mo) in enumerate(zip(fathers, mothers)):
            for par in (fa, mo):
                if par is not None:
                    adj[par, child] = True
        return cls(adj, sex, labels)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "PedigreeGraph":
        """Таблица с колонками id, father_id, mother_id, sex (1/2 или M/F)."""
        ids = [_id_key(v) for v in df["id"]]
        if None in ids:
            raise InvalidGraphError("Missing individual id")
        idx = {a: i for i, a in enumerate(ids)}

        def _lookup(val):
            key = _id_key(val)
            if key is None:
                return None
            if key not in idx:
                raise InvalidGraphError(f"Unknown parent id: {key!r}")
            return idx[key]

        sex = []
        for s in df["sex"]:
            code = {"M": Sex.MALE, "F": Sex.FEMALE}.get(str(s).upper())
            if code is None:
                try:
                    code = int(s)
                except (TypeError, ValueError):
                    raise InvalidGraphError(f"Unknown sex code: {s!r}") from None
            sex.append(code)

        return cls.from_parents(
            [_lookup(v) for v in df["father_id"]],
            [_lookup(v) for v in df["mother_id"]],
            sex,
            ids,
        )

    def to_frame(self) -> pd.DataFrame:
        rows = []
        for j, lab in enumerate(self.labels):
            fa = mo = None
            for p in self.parents(j):
                if self.sex[p] == Sex.MALE:
                    fa = self.labels[p]
                else:
                    mo = self.labels[p]
            rows.append({"id": lab, "father_id": fa, "mother_id": mo, "sex": int(self.sex[j])})
        return pd.DataFrame(rows, columns=["id", "father_id", "mother_id", "sex"])

    # ------------------------------------------------------------------ #
    # Производные множества
    # ------------------------------------------------------------------ #
    @property
    def n(self) -> int:
        return self.adj.shape[0]

    def founders(self) -> np.ndarray:
        return np.flatnonzero(self.adj.sum(axis=0) == 0)

    def missing_fathers(self) -> np.ndarray:
        return np.flatnonzero(self.adj[self.sex == Sex.MALE].sum(axis=0) == 0)

    def missing_mothers(self) -> np.ndarray:
        return np.flatnonzero(self.adj[self.sex == Sex.FEMALE].sum(axis=0) == 0)

    def parents(self, i: int) -> np.ndarray:
        return np.flatnonzero(self.adj[:, i])

    def children(self, i: int) -> np.ndarray:
        return np.flatnonzero(self.adj[i])

    def is_complete(self) -> bool:
        return bool(np.isin(self.adj.sum(axis=0), (0, 2)).all())

    # ------------------------------------------------------------------ #
    # Построение новых графов
    # ------------------------------------------------------------------ #
    def with_added_parents(self, bottom: np.ndarray, n_fathers: int) -> "PedigreeGraph":
        """
        Новый граф: снизу дописываются строки ``bottom`` (по одной на
        добавленного родителя, ``n`` столбцов), справа – нулевые столбцы.
        Первые ``n_fathers`` строк – отцы, остальные – матери.
        """
        n = self.n
        k = bottom.shape[0]
        adj = np.zeros((n + k, n + k), dtype=bool)
        adj[:n, :n] = self.adj
        adj[n:, :n] = bottom
        sex = np.concatenate(
            [self.sex, np.full(n_fathers, Sex.MALE), np.full(k - n_fathers, Sex.FEMALE)]
        )
        return PedigreeGraph._trusted(adj, sex, self.labels + tuple(fresh_labels(self.labels, k)))

    def remove(self, ids: Iterable[int]) -> "PedigreeGraph":
        """Удаляет особей ``ids`` с явной перенумерацией old → new."""
        n = self.n
        drop = np.zeros(n, dtype=bool)
        drop[list(ids)] = True
        if not drop.any():
            return self
        remap = np.full(n, -1, dtype=np.int64)
        remap[~drop] = np.arange(int((~drop).sum()))

        m = int((~drop).sum())
        adj = np.zeros((m, m), dtype=bool)
        sex = np.zeros(m, dtype=np.int8)
        labels: list[str] = [""] * m
        for old in range(n):
            new = remap[old]
            if new < 0:
                continue
            sex[new] = self.sex[old]
            labels[new] = self.labels[old]
            kids = remap[self.children(old)]
            adj[new, kids[kids >= 0]] = True
        return PedigreeGraph._trusted(adj, sex, labels)

    # ------------------------------------------------------------------ #
    def __eq__(self, other) -> bool:
        if not isinstance(other, PedigreeGraph):
            return NotImplemented
        return (
            self.labels == other.labels
            and np.array_equal(self.sex, other.sex)
            and np.array_equal(self.adj, other.adj)
        )

    def __hash__(self) -> int:
        return hash((self.labels, self.sex.tobytes(), self.adj.tobytes()))

    def __repr__(self) -> str:
        return f"PedigreeGraph(n={self.n}, founders={self.founders().tolist()})"
