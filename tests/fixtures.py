"""Мини‑родословные для юнит‑тестов."""
import pandas as pd

from pedbuild.adjacency import PedigreeGraph, Sex

M, F = Sex.MALE, Sex.FEMALE

# одинокая особь
single = PedigreeGraph([[0]], [M])

# два несвязанных основателя
two_founders = PedigreeGraph([[0, 0], [0, 0]], [M, F])

# 1 – отец 2, оба самцы (пример из документации pedbuildr)
father_son = PedigreeGraph([[0, 1], [0, 0]], [M, M])

# 1 – отец 2, 3, 4; все самцы
father_three_sons = PedigreeGraph.from_parents(
    [None, 0, 0, 0], [None, None, None, None], [M, M, M, M]
)

# FA, MO – основатели; C1 – полный сиб, C2 знает только отца
pedigree = pd.DataFrame(
    [
        {"id": "FA", "father_id": None, "mother_id": None, "sex": 1},
        {"id": "MO", "father_id": None, "mother_id": None, "sex": 2},
        {"id": "C1", "father_id": "FA", "mother_id": "MO", "sex": 1},
        {"id": "C2", "father_id": "FA", "mother_id": None, "sex": 2},
    ]
)
