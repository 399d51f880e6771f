import numpy as np

from pedbuild.adjacency import PedigreeGraph
from pedbuild.kinship import creates_linear_inbreeding, descendant_matrix, descendants
from .fixtures import M, F

# 0 → 1 → 2 → 3, одна линия самцов
chain = PedigreeGraph.from_parents([None, 0, 1, 2], [None] * 4, [M, M, M, M])


def test_descendants():
    assert descendants(chain, 0).tolist() == [1, 2, 3]
    assert descendants(chain, 1).tolist() == [2, 3]
    # с внуков и дальше
    assert descendants(chain, 0, min_dist=2).tolist() == [2, 3]
    assert descendants(chain, 2, min_dist=2).tolist() == []
    assert descendants(chain, 0, min_dist=3).tolist() == [3]


def test_descendants_any_path():
    # 0 – отец 1 и 2; 1 и 2 – родители 3: два пути длины 2
    g = PedigreeGraph.from_parents([None, 0, 0, 1], [None, None, None, 2], [M, M, F, M])
    D = descendant_matrix(g, min_dist=2)
    assert D[0, 3]
    assert not D[0, 1]
    assert not D[1, 3]


def test_linear_inbreeding():
    bottom = np.zeros((1, 4), dtype=bool)
    bottom[0, [0, 2]] = True
    assert creates_linear_inbreeding(bottom, descendant_matrix(chain, 1))
    assert creates_linear_inbreeding(bottom, descendant_matrix(chain, 2))
    assert not creates_linear_inbreeding(bottom, descendant_matrix(chain, 3))

    single = np.zeros((2, 4), dtype=bool)
    single[0, 0] = single[1, 3] = True
    assert not creates_linear_inbreeding(single, descendant_matrix(chain, 1))


def test_descendants_single_source_matches_matrix():
    g = PedigreeGraph.from_parents([None, 0, 0, 1], [None, None, None, 2], [M, M, F, M])
    for min_dist in (1, 2, 3):
        D = descendant_matrix(g, min_dist)
        for i in range(g.n):
            assert descendants(g, i, min_dist).tolist() == np.flatnonzero(D[i]).tolist()
