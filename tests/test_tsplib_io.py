import pytest

from heldkarp.dp import held_karp, tour_cost
from heldkarp.tsplib_io import load_optimal_tour, load_problem, optimality_gap

TINY4_TSP = """NAME: tiny4
TYPE: TSP
COMMENT: 4 cities, symmetric
DIMENSION: 4
EDGE_WEIGHT_TYPE: EXPLICIT
EDGE_WEIGHT_FORMAT: FULL_MATRIX
EDGE_WEIGHT_SECTION
0 10 15 20
10 0 35 25
15 35 0 30
20 25 30 0
EOF
"""

TINY4_TOUR = """NAME: tiny4.opt.tour
TYPE: TOUR
DIMENSION: 4
TOUR_SECTION
1
2
4
3
-1
EOF
"""


@pytest.fixture
def tiny4(tmp_path):
    path = tmp_path / "tiny4.tsp"
    path.write_text(TINY4_TSP)
    (tmp_path / "tiny4.opt.tour").write_text(TINY4_TOUR)
    return path


def test_load_explicit_matrix(tiny4):
    adj = load_problem(tiny4)
    assert len(adj) == 4
    assert adj[0][1] == 10
    assert adj[1][3] == 25
    assert adj[2][2] == 0
    assert held_karp(adj, 0) == (80, [0, 1, 3, 2, 0])


def test_load_missing_problem(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_problem(tmp_path / "missing.tsp")


def test_load_optimal_tour(tiny4):
    tour = load_optimal_tour(tiny4.with_suffix(".opt.tour"))
    assert tour == [0, 1, 3, 2, 0]
    assert tour_cost(load_problem(tiny4), tour) == 80


def test_missing_optimal_tour(tmp_path):
    assert load_optimal_tour(tmp_path / "missing.opt.tour") is None


def test_optimality_gap():
    assert optimality_gap(110, 100) == pytest.approx(10.0)
    assert optimality_gap(80, 80) == 0
    assert optimality_gap(80, None) is None
    assert optimality_gap(80, 0) is None
