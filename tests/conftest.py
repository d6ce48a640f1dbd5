import os
from itertools import permutations
from pathlib import Path

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

from heldkarp.matrix import AdjacencyMatrix  # noqa: E402

DATA_DIR = Path(__file__).parent

INF = float("inf")

# 對稱完整圖，最短 80
SYMMETRIC4 = [
    [0, 10, 15, 20],
    [10, 0, 35, 25],
    [15, 35, 0, 30],
    [20, 25, 30, 0],
]

# 只有 0→1、1→2，沒有回程邊
NO_RETURN3 = [
    [0, 5, INF],
    [INF, 0, 5],
    [INF, INF, 0],
]


def brute_force(adj, start):
    """枚舉所有排列，當作 Held-Karp 的 oracle（只適合 n <= 8）。"""
    n = len(adj)
    others = [c for c in range(n) if c != start]
    best = INF
    for perm in permutations(others):
        tour = [start, *perm, start]
        cost = 0.0
        for a, b in zip(tour, tour[1:]):
            cost += adj[a][b]
        best = min(best, cost)
    return best


@pytest.fixture
def symmetric4():
    return AdjacencyMatrix(SYMMETRIC4)


@pytest.fixture
def no_return3():
    return AdjacencyMatrix(NO_RETURN3)


@pytest.fixture
def data_dir():
    return DATA_DIR
