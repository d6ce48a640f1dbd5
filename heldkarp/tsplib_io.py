"""
TSPLIB 讀檔：.tsp → AdjacencyMatrix，.opt.tour → 0-based closed tour．
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import tsplib95

from .matrix import AdjacencyMatrix


def build_cost_matrix(problem: tsplib95.models.StandardProblem) -> AdjacencyMatrix:
    """
    n×n 成本矩陣．
    * 節點排序後依位置轉成 0..n-1（座標型的檔案節點是 1-based，EXPLICIT 的可能是 0-based）
    * 若 (i, j) 查不到就改查 (j, i)（三角矩陣格式）
    """
    nodes = sorted(problem.get_nodes())
    n = len(nodes)
    cost = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(n):
            if i == j:
                continue                        # 對角線保持 0
            a, b = nodes[i], nodes[j]
            try:
                cost[i][j] = problem.get_weight(a, b)
            except IndexError:
                cost[i][j] = problem.get_weight(b, a)
    return AdjacencyMatrix(cost)


def load_problem(path) -> AdjacencyMatrix:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    return build_cost_matrix(tsplib95.load(str(path)))


def load_optimal_tour(filename) -> Optional[List[int]]:
    """讀取 .opt.tour，回傳 0-based 且首尾相接的 tour；檔案不存在時回傳 None。"""
    path = Path(filename)
    if not path.exists():
        return None
    tour_file = tsplib95.load(str(path))
    if not tour_file.tours:
        return None
    # 官方解可能包含多個 tour，取第一個；TSPLIB 的 tour 一律 1-based
    tour = [v - 1 for v in tour_file.tours[0] if v > 0]
    if tour:
        tour.append(tour[0])
    return tour


def optimality_gap(found_cost: float, opt_cost: Optional[float]) -> Optional[float]:
    """誤差百分比；沒有最佳解或最佳成本 <= 0 時回傳 None。"""
    if opt_cost is None or opt_cost <= 0:
        return None
    return (found_cost - opt_cost) / opt_cost * 100
