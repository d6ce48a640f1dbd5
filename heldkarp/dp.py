"""
DP for TSP

Held-Karp 動態規劃解 TSP（有向、可含 inf 邊）．
  • tsp_cost()           : 遞迴 + memo，回傳從城市 i 出發走完 remaining 再回起點的最小成本
  • tsp_path()           : 用已填好的 memo 重建路徑
  • tsp_cost_iterative() : 同一個遞迴式，改成依子集大小由小到大掃描（不遞迴）
  • held_karp()          : 一次完整求解 → (最短成本, tour；首尾皆為 start)

未訪問集合以 bitmask 表示：第 j 個 bit 為 1 代表城市 j 尚未訪問．
memo 的 key = (目前城市, mask)．
"""

from __future__ import annotations

import math
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Tuple

INF = math.inf

Memo = Dict[Tuple[int, int], float]


# ---------- bitmask helpers ---------- #
def cities_to_mask(cities: Iterable[int]) -> int:
    mask = 0
    for c in cities:
        mask |= 1 << c
    return mask


def mask_to_cities(mask: int) -> List[int]:
    """由小到大列出 mask 中的城市（也就是所有迴圈的列舉順序）。"""
    cities = []
    j = 0
    while mask:
        if mask & 1:
            cities.append(j)
        mask >>= 1
        j += 1
    return cities


# ---------- Held-Karp 遞迴 ---------- #
def tsp_cost(i: int, remaining: int, adj, start: int, memo: Memo) -> float:
    """
    Minimum cost to leave city ``i``, visit every city in ``remaining`` and
    return to ``start``.

    Args:
        i         : current city index (0-based), not part of ``remaining``
        remaining : bitmask of unvisited cities (``start`` and ``i`` excluded)
        adj       : N×N cost matrix, ``inf`` for a missing edge
        start     : starting city index
        memo      : dict keyed by (i, remaining), filled as a side effect

    Returns:
        The minimum cost, or ``inf`` when no completion exists.
    """
    # 沒有城市要拜訪了 → 直接回起點
    if not remaining:
        return adj[i][start]

    key = (i, remaining)
    if key in memo:
        return memo[key]

    row = adj[i]
    min_cost = INF
    for j in mask_to_cities(remaining):
        # i → j 沒有邊就整條分支跳過，絕不把 inf 加進去
        if row[j] == INF:
            continue
        cost_to_j = row[j] + tsp_cost(j, remaining & ~(1 << j), adj, start, memo)
        if cost_to_j < min_cost:
            min_cost = cost_to_j

    memo[key] = min_cost
    return min_cost


def tsp_path(i: int, remaining: int, adj, start: int, memo: Memo) -> List[int]:
    """
    Reconstruct the optimal continuation after city ``i`` from the memo table.

    The returned list holds every city of ``remaining`` in visiting order
    followed by ``start``; ``i`` itself is not included. Among equal-cost
    choices the lowest city index wins. An empty list means no valid
    continuation exists from this state.
    """
    if not remaining:
        return [start]

    row = adj[i]
    min_cost = INF
    best_next: Optional[int] = None

    for j in mask_to_cities(remaining):
        if row[j] == INF:
            continue
        # 與 tsp_cost 完全相同的算式，保證重建出來的路徑成本 == 回報的最小成本
        total_cost = row[j] + tsp_cost(j, remaining & ~(1 << j), adj, start, memo)
        if total_cost < min_cost:
            min_cost = total_cost
            best_next = j

    if best_next is None:
        stored = memo.get((i, remaining), INF)
        assert stored == INF, (
            f"memo holds finite cost {stored} for city {i}, "
            f"remaining {mask_to_cities(remaining)} but no continuation was found"
        )
        return []

    return [best_next] + tsp_path(best_next, remaining & ~(1 << best_next), adj, start, memo)


# ---------- Held-Karp 迭代版 ---------- #
def tsp_cost_iterative(adj, start: int, memo: Optional[Memo] = None) -> Tuple[float, Memo]:
    """
    Bottom-up version of :func:`tsp_cost`.

    States are filled by increasing size of the unvisited set, so every
    ``(j, R \\ {j})`` a state needs is already in the memo. The keys and values
    are the same ones the recursive solver would store, which lets
    :func:`tsp_path` reuse the table as is.

    Returns:
        (minimum tour cost from ``start``, memo)
    """
    if memo is None:
        memo = {}
    n = len(adj)
    others = [c for c in range(n) if c != start]
    full_mask = cities_to_mask(others)

    def best(i: int, mask: int) -> float:
        row = adj[i]
        min_cost = INF
        for j in mask_to_cities(mask):
            if row[j] == INF:
                continue
            rest = mask & ~(1 << j)
            # rest 為空時就是回起點那條邊（base case 不進 memo）
            tail = memo[(j, rest)] if rest else adj[j][start]
            cost_to_j = row[j] + tail
            if cost_to_j < min_cost:
                min_cost = cost_to_j
        return min_cost

    # 子集大小 1 → n-2：所有非 start 的城市 i，以及不含 i 的子集
    for size in range(1, len(others)):
        for subset in combinations(others, size):
            mask = cities_to_mask(subset)
            for i in others:
                if mask & (1 << i):
                    continue
                memo[(i, mask)] = best(i, mask)

    # 最外層：從 start 出發，所有城市都還沒去
    if not full_mask:
        return adj[start][start], memo
    total = best(start, full_mask)
    memo[(start, full_mask)] = total
    return total, memo


# ---------- 完整求解 ---------- #
def held_karp(adj, start: int = 0, method: str = "recursive",
              memo: Optional[Memo] = None) -> Tuple[float, List[int]]:
    """
    回傳 (最短成本, tour)．tour 首尾皆為 start，長度 n+1；
    若不存在 Hamiltonian circuit，回傳 (inf, [])．

    memo 可由呼叫端傳入一個空 dict，求解後可查看填了多少個狀態．
    """
    if memo is None:
        memo = {}
    n = len(adj)
    remaining = cities_to_mask(c for c in range(n) if c != start)

    if method == "recursive":
        min_cost = tsp_cost(start, remaining, adj, start, memo)
    elif method == "iterative":
        min_cost, memo = tsp_cost_iterative(adj, start, memo)
    else:
        raise ValueError(f"unknown method '{method}' (expected 'recursive' or 'iterative')")

    if min_cost == INF:
        return INF, []

    tour = [start] + tsp_path(start, remaining, adj, start, memo)
    assert len(tour) == n + 1, f"reconstructed tour {tour} does not visit all {n} cities"
    return min_cost, tour


def tour_cost(adj, tour: List[int]) -> float:
    """沿著 tour 把每條邊加總（tour 必須是首尾相接的 closed tour）。"""
    total = 0.0
    for i in range(len(tour) - 1):
        edge = adj[tour[i]][tour[i + 1]]
        if edge == INF:
            return INF
        total += edge
    return total
