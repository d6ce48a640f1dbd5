"""
Adjacency matrix: 讀檔、檢查與顯示．

文字檔格式：每行一列，以空白分隔，``inf``（不分大小寫）代表沒有邊．
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

import numpy as np


class MatrixFormatError(ValueError):
    """The matrix file or rows do not describe a valid cost matrix."""


class AdjacencyMatrix:
    """Square, read-only matrix of directed edge costs (``inf`` = no edge)."""

    def __init__(self, costs):
        data = np.array(costs, dtype=float)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise MatrixFormatError(f"cost matrix must be square, got shape {data.shape}")
        if np.isnan(data).any():
            raise MatrixFormatError("cost matrix contains NaN")
        if (data < 0).any():
            raise MatrixFormatError("cost matrix contains negative costs")
        data.setflags(write=False)
        self._data = data
        # 解題時大量 adj[i][j] 查表，tuple 比 numpy scalar 快很多
        self._rows: Tuple[Tuple[float, ...], ...] = tuple(
            tuple(float(v) for v in row) for row in data
        )

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[float]]) -> "AdjacencyMatrix":
        rows = [list(r) for r in rows]
        if not rows:
            raise MatrixFormatError("matrix is empty")
        n = len(rows)
        for i, row in enumerate(rows):
            if len(row) != n:
                raise MatrixFormatError(f"Line {i + 1} does not have {n} entries.")
        return cls(rows)

    @property
    def size(self) -> int:
        return self._data.shape[0]

    @property
    def rows(self) -> Tuple[Tuple[float, ...], ...]:
        return self._rows

    def to_numpy(self) -> np.ndarray:
        return self._data

    def __len__(self):
        return self.size

    def __getitem__(self, key):
        if isinstance(key, tuple):
            i, j = key
            return self._rows[i][j]
        return self._rows[key]

    def __eq__(self, other):
        if not isinstance(other, AdjacencyMatrix):
            return NotImplemented
        return np.array_equal(self._data, other._data)

    def __repr__(self):
        return f"AdjacencyMatrix(n={self.size})"


# ---------- 1. 讀檔 / parse text file ----------
def parse_token(token: str) -> float:
    token = token.strip()
    if token.lower() == "inf":
        return math.inf
    try:
        return float(token)
    except ValueError:
        raise MatrixFormatError(f"'{token}' is not a number") from None


def read_matrix_file(path) -> AdjacencyMatrix:
    """讀取空白分隔的成本矩陣檔；找不到檔案時讓 FileNotFoundError 往上丟。"""
    raw_rows: List[List[float]] = []
    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                raw_rows.append([parse_token(tok) for tok in line.split()])
    except UnicodeDecodeError:
        raise MatrixFormatError(f"'{path}' is not a UTF-8 text file") from None
    return AdjacencyMatrix.from_rows(raw_rows)


# ---------- 2. 顯示 / format table ----------
def format_cost(value: float) -> str:
    return "inf" if value == math.inf else f"{value:.1f}"


def format_matrix(adj: AdjacencyMatrix) -> str:
    n = len(adj)
    lines = []
    lines.append("     |" + "".join(f" {j:5d} |" for j in range(1, n + 1)))
    lines.append("-----+" + "-------+" * n)
    for i in range(n):
        cells = "".join(f" {format_cost(adj[i][j]):>5s} |" for j in range(n))
        lines.append(f" {i + 1:3d} |" + cells)
    return "\n".join(lines)
