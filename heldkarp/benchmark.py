"""
Held-Karp 批次效能量測

對一組問題（隨機矩陣或矩陣檔 / .tsp 檔）逐一求解，記錄
成本、時間、CPU、記憶體與 memo 狀態數，輸出成 DataFrame / CSV，並畫出隨 N 的趨勢圖．
"""

from __future__ import annotations

import math
import os
import traceback
from pathlib import Path
from typing import Iterable, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .dp import held_karp, tour_cost
from .matrix import AdjacencyMatrix, read_matrix_file
from .perf import measure_performance
from .tsplib_io import load_optimal_tour, load_problem, optimality_gap

DEFAULT_SIZES = (4, 6, 8, 10, 12)
DEFAULT_SEED = 0


def random_matrix(n: int, seed: Optional[int] = None, missing_rate: float = 0.0,
                  low: int = 1, high: int = 100) -> AdjacencyMatrix:
    """隨機有向整數成本矩陣；missing_rate 為每條邊變成 inf 的機率（對角線固定為 0）。"""
    rng = np.random.default_rng(seed)
    costs = rng.integers(low, high, size=(n, n)).astype(float)
    if missing_rate > 0:
        costs[rng.random((n, n)) < missing_rate] = np.inf
    np.fill_diagonal(costs, 0.0)
    return AdjacencyMatrix(costs)


def load_any(path) -> AdjacencyMatrix:
    path = Path(path)
    if path.suffix == ".tsp":
        return load_problem(path)
    return read_matrix_file(path)


def process_problem(name: str, adj: AdjacencyMatrix, start: int = 0,
                    method: str = "recursive", opt_tour=None) -> dict:
    """Solve one problem and return a row of benchmark results."""
    n = len(adj)
    print(f"\n--- Processing: {name} ---")
    print(f"Solving with Held-Karp (n={n}, method={method})...")

    memo = {}
    cost, tour, time_taken, cpu_time, mem_usage = measure_performance(
        held_karp, adj=adj, start=start, method=method, memo=memo
    )

    opt_cost = tour_cost(adj, opt_tour) if opt_tour else None
    error_pct = optimality_gap(cost, opt_cost) if not math.isinf(cost) else None

    if math.isinf(cost):
        print("  ⚠️ No valid tour exists (cost is infinite)")
    else:
        print(f"  Held-Karp cost found: {cost:.2f}")
    if opt_cost is not None:
        print(f"  Optimal cost: {opt_cost}")
        if error_pct is not None:
            print(f"  Gap to optimal: {error_pct:.2f}%")

    return {
        "Problem": name, "N_Cities": n, "Start": start,
        "Found_Tour": " ".join(str(c + 1) for c in tour),
        "Found_Cost": cost, "Optimal_Cost": opt_cost, "Error_Pct": error_pct,
        "Time_Taken_s": time_taken, "CPU_Time_s": cpu_time,
        "Memory_Usage_MB": mem_usage, "Memo_States": len(memo),
    }


def run_benchmark(sizes: Sequence[int] = DEFAULT_SIZES,
                  files: Iterable = (),
                  seed: int = DEFAULT_SEED,
                  missing_rate: float = 0.0,
                  method: str = "recursive") -> pd.DataFrame:
    """
    先跑檔案，再跑各種大小的隨機矩陣．
    單一問題失敗時印出錯誤並跳過，不影響其他問題．
    """
    all_results = []

    for f in files:
        name = os.path.basename(str(f))
        try:
            adj = load_any(f)
            opt_tour = None
            if Path(f).suffix == ".tsp":
                opt_tour = load_optimal_tour(Path(f).with_suffix(".opt.tour"))
            all_results.append(process_problem(name, adj, method=method, opt_tour=opt_tour))
        except FileNotFoundError:
            print(f"\n--- Processing: {name} ---")
            print(f"⚠️ File not found: '{f}'. Skipping.")
        except Exception as e:
            print(f"An unexpected error occurred while processing {name}: {e}")
            traceback.print_exc()

    for n in sizes:
        adj = random_matrix(n, seed=seed + n, missing_rate=missing_rate)
        all_results.append(process_problem(f"random{n}", adj, method=method))

    return pd.DataFrame(all_results)


def save_results(df: pd.DataFrame, csv_path) -> None:
    df.to_csv(csv_path, index=False)
    print(f"\n✅ All results have been logged to {csv_path}")


def plot_performance_trends(df: pd.DataFrame, out_path="heldkarp_performance_trends.png",
                            show: bool = False) -> Optional[str]:
    """Plots Held-Karp performance metrics against the number of cities."""
    if df.empty:
        print("No data available for plotting.")
        return None

    df_sorted = df.sort_values(by="N_Cities")

    fig, axs = plt.subplots(2, 2, figsize=(16, 12))
    fig.suptitle("Held-Karp Performance Analysis", fontsize=20)

    axs[0, 0].plot(df_sorted["N_Cities"], df_sorted["Time_Taken_s"], marker="o", color="coral")
    axs[0, 0].set_title("Execution Time (seconds)"); axs[0, 0].set_ylabel("Time (s)")
    axs[0, 0].grid(True)

    axs[0, 1].plot(df_sorted["N_Cities"], df_sorted["CPU_Time_s"], marker="s", color="lightgreen")
    axs[0, 1].set_title("CPU Time (seconds)"); axs[0, 1].set_ylabel("CPU Time (s)")
    axs[0, 1].grid(True)

    axs[1, 0].plot(df_sorted["N_Cities"], df_sorted["Memory_Usage_MB"], marker="x", color="plum")
    axs[1, 0].set_title("Memory Usage (MB)"); axs[1, 0].set_xlabel("Number of cities")
    axs[1, 0].set_ylabel("Memory (MB)"); axs[1, 0].grid(True)

    axs[1, 1].bar(df_sorted["Problem"], df_sorted["Memo_States"], color="skyblue")
    axs[1, 1].set_title("Memo States"); axs[1, 1].set_yscale("log")
    axs[1, 1].tick_params(axis="x", rotation=45)

    plt.tight_layout(rect=[0, 0.03, 1, 0.95])
    plt.savefig(out_path)
    print(f"\n📈 Performance trend plot saved to {out_path}")
    if show:
        plt.show()
    plt.close(fig)
    return str(out_path)
