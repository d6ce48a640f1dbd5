"""
命令列介面

  heldkarp solve [FILE] [--start K]      解一個矩陣檔（或 .tsp），互動式詢問缺少的參數
  heldkarp bench [FILES...] [--sizes …]  批次量測，輸出 CSV 與趨勢圖

城市編號對使用者一律 1-based，內部一律 0-based．
"""

from __future__ import annotations

import argparse
import math
import sys
from pathlib import Path

from .benchmark import (DEFAULT_SEED, DEFAULT_SIZES, load_any, plot_performance_trends,
                        run_benchmark, save_results)
from .dp import held_karp, tour_cost
from .matrix import MatrixFormatError, format_cost, format_matrix
from .perf import measure_performance
from .tsplib_io import load_optimal_tour, optimality_gap

DEFAULT_DATA_DIR = "tests"
MAX_CITIES = 20

TITLE = """
╔══════════════════════════════════════════════╗
║                                              ║
║      Traveling Salesman Solver using DP      ║
║                                              ║
╚══════════════════════════════════════════════╝
"""


def fail(message: str):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def parse_start(raw, n: int) -> int:
    """1-based 起點字串 → 0-based index；不合法時結束程式。"""
    try:
        user_input = int(str(raw).strip())
    except ValueError:
        fail(f"starting node must be an integer between 1 and {n}.")
    if user_input < 1 or user_input > n:
        fail(f"starting node must be between 1 and {n}.")
    return user_input - 1


def load_input(path: Path):
    try:
        return load_any(path)
    except FileNotFoundError:
        fail(f"File '{path}' not found.")
    except OSError as e:
        # 目錄、權限不足等
        fail(f"cannot read '{path}': {e.strerror or e}")
    except MatrixFormatError as e:
        fail(str(e))
    except UnicodeDecodeError:
        fail(f"'{path}' is not a UTF-8 text file")


def print_solution(adj, tour, min_cost):
    display_path = [city + 1 for city in tour]

    print("\n --------- SOLUTION ---------")
    print("Tour path: " + " → ".join(str(c) for c in display_path))

    print("\nTour details:")
    for i in range(len(display_path) - 1):
        a, b = display_path[i], display_path[i + 1]
        print(f"{i + 1}) {a} → {b}: {format_cost(adj[a - 1][b - 1])}")

    print(f"\nTotal tour cost: {format_cost(min_cost)}")


def cmd_solve(args) -> int:
    print(TITLE)

    if args.file is None:
        name = input("Input the test file name (e.g., test1.txt): ").strip()
        path = Path(args.data_dir) / name
    else:
        path = Path(args.file)

    adj = load_input(path)
    n = len(adj)

    if not args.no_table:
        print("\nInput matrix:")
        print(format_matrix(adj))

    if n > MAX_CITIES:
        print(f"\n⚠️  n = {n} > {MAX_CITIES}: Held-Karp needs O(n·2ⁿ) states, this may not finish. "
              f"Consider --method iterative.")

    if args.start is None:
        raw = input(f"\nEnter the starting city (1 to {n}):\n")
    else:
        raw = args.start
    start = parse_start(raw, n)

    min_cost, tour, wall, cpu, mem = measure_performance(
        held_karp, adj=adj, start=start, method=args.method
    )

    if math.isinf(min_cost):
        print("\nNo valid tour exists (cost is infinite).")
        return 0

    print_solution(adj, tour, min_cost)
    print(f"Wall-clock time: {wall:.4f}s | CPU: {cpu:.4f}s | RSS: {mem:.2f}MB")

    if path.suffix == ".tsp":
        opt_tour = load_optimal_tour(path.with_suffix(".opt.tour"))
        if opt_tour is None:
            print("\n⚠️ 找不到 .opt.tour，跳過比較")
        else:
            opt_cost = tour_cost(adj, opt_tour)
            print("\n--- 與官方 '.opt.tour' 比較 ---")
            print(f"官方成本：{format_cost(opt_cost)}")
            gap = optimality_gap(min_cost, opt_cost)
            if gap is not None:
                print(f"誤差：{gap:.2f}%")
    return 0


def cmd_bench(args) -> int:
    df = run_benchmark(sizes=args.sizes, files=args.files, seed=args.seed,
                       missing_rate=args.missing_rate, method=args.method)
    if df.empty:
        print("\n⚠️ No problem was solved.")
        return 1
    save_results(df, args.csv)
    if args.plot:
        plot_performance_trends(df, args.plot, show=args.show)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="heldkarp",
                                     description="Exact TSP solver (Held-Karp dynamic programming)")
    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", help="solve a single cost matrix")
    solve.add_argument("file", nargs="?", help="matrix text file (rows of numbers, 'inf' = no edge) or .tsp")
    solve.add_argument("--start", help="starting city, 1-based (prompted when omitted)")
    solve.add_argument("--method", choices=["recursive", "iterative"], default="recursive")
    solve.add_argument("--data-dir", default=DEFAULT_DATA_DIR,
                       help=f"directory for prompted file names (default: {DEFAULT_DATA_DIR})")
    solve.add_argument("--no-table", action="store_true", help="do not print the input matrix")
    solve.set_defaults(func=cmd_solve)

    bench = sub.add_parser("bench", help="benchmark on random matrices and/or files")
    bench.add_argument("files", nargs="*", help="matrix text files or .tsp files")
    bench.add_argument("--sizes", type=int, nargs="*", default=list(DEFAULT_SIZES),
                       help=f"random matrix sizes (default: {' '.join(map(str, DEFAULT_SIZES))})")
    bench.add_argument("--seed", type=int, default=DEFAULT_SEED)
    bench.add_argument("--missing-rate", type=float, default=0.0,
                       help="probability of an edge being 'inf' in random matrices")
    bench.add_argument("--method", choices=["recursive", "iterative"], default="recursive")
    bench.add_argument("--csv", default="heldkarp_log.csv")
    bench.add_argument("--plot", default=None, help="save the trend plot to this PNG file")
    bench.add_argument("--show", action="store_true", help="also open the plot window")
    bench.set_defaults(func=cmd_bench)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
