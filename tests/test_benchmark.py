import math

import numpy as np
import pandas as pd

from heldkarp.benchmark import (load_any, plot_performance_trends, process_problem,
                                random_matrix, run_benchmark, save_results)
from heldkarp.dp import held_karp
from heldkarp.perf import measure_performance


def test_random_matrix_is_reproducible():
    a = random_matrix(6, seed=7)
    b = random_matrix(6, seed=7)
    assert a == b
    data = a.to_numpy()
    assert data.shape == (6, 6)
    assert np.all(np.diag(data) == 0)
    assert np.all(data[~np.eye(6, dtype=bool)] >= 1)


def test_random_matrix_missing_edges():
    adj = random_matrix(5, seed=1, missing_rate=1.0)
    data = adj.to_numpy()
    assert np.all(np.isinf(data[~np.eye(5, dtype=bool)]))
    assert math.isinf(held_karp(adj, 0)[0])


def test_measure_performance(symmetric4):
    cost, tour, wall, cpu, mem = measure_performance(held_karp, adj=symmetric4, start=0)
    assert cost == 80
    assert tour == [0, 1, 3, 2, 0]
    assert wall >= 0
    assert cpu >= 0
    assert mem > 0


def test_process_problem(symmetric4, capsys):
    row = process_problem("sym4", symmetric4, opt_tour=[0, 2, 3, 1, 0])
    assert row["Problem"] == "sym4"
    assert row["N_Cities"] == 4
    assert row["Found_Cost"] == 80
    assert row["Found_Tour"] == "1 2 4 3 1"
    assert row["Optimal_Cost"] == 80
    assert row["Error_Pct"] == 0
    assert row["Memo_States"] > 0
    assert "Held-Karp cost found: 80.00" in capsys.readouterr().out


def test_process_problem_without_tour(no_return3, capsys):
    row = process_problem("stuck", no_return3, method="iterative")
    assert math.isinf(row["Found_Cost"])
    assert row["Found_Tour"] == ""
    assert row["Error_Pct"] is None
    assert "No valid tour exists" in capsys.readouterr().out


def test_run_benchmark_skips_bad_files(tmp_path, data_dir, capsys):
    bad = tmp_path / "bad.txt"
    bad.write_text("0 1\n1\n")
    df = run_benchmark(sizes=[3, 5], files=[data_dir / "test1.txt", tmp_path / "missing.txt", bad])
    assert list(df["Problem"]) == ["test1.txt", "random3", "random5"]
    assert df.loc[0, "Found_Cost"] == 80
    captured = capsys.readouterr()
    assert "File not found" in captured.out
    assert "bad.txt" in captured.out


def test_load_any_reads_text(data_dir):
    assert len(load_any(data_dir / "test3.txt")) == 6


def test_save_and_plot(tmp_path):
    df = run_benchmark(sizes=[3, 4, 5])
    csv_path = tmp_path / "log.csv"
    save_results(df, csv_path)
    assert len(pd.read_csv(csv_path)) == 3

    png = plot_performance_trends(df, tmp_path / "trend.png")
    assert png is not None
    assert (tmp_path / "trend.png").exists()


def test_plot_empty_dataframe(tmp_path):
    assert plot_performance_trends(pd.DataFrame(), tmp_path / "x.png") is None


def test_opt_tour_next_to_tsp_in_dotted_directory(tmp_path):
    from test_tsplib_io import TINY4_TOUR, TINY4_TSP

    run_dir = tmp_path / "runs.tsp"
    run_dir.mkdir()
    (run_dir / "tiny4.tsp").write_text(TINY4_TSP)
    (run_dir / "tiny4.opt.tour").write_text(TINY4_TOUR)
    df = run_benchmark(sizes=[], files=[run_dir / "tiny4.tsp"])
    assert df.loc[0, "Found_Cost"] == 80
    assert df.loc[0, "Optimal_Cost"] == 80
    assert df.loc[0, "Error_Pct"] == 0
