import pandas as pd
import pytest

from batch_run import _fieldnames, flatten_dict, iter_param_combinations, run_one, run_single_experiment
from plot_utils import group_stats, load_results, plot_metric_boxplots, plot_success_rate


def test_flatten_dict():
    assert flatten_dict({"a": {"b": 1, "c": {"d": 2}}, "e": 3}) == {"a.b": 1, "a.c.d": 2, "e": 3}


def test_iter_param_combinations():
    combos = list(iter_param_combinations({"rows": [10, 20], "seed": [0, 1, 2]}))
    assert len(combos) == 6
    assert combos[0] == {"rows": 10, "seed": 0}
    assert combos[-1] == {"rows": 20, "seed": 2}


SMALL = dict(
    purpose="test",
    rows=8,
    cols=8,
    n_waypoints=3,
    obstacle_density=0.1,
    seed=1,
    population_size=20,
    generations=10,
)


def test_single_experiment_gives_one_row_per_planner():
    rows = run_single_experiment(**SMALL)
    by_planner = {r["planner"]: r for r in rows}

    assert set(by_planner) == {"NearestNeighborBFS", "NearestNeighborAStar", "Genetic"}
    assert by_planner["NearestNeighborAStar"]["route.gap_vs_reference"] == 0
    assert by_planner["NearestNeighborBFS"]["route.total_cost"] == by_planner["NearestNeighborAStar"]["route.total_cost"]
    assert by_planner["Genetic"]["route.generations_run"] == 10
    assert "route.generations_run" not in by_planner["NearestNeighborBFS"]


def test_run_one_merges_params_and_orders_columns():
    rows = run_one(SMALL)
    assert len(rows) == 3
    assert rows[0]["purpose"] == "test"
    assert rows[0]["seed"] == 1
    assert _fieldnames(rows[0])[:2] == ["purpose", "planner"]


def test_run_one_swallows_failures(capsys):
    assert run_one(dict(SMALL, rows=0, cols=0)) == []
    assert "[ERROR]" in capsys.readouterr().out


def test_load_results_and_stats(tmp_path):
    csv_path = tmp_path / "batch.csv"
    pd.DataFrame({
        "planner": ["A", "A", "B", "B"],
        "route.total_cost": [10, 12, 9, None],
    }).to_csv(csv_path, index=False)

    df = load_results(csv_path, ["planner"], ["route.total_cost"])
    stats = group_stats(df, "planner", "route.total_cost")
    assert stats.loc["A", "n"] == 2
    assert stats.loc["A", "median"] == 11
    assert stats.loc["B", "n"] == 1

    with pytest.raises(ValueError):
        load_results(csv_path, ["planner"], ["route.runtime"])
    with pytest.raises(FileNotFoundError):
        load_results(tmp_path / "missing.csv", ["planner"], ["route.total_cost"])


def test_success_rate_and_plots(tmp_path):
    csv_path = tmp_path / "batch.csv"
    pd.DataFrame({
        "planner": ["A", "A", "B", "B"],
        "route.found": [True, True, True, False],
        "route.total_cost": [10, 12, 9, None],
    }).to_csv(csv_path, index=False)

    rates = plot_success_rate(csv_path, output_dir=tmp_path, show=False)
    assert rates["A"] == 1.0
    assert rates["B"] == 0.5

    plot_metric_boxplots(csv_path, ["planner"], ["route.total_cost"], output_dir=tmp_path, show=False)
    assert (tmp_path / "box_route_total_cost.pdf").exists()
    assert (tmp_path / "success_rate.pdf").exists()
