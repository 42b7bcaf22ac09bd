#!/usr/bin/env python3
"""
plot_utils.py

Charts for the long-format CSV written by batch_run.py (one row per
experiment x planner).

  - plot_metric_boxplots: one box+strip plot per numeric metric, grouped by
    one or more columns (usually 'planner').
  - plot_success_rate: share of experiments in which each planner found a
    full route. Failed routes have no cost, so they never show up in the
    cost boxplots; this chart is where they become visible.

Usage:

    python batch_run.py          # fills outputs_batch/batch_results.csv
    python plot_utils.py         # writes PDFs to outputs_batch/plots/

or from Python:

    from plot_utils import plot_metric_boxplots
    plot_metric_boxplots("outputs_batch/batch_results.csv",
                         group_by=["n_waypoints", "planner"],
                         metrics=["route.total_cost"],
                         output_dir="outputs_batch/plots")
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd
import matplotlib.pyplot as plt

import seaborn as sns


PathLike = Union[str, Path]

GROUP_LABEL = "__group__"

TITLE_SIZE = 16
LABEL_SIZE = 13


def load_results(csv_path: PathLike, group_by: Sequence[str], metrics: Sequence[str]) -> pd.DataFrame:
    """
    Read the batch CSV, make sure every requested column is present and add
    a GROUP_LABEL column ("5 | Genetic", ...) joining the group_by values.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {csv_path}")

    df = pd.read_csv(csv_path)

    missing = [c for c in [*group_by, *metrics] if c not in df.columns]
    if missing:
        raise ValueError(f"columns {missing} not in {csv_path.name}; have {sorted(df.columns)}")

    df[GROUP_LABEL] = df[list(group_by)].astype(str).agg(" | ".join, axis=1)
    return df


def group_stats(df: pd.DataFrame, group_col: str, metric: str) -> pd.DataFrame:
    """Count, median and quartiles of 'metric' per group (NaNs dropped)."""
    sub = df[[group_col, metric]].dropna()
    return (
        sub.groupby(group_col)[metric]
        .agg(
            n="count",
            median="median",
            q1=lambda s: s.quantile(0.25),
            q3=lambda s: s.quantile(0.75),
        )
        .sort_index()
    )


def success_rate(df: pd.DataFrame, group_col: str = "planner") -> pd.Series:
    """Fraction of rows per group with a complete route ('route.found')."""
    found = df["route.found"].astype(str).str.lower() == "true"
    return found.groupby(df[group_col]).mean().sort_index()


def _finish(fig: plt.Figure, out: Optional[Path], show: bool) -> None:
    fig.tight_layout()
    if out is not None:
        fig.savefig(out, dpi=150, bbox_inches="tight")
        print(f"Saved {out}")
    if show:
        plt.show()
    else:
        plt.close(fig)


def _draw_metric(ax: plt.Axes, sub: pd.DataFrame, metric: str, order: List[str], palette: Dict[str, tuple]) -> None:
    sns.boxplot(
        data=sub, x=GROUP_LABEL, y=metric, hue=GROUP_LABEL,
        order=order, palette=palette, legend=False, showfliers=False, ax=ax,
    )
    sns.stripplot(
        data=sub, x=GROUP_LABEL, y=metric, order=order,
        color="0.25", size=3, alpha=0.5, jitter=0.2, ax=ax,
    )


def plot_metric_boxplots(
    csv_path: PathLike,
    group_by: Sequence[str],
    metrics: Sequence[str],
    output_dir: Optional[PathLike] = None,
    show: bool = True,
    width_per_group: float = 1.4,
    labels: Optional[Dict[str, str]] = None,
    log_metrics: Sequence[str] = (),
    palette_name: str = "colorblind",
) -> None:
    """
    One figure per metric. Group statistics are printed as well.

    Parameters
    ----------
    csv_path : str or Path
        Batch CSV from batch_run.py.
    group_by : list[str]
        Column(s) forming the x-axis groups, e.g. ['planner'].
    metrics : list[str]
        Numeric columns such as 'route.total_cost' or 'route.runtime'.
        Rows with an empty value (failed routes) are dropped per metric.
    output_dir : str or Path or None
        Where to save 'box_<metric>.pdf'; nothing is saved when None.
    labels : dict
        Optional pretty y-axis labels keyed by metric.
    log_metrics : list[str]
        Metrics drawn on a log y-axis (runtimes spread over decades).
    """
    df = load_results(csv_path, group_by, metrics)
    labels = labels or {}

    out_dir = Path(output_dir) if output_dir is not None else None
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)

    order = sorted(df[GROUP_LABEL].unique())
    palette = dict(zip(order, sns.color_palette(palette_name, n_colors=len(order))))
    sns.set_theme(style="whitegrid", context="paper")

    for metric in metrics:
        sub = df[[GROUP_LABEL, metric]].dropna()
        if sub.empty:
            print(f"[WARN] '{metric}' has no values; skipped.")
            continue

        print(f"\n[STATS] {metric}")
        print(group_stats(sub, GROUP_LABEL, metric).to_string(float_format=lambda x: f"{x:.4g}"))

        fig, ax = plt.subplots(figsize=(max(6.0, width_per_group * len(order)), 5))
        _draw_metric(ax, sub, metric, order, palette)

        ax.set_title(labels.get(metric, metric), fontsize=TITLE_SIZE)
        ax.set_xlabel(" | ".join(group_by), fontsize=LABEL_SIZE)
        ax.set_ylabel(labels.get(metric, metric), fontsize=LABEL_SIZE)
        ax.tick_params(axis="x", labelrotation=30)
        if metric in log_metrics:
            ax.set_yscale("log")

        out = out_dir / f"box_{metric.replace('.', '_')}.pdf" if out_dir is not None else None
        _finish(fig, out, show)


def plot_success_rate(
    csv_path: PathLike,
    output_dir: Optional[PathLike] = None,
    show: bool = True,
    palette_name: str = "colorblind",
) -> pd.Series:
    """Bar chart of success_rate per planner; returns the rates."""
    df = load_results(csv_path, ["planner"], ["route.found"])
    rates = success_rate(df)

    fig, ax = plt.subplots(figsize=(max(5.0, 1.4 * len(rates)), 4))
    sns.barplot(
        x=rates.index, y=rates.values, hue=rates.index,
        palette=palette_name, legend=False, ax=ax,
    )
    ax.set_ylim(0, 1)
    ax.set_ylabel("Routes found (fraction)", fontsize=LABEL_SIZE)
    ax.set_xlabel("planner", fontsize=LABEL_SIZE)
    ax.set_title("Planner success rate", fontsize=TITLE_SIZE)

    out = None
    if output_dir is not None:
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        out = out / "success_rate.pdf"
    _finish(fig, out, show)
    return rates


# ---------------------------------------------------------------------
# Defaults for `python plot_utils.py`
# ---------------------------------------------------------------------
DEFAULT_CSV = "outputs_batch/batch_results.csv"
DEFAULT_OUTPUT_DIR = "outputs_batch/plots"
DEFAULT_GROUP_BY = ["planner"]
DEFAULT_LABELS = {
    "route.total_cost": "Total route cost (steps)",
    "route.gap_vs_reference": "Cost minus nearest-neighbor (A*)",
    "route.explored_count": "Explored cells",
    "route.runtime": "Runtime (s)",
}


def _run_with_defaults() -> None:
    print(f"Reading {DEFAULT_CSV}")
    plot_metric_boxplots(
        DEFAULT_CSV,
        group_by=DEFAULT_GROUP_BY,
        metrics=list(DEFAULT_LABELS),
        output_dir=DEFAULT_OUTPUT_DIR,
        show=False,
        labels=DEFAULT_LABELS,
        log_metrics=["route.runtime"],
    )
    print(plot_success_rate(DEFAULT_CSV, output_dir=DEFAULT_OUTPUT_DIR, show=False).to_string())


if __name__ == "__main__":
    _run_with_defaults()
