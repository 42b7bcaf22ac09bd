# viz.py
from __future__ import annotations
from typing import Dict
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Patch

from env import RouteProblem
from tours.base import RouteResult


# --- Color palette (RGB in 0–1) ---
BG_COLOR       = np.array([0.96, 0.96, 0.96])  # light gray background
BLOCKED_COLOR  = np.array([0.30, 0.30, 0.30])  # dark gray
EXPLORED_COLOR = np.array([0.62, 0.78, 0.95])  # soft blue


def grid_image(problem: RouteProblem, result: RouteResult | None = None) -> np.ndarray:
    """rows x cols x 3 RGB image: background, explored cells, obstacles."""
    grid = problem.grid
    img = np.zeros((grid.rows, grid.cols, 3), dtype=float)
    img[:, :, :] = BG_COLOR

    if result is not None:
        for (r, c) in result.all_explored:
            img[r, c] = EXPLORED_COLOR

    blocked = np.array(grid.cells, dtype=bool).reshape(grid.rows, grid.cols)
    img[blocked] = BLOCKED_COLOR
    return img


def draw_routes(
    problem: RouteProblem,
    results: Dict[str, RouteResult],
    out_path: str | Path,
) -> None:
    """
    One panel per planner, side by side:
      - obstacles: dark gray
      - cells explored by the planner's searches: soft blue
      - route: orange line
      - origin: purple star
      - waypoints: green crosses, numbered in visiting order
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    rows, cols = problem.grid.rows, problem.grid.cols
    n = max(1, len(results))
    fig, axes = plt.subplots(1, n, figsize=(n * cols / 2.5, rows / 2.5), squeeze=False)

    for ax, (name, result) in zip(axes[0], results.items()):
        ax.imshow(grid_image(problem, result), origin="upper")

        # Grid lines (subtle)
        ax.set_xticks(np.arange(-0.5, cols, 1), minor=True)
        ax.set_yticks(np.arange(-0.5, rows, 1), minor=True)
        ax.grid(which="minor", color="0.85", linestyle="-", linewidth=0.4)

        if result.full_path:
            pr = [p[0] for p in result.full_path]
            pc = [p[1] for p in result.full_path]
            ax.plot(pc, pr, color="#ff7f0e", linewidth=2.0)

        if problem.waypoints:
            ax.scatter(
                [w[1] for w in problem.waypoints],
                [w[0] for w in problem.waypoints],
                marker="x",
                s=80,
                c="#2ca02c",       # green
                linewidths=1.5,
            )

        # visiting order labels (origin is stop 0)
        for i, (r, c) in enumerate(result.visitation_order[1:], start=1):
            ax.annotate(str(i), (c, r), xytext=(4, 4), textcoords="offset points", fontsize=8)

        ax.scatter(
            [problem.origin[1]],
            [problem.origin[0]],
            marker="*",
            s=150,
            c="#9467bd",          # purple
            edgecolors="white",
            linewidths=1.0,
        )

        cost = f"cost {result.total_cost}" if result.found else "no route"
        ax.set_title(f"{name}\n{cost}", fontsize=11)
        ax.set_xlim(-0.5, cols - 0.5)
        ax.set_ylim(rows - 0.5, -0.5)
        ax.set_aspect("equal")
        ax.set_xticks([])
        ax.set_yticks([])

    handles = [
        Patch(facecolor=BLOCKED_COLOR, edgecolor="black", label="blocked"),
        Patch(facecolor=EXPLORED_COLOR, edgecolor="black", label="explored"),
        Patch(facecolor="#ff7f0e", edgecolor="black", label="route"),
    ]
    fig.legend(
        handles=handles,
        loc="upper center",
        bbox_to_anchor=(0.5, 1.0),
        ncol=len(handles),
        fontsize=9,
        frameon=False,
    )

    fig.tight_layout(rect=[0.0, 0.0, 1.0, 0.93])
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
