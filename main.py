from config import Config
from env import RouteProblem
from viz import draw_routes
from io_utils import make_run_dir, save_config, save_routes, save_summary
from router import RoutePlanner


def main() -> None:
    """
    Single-run entry point for the multi-stop route planner.

    Typical usage:
      1. Open config.py and edit the Config defaults
         (grid size, obstacle density, number of waypoints, GA parameters,
         which planners to run, ...).
      2. Run:
             python main.py
      3. Inspect the output folder under outputs/
         (routes.png, routes.json, summary.json, config.json).
    """

    # ------------------------------------------------------------------
    # 1) Configuration
    # ------------------------------------------------------------------
    # Users are expected to edit config.py instead of this file.
    cfg = Config()

    # Enable textual logs when running via main.py.
    cfg.log_events = True

    # ------------------------------------------------------------------
    # 2) Output directory
    # ------------------------------------------------------------------
    run_dir = make_run_dir(cfg, base="outputs")
    save_config(cfg, run_dir)

    # ------------------------------------------------------------------
    # 3) Problem + planners
    # ------------------------------------------------------------------
    # RouteProblem.from_config samples obstacles (seeded) until enough of
    # the grid is connected to the origin, then drops the waypoints on
    # reachable cells.
    problem = RouteProblem.from_config(cfg)

    planner = RoutePlanner(
        cfg=cfg,
        problem=problem,
        log_events=cfg.log_events,
        validate=True,
    )

    # Timing stats should only reflect this run.
    planner.reset_stats()

    # ------------------------------------------------------------------
    # 4) Plan with every selected planner
    # ------------------------------------------------------------------
    results = planner.run()

    # ------------------------------------------------------------------
    # 5) Save
    # ------------------------------------------------------------------
    save_summary(planner.summary(), run_dir)
    save_routes(problem, results, run_dir)
    draw_routes(problem, results, out_path=run_dir / "routes.png")

    print(f"Run directory: {run_dir}")
    print(planner.comparison_message())


if __name__ == "__main__":
    main()
