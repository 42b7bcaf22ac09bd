import pytest

from config import Config
from env import GridMap, RouteProblem, check_inputs, pos_key


def test_from_rows_marks_blocked_cells():
    grid = GridMap.from_rows([[0, 1, 0], [0, 0, 1]])
    assert (grid.rows, grid.cols) == (2, 3)
    assert grid.is_blocked((0, 1))
    assert grid.is_blocked((1, 2))
    assert not grid.is_blocked((1, 0))
    assert grid.blocked_cells() == {(0, 1), (1, 2)}


def test_from_rows_rejects_ragged_table():
    with pytest.raises(ValueError):
        GridMap.from_rows([[0, 0], [0]])


def test_neighbors_are_down_up_right_left_and_clipped():
    grid = GridMap.empty(3, 3)
    assert grid.neighbors4((1, 1)) == [(2, 1), (0, 1), (1, 2), (1, 0)]
    assert grid.neighbors4((0, 0)) == [(1, 0), (0, 1)]


def test_neighbors_skip_blocked():
    grid = GridMap.empty(3, 3).with_blocked([(2, 1), (1, 0)])
    assert grid.neighbors4((1, 1)) == [(0, 1), (1, 2)]


def test_with_blocked_returns_a_new_grid():
    grid = GridMap.empty(2, 2)
    walled = grid.with_blocked([(0, 0)])
    assert not grid.is_blocked((0, 0))
    assert walled.is_blocked((0, 0))


def test_reachable_from(walled_grid):
    top = walled_grid.reachable_from((0, 0))
    assert len(top) == 10
    assert (4, 0) not in top


def test_pos_key():
    assert pos_key((3, 12)) == "3,12"


def test_check_inputs_accepts_valid_problem(open_grid):
    check_inputs(open_grid, (0, 0), [(4, 4), (0, 4)])


@pytest.mark.parametrize(
    "origin, waypoints",
    [
        ((5, 0), [(1, 1)]),          # origin off the grid
        ((0, 0), [(2, 2)]),          # waypoint on an obstacle
        ((0, 0), [(1, 1), (1, 1)]),  # duplicate waypoint
    ],
)
def test_check_inputs_rejects_bad_problem(origin, waypoints):
    grid = GridMap.empty(5, 5).with_blocked([(2, 2)])
    with pytest.raises(ValueError):
        check_inputs(grid, origin, waypoints)


def test_problem_from_config_is_seeded():
    cfg = Config(rows=12, cols=12, n_waypoints=5, obstacle_density=0.2, seed=7)
    a = RouteProblem.from_config(cfg)
    b = RouteProblem.from_config(cfg)
    assert a.grid == b.grid
    assert a.waypoints == b.waypoints


def test_problem_from_config_places_reachable_distinct_waypoints():
    cfg = Config(rows=15, cols=10, n_waypoints=6, obstacle_density=0.25, seed=3)
    problem = RouteProblem.from_config(cfg)

    assert problem.origin == (7, 5)
    assert not problem.grid.is_blocked(problem.origin)
    assert len(set(problem.waypoints)) == 6
    assert problem.origin not in problem.waypoints

    reachable = problem.grid.reachable_from(problem.origin)
    assert all(w in reachable for w in problem.waypoints)


def test_problem_from_config_gives_up_on_impossible_density():
    cfg = Config(rows=20, cols=20, n_waypoints=4, obstacle_density=1.0, max_obstacle_tries=3)
    with pytest.raises(RuntimeError):
        RouteProblem.from_config(cfg)
