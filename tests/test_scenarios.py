"""End-to-end behaviour shared by all three multi-stop planners."""
from math import inf

import pytest

from env import GridMap
from pathfinding.astar import AStarPlanner
from pathfinding.bfs import BFSPlanner
from tours.genetic import GeneticTour
from tours.nearest_neighbor import NearestNeighborTour


def make_planners():
    return [
        NearestNeighborTour(BFSPlanner(), name="NearestNeighborBFS"),
        NearestNeighborTour(AStarPlanner(), name="NearestNeighborAStar"),
        GeneticTour(seed=0),
    ]


@pytest.fixture(params=make_planners(), ids=lambda t: t.name)
def planner(request):
    return request.param


def test_single_waypoint_across_open_grid(planner, open_grid, check_path):
    result = planner.solve(open_grid, (0, 0), [(4, 4)])
    assert result.total_cost == 8
    assert len(result.full_path) == 9
    assert result.visitation_order == [(0, 0), (4, 4)]
    check_path(open_grid, result.full_path, (0, 0), (4, 4), cost=8)


def test_wall_without_gap_fails_route(planner, walled_grid):
    result = planner.solve(walled_grid, (0, 0), [(4, 0)])
    assert result.full_path is None
    assert result.total_cost == inf
    assert not result.found


def test_two_waypoints_second_leg_starts_at_first_stop(planner, open_grid):
    result = planner.solve(open_grid, (0, 0), [(0, 4), (4, 0)])
    assert result.total_cost == 12
    assert len(result.full_path) == 13
    assert result.visitation_order[0] == (0, 0)
    assert set(result.visitation_order[1:]) == {(0, 4), (4, 0)}


def test_nearest_neighbor_tie_uses_input_order(open_grid):
    for planner in make_planners()[:2]:
        result = planner.solve(open_grid, (0, 0), [(0, 4), (4, 0)])
        assert result.visitation_order == [(0, 0), (0, 4), (4, 0)]


def test_zero_waypoints(planner, open_grid):
    result = planner.solve(open_grid, (0, 0), [])
    assert result.full_path == [(0, 0)]
    assert result.visitation_order == [(0, 0)]
    assert result.total_cost == 0


def test_isolated_waypoint_among_reachable_ones(planner):
    # (5, 5) is boxed in; everything else is reachable
    grid = GridMap.empty(7, 7).with_blocked([(4, 5), (6, 5), (5, 4), (5, 6)])
    result = planner.solve(grid, (0, 0), [(2, 2), (5, 5), (0, 6)])
    assert result.full_path is None
    assert result.total_cost == inf


def test_path_never_touches_blocked_cells(planner, check_path):
    grid = GridMap.from_rows([
        [0, 0, 0, 1, 0, 0, 0],
        [0, 1, 0, 1, 0, 1, 0],
        [0, 1, 0, 0, 0, 1, 0],
        [0, 1, 1, 1, 1, 1, 0],
        [0, 0, 0, 0, 0, 0, 0],
    ])
    result = planner.solve(grid, (0, 0), [(0, 6), (2, 2), (4, 3)])
    assert result.found
    check_path(grid, result.full_path, (0, 0), result.visitation_order[-1], cost=result.total_cost)
