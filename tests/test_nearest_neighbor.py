from math import inf

import pytest

from env import GridMap
from pathfinding.astar import AStarPlanner
from pathfinding.bfs import BFSPlanner
from tours import TOUR_ALGOS
from tours.nearest_neighbor import NearestNeighborTour

SEARCHES = [BFSPlanner, AStarPlanner]


@pytest.fixture(params=SEARCHES, ids=["bfs", "astar"])
def tour(request):
    return NearestNeighborTour(request.param(), name="NN")


def test_both_instantiations_are_registered():
    bfs_nn = TOUR_ALGOS["NearestNeighborBFS"]
    astar_nn = TOUR_ALGOS["NearestNeighborAStar"]
    assert bfs_nn.path_algo.name == "BFS"
    assert astar_nn.path_algo.name == "AStar"


def test_requires_path_algo(open_grid):
    with pytest.raises(RuntimeError):
        NearestNeighborTour().solve(open_grid, (0, 0), [(1, 1)])


def test_goes_to_closest_first(tour, open_grid, check_path):
    waypoints = [(4, 4), (0, 2), (2, 2)]
    result = tour.solve(open_grid, (0, 0), waypoints)

    assert result.visitation_order == [(0, 0), (0, 2), (2, 2), (4, 4)]
    assert result.total_cost == 2 + 2 + 4
    check_path(open_grid, result.full_path, (0, 0), (4, 4), cost=result.total_cost)
    # caller's list is left alone
    assert waypoints == [(4, 4), (0, 2), (2, 2)]


def test_ties_go_to_first_listed(tour, open_grid):
    result = tour.solve(open_grid, (0, 0), [(4, 0), (0, 4)])
    assert result.visitation_order == [(0, 0), (4, 0), (0, 4)]
    assert result.total_cost == 12


def test_stops_appear_in_path_in_visiting_order(tour, check_path):
    grid = GridMap.from_rows([
        [0, 0, 0, 0, 0, 0],
        [0, 1, 1, 1, 1, 0],
        [0, 0, 0, 0, 1, 0],
        [1, 1, 1, 0, 1, 0],
        [0, 0, 0, 0, 0, 0],
    ])
    result = tour.solve(grid, (2, 0), [(4, 0), (0, 5), (2, 3)])

    check_path(grid, result.full_path, (2, 0), result.visitation_order[-1], cost=result.total_cost)
    idx = [result.full_path.index(s) for s in result.visitation_order]
    assert idx == sorted(idx)


def test_unreachable_waypoint_fails_whole_route(tour, walled_grid):
    result = tour.solve(walled_grid, (0, 0), [(1, 3), (4, 4)])

    assert not result.found
    assert result.full_path is None
    assert result.total_cost == inf
    # partial progress is still reported
    assert result.visitation_order == [(0, 0), (1, 3)]
    assert (1, 3) in result.all_explored


def test_explored_union_has_no_duplicates(tour, open_grid):
    result = tour.solve(open_grid, (0, 0), [(4, 4), (0, 4), (4, 0), (2, 2)])
    assert len(result.all_explored) == len(set(result.all_explored))
    assert result.all_explored[0] == (0, 0)


def test_waypoints_matched_by_coordinate_value(tour, open_grid):
    # equal coordinates built separately must still be treated as one stop
    a = tuple([1, 1])
    b = (1, 1)
    assert a == b and a is not b
    result = tour.solve(open_grid, (0, 0), [a, (3, 3)])
    assert result.visitation_order == [(0, 0), (1, 1), (3, 3)]
    assert result.total_cost == 6


def test_repeated_calls_are_identical(tour):
    grid = GridMap.empty(7, 7).with_blocked([(3, c) for c in range(6)])
    waypoints = [(6, 0), (0, 6), (5, 5), (1, 1)]
    first = tour.solve(grid, (0, 0), waypoints)
    second = tour.solve(grid, (0, 0), waypoints)
    assert first.visitation_order == second.visitation_order
    assert first.total_cost == second.total_cost
    assert first.full_path == second.full_path
