import matplotlib

matplotlib.use("Agg")

import pytest

from env import GridMap, manhattan


@pytest.fixture
def open_grid():
    return GridMap.empty(5, 5)


@pytest.fixture
def walled_grid():
    """5x5 with row 2 fully blocked: top and bottom halves are disconnected."""
    return GridMap.empty(5, 5).with_blocked([(2, c) for c in range(5)])


@pytest.fixture
def check_path():
    """Asserts a path is a contiguous chain of passable, 4-adjacent cells."""

    def _check(grid, path, source, dest, cost=None):
        assert path[0] == source
        assert path[-1] == dest
        for a, b in zip(path, path[1:]):
            assert manhattan(a, b) == 1
        for p in path:
            assert grid.in_bounds(p)
            assert not grid.is_blocked(p)
        if cost is not None:
            assert len(path) == cost + 1

    return _check
