import itertools

from robot_tour.algorithms.bfs import shortest_path
from robot_tour.geometry import is_walkable, path_length
from robot_tour.models import Cell, GridSpec


def test_same_cell_returns_single_element():
    grid = GridSpec.empty(3)
    assert shortest_path(grid, Cell(1, 1), Cell(1, 1)) == [Cell(1, 1)]


def test_open_grid_length_is_manhattan_distance():
    grid = GridSpec.empty(5)
    cells = [Cell(x, y) for x in range(5) for y in range(5)]
    for a, b in itertools.product(cells, repeat=2):
        path = shortest_path(grid, a, b)
        assert path[0] == a
        assert path[-1] == b
        assert path_length(path) == a.manhattan(b)
        assert is_walkable(grid, path)


def test_tie_break_follows_neighbor_order():
    # From (0, 0) "down" is expanded before "right"
    grid = GridSpec.empty(2)
    assert shortest_path(grid, Cell(0, 0), Cell(1, 1)) == [Cell(0, 0), Cell(0, 1), Cell(1, 1)]


def test_route_detours_around_wall(make_grid):
    # Wall between (0, 0) and (1, 0); must go down, across and back up
    grid = make_grid(size=3, vwalls=[(0, 0)])
    path = shortest_path(grid, Cell(0, 0), Cell(1, 0))
    assert path == [Cell(0, 0), Cell(0, 1), Cell(1, 1), Cell(1, 0)]
    assert is_walkable(grid, path)


def test_adding_blocking_wall_never_shortens(make_grid):
    a, b = Cell(0, 1), Cell(2, 1)
    before = shortest_path(make_grid(size=3), a, b)
    after = shortest_path(make_grid(size=3, vwalls=[(0, 1)]), a, b)
    assert path_length(before) == 2
    assert path_length(after) > path_length(before)


def test_unreachable_goal_returns_empty(make_grid):
    # Column 0 is cut off from the rest of the grid
    grid = make_grid(size=3, vwalls=[(0, 0), (0, 1), (0, 2)])
    assert shortest_path(grid, Cell(0, 0), Cell(2, 2)) == []
    assert path_length(shortest_path(grid, Cell(0, 0), Cell(0, 2))) == 2


def test_enclosed_cell_is_unreachable(make_grid):
    grid = make_grid(size=3, vwalls=[(0, 1), (1, 1)], hwalls=[(1, 0), (1, 1)])
    assert shortest_path(grid, Cell(0, 0), Cell(1, 1)) == []
    assert shortest_path(grid, Cell(1, 1), Cell(0, 0)) == []
    assert shortest_path(grid, Cell(1, 1), Cell(1, 1)) == [Cell(1, 1)]
