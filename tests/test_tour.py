import math

from robot_tour.algorithms.bfs import shortest_path
from robot_tour.algorithms.tour import build_legs, find_best_tour
from robot_tour.geometry import is_walkable, path_length
from robot_tour.models import Cell, GridSpec


def test_no_checkpoints_goes_start_end_checkpoint_exit():
    grid = GridSpec.empty(5)
    start, end_cp, exit_cell = Cell(0, 0), Cell(4, 2), Cell(1, 4)

    result = find_best_tour(grid, start, [], end_cp, exit_cell)

    expected = path_length(shortest_path(grid, start, end_cp)) + path_length(
        shortest_path(grid, end_cp, exit_cell)
    )
    assert result.found
    assert result.n_permutations == 1
    assert result.n_rejected == 0
    assert result.order == ()
    assert result.length == expected
    assert result.route[0] == start
    assert end_cp in result.route
    assert result.route[-1] == exit_cell


def test_picks_shortest_order():
    grid = GridSpec.empty(5)
    start = Cell(0, 0)
    checkpoints = [Cell(4, 0), Cell(1, 0)]

    result = find_best_tour(grid, start, checkpoints, Cell(2, 0), Cell(2, 0))

    # (1,0) -> (4,0) -> (2,0) costs 1 + 3 + 2; the other order costs 4 + 3 + 1
    assert result.order == (Cell(1, 0), Cell(4, 0))
    assert result.length == 6
    assert result.n_permutations == 2
    assert is_walkable(grid, result.route)


def test_every_permutation_is_evaluated():
    grid = GridSpec.empty(4)
    checkpoints = [Cell(1, 1), Cell(2, 2), Cell(3, 0), Cell(0, 3)]
    result = find_best_tour(grid, Cell(0, 0), checkpoints, Cell(3, 3), Cell(3, 3))
    assert result.n_permutations == math.factorial(4)
    assert set(result.order) == set(checkpoints)


def test_ties_keep_first_order_in_enumeration():
    grid = GridSpec.empty(2)
    checkpoints = [Cell(1, 0), Cell(0, 1)]
    result = find_best_tour(grid, Cell(0, 0), checkpoints, Cell(1, 1), Cell(1, 1))
    assert result.length == 4
    assert result.order == (Cell(1, 0), Cell(0, 1))


def test_end_checkpoint_is_not_treated_as_plain_checkpoint():
    grid = GridSpec.empty(3)
    result = find_best_tour(grid, Cell(0, 0), [Cell(2, 2), Cell(1, 0)], Cell(2, 2), Cell(0, 2))
    assert result.n_permutations == 1
    assert result.order == (Cell(1, 0),)


def test_route_visits_checkpoints_in_order():
    grid = GridSpec.empty(4)
    checkpoints = [Cell(3, 0), Cell(0, 3)]
    result = find_best_tour(grid, Cell(0, 0), checkpoints, Cell(3, 3), Cell(2, 3))

    positions = [result.route.index(c) for c in result.order]
    assert positions == sorted(positions)
    last_end_visit = max(i for i, c in enumerate(result.route) if c == Cell(3, 3))
    assert last_end_visit > positions[-1]


def test_unreachable_checkpoint_rejects_every_order(make_grid):
    # (2, 2) is walled off from the rest of a 3x3 grid
    grid = make_grid(size=3, end=(0, 2), end_checkpoint=(0, 2), vwalls=[(1, 2)], hwalls=[(2, 1)])
    result = find_best_tour(grid, Cell(0, 0), [Cell(2, 2), Cell(1, 0)], Cell(0, 2), Cell(0, 2))

    assert not result.found
    assert result.route == []
    assert result.length == float("inf")
    assert result.n_rejected == result.n_permutations == 2


def test_build_legs_stops_at_unreachable_leg(make_grid):
    grid = make_grid(size=3, end=(0, 2), end_checkpoint=(0, 2), vwalls=[(1, 2)], hwalls=[(2, 1)])
    assert build_legs(grid, [Cell(0, 0), Cell(2, 2), Cell(0, 2)]) is None

    legs = build_legs(grid, [Cell(0, 0), Cell(0, 0), Cell(2, 0)])
    assert legs == [[Cell(0, 0)], [Cell(0, 0), Cell(1, 0), Cell(2, 0)]]
