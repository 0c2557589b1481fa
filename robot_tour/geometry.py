from typing import List, Sequence

from .models import Cell, GridSpec


# Neighbor enumeration order: up, down, left, right.
# BFS tie-breaking between equal-length routes depends on it.
NEIGHBOR_OFFSETS = ((0, -1), (0, 1), (-1, 0), (1, 0))


def in_bounds(cell: Cell, size: int) -> bool:
    return 0 <= cell.x < size and 0 <= cell.y < size


def is_blocked(grid: GridSpec, a: Cell, b: Cell) -> bool:
    """Check whether a single step from ``a`` to ``b`` is disallowed.

    Targets outside the grid and pairs that are not one step apart along
    a single axis are reported as blocked.
    """
    if not in_bounds(b, grid.size):
        return True

    if a.x == b.x:
        if a.y == b.y + 1:
            return bool(grid.horizontal_walls[a.x, b.y])
        if a.y + 1 == b.y:
            return bool(grid.horizontal_walls[a.x, a.y])
    elif a.y == b.y:
        if a.x == b.x + 1:
            return bool(grid.vertical_walls[b.x, a.y])
        if a.x + 1 == b.x:
            return bool(grid.vertical_walls[a.x, a.y])

    return True


def neighbors(grid: GridSpec, cell: Cell) -> List[Cell]:
    """Cells reachable from ``cell`` in one step, in up/down/left/right order."""
    result: List[Cell] = []
    for dx, dy in NEIGHBOR_OFFSETS:
        nxt = Cell(cell.x + dx, cell.y + dy)
        if in_bounds(nxt, grid.size) and not is_blocked(grid, cell, nxt):
            result.append(nxt)
    return result


# =============================================================================
# Path utilities
# =============================================================================


def concat_paths(legs: Sequence[Sequence[Cell]]) -> List[Cell]:
    """Join legs that share endpoints, dropping each repeated first cell."""
    result: List[Cell] = []
    for i, leg in enumerate(legs):
        if i == 0:
            result = list(leg)
        else:
            result.extend(leg[1:])
    return result


def path_length(path: Sequence[Cell]) -> int:
    """Number of unit edges in a path."""
    return max(0, len(path) - 1)


def is_walkable(grid: GridSpec, path: Sequence[Cell]) -> bool:
    """Check that every consecutive pair is an unblocked unit step."""
    for i in range(len(path) - 1):
        if is_blocked(grid, path[i], path[i + 1]):
            return False
    return all(in_bounds(c, grid.size) for c in path)
