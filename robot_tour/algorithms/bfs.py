from collections import deque
from typing import List, Optional

import numpy as np

from ..models import Cell, GridSpec
from ..geometry import neighbors


def shortest_path(grid: GridSpec, start: Cell, goal: Cell) -> List[Cell]:
    """Breadth-first search between two cell centers.

    Args:
        grid: Wall layout to search.
        start: First cell of the path.
        goal: Last cell of the path.

    Returns:
        Cells from ``start`` to ``goal`` inclusive with the fewest steps,
        ``[start]`` when both are the same cell, or an empty list when
        ``goal`` cannot be reached.
    """
    if start == goal:
        return [start]

    size = grid.size
    visited = np.zeros((size, size), dtype=bool)
    parent: dict[Cell, Optional[Cell]] = {start: None}

    queue = deque([start])
    visited[start.x, start.y] = True
    found = False

    while queue:
        cur = queue.popleft()
        if cur == goal:
            found = True
            break

        for nxt in neighbors(grid, cur):
            if not visited[nxt.x, nxt.y]:
                visited[nxt.x, nxt.y] = True
                parent[nxt] = cur
                queue.append(nxt)

    if not found:
        return []

    # Walk parents back from the goal
    path: List[Cell] = []
    node: Optional[Cell] = goal
    while node is not None:
        path.append(node)
        node = parent[node]
    path.reverse()
    return path
