import time
from dataclasses import dataclass, field
from itertools import permutations
from typing import List, Optional, Sequence, Tuple

from ..models import Cell, GridSpec
from ..geometry import concat_paths, path_length
from .bfs import shortest_path


@dataclass
class TourResult:
    """Outcome of the checkpoint order search.

    Attributes:
        route: Merged cell path of the best order, empty if none was feasible.
        length: Edge count of ``route`` (``inf`` when no order was feasible).
        order: Plain checkpoints in the winning visiting order.
        n_permutations: Orders evaluated.
        n_rejected: Orders dropped because some leg was unreachable.
        cpu_time: Seconds spent searching.
    """

    route: List[Cell] = field(default_factory=list)
    length: float = float("inf")
    order: Tuple[Cell, ...] = ()
    n_permutations: int = 0
    n_rejected: int = 0
    cpu_time: float = 0.0

    @property
    def found(self) -> bool:
        return bool(self.route)


def build_legs(
    grid: GridSpec, waypoints: Sequence[Cell]
) -> Optional[List[List[Cell]]]:
    """Shortest path for each consecutive waypoint pair, or None if any is unreachable."""
    legs: List[List[Cell]] = []
    for a, b in zip(waypoints, waypoints[1:]):
        leg = shortest_path(grid, a, b)
        if not leg:
            return None
        legs.append(leg)
    return legs


def find_best_tour(
    grid: GridSpec,
    start: Cell,
    checkpoints: Sequence[Cell],
    end_checkpoint: Cell,
    exit_cell: Cell,
) -> TourResult:
    """Exhaustively choose the checkpoint order with the shortest route.

    Every order of ``checkpoints`` is tried as
    ``start -> c0 -> ... -> end_checkpoint -> exit_cell``. Orders are
    enumerated lexicographically over checkpoint indices and the first
    order reaching the minimum length wins. Cost grows as k! for k
    checkpoints, so keep k in single digits.
    """
    t0 = time.perf_counter()

    cpts = [c for c in checkpoints if c != end_checkpoint]
    best = TourResult()

    for indices in permutations(range(len(cpts))):
        best.n_permutations += 1
        order = tuple(cpts[i] for i in indices)
        legs = build_legs(grid, [start, *order, end_checkpoint, exit_cell])
        if legs is None:
            best.n_rejected += 1
            continue

        route = concat_paths(legs)
        dist = path_length(route)
        if dist < best.length:
            best.length = dist
            best.route = route
            best.order = order

    best.cpu_time = time.perf_counter() - t0
    return best
