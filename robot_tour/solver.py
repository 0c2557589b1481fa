import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .models import Cell, Command, GridSpec
from .algorithms.tour import TourResult, find_best_tour
from .algorithms.motion import (
    build_commands,
    from_center,
    is_feasible,
    to_center,
    total_distance,
)


class FailureReason(Enum):
    """Why a solve produced no command list."""

    PRECONDITION = "Not all conditions met (start/end or end checkpoint not set)."
    OFF_GRID_START = "Cannot move from start corner/edge to center without going off-grid."
    UNREACHABLE = "No path found."
    OFF_GRID_END = "Cannot move from center to final corner/edge without going off-grid."

    @property
    def message(self) -> str:
        return self.value


class SolveError(Exception):
    """Base class for solve failures raised by ``SolveResult.raise_for_failure``."""

    reason: Optional[FailureReason] = None

    def __init__(self, message: Optional[str] = None):
        if message is None:
            if self.reason is None:
                raise TypeError("SolveError requires a message when it has no reason")
            message = self.reason.message
        super().__init__(message)


class PreconditionError(SolveError):
    """Raised when a robot is unplaced or the end checkpoint is unset."""
    reason = FailureReason.PRECONDITION


class OffGridStartError(SolveError):
    """Raised when undocking at the start would leave the grid."""
    reason = FailureReason.OFF_GRID_START


class UnreachableError(SolveError):
    """Raised when no checkpoint order yields a connected route."""
    reason = FailureReason.UNREACHABLE


class OffGridEndError(SolveError):
    """Raised when docking at the exit would leave the grid."""
    reason = FailureReason.OFF_GRID_END


_ERRORS = {cls.reason: cls for cls in (PreconditionError, OffGridStartError, UnreachableError, OffGridEndError)}


@dataclass
class SolveResult:
    """Outcome of one solve.

    Attributes:
        commands: Ordered motion commands, empty on failure.
        total_distance: Sum of command magnitudes.
        reason: Failure reason, None on success.
        route: Cell-center route chosen by the optimizer.
        tour: Optimizer diagnostics, None if the optimizer never ran.
        cpu_time: Seconds spent in the whole solve.
    """

    commands: List[Command] = field(default_factory=list)
    total_distance: float = 0.0
    reason: Optional[FailureReason] = None
    route: List[Cell] = field(default_factory=list)
    tour: Optional[TourResult] = None
    cpu_time: float = 0.0

    @property
    def success(self) -> bool:
        return self.reason is None

    @property
    def route_length(self) -> int:
        return max(0, len(self.route) - 1)

    def raise_for_failure(self) -> None:
        """Raise the matching ``SolveError`` if this solve failed."""
        if self.reason is not None:
            raise _ERRORS[self.reason]()


def solve(grid: GridSpec) -> SolveResult:
    """Plan the full command sequence for a grid snapshot.

    Steps run once, stopping at the first failure: preconditions, start
    undocking feasibility, checkpoint order search, exit docking
    feasibility, command construction.
    """
    t0 = time.perf_counter()

    def _fail(reason: FailureReason, tour: Optional[TourResult] = None) -> SolveResult:
        return SolveResult(reason=reason, tour=tour, cpu_time=time.perf_counter() - t0)

    start, end = grid.robot_start, grid.robot_end
    if (
        start is None
        or end is None
        or not start.valid
        or not end.valid
        or grid.end_checkpoint is None
    ):
        return _fail(FailureReason.PRECONDITION)

    heading = start.heading

    if not is_feasible(start.cell, to_center(start.position, heading), heading, grid.size):
        return _fail(FailureReason.OFF_GRID_START)

    tour = find_best_tour(
        grid,
        start.cell,
        grid.checkpoints,
        grid.end_checkpoint,
        end.cell,
    )
    if not tour.found:
        return _fail(FailureReason.UNREACHABLE, tour)

    # Exit docking uses the tour heading, not the exit robot's own heading
    if not is_feasible(tour.route[-1], from_center(end.position, heading), heading, grid.size):
        return _fail(FailureReason.OFF_GRID_END, tour)

    commands = build_commands(tour.route, heading, start.position, end.position)
    return SolveResult(
        commands=commands,
        total_distance=total_distance(commands),
        route=tour.route,
        tour=tour,
        cpu_time=time.perf_counter() - t0,
    )


def format_commands(commands: Sequence[Command]) -> str:
    """One command per line followed by the total distance."""
    lines = [str(cmd) for cmd in commands]
    lines.append(f"total distance: {total_distance(commands):g}")
    return "\n".join(lines)
