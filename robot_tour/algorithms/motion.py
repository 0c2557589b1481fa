"""Translate a cell-center route into heading-relative motion commands.

Docking half-steps are looked up in two fixed tables keyed by
(SubCellPosition, Heading). Both tables are hand-specified and are not
derived from each other.
"""
import math
from typing import Dict, List, Sequence, Tuple

from ..models import Cell, Command, Direction, Heading, SubCellPosition


HALF_STEP = 0.5
FULL_STEP = 1.0

# Slack added before flooring so positions landing exactly on a cell
# boundary count as inside the higher cell.
CELL_EPS = 1e-4

# Absolute (dx, dy) of a unit move in each relative direction. y grows downward.
DIRECTION_DELTAS: Dict[Heading, Dict[Direction, Tuple[int, int]]] = {
    Heading.UP: {
        Direction.FORWARD: (0, -1),
        Direction.BACKWARD: (0, 1),
        Direction.LEFT: (-1, 0),
        Direction.RIGHT: (1, 0),
    },
    Heading.DOWN: {
        Direction.FORWARD: (0, 1),
        Direction.BACKWARD: (0, -1),
        Direction.LEFT: (1, 0),
        Direction.RIGHT: (-1, 0),
    },
    Heading.LEFT: {
        Direction.FORWARD: (-1, 0),
        Direction.BACKWARD: (1, 0),
        Direction.LEFT: (0, 1),
        Direction.RIGHT: (0, -1),
    },
    Heading.RIGHT: {
        Direction.FORWARD: (1, 0),
        Direction.BACKWARD: (-1, 0),
        Direction.LEFT: (0, -1),
        Direction.RIGHT: (0, 1),
    },
}

_F, _B, _L, _R = Direction.FORWARD, Direction.BACKWARD, Direction.LEFT, Direction.RIGHT
_P = SubCellPosition


def _table(rows: Dict[Heading, Dict[SubCellPosition, Tuple[Direction, ...]]]):
    return {
        (pos, heading): tuple(Command(d, HALF_STEP) for d in dirs)
        for heading, by_pos in rows.items()
        for pos, dirs in by_pos.items()
    }


TO_CENTER: Dict[Tuple[SubCellPosition, Heading], Tuple[Command, ...]] = _table({
    Heading.UP: {
        _P.CENTER: (),
        _P.MID_TOP: (_B,),
        _P.MID_RIGHT: (_L,),
        _P.MID_BOTTOM: (_F,),
        _P.MID_LEFT: (_R,),
        _P.CORNER_TOP_LEFT: (_R, _B),
        _P.CORNER_TOP_RIGHT: (_L, _B),
        _P.CORNER_BOTTOM_LEFT: (_R, _F),
        _P.CORNER_BOTTOM_RIGHT: (_L, _F),
    },
    Heading.DOWN: {
        _P.CENTER: (),
        _P.MID_TOP: (_F,),
        _P.MID_RIGHT: (_R,),
        _P.MID_BOTTOM: (_B,),
        _P.MID_LEFT: (_L,),
        _P.CORNER_TOP_LEFT: (_L, _F),
        _P.CORNER_TOP_RIGHT: (_R, _F),
        _P.CORNER_BOTTOM_LEFT: (_L, _B),
        _P.CORNER_BOTTOM_RIGHT: (_R, _B),
    },
    Heading.LEFT: {
        _P.CENTER: (),
        _P.MID_TOP: (_R,),
        _P.MID_RIGHT: (_B,),
        _P.MID_BOTTOM: (_L,),
        _P.MID_LEFT: (_F,),
        _P.CORNER_TOP_LEFT: (_F, _R),
        _P.CORNER_TOP_RIGHT: (_B, _R),
        _P.CORNER_BOTTOM_LEFT: (_F, _L),
        _P.CORNER_BOTTOM_RIGHT: (_B, _L),
    },
    Heading.RIGHT: {
        _P.CENTER: (),
        _P.MID_TOP: (_L,),
        _P.MID_RIGHT: (_F,),
        _P.MID_BOTTOM: (_R,),
        _P.MID_LEFT: (_B,),
        _P.CORNER_TOP_LEFT: (_B, _L),
        _P.CORNER_TOP_RIGHT: (_F, _L),
        _P.CORNER_BOTTOM_LEFT: (_B, _R),
        _P.CORNER_BOTTOM_RIGHT: (_F, _R),
    },
})

FROM_CENTER: Dict[Tuple[SubCellPosition, Heading], Tuple[Command, ...]] = _table({
    Heading.UP: {
        _P.CENTER: (),
        _P.MID_TOP: (_F,),
        _P.MID_RIGHT: (_R,),
        _P.MID_BOTTOM: (_B,),
        _P.MID_LEFT: (_L,),
        _P.CORNER_TOP_LEFT: (_B, _L),
        _P.CORNER_TOP_RIGHT: (_B, _R),
        _P.CORNER_BOTTOM_LEFT: (_F, _L),
        _P.CORNER_BOTTOM_RIGHT: (_F, _R),
    },
    Heading.DOWN: {
        _P.CENTER: (),
        _P.MID_TOP: (_B,),
        _P.MID_RIGHT: (_L,),
        _P.MID_BOTTOM: (_F,),
        _P.MID_LEFT: (_R,),
        _P.CORNER_TOP_LEFT: (_B, _L),
        _P.CORNER_TOP_RIGHT: (_B, _R),
        _P.CORNER_BOTTOM_LEFT: (_F, _L),
        _P.CORNER_BOTTOM_RIGHT: (_F, _R),
    },
    Heading.LEFT: {
        _P.CENTER: (),
        _P.MID_TOP: (_L,),
        _P.MID_RIGHT: (_F,),
        _P.MID_BOTTOM: (_R,),
        _P.MID_LEFT: (_B,),
        _P.CORNER_TOP_LEFT: (_R, _F),
        _P.CORNER_TOP_RIGHT: (_R, _B),
        _P.CORNER_BOTTOM_LEFT: (_L, _F),
        _P.CORNER_BOTTOM_RIGHT: (_L, _B),
    },
    Heading.RIGHT: {
        _P.CENTER: (),
        _P.MID_TOP: (_R,),
        _P.MID_RIGHT: (_B,),
        _P.MID_BOTTOM: (_L,),
        _P.MID_LEFT: (_F,),
        _P.CORNER_TOP_LEFT: (_L, _B),
        _P.CORNER_TOP_RIGHT: (_L, _F),
        _P.CORNER_BOTTOM_LEFT: (_R, _B),
        _P.CORNER_BOTTOM_RIGHT: (_R, _F),
    },
})


def to_center(position: SubCellPosition, heading: Heading) -> List[Command]:
    """Half-steps from a docked position to the cell center."""
    return list(TO_CENTER[(position, heading)])


def from_center(position: SubCellPosition, heading: Heading) -> List[Command]:
    """Half-steps from the cell center to a docked position."""
    return list(FROM_CENTER[(position, heading)])


def resolve(command: Command, heading: Heading) -> Tuple[float, float]:
    """Absolute (dx, dy) displacement of a command under ``heading``."""
    dx, dy = DIRECTION_DELTAS[heading][command.direction]
    return dx * command.magnitude, dy * command.magnitude


def is_feasible(
    cell: Cell, commands: Sequence[Command], heading: Heading, size: int
) -> bool:
    """Check that a command sequence never leaves the grid.

    Simulation starts at the integer coordinate of ``cell``. After every
    command the enclosing cell index must stay inside ``[0, size)`` on
    both axes, so one overhanging intermediate step fails the sequence.
    """
    cur_x, cur_y = float(cell.x), float(cell.y)
    for cmd in commands:
        dx, dy = resolve(cmd, heading)
        cur_x += dx
        cur_y += dy
        cx = math.floor(cur_x + CELL_EPS)
        cy = math.floor(cur_y + CELL_EPS)
        if cx < 0 or cx >= size or cy < 0 or cy >= size:
            return False
    return True


def leg_to_command(a: Cell, b: Cell, heading: Heading) -> Command:
    """Full-step command moving between adjacent cell centers."""
    delta = (b.x - a.x, b.y - a.y)
    for direction, d in DIRECTION_DELTAS[heading].items():
        if d == delta:
            return Command(direction, FULL_STEP)
    raise ValueError(f"Cells {a} and {b} are not adjacent")


def build_commands(
    route: Sequence[Cell],
    heading: Heading,
    start_position: SubCellPosition,
    end_position: SubCellPosition,
) -> List[Command]:
    """Full command list: undock at start, walk the route, dock at the exit."""
    if not route:
        return []

    commands = to_center(start_position, heading)
    for a, b in zip(route, route[1:]):
        commands.append(leg_to_command(a, b, heading))
    commands.extend(from_center(end_position, heading))
    return commands


def total_distance(commands: Sequence[Command]) -> float:
    return sum(cmd.magnitude for cmd in commands)
