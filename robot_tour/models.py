from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Cell:
    """Integer grid coordinate. Row ``y`` grows downward."""

    x: int
    y: int

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def manhattan(self, other: "Cell") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


class Heading(Enum):
    """Fixed facing of the robot for the whole tour."""

    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"


class SubCellPosition(Enum):
    """Where inside its cell the robot is docked."""

    CENTER = "center"
    MID_TOP = "mid_top"
    MID_RIGHT = "mid_right"
    MID_BOTTOM = "mid_bottom"
    MID_LEFT = "mid_left"
    CORNER_TOP_LEFT = "corner_top_left"
    CORNER_TOP_RIGHT = "corner_top_right"
    CORNER_BOTTOM_LEFT = "corner_bottom_left"
    CORNER_BOTTOM_RIGHT = "corner_bottom_right"

    @property
    def is_corner(self) -> bool:
        return self.name.startswith("CORNER_")


class Direction(Enum):
    """Motion direction relative to the robot's heading."""

    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Command:
    """A single motion command.

    Attributes:
        direction: Direction relative to the fixed heading.
        magnitude: Distance in cells, 0.5 for docking half-steps or 1.0
            for a move between cell centers.
    """

    direction: Direction
    magnitude: float

    def __str__(self) -> str:
        mag = self.magnitude
        text = str(int(mag)) if float(mag).is_integer() else f"{mag:g}"
        return f"{self.direction.value}({text})"


@dataclass(frozen=True)
class RobotState:
    """Robot placement on the grid.

    Attributes:
        cell: Grid cell the robot occupies.
        position: Docking offset inside the cell.
        heading: Facing. Only the start robot's heading is used.
        valid: Whether the editor has placed this robot.
    """

    cell: Cell
    position: SubCellPosition = SubCellPosition.CENTER
    heading: Heading = Heading.UP
    valid: bool = True


def _frozen_bool_array(values, shape: Tuple[int, int], name: str) -> np.ndarray:
    arr = np.array(values, dtype=bool, copy=True)
    if arr.shape != shape:
        raise ValueError(f"{name} must have shape {shape}, got {arr.shape}")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class GridSpec:
    """Immutable snapshot of everything a solve reads.

    Attributes:
        size: Side length of the square grid.
        vertical_walls: Bool array of shape (size-1, size) indexed [x, y];
            True blocks movement between column x and x+1 at row y.
        horizontal_walls: Bool array of shape (size, size-1) indexed [x, y];
            True blocks movement between row y and y+1 at column x.
        checkpoints: Plain checkpoints in insertion order.
        end_checkpoint: Checkpoint visited last, or None when unset.
        robot_start: Start robot, or None when unset.
        robot_end: Exit robot, or None when unset.
    """

    size: int
    vertical_walls: np.ndarray = field(compare=False, repr=False)
    horizontal_walls: np.ndarray = field(compare=False, repr=False)
    checkpoints: Tuple[Cell, ...] = ()
    end_checkpoint: Optional[Cell] = None
    robot_start: Optional[RobotState] = None
    robot_end: Optional[RobotState] = None

    def __post_init__(self) -> None:
        if self.size < 2:
            raise ValueError(f"Grid size must be at least 2, got {self.size}")
        object.__setattr__(
            self,
            "vertical_walls",
            _frozen_bool_array(self.vertical_walls, (self.size - 1, self.size), "vertical_walls"),
        )
        object.__setattr__(
            self,
            "horizontal_walls",
            _frozen_bool_array(self.horizontal_walls, (self.size, self.size - 1), "horizontal_walls"),
        )
        object.__setattr__(self, "checkpoints", tuple(self.checkpoints))

        # Negative indices would wrap around in the wall and visited arrays
        placed = [(f"Checkpoint {i}", c) for i, c in enumerate(self.checkpoints)]
        placed.append(("End checkpoint", self.end_checkpoint))
        if self.robot_start is not None:
            placed.append(("Robot start", self.robot_start.cell))
        if self.robot_end is not None:
            placed.append(("Robot end", self.robot_end.cell))
        for name, cell in placed:
            if cell is not None and not self.contains(cell):
                raise ValueError(
                    f"{name} ({cell.x}, {cell.y}) is outside grid bounds [0, {self.size})"
                )

    @classmethod
    def empty(cls, size: int) -> "GridSpec":
        """Grid with no walls, checkpoints or robots."""
        return cls(
            size=size,
            vertical_walls=np.zeros((size - 1, size), dtype=bool),
            horizontal_walls=np.zeros((size, size - 1), dtype=bool),
        )

    def contains(self, cell: Cell) -> bool:
        return 0 <= cell.x < self.size and 0 <= cell.y < self.size

    @property
    def n_walls(self) -> int:
        return int(self.vertical_walls.sum() + self.horizontal_walls.sum())

    @property
    def heading(self) -> Heading:
        """Tour-wide heading, taken from the start robot."""
        if self.robot_start is None:
            return Heading.UP
        return self.robot_start.heading


def parse_command(token: str) -> Command:
    """Parse a robot-facing token such as ``left(0.5)``."""
    token = token.strip()
    open_paren = token.find("(")
    close_paren = token.find(")")
    if open_paren < 0 or close_paren < open_paren:
        raise ValueError(f"Malformed command: '{token}'")
    try:
        direction = Direction(token[:open_paren].strip().lower())
        magnitude = float(token[open_paren + 1:close_paren])
    except ValueError:
        raise ValueError(f"Malformed command: '{token}'")
    return Command(direction, magnitude)
