from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .models import Cell, GridSpec, Heading, RobotState, SubCellPosition


DEFAULT_SIZE = 4
DEFAULT_HEADING = Heading.UP


class GridValidationError(Exception):
    """Raised when grid validation fails."""
    pass


class GridParseError(Exception):
    """Raised when grid file cannot be parsed."""
    pass


def parse_grid_size(value: int) -> int:
    """Return ``value``, or the default size when it is below 2."""
    if value < 2:
        print(f"Invalid grid size {value}. Defaulting to {DEFAULT_SIZE}.")
        return DEFAULT_SIZE
    return value


def parse_heading(token: str) -> Heading:
    """Parse ``up/right/down/left`` (any case); unknown tokens default to UP."""
    try:
        return Heading(token.strip().lower())
    except ValueError:
        print(f"Invalid orientation '{token}'. Defaulting to {DEFAULT_HEADING.value.upper()}.")
        return DEFAULT_HEADING


def _parse_int(token: str, lineno: int, filepath: Path) -> int:
    try:
        return int(token)
    except ValueError:
        raise GridParseError(f"Invalid integer '{token}' on line {lineno} of {filepath}")


def _parse_position(token: str, lineno: int, filepath: Path) -> SubCellPosition:
    try:
        return SubCellPosition(token.lower())
    except ValueError:
        raise GridParseError(
            f"Unknown sub-cell position '{token}' on line {lineno} of {filepath}"
        )


def _validate_cell(cell: Cell, name: str, size: int) -> None:
    if not (0 <= cell.x < size and 0 <= cell.y < size):
        raise GridValidationError(
            f"{name} ({cell.x}, {cell.y}) is outside grid bounds [0, {size})"
        )


def _validate_wall(x: int, y: int, shape: Tuple[int, int], kind: str) -> None:
    if not (0 <= x < shape[0] and 0 <= y < shape[1]):
        raise GridValidationError(
            f"{kind} wall ({x}, {y}) is outside range [0, {shape[0]}) x [0, {shape[1]})"
        )


def build_grid_spec(
    size: int,
    vertical_walls: Iterable[Tuple[int, int]] = (),
    horizontal_walls: Iterable[Tuple[int, int]] = (),
    checkpoints: Iterable[Cell] = (),
    end_checkpoint: Optional[Cell] = None,
    robot_start: Optional[RobotState] = None,
    robot_end: Optional[RobotState] = None,
) -> GridSpec:
    """Build and validate a grid snapshot.

    Args:
        size: Grid side length (at least 2).
        vertical_walls: (x, y) pairs blocking column x to x+1 at row y.
        horizontal_walls: (x, y) pairs blocking row y to y+1 at column x.
        checkpoints: Plain checkpoints; the end checkpoint is dropped if listed.
        end_checkpoint: Checkpoint visited last, or None.
        robot_start: Start robot, or None.
        robot_end: Exit robot, or None.

    Raises:
        GridValidationError: If any coordinate is out of range or a
            checkpoint is listed twice.
    """
    if size < 2:
        raise GridValidationError(f"Grid size must be at least 2, got {size}")

    vwalls = np.zeros((size - 1, size), dtype=bool)
    for x, y in vertical_walls:
        _validate_wall(x, y, vwalls.shape, "Vertical")
        vwalls[x, y] = True

    hwalls = np.zeros((size, size - 1), dtype=bool)
    for x, y in horizontal_walls:
        _validate_wall(x, y, hwalls.shape, "Horizontal")
        hwalls[x, y] = True

    cpts: List[Cell] = []
    seen = set()
    for i, c in enumerate(checkpoints):
        _validate_cell(c, f"Checkpoint {i}", size)
        if c in seen:
            raise GridValidationError(f"Checkpoint ({c.x}, {c.y}) is listed twice")
        seen.add(c)
        if c != end_checkpoint:
            cpts.append(c)

    if end_checkpoint is not None:
        _validate_cell(end_checkpoint, "End checkpoint", size)
    if robot_start is not None:
        _validate_cell(robot_start.cell, "Robot start", size)
    if robot_end is not None:
        _validate_cell(robot_end.cell, "Robot end", size)

    return GridSpec(
        size=size,
        vertical_walls=vwalls,
        horizontal_walls=hwalls,
        checkpoints=tuple(cpts),
        end_checkpoint=end_checkpoint,
        robot_start=robot_start,
        robot_end=robot_end,
    )


# Token counts after the keyword
_ARITY = {
    "size": 1,
    "heading": 1,
    "start": 3,
    "end": 3,
    "checkpoint": 2,
    "end_checkpoint": 2,
    "vwall": 2,
    "hwall": 2,
}


def load_grid_spec(filepath: str | Path, heading: Optional[Heading] = None) -> GridSpec:
    """Load a grid snapshot from file.

    Args:
        filepath: Path to the grid file.
        heading: Overrides the ``heading`` line of the file when given.

    Returns:
        Validated GridSpec.

    Raises:
        GridParseError: If file cannot be parsed.
        GridValidationError: If validation fails.

    File format (one directive per line, ``#`` starts a comment):
        size N
        heading up|right|down|left
        start X Y POSITION
        end X Y POSITION
        checkpoint X Y          (0 or more)
        end_checkpoint X Y
        vwall X Y               (0 or more)
        hwall X Y               (0 or more)
    """
    filepath = Path(filepath)

    try:
        content = filepath.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise GridParseError(f"File not found: {filepath}")
    except PermissionError:
        raise GridParseError(f"Permission denied: {filepath}")
    except UnicodeDecodeError:
        raise GridParseError(f"File is not valid UTF-8 text: {filepath}")
    except OSError as e:
        raise GridParseError(f"Cannot read {filepath}: {e.strerror or e}")

    if not content.strip():
        raise GridParseError(f"File is empty: {filepath}")

    size: Optional[int] = None
    file_heading = DEFAULT_HEADING
    start: Optional[Tuple[Cell, SubCellPosition]] = None
    end: Optional[Tuple[Cell, SubCellPosition]] = None
    checkpoints: List[Cell] = []
    end_checkpoint: Optional[Cell] = None
    vwalls: List[Tuple[int, int]] = []
    hwalls: List[Tuple[int, int]] = []

    for lineno, raw in enumerate(content.splitlines(), start=1):
        tokens = raw.split("#", 1)[0].split()
        if not tokens:
            continue
        key, args = tokens[0].lower(), tokens[1:]
        if key not in _ARITY:
            raise GridParseError(f"Unknown directive '{tokens[0]}' on line {lineno} of {filepath}")
        if len(args) != _ARITY[key]:
            raise GridParseError(
                f"'{key}' on line {lineno} of {filepath} expects {_ARITY[key]} values, got {len(args)}"
            )

        if key == "size":
            size = parse_grid_size(_parse_int(args[0], lineno, filepath))
        elif key == "heading":
            file_heading = parse_heading(args[0])
        elif key in ("start", "end"):
            cell = Cell(_parse_int(args[0], lineno, filepath), _parse_int(args[1], lineno, filepath))
            placed = (cell, _parse_position(args[2], lineno, filepath))
            if key == "start":
                start = placed
            else:
                end = placed
        else:
            x, y = _parse_int(args[0], lineno, filepath), _parse_int(args[1], lineno, filepath)
            if key == "checkpoint":
                checkpoints.append(Cell(x, y))
            elif key == "end_checkpoint":
                end_checkpoint = Cell(x, y)
            elif key == "vwall":
                vwalls.append((x, y))
            else:
                hwalls.append((x, y))

    if size is None:
        raise GridParseError(f"Missing 'size' directive in {filepath}")

    tour_heading = heading if heading is not None else file_heading

    return build_grid_spec(
        size,
        vertical_walls=vwalls,
        horizontal_walls=hwalls,
        checkpoints=checkpoints,
        end_checkpoint=end_checkpoint,
        robot_start=RobotState(start[0], start[1], tour_heading) if start else None,
        robot_end=RobotState(end[0], end[1], tour_heading) if end else None,
    )


def save_grid_spec(grid: GridSpec, filepath: str | Path) -> None:
    """Write a grid snapshot in the format read by ``load_grid_spec``."""
    lines = [f"size {grid.size}", f"heading {grid.heading.value}"]
    if grid.robot_start is not None and grid.robot_start.valid:
        s = grid.robot_start
        lines.append(f"start {s.cell.x} {s.cell.y} {s.position.value}")
    if grid.robot_end is not None and grid.robot_end.valid:
        e = grid.robot_end
        lines.append(f"end {e.cell.x} {e.cell.y} {e.position.value}")
    for c in grid.checkpoints:
        lines.append(f"checkpoint {c.x} {c.y}")
    if grid.end_checkpoint is not None:
        lines.append(f"end_checkpoint {grid.end_checkpoint.x} {grid.end_checkpoint.y}")
    for x, y in np.argwhere(grid.vertical_walls):
        lines.append(f"vwall {x} {y}")
    for x, y in np.argwhere(grid.horizontal_walls):
        lines.append(f"hwall {x} {y}")

    Path(filepath).write_text("\n".join(lines) + "\n")
