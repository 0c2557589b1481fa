import matplotlib

matplotlib.use("Agg")

import pytest

from robot_tour.loader import build_grid_spec
from robot_tour.models import Cell, Heading, RobotState, SubCellPosition


@pytest.fixture()
def make_grid():
    """Factory for validated grids.

    Robots default to centered and valid; exit and end checkpoint default
    to the bottom-right cell.
    """

    def _make(
        size=4,
        start=(0, 0),
        end="corner",
        end_checkpoint="corner",
        checkpoints=(),
        vwalls=(),
        hwalls=(),
        heading=Heading.UP,
        start_pos=SubCellPosition.CENTER,
        end_pos=SubCellPosition.CENTER,
    ):
        corner = (size - 1, size - 1)
        if end == "corner":
            end = corner
        if end_checkpoint == "corner":
            end_checkpoint = corner
        return build_grid_spec(
            size,
            vertical_walls=vwalls,
            horizontal_walls=hwalls,
            checkpoints=[Cell(*c) for c in checkpoints],
            end_checkpoint=Cell(*end_checkpoint) if end_checkpoint is not None else None,
            robot_start=RobotState(Cell(*start), start_pos, heading) if start is not None else None,
            robot_end=RobotState(Cell(*end), end_pos, heading) if end is not None else None,
        )

    return _make
