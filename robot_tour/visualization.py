from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as patches
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from .models import Cell, GridSpec, RobotState, SubCellPosition


# Docking offset from the cell's top-left corner, in cells
POSITION_OFFSETS: Dict[SubCellPosition, Tuple[float, float]] = {
    SubCellPosition.CENTER: (0.5, 0.5),
    SubCellPosition.MID_TOP: (0.5, 0.0),
    SubCellPosition.MID_RIGHT: (1.0, 0.5),
    SubCellPosition.MID_BOTTOM: (0.5, 1.0),
    SubCellPosition.MID_LEFT: (0.0, 0.5),
    SubCellPosition.CORNER_TOP_LEFT: (0.0, 0.0),
    SubCellPosition.CORNER_TOP_RIGHT: (1.0, 0.0),
    SubCellPosition.CORNER_BOTTOM_LEFT: (0.0, 1.0),
    SubCellPosition.CORNER_BOTTOM_RIGHT: (1.0, 1.0),
}


def docked_point(robot: RobotState) -> Tuple[float, float]:
    ox, oy = POSITION_OFFSETS[robot.position]
    return robot.cell.x + ox, robot.cell.y + oy


def plot_grid(
    grid: GridSpec,
    route: Optional[List[Cell]] = None,
    save_to: Optional[str | Path] = None,
    show: bool = True,
) -> Tuple[Figure, Axes]:
    """Plot the grid, walls, checkpoints, robots, and optionally a route."""
    size = grid.size
    fontsize = 16

    # Initialize figure
    fig, ax = plt.subplots(figsize=(10, 10))

    padding = size * 0.02
    ax.set_xlim(-padding, size + padding)
    # Row 0 at the top, as in the editor
    ax.set_ylim(size + padding, -padding)
    ax.set_aspect("equal")
    ax.set_xticks(range(size + 1))
    ax.set_yticks(range(size + 1))
    ax.grid(True, alpha=0.3)
    ax.tick_params(axis="both", labelsize=fontsize)

    # Draw environment border
    border = patches.Rectangle(
        (0, 0), size, size,
        linewidth=2,
        edgecolor="black",
        facecolor="none",
    )
    ax.add_patch(border)

    # Checkpoints
    for c in grid.checkpoints:
        ax.add_patch(patches.Rectangle(
            (c.x, c.y), 1, 1,
            facecolor="gold",
            alpha=0.6,
        ))
    if grid.end_checkpoint is not None:
        c = grid.end_checkpoint
        ax.add_patch(patches.Rectangle(
            (c.x, c.y), 1, 1,
            facecolor="orange",
            alpha=0.8,
        ))

    # Walls
    for x, y in np.argwhere(grid.vertical_walls):
        ax.plot([x + 1, x + 1], [y, y + 1], color="black", linewidth=4)
    for x, y in np.argwhere(grid.horizontal_walls):
        ax.plot([x, x + 1], [y + 1, y + 1], color="black", linewidth=4)

    # Draw route (if provided)
    if route and len(route) >= 2:
        xs = [c.x + 0.5 for c in route]
        ys = [c.y + 0.5 for c in route]
        ax.plot(xs, ys, color="blue", linewidth=2, label="Route", zorder=5)

    # Draw start and exit robots
    if grid.robot_start is not None and grid.robot_start.valid:
        sx, sy = docked_point(grid.robot_start)
        ax.plot(
            sx, sy,
            marker="o",
            markersize=12,
            color="green",
            label=f"Start ({grid.robot_start.heading.value})",
            zorder=10,
        )
    if grid.robot_end is not None and grid.robot_end.valid:
        ex, ey = docked_point(grid.robot_end)
        ax.plot(
            ex, ey,
            marker="*",
            markersize=15,
            color="red",
            label="Exit",
            zorder=10,
        )

    # Finalize
    ax.set_xlabel("X", fontsize=fontsize)
    ax.set_ylabel("Y", fontsize=fontsize)
    ax.set_title(f"Robot Tour ({size} x {size})", fontsize=fontsize + 4)
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc="best", fontsize=fontsize)

    if save_to:
        fig.savefig(save_to, dpi=150, bbox_inches="tight")

    if show:
        plt.show()

    return fig, ax
