"""Grid search, tour optimization and motion translation."""

from .bfs import shortest_path
from .tour import (
    TourResult,
    build_legs,
    find_best_tour,
)
from .motion import (
    # Lookup tables
    DIRECTION_DELTAS,
    TO_CENTER,
    FROM_CENTER,

    # Docking
    to_center,
    from_center,
    is_feasible,

    # Command construction
    resolve,
    leg_to_command,
    build_commands,
    total_distance,
)

__all__ = [
    "shortest_path",
    "TourResult",
    "build_legs",
    "find_best_tour",
    "DIRECTION_DELTAS",
    "TO_CENTER",
    "FROM_CENTER",
    "to_center",
    "from_center",
    "is_feasible",
    "resolve",
    "leg_to_command",
    "build_commands",
    "total_distance",
]
