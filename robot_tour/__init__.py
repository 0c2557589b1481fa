"""robot_tour - Checkpoint tour planning for a grid robot."""

from .loader import (
    load_grid_spec,
    save_grid_spec,
    build_grid_spec,
    parse_grid_size,
    parse_heading,
    GridValidationError,
    GridParseError,
)
from .models import (
    Cell,
    Command,
    Direction,
    GridSpec,
    Heading,
    RobotState,
    SubCellPosition,
    parse_command,
)
from .geometry import (
    in_bounds,
    is_blocked,
    neighbors,
    concat_paths,
    path_length,
    is_walkable,
)
from .solver import (
    FailureReason,
    SolveResult,
    SolveError,
    PreconditionError,
    OffGridStartError,
    UnreachableError,
    OffGridEndError,
    solve,
    format_commands,
)
from .visualization import plot_grid

# Algorithms
from .algorithms import (
    shortest_path,
    TourResult,
    find_best_tour,
    to_center,
    from_center,
    is_feasible,
    leg_to_command,
    build_commands,
    total_distance,
)

# Utils
from .utils import (
    ExperimentResult,
    run_experiment,
    run_all_experiments,
    save_results_csv,
    print_results_summary,
)
