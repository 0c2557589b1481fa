"""Solve a single grid file and plot it (edit settings at top)."""
import sys
from pathlib import Path

_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from robot_tour.utils.experiments import run_experiment

# Edit: which grid (0-2) and where to write
GRID_INDEX = 1
OUTPUT_DIR = _project_root / "output" / "results"
SAVE_PLOTS = True

def main():
    grids_dir = _project_root / "grids"
    grid_files = sorted(grids_dir.glob("grid*.txt"))
    if not grid_files or GRID_INDEX < 0 or GRID_INDEX >= len(grid_files):
        print(f"GRID_INDEX must be 0..{len(grid_files) - 1}")
        return
    grid_path = grid_files[GRID_INDEX]
    print("=" * 50)
    print(f"Grid: {grid_path.name}")
    print("=" * 50)
    result = run_experiment(
        grid_path,
        output_dir=OUTPUT_DIR if SAVE_PLOTS else None,
        save_plots=SAVE_PLOTS,
        verbose=True,
    )
    print("\nDone.")
    return result

if __name__ == "__main__":
    main()
