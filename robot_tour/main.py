"""Main entry point for robot_tour."""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .loader import GridParseError, GridValidationError, load_grid_spec, parse_heading
from .solver import format_commands, solve
from .utils.experiments import print_results_summary, run_all_experiments, save_results_csv
from .visualization import plot_grid


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plan a checkpoint tour for a grid robot")
    parser.add_argument("grid", type=str, help="Grid file, or a directory of grid*.txt files with --batch")
    parser.add_argument("--heading", type=str, default=None, help="Override starting heading (up, right, down, left)")
    parser.add_argument("--plot", type=str, default=None, help="Save a plot of the grid and route to this file")
    parser.add_argument("--batch", action="store_true", help="Solve every grid*.txt in the given directory")
    parser.add_argument("--out", type=str, default="output/results", help="Output directory for --batch")
    parser.add_argument("--quiet", action="store_true", help="Only print commands or the failure reason")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    heading = parse_heading(args.heading) if args.heading is not None else None

    if args.batch:
        grids_dir = Path(args.grid)
        output_dir = Path(args.out)
        results = run_all_experiments(
            grids_dir,
            output_dir=output_dir,
            save_plots=True,
            verbose=not args.quiet,
            heading=heading,
        )
        output_dir.mkdir(parents=True, exist_ok=True)
        save_results_csv(results, output_dir / "results.csv")
        if not args.quiet:
            print_results_summary(results)
        return 0 if all(r.success for r in results) else 1

    try:
        grid = load_grid_spec(args.grid, heading=heading)
    except (GridParseError, GridValidationError) as e:
        print(f"Error: {e}")
        return 2

    if not args.quiet:
        print("robot_tour - Checkpoint Tour Planning")
        print("=" * 40)
        print(f"Grid {grid.size} x {grid.size}, heading {grid.heading.value}, "
              f"{len(grid.checkpoints)} checkpoints, {grid.n_walls} walls")

    result = solve(grid)

    if args.plot:
        plot_grid(grid, route=result.route, save_to=args.plot, show=False)
        if not args.quiet:
            print(f"Plot saved to {args.plot}")

    if not result.success:
        print(result.reason.message)
        return 1

    print(format_commands(result.commands))
    return 0


if __name__ == "__main__":
    sys.exit(main())
