"""Experiment utilities for running and collecting solve results."""

import csv
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt

from ..loader import GridParseError, GridValidationError, load_grid_spec
from ..models import Heading
from ..visualization import plot_grid
from ..solver import format_commands, solve


@dataclass
class ExperimentResult:
    grid_name: str
    size: int
    n_checkpoints: int
    n_walls: int
    success: bool
    reason: str
    route_length: int
    total_distance: float
    n_commands: int
    permutations: int
    rejected: int
    cpu_time: float


def run_experiment(
    grid_path: Path,
    output_dir: Optional[Path] = None,
    save_plots: bool = True,
    verbose: bool = True,
    heading: Optional[Heading] = None,
) -> ExperimentResult:
    grid_id = grid_path.stem.replace("grid", "")

    if verbose:
        print(f"\nProcessing {grid_path.name}...")

    # Load grid
    grid = load_grid_spec(grid_path, heading=heading)

    if verbose:
        print(f"  Grid: {grid.size} x {grid.size}")
        print(f"  Walls: {grid.n_walls}")
        print(f"  Checkpoints: {len(grid.checkpoints)} (+ end checkpoint)")
        print(f"  Heading: {grid.heading.value}")

    result = solve(grid)
    tour = result.tour

    if verbose:
        if result.success:
            print(f"  Route length: {result.route_length}")
            print(f"  Commands: {len(result.commands)}")
            print(f"  Total distance: {result.total_distance:g}")
        else:
            print(f"  FAILED: {result.reason.message}")
        if tour is not None:
            print(f"  Permutations: {tour.n_permutations} ({tour.n_rejected} rejected)")
        print(f"  CPU Time: {result.cpu_time:.3f}s")

    if save_plots and output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)

        plot_file = output_dir / f"grid_{grid_id}_route.png"
        fig, _ = plot_grid(grid, route=result.route, save_to=plot_file, show=False)
        plt.close(fig)
        if verbose:
            print(f"  Saved: {plot_file.name}")

        if result.success:
            commands_file = output_dir / f"grid_{grid_id}_commands.txt"
            commands_file.write_text(format_commands(result.commands) + "\n")
            if verbose:
                print(f"  Saved: {commands_file.name}")

    return ExperimentResult(
        grid_name=grid_path.name,
        size=grid.size,
        n_checkpoints=len(grid.checkpoints),
        n_walls=grid.n_walls,
        success=result.success,
        reason="" if result.success else result.reason.name,
        route_length=result.route_length,
        total_distance=result.total_distance,
        n_commands=len(result.commands),
        permutations=tour.n_permutations if tour else 0,
        rejected=tour.n_rejected if tour else 0,
        cpu_time=result.cpu_time,
    )


def load_failure(grid_path: Path) -> ExperimentResult:
    """Placeholder row for a grid file that could not be loaded."""
    return ExperimentResult(
        grid_name=grid_path.name,
        size=0,
        n_checkpoints=0,
        n_walls=0,
        success=False,
        reason="LOAD_ERROR",
        route_length=0,
        total_distance=0.0,
        n_commands=0,
        permutations=0,
        rejected=0,
        cpu_time=0.0,
    )


def run_all_experiments(
    grids_dir: Path,
    output_dir: Optional[Path] = None,
    save_plots: bool = True,
    verbose: bool = True,
    heading: Optional[Heading] = None,
) -> List[ExperimentResult]:
    """Solve every grid file in a directory.

    Args:
        grids_dir: Directory containing ``grid*.txt`` files.
        output_dir: Directory to save plots and command listings.
        save_plots: Whether to save plots.
        verbose: Whether to print progress.
        heading: Overrides the heading of every grid when given.

    Returns:
        List of ExperimentResult for all grids.
    """
    grid_files = sorted(grids_dir.glob("grid*.txt"))

    if verbose:
        print(f"Found {len(grid_files)} grids: {[f.stem for f in grid_files]}")

    results = []
    shortest: Optional[ExperimentResult] = None

    for grid_file in grid_files:
        try:
            result = run_experiment(grid_file, output_dir, save_plots, verbose, heading)
        except (GridParseError, GridValidationError) as e:
            print(f"Error: {e}")
            result = load_failure(grid_file)
        results.append(result)

        if result.success:
            if shortest is None or result.total_distance < shortest.total_distance:
                shortest = result

    if verbose:
        print(f"\n{'='*60}")
        print(f"Completed {len(results)} experiments.")

        if shortest:
            print("SHORTEST SOLVED TOUR:")
            print(f"  Grid:     {shortest.grid_name}")
            print(f"  Distance: {shortest.total_distance:g}")
        else:
            print("NO GRID could be solved.")

    return results


def save_results_csv(
    results: List[ExperimentResult],
    output_path: Path,
) -> None:
    """Save experiment results to CSV file."""
    if not results:
        return

    fieldnames = [
        "grid_name", "size", "n_checkpoints", "n_walls", "success", "reason",
        "route_length", "total_distance", "n_commands", "permutations",
        "rejected", "cpu_time",
    ]

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in results:
            writer.writerow(asdict(r))


def print_results_summary(results: List[ExperimentResult]) -> None:
    """Print formatted summary table of results."""
    print("\n" + "=" * 96)
    print("ROBOT TOUR RESULTS SUMMARY")
    print("=" * 96)
    print()

    # Table header
    header = (f"{'Grid':<18} {'Size':>4} {'CP':>3} {'Walls':>5} {'Route':>6} "
              f"{'Dist':>6} {'Cmds':>5} {'Perms':>6} {'Rej':>5} {'CPU(s)':>7}  {'Result':<14}")
    print(header)
    print("-" * len(header))

    for r in results:
        print(f"{r.grid_name:<18} {r.size:>4} {r.n_checkpoints:>3} {r.n_walls:>5} {r.route_length:>6} "
              f"{r.total_distance:>6g} {r.n_commands:>5} {r.permutations:>6} {r.rejected:>5} "
              f"{r.cpu_time:>7.3f}  {'OK' if r.success else r.reason:<14}")

    print("-" * len(header))
    print(f"\nTotal grids: {len(results)}")
    print(f"Solved: {sum(1 for r in results if r.success)}/{len(results)}")
    if results:
        print(f"Avg CPU time: {sum(r.cpu_time for r in results)/len(results):.3f}s")
