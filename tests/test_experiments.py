import csv

from robot_tour.main import main
from robot_tour.models import Heading
from robot_tour.utils.experiments import (
    print_results_summary,
    run_all_experiments,
    run_experiment,
    save_results_csv,
)
from robot_tour.visualization import plot_grid

OPEN_GRID = """\
size 4
heading up
start 0 0 center
end 3 3 center
end_checkpoint 3 3
"""

ENCLOSED_GRID = """\
size 4
heading up
start 0 0 center
end 3 3 center
end_checkpoint 1 1
vwall 0 1
vwall 1 1
hwall 1 0
hwall 1 1
"""


def write_grids(tmp_path):
    grids = tmp_path / "grids"
    grids.mkdir()
    (grids / "grid0.txt").write_text(OPEN_GRID)
    (grids / "grid1.txt").write_text(ENCLOSED_GRID)
    return grids


def test_run_experiment_saves_outputs(tmp_path):
    grids = write_grids(tmp_path)
    out = tmp_path / "out"

    result = run_experiment(grids / "grid0.txt", output_dir=out, verbose=False)

    assert result.success
    assert result.total_distance == 6.0
    assert result.route_length == 6
    assert (out / "grid_0_route.png").exists()
    commands = (out / "grid_0_commands.txt").read_text().splitlines()
    assert commands[-1] == "total distance: 6"
    assert len(commands) == 7


def test_run_experiment_heading_override(tmp_path):
    grids = write_grids(tmp_path)
    result = run_experiment(grids / "grid0.txt", save_plots=False, verbose=False, heading=Heading.LEFT)
    assert result.success
    assert result.total_distance == 6.0


def test_run_all_and_report(tmp_path, capsys):
    grids = write_grids(tmp_path)
    out = tmp_path / "out"

    results = run_all_experiments(grids, output_dir=out, verbose=True)

    assert [r.grid_name for r in results] == ["grid0.txt", "grid1.txt"]
    assert results[0].success
    assert not results[1].success
    assert results[1].reason == "UNREACHABLE"
    assert results[1].rejected == results[1].permutations == 1
    assert "SHORTEST SOLVED TOUR" in capsys.readouterr().out

    csv_path = out / "results.csv"
    save_results_csv(results, csv_path)
    with open(csv_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [row["grid_name"] for row in rows] == ["grid0.txt", "grid1.txt"]

    print_results_summary(results)
    assert "Solved: 1/2" in capsys.readouterr().out


def test_plot_grid_returns_axes(make_grid, tmp_path):
    grid = make_grid(size=3, checkpoints=[(1, 0)], vwalls=[(0, 1)], hwalls=[(2, 0)])
    out = tmp_path / "grid.png"
    fig, ax = plot_grid(grid, route=None, save_to=out, show=False)
    assert out.exists()
    assert ax.get_title() == "Robot Tour (3 x 3)"


def test_cli_prints_commands(tmp_path, capsys):
    grids = write_grids(tmp_path)
    assert main([str(grids / "grid0.txt"), "--quiet"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 7
    assert lines[-1] == "total distance: 6"


def test_cli_reports_failure(tmp_path, capsys):
    grids = write_grids(tmp_path)
    assert main([str(grids / "grid1.txt"), "--quiet"]) == 1
    assert "No path found." in capsys.readouterr().out


def test_cli_bad_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 2
    assert "File not found" in capsys.readouterr().out


def test_cli_batch(tmp_path):
    grids = write_grids(tmp_path)
    out = tmp_path / "batch"
    assert main([str(grids), "--batch", "--out", str(out), "--quiet"]) == 1
    assert (out / "results.csv").exists()


def test_cli_batch_reports_unloadable_grid(tmp_path, capsys):
    grids = write_grids(tmp_path)
    (grids / "grid2.txt").write_text("size 4\nbogus 1\n")
    out = tmp_path / "batch"

    assert main([str(grids), "--batch", "--out", str(out), "--quiet"]) == 1
    assert "Error: Unknown directive 'bogus'" in capsys.readouterr().out

    with open(out / "results.csv", newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [row["grid_name"] for row in rows] == ["grid0.txt", "grid1.txt", "grid2.txt"]
    assert rows[0]["success"] == "True"
    assert rows[2]["reason"] == "LOAD_ERROR"
