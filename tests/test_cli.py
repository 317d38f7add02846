from pathlib import Path

from batch_scheduler.cli import build_parser, main


def _workload(tmp_path: Path) -> Path:
    p = tmp_path / "batch.csv"
    p.write_text("1,24,0,3\n2,3,0,1\n3,3,0,2\n")
    return p


def test_parser_defaults():
    args = build_parser().parse_args(["run", "-w", "x.csv"])
    assert args.algorithms == ["fcfs", "sjf", "priority", "rr"]
    assert args.wait_model == "service"
    assert args.log_level == "WARNING"


def test_run_prints_every_discipline(tmp_path: Path, capsys):
    assert main(["run", "-w", str(_workload(tmp_path)), "--plain"]) == 0
    out = capsys.readouterr().out
    for title in ("First-come, first-serve", "Shortest-job-first", "Priority", "Round-robin"):
        assert title in out
    assert "Gantt schedule" in out
    assert "17.00" in out


def test_run_single_algorithm_with_dispatches(tmp_path: Path, capsys):
    code = main(["run", "-w", str(_workload(tmp_path)), "-a", "rr", "--dispatches", "--wait-model", "elapsed"])
    assert code == 0
    out = capsys.readouterr().out
    assert "Round-robin" in out
    assert "Dispatched slices" in out
    assert "First-come" not in out


def test_compare(tmp_path: Path, capsys):
    assert main(["compare", "-w", str(_workload(tmp_path)), "-a", "fcfs", "sjf"]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out
    assert "17.00" in out
    assert "3.00" in out


def test_invalid_workload_exit_code(tmp_path: Path, capsys):
    p = tmp_path / "bad.csv"
    p.write_text("1,0,0\n")
    assert main(["run", "-w", str(p)]) == 2
    assert "burst_time" in capsys.readouterr().out


def test_missing_workload_exit_code(tmp_path: Path, capsys):
    assert main(["compare", "-w", str(tmp_path / "missing.json")]) == 2
    assert "Error" in capsys.readouterr().out
