import json
from pathlib import Path

from srtf_sim import cli


def _write(tmp_path: Path, entries) -> Path:
    p = tmp_path / "w.json"
    p.write_text(json.dumps(entries))
    return p


def test_run_prints_results(tmp_path: Path, capsys):
    path = _write(
        tmp_path,
        [
            {"pid": "P1", "arrival_time": 0, "burst_time": 8},
            {"pid": "P2", "arrival_time": 1, "burst_time": 4},
        ],
    )
    assert cli.main(["run", "-w", str(path), "--tick-mode", "jump"]) == 0
    out = capsys.readouterr().out
    assert "Avg turnaround" in out
    assert "Gantt Chart" in out


def test_run_in_background(tmp_path: Path, capsys):
    path = _write(tmp_path, [{"pid": "P1", "arrival_time": 2, "burst_time": 1}])
    assert cli.main(["run", "-w", str(path), "--background"]) == 0
    assert "P1" in capsys.readouterr().out


def test_configuration_error_exit_code(tmp_path: Path, capsys):
    path = _write(tmp_path, [{"pid": "P1", "arrival_time": 0, "burst_time": 0}])
    assert cli.main(["run", "-w", str(path)]) == cli.EXIT_CONFIG_ERROR
    assert "Configuration error" in capsys.readouterr().out


def test_missing_workload_file(tmp_path: Path):
    assert cli.main(["run", "-w", str(tmp_path / "nope.json")]) == cli.EXIT_CONFIG_ERROR


def test_interactive_reprompts_and_runs_again(monkeypatch, capsys):
    answers = iter(
        [
            "0",  # out of range
            "1",
            "-1",  # invalid arrival
            "2",
            "x",  # invalid burst
            "3",
            "y",
            "1",
            "0",
            "1",
            "n",
        ]
    )
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert cli.main(["interactive"]) == 0
    out = capsys.readouterr().out
    assert out.count("Invalid input") == 3
    assert out.count("SRTF performance results") == 2


def test_max_processes_below_one_is_rejected(tmp_path: Path, monkeypatch, capsys):
    def no_input(prompt=""):
        raise AssertionError("should not prompt")

    monkeypatch.setattr("builtins.input", no_input)
    assert cli.main(["interactive", "--max-processes", "0"]) == cli.EXIT_CONFIG_ERROR

    path = _write(tmp_path, [{"pid": "P1", "arrival_time": 0, "burst_time": 1}])
    assert cli.main(["run", "-w", str(path), "--max-processes", "0"]) == cli.EXIT_CONFIG_ERROR
    assert "--max-processes must be at least 1" in capsys.readouterr().out


def test_interactive_exits_cleanly_on_closed_stdin(monkeypatch, capsys):
    def closed(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed)
    assert cli.main(["interactive"]) == 1
    assert "Input closed" in capsys.readouterr().out


def test_interactive_eof_at_run_again_prompt(monkeypatch, capsys):
    answers = iter(["1", "0", "2"])

    def fake_input(prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    assert cli.main(["interactive"]) == 0
    assert "SRTF performance results" in capsys.readouterr().out
