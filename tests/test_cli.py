import io
from pathlib import Path

import pytest

from schedsim.cli import main

WORKLOAD = "1 5 0 2\n2 3 1 1\n3 8 2 3\n"


def _write(tmp_path: Path, text: str = WORKLOAD) -> Path:
    p = tmp_path / "procs.txt"
    p.write_text(text)
    return p


def test_runs_all_default_policies(tmp_path: Path, capsys):
    assert main([str(_write(tmp_path))]) == 0
    out = capsys.readouterr().out
    for header in ("FCFS", "Priority", "SJF", "RR Quantum = 2"):
        assert header in out
    assert "Average waiting time = 3.33" in out
    assert "Average turn around time = 8.67" in out
    assert "Average waiting time = 8.00" in out


def test_reads_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(WORKLOAD))
    assert main(["-a", "fcfs"]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "Priority" not in out


def test_quantum_option(tmp_path: Path, capsys):
    assert main([str(_write(tmp_path)), "-q", "4", "-a", "rr"]) == 0
    assert "RR Quantum = 4" in capsys.readouterr().out


def test_gantt_and_compare(tmp_path: Path, capsys):
    assert main([str(_write(tmp_path)), "--gantt", "--compare"]) == 0
    out = capsys.readouterr().out
    assert "Gantt Chart" in out
    assert "Algorithm comparison" in out


def test_missing_file_exits_1(tmp_path: Path, capsys):
    assert main([str(tmp_path / "nope.txt")]) == 1
    assert "Could not open file" in capsys.readouterr().err


def test_empty_batch_exits_1(tmp_path: Path, capsys):
    assert main([str(_write(tmp_path, "\n"))]) == 1
    assert "No processes to schedule" in capsys.readouterr().err


def test_invalid_process_exits_1(tmp_path: Path, capsys):
    assert main([str(_write(tmp_path, "1 0 0 0\n"))]) == 1
    assert "burst time" in capsys.readouterr().err


def test_non_positive_quantum_is_a_usage_error(tmp_path: Path):
    with pytest.raises(SystemExit) as exc:
        main([str(_write(tmp_path)), "-q", "0"])
    assert exc.value.code == 2


def test_bracketed_pids_are_printed_verbatim(tmp_path: Path, capsys):
    assert main([str(_write(tmp_path, "[/] 3 0 1\n[bold] 2 0 0\n")), "-a", "fcfs"]) == 0
    out = capsys.readouterr().out
    assert "[/]" in out
    assert "[bold]" in out


def test_non_utf8_file_exits_1(tmp_path: Path, capsys):
    p = tmp_path / "procs.txt"
    p.write_bytes(b"\xff\xfe 3 0 1\n")
    assert main([str(p)]) == 1
    assert "UTF-8" in capsys.readouterr().err


def test_directory_path_exits_1(tmp_path: Path, capsys):
    assert main([str(tmp_path)]) == 1
    assert "Could not open file" in capsys.readouterr().err


def test_non_positive_quantum_ignored_without_rr(tmp_path: Path, capsys):
    assert main([str(_write(tmp_path)), "-q", "0", "-a", "fcfs", "sjf"]) == 0
    assert "FCFS" in capsys.readouterr().out
