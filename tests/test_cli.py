from pathlib import Path

from cpu_scheduler.cli import build_parser, main


def test_parser_requires_a_process_source():
    parser = build_parser()
    args = parser.parse_args(["run", "-a", "fcfs", "-p", "A:0:5", "-p", "B:1:3"])
    assert args.process == ["A:0:5", "B:1:3"]
    assert args.workload is None


def test_run_inline_processes(capsys):
    assert main(["run", "-a", "fcfs", "-p", "A:0:5", "-p", "B:1:3"]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "Gantt Chart" in out


def test_run_workload_file(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("name,arrival_time,burst_time,priority\nA,0,4,1\nB,0,2,5\n")
    assert main(["run", "-a", "priority", "-w", str(p)]) == 0
    assert "Priority" in capsys.readouterr().out


def test_compare(capsys):
    assert main(["compare", "-p", "A:0:5", "-p", "B:0:3", "-q", "2"]) == 0
    out = capsys.readouterr().out
    assert "Round Robin" in out
    assert "SJF" in out


def test_invalid_quantum_reports_error(capsys):
    assert main(["run", "-a", "rr", "-q", "0", "-p", "A:0:5"]) == 2
    out = capsys.readouterr().out
    assert "Error" in out
    assert "Gantt" not in out


def test_missing_workload_file(tmp_path: Path, capsys):
    assert main(["run", "-a", "fcfs", "-w", str(tmp_path / "nope.json")]) == 2


def test_undecodable_workload_file(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_bytes(b"\xff\xfe\x00A,0,1\n")
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 2
    assert "Error" in capsys.readouterr().out


def test_original_menu_labels_accepted(capsys):
    assert main(["run", "-a", "Round Robin", "-p", "A:0:3"]) == 0
    assert main(["run", "-a", "Priority Scheduling", "-p", "A:0:3"]) == 0
