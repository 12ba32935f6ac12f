import json
from pathlib import Path

import pytest

from cpu_scheduler.errors import WorkloadError
from cpu_scheduler.models import ProcessDescriptor
from cpu_scheduler.workload_io import load_workload, parse_process_spec


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":3,"name":"editor","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":4,"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], ProcessDescriptor)
    assert procs[0].name == "editor"
    assert procs[1].name == "P4"
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("name,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert [(x.pid, x.name) for x in procs] == [(1, "A"), (2, "B")]
    assert procs[1].priority == 0


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.yaml"
    p.write_text("- {}")
    with pytest.raises(WorkloadError, match="Unsupported"):
        load_workload(p)


def test_missing_field(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"name":"A","arrival_time":0}]')
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_json_must_be_a_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"name":"A","arrival_time":0,"burst_time":1}')
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_parse_process_spec():
    assert parse_process_spec("shell:2:4:7", pid=5) == ProcessDescriptor(
        pid=5, name="shell", arrival_time=2, burst_time=4, priority=7
    )
    assert parse_process_spec("A:0:1", pid=1).priority == 0


@pytest.mark.parametrize("spec", ["A:0", ":0:1", "A:x:1", "A:0:1:2:3"])
def test_parse_process_spec_rejects_garbage(spec):
    with pytest.raises(WorkloadError):
        parse_process_spec(spec, pid=1)


def test_fractional_times_rejected_not_truncated(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"name":"A","arrival_time":2.9,"burst_time":3}]')
    with pytest.raises(WorkloadError, match="arrival_time"):
        load_workload(p)


@pytest.mark.parametrize(
    "field, value",
    [("burst_time", "2.5"), ("priority", 1.5), ("pid", True), ("arrival_time", "soon")],
)
def test_every_numeric_field_needs_an_integer(tmp_path: Path, field, value):
    entry = {"name": "A", "arrival_time": 0, "burst_time": 3}
    entry[field] = value
    p = tmp_path / "w.json"
    p.write_text(json.dumps([entry]))
    with pytest.raises(WorkloadError, match=field):
        load_workload(p)


def test_integer_strings_accepted(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"7","name":"A","arrival_time":" 2 ","burst_time":"3"}]')
    (proc,) = load_workload(p)
    assert (proc.pid, proc.arrival_time, proc.burst_time) == (7, 2, 3)


@pytest.mark.parametrize("suffix", [".csv", ".json"])
def test_non_utf8_file_rejected(tmp_path: Path, suffix):
    p = tmp_path / f"w{suffix}"
    p.write_bytes(b"\xff\xfename,arrival_time,burst_time\n")
    with pytest.raises(WorkloadError, match="UTF-8"):
        load_workload(p)
