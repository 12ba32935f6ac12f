import io

from rich.console import Console

from cpu_scheduler.algorithms import run_algorithm
from cpu_scheduler.gantt import PALETTE, block_color, build_rich_gantt, render_gantt, time_axis
from cpu_scheduler.models import ProcessDescriptor


def _result(algorithm="fcfs"):
    procs = [
        ProcessDescriptor(pid=1, name="P1", arrival_time=0, burst_time=2),
        ProcessDescriptor(pid=2, name="P2", arrival_time=5, burst_time=1),
    ]
    return run_algorithm(algorithm, procs)


def test_time_axis_ticks_every_unit():
    assert time_axis(4, unit_width=3) == "0  1  2  3  4"


def test_time_axis_skips_colliding_labels():
    assert time_axis(12, unit_width=1) == "0 2 4 6 8   12"


def test_render_gantt_shows_idle_and_names():
    lines = render_gantt(_result(), unit_width=2).splitlines()
    assert lines[0] == "Gantt Chart (FCFS):"
    assert lines[1] == "====......=="
    assert lines[2] == " P1       P2"
    assert lines[3] == "0 1 2 3 4 5 6"


def test_render_gantt_empty():
    res = run_algorithm("sjf", [])
    assert render_gantt(res) == "(no execution)"


def test_block_colors_cycle_by_id():
    assert block_color(1) == PALETTE[0]
    assert block_color(len(PALETTE) + 1) == PALETTE[0]
    assert block_color(2) != block_color(1)


def test_rich_gantt_renders():
    panel, axis = build_rich_gantt(_result("rr"))
    assert axis == time_axis(6)

    buf = io.StringIO()
    Console(file=buf, width=120, color_system=None).print(panel)
    out = buf.getvalue()
    assert "P1" in out
    assert "P2" in out


def test_time_axis_always_ends_with_finish_time():
    assert time_axis(1, unit_width=1).split()[-1] == "1"
    assert time_axis(100, unit_width=1).endswith("100")
    assert time_axis(0) == "0"
