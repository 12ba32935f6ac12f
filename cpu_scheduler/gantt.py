from __future__ import annotations

from typing import List, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ExecutionInterval, ScheduleResult

DEFAULT_UNIT_WIDTH = 3

# light sky blue, green yellow, light pink, gold, sandy brown, light green, plum
PALETTE = [
    "light_sky_blue1",
    "green_yellow",
    "light_pink1",
    "gold1",
    "sandy_brown",
    "light_green",
    "plum2",
]


def block_color(pid: int) -> str:
    return PALETTE[(pid - 1) % len(PALETTE)]


def time_axis(total: int, unit_width: int = DEFAULT_UNIT_WIDTH) -> str:
    """
    Tick labels for every integer time unit from 0 to ``total``.

    Labels that would run into the previous one are left out. The label for
    ``total`` is always shown, displacing earlier labels if it has to.
    """
    ticks: List[Tuple[int, str]] = []

    def fits(col: int) -> bool:
        return not ticks or col >= ticks[-1][0] + len(ticks[-1][1]) + 1

    for t in range(total):
        col = t * unit_width
        if fits(col):
            ticks.append((col, str(t)))

    end_col = total * unit_width
    while not fits(end_col):
        ticks.pop()
    ticks.append((end_col, str(total)))

    chars: List[str] = []
    for col, label in ticks:
        chars.extend(" " * (col - len(chars)))
        chars.extend(label)
    return "".join(chars)


def _ordered(intervals: List[ExecutionInterval]) -> List[ExecutionInterval]:
    return sorted(intervals, key=lambda s: (s.start, s.end))


def render_gantt(result: ScheduleResult, unit_width: int = DEFAULT_UNIT_WIDTH) -> str:
    """
    Plain-text Gantt chart: ``=`` for CPU time, ``.`` for idle time.
    """
    if not result.intervals:
        return "(no execution)"

    line = ""
    labels = ""
    last_time = 0

    for sl in _ordered(result.intervals):
        idle_gap = (sl.start - last_time) * unit_width
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap

        width = sl.duration * unit_width
        line += "=" * width
        labels += result.name_of(sl.pid)[:width].center(width)
        last_time = sl.end

    return "\n".join(
        [
            f"Gantt Chart ({result.algorithm.label}):",
            line,
            labels.rstrip(),
            time_axis(last_time, unit_width),
        ]
    )


def build_rich_gantt(result: ScheduleResult, unit_width: int = DEFAULT_UNIT_WIDTH) -> Tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not result.intervals:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    timeline = Text()
    last_time = 0

    for sl in _ordered(result.intervals):
        idle_gap = (sl.start - last_time) * unit_width
        if idle_gap > 0:
            timeline.append(" " * idle_gap)

        width = sl.duration * unit_width
        name = result.name_of(sl.pid)[:width].center(width)
        timeline.append(name, style=f"bold black on {block_color(sl.pid)}")
        last_time = sl.end

    axis = time_axis(last_time, unit_width)

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(Text(axis, style="dim"))

    panel = Panel.fit(table, title=f"Gantt Chart ({result.algorithm.label})")
    return panel, axis
