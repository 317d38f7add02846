from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import RunInterval

CELL_WIDTH = 8


def render_gantt(intervals: Sequence[RunInterval]) -> str:
    """
    Plain-text Gantt chart: one fixed-width cell per interval, followed by the
    start time of every interval and the stop time of the last one.
    """
    if not intervals:
        return "Gantt schedule\n(no execution)"

    cells = "|"
    for iv in intervals:
        cells += iv.pid[:CELL_WIDTH].center(CELL_WIDTH) + "|"

    marks = "".join(str(iv.start_time).ljust(CELL_WIDTH + 1) for iv in intervals)
    marks += str(intervals[-1].end_time)

    return "\n".join(["Gantt schedule", cells, marks])


def build_rich_gantt(intervals: Sequence[RunInterval], title: str = "Gantt Chart") -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.

    Each time unit is one character wide; idle gaps are left blank.
    """
    if not intervals:
        panel = Panel("No execution", title=title)
        return panel, ""

    ordered: List[RunInterval] = sorted(intervals, key=lambda s: (s.start_time, s.end_time))

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for iv in ordered:
        idle_gap = iv.start_time - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            last_time = iv.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, iv.duration)
        timeline.append(" " * width, style=f"on {pid_color(iv.pid)}")
        labels.append(iv.pid[:width].ljust(width), style="bold")

        last_time = iv.end_time
        time_marks += f"{last_time:>3}"

    grid = Table.grid(padding=(0, 0))
    grid.add_row(timeline)
    grid.add_row(labels)

    return Panel.fit(grid, title=title), time_marks
