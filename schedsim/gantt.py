from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def build_rich_gantt(slices: List[ScheduledSlice], title: str = "Gantt Chart") -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.

    Gaps between slices are drawn as idle CPU time.
    """
    if not slices:
        return Panel("No execution", title=title), ""

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    bar = Text()
    labels = Text()
    last_time = slices[0].start_time
    time_marks = str(last_time)

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            bar.append("." * idle_gap, style="dim")
            labels.append(" " * idle_gap)
            time_marks += f"{sl.start_time:>{max(idle_gap, len(str(sl.start_time)) + 1)}}"

        width = max(1, sl.end_time - sl.start_time)
        bar.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(str(sl.pid)[:width].ljust(width), style="bold")

        last_time = sl.end_time
        time_marks += f"{last_time:>{max(width, len(str(last_time)) + 1)}}"

    grid = Table.grid(padding=(0, 0))
    grid.add_row(bar)
    grid.add_row(labels)

    return Panel.fit(grid, title=title), time_marks
