from rich.console import Console

from schedsim.gantt import build_rich_gantt
from schedsim.models import ScheduledSlice


def test_empty_timeline():
    panel, marks = build_rich_gantt([])
    assert marks == ""
    assert panel.title == "Gantt Chart"


def test_time_marks_include_idle_boundaries():
    slices = [
        ScheduledSlice("A", 0, 2),
        ScheduledSlice("B", 5, 8),
    ]
    panel, marks = build_rich_gantt(slices)
    assert marks.split() == ["0", "2", "5", "8"]

    console = Console(record=True, width=80)
    console.print(panel)
    text = console.export_text()
    assert "A" in text and "B" in text
    assert "..." in text
