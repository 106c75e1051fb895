from __future__ import annotations

from typing import Dict, Iterable

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .events import EventKind, GanttEvent, iter_segments


def _place_mark(marks: str, t: int, column: int) -> str:
    # Last digit lands on ``column``; at least one space between marks.
    text = str(t)
    pad = max(1, column - len(marks) - len(text) + 1)
    return marks + " " * pad + text


def render_gantt(timeline: Iterable[GanttEvent]) -> str:
    """
    Plain-text Gantt chart: ``=`` for execution, ``.`` for idle time.
    """
    segments = list(iter_segments(timeline))
    if not segments:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = str(segments[0][0])
    column = 0

    for start, end, ev in segments:
        width = max(1, end - start)
        if ev.kind is EventKind.IDLE:
            line += "." * width
            labels += " " * width
        else:
            line += "=" * width
            labels += ev.pid[:width].ljust(width)
        column += width
        time_marks = _place_mark(time_marks, end, column)

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            " " + labels,
            time_marks,
        ]
    )


def build_rich_gantt(timeline: Iterable[GanttEvent]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    segments = list(iter_segments(timeline))
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    bar = Text()
    labels = Text()
    time_marks = str(segments[0][0])
    column = 0

    for start, end, ev in segments:
        width = max(1, end - start)
        if ev.kind is EventKind.IDLE:
            bar.append("░" * width, style="dim")
            labels.append("IDLE"[:width].ljust(width), style="dim")
        else:
            bar.append(" " * width, style=f"on {pid_color(ev.pid)}")
            labels.append(ev.pid[:width].ljust(width), style="bold")
        column += width
        time_marks = _place_mark(time_marks, end, column)

    table = Table.grid(padding=(0, 0))
    table.add_row(bar)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
