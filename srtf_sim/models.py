from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import TickMode
from .events import GanttEvent


@dataclass
class Process:
    """
    Input descriptor for one process.

    ``remaining_time`` resumes a partially executed process; a supplied
    ``completion_time`` marks the process as pre-resolved.
    """

    pid: str
    arrival_time: int
    burst_time: int
    remaining_time: Optional[int] = None
    completion_time: Optional[int] = None


@dataclass
class ProcessMetrics:
    pid: str
    arrival_time: int
    burst_time: int
    start_time: Optional[int]
    completion_time: int
    turnaround_time: int
    waiting_time: int
    response_time: Optional[int]
    pre_resolved: bool = False
    original_remaining: Optional[int] = None


@dataclass
class SummaryMetrics:
    avg_turnaround: float
    avg_waiting: float
    count: int


@dataclass
class ScheduleResult:
    tick_mode: TickMode
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: Tuple[GanttEvent, ...] = ()
    summary: Optional[SummaryMetrics] = None
    elapsed_ticks: int = 0
