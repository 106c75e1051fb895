from __future__ import annotations

from typing import Iterable, List

from .errors import ConfigurationError
from .events import EventKind, GanttEvent, iter_segments
from .models import ProcessMetrics, SummaryMetrics
from .process_set import ProcessSet


def compute_process_metrics(process_set: ProcessSet) -> List[ProcessMetrics]:
    """
    Derive turnaround and waiting time for every process with a completion
    time, in input order. Pre-resolved processes are included.
    """
    rows: List[ProcessMetrics] = []
    for rec in process_set:
        if rec.completion_time is None:
            continue

        turnaround_time = rec.completion_time - rec.arrival_time
        waiting_time = turnaround_time - rec.burst_time

        rows.append(
            ProcessMetrics(
                pid=rec.pid,
                arrival_time=rec.arrival_time,
                burst_time=rec.burst_time,
                start_time=rec.start_time,
                completion_time=rec.completion_time,
                turnaround_time=turnaround_time,
                waiting_time=waiting_time,
                response_time=rec.response_time,
                pre_resolved=rec.pre_resolved,
                original_remaining=rec.original_remaining,
            )
        )
    return rows


def summarize_process_metrics(processes: List[ProcessMetrics]) -> SummaryMetrics:
    """
    Mean turnaround and waiting time. Averaging over nothing is a
    configuration error, not zero.
    """
    if not processes:
        raise ConfigurationError("No completed processes to average over")

    n = len(processes)
    return SummaryMetrics(
        avg_turnaround=sum(p.turnaround_time for p in processes) / n,
        avg_waiting=sum(p.waiting_time for p in processes) / n,
        count=n,
    )


def cpu_utilization(timeline: Iterable[GanttEvent]) -> float:
    """
    Fraction of the timeline spent running a process.
    """
    segments = list(iter_segments(timeline))
    if not segments:
        return 0.0

    makespan = segments[-1][1] - segments[0][0]
    busy = sum(end - start for start, end, ev in segments if ev.kind is EventKind.RUN)
    return busy / makespan if makespan > 0 else 0.0
