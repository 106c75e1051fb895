from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .config import MAX_PROCESSES, MIN_PROCESSES
from .errors import ConfigurationError
from .models import Process


@dataclass
class ProcessRecord:
    """
    Mutable simulation state for one process.

    ``start_time``/``response_time`` are set once on first execution and
    ``completion_time`` once when ``remaining_time`` reaches zero.
    """

    pid: str
    index: int
    arrival_time: int
    burst_time: int
    remaining_time: int
    original_remaining: Optional[int] = None
    pre_resolved: bool = False
    started: bool = False
    start_time: Optional[int] = None
    response_time: Optional[int] = None
    completion_time: Optional[int] = None

    @property
    def completed(self) -> bool:
        return self.completion_time is not None

    def is_eligible(self, now: int) -> bool:
        return not self.pre_resolved and not self.completed and self.arrival_time <= now

    def mark_started(self, now: int) -> None:
        if self.started:
            raise RuntimeError(f"{self.pid} already started at t={self.start_time}")
        self.start_time = now
        self.response_time = now - self.arrival_time
        self.started = True

    def run(self, ticks: int = 1) -> None:
        if ticks <= 0 or ticks > self.remaining_time:
            raise ValueError(f"cannot run {self.pid} for {ticks} ticks with {self.remaining_time} remaining")
        self.remaining_time -= ticks

    def mark_completed(self, now: int) -> None:
        if self.completed:
            raise RuntimeError(f"{self.pid} already completed at t={self.completion_time}")
        if self.remaining_time != 0:
            raise RuntimeError(f"{self.pid} still has {self.remaining_time} ticks remaining")
        self.completion_time = now


class ProcessSet:
    """
    Ordered collection of process records. Input order is the final
    tie-breaker for selection.
    """

    def __init__(self, records: List[ProcessRecord]) -> None:
        self._records = records

    @classmethod
    def from_processes(
        cls,
        processes: Iterable[Process],
        max_processes: int = MAX_PROCESSES,
    ) -> "ProcessSet":
        processes = list(processes)
        validate_processes(processes, max_processes=max_processes)

        records: List[ProcessRecord] = []
        for idx, p in enumerate(processes):
            pre_resolved = p.completion_time is not None
            if pre_resolved:
                remaining = 0
            elif p.remaining_time is not None:
                remaining = p.remaining_time
            else:
                remaining = p.burst_time

            records.append(
                ProcessRecord(
                    pid=p.pid,
                    index=idx,
                    arrival_time=p.arrival_time,
                    burst_time=p.burst_time,
                    remaining_time=remaining,
                    original_remaining=p.remaining_time,
                    pre_resolved=pre_resolved,
                    completion_time=p.completion_time,
                )
            )
        return cls(records)

    def __iter__(self) -> Iterator[ProcessRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def completed_count(self) -> int:
        return sum(1 for rec in self._records if rec.completed)

    @property
    def outstanding_work(self) -> int:
        return sum(rec.remaining_time for rec in self.schedulable())

    @property
    def max_arrival(self) -> int:
        return max((rec.arrival_time for rec in self.schedulable()), default=0)

    def schedulable(self) -> List[ProcessRecord]:
        return [rec for rec in self._records if not rec.pre_resolved]

    def next_arrival_after(self, t: int) -> Optional[int]:
        future = [
            rec.arrival_time
            for rec in self._records
            if rec.arrival_time > t and not rec.pre_resolved and not rec.completed
        ]
        return min(future) if future else None


def validate_processes(processes: List[Process], max_processes: int = MAX_PROCESSES) -> None:
    """
    Reject anything the core cannot simulate. Raises ConfigurationError.
    """
    if not MIN_PROCESSES <= len(processes) <= max_processes:
        raise ConfigurationError(
            f"Process count must be between {MIN_PROCESSES} and {max_processes}, got {len(processes)}"
        )

    seen = set()
    for p in processes:
        if p.pid in seen:
            raise ConfigurationError(f"Duplicate process id: {p.pid!r}")
        seen.add(p.pid)

        if p.arrival_time < 0:
            raise ConfigurationError(f"{p.pid}: arrival time must be >= 0, got {p.arrival_time}")
        if p.burst_time <= 0:
            raise ConfigurationError(f"{p.pid}: burst time must be > 0, got {p.burst_time}")
        if p.remaining_time is not None and not 0 < p.remaining_time <= p.burst_time:
            raise ConfigurationError(
                f"{p.pid}: remaining time must be in 1..{p.burst_time}, got {p.remaining_time}"
            )
        if p.completion_time is not None and p.completion_time < p.arrival_time:
            raise ConfigurationError(
                f"{p.pid}: completion time {p.completion_time} precedes arrival {p.arrival_time}"
            )
