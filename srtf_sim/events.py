from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .errors import AllocationError


class EventKind(str, Enum):
    RUN = "run"
    IDLE = "idle"
    END = "end"


@dataclass(frozen=True)
class GanttEvent:
    """
    Start of a new CPU occupant. Its duration is implied by the next event's
    timestamp; the END sentinel only bounds the last real segment.
    """

    timestamp: int
    kind: EventKind
    pid: Optional[str] = None

    @property
    def occupant(self) -> Optional[str]:
        if self.kind is EventKind.RUN:
            return self.pid
        if self.kind is EventKind.IDLE:
            return "IDLE"
        return None


class EventLog:
    """
    Append-only, run-length encoded execution timeline.
    """

    def __init__(self, capacity: Optional[int] = None) -> None:
        self._events: List[GanttEvent] = []
        self._capacity = capacity
        self._closed = False

    def __len__(self) -> int:
        return len(self._events)

    @property
    def events(self) -> Tuple[GanttEvent, ...]:
        return tuple(self._events)

    def _last(self) -> Optional[GanttEvent]:
        return self._events[-1] if self._events else None

    def record(self, timestamp: int, kind: EventKind, pid: Optional[str] = None) -> bool:
        """
        Log ``(kind, pid)`` as the occupant from ``timestamp`` on.

        Returns False without appending when the occupant is unchanged.
        """
        if self._closed:
            raise RuntimeError("EventLog is closed")
        if kind is EventKind.END:
            raise ValueError("use close() for the terminal event")

        last = self._last()
        if last is not None:
            if last.kind is kind and last.pid == pid:
                return False
            if timestamp <= last.timestamp:
                raise ValueError(
                    f"timestamp {timestamp} does not follow previous event at {last.timestamp}"
                )

        self._append(GanttEvent(timestamp=timestamp, kind=kind, pid=pid if kind is EventKind.RUN else None))
        return True

    def close(self, timestamp: int) -> None:
        last = self._last()
        if last is not None and timestamp < last.timestamp:
            raise ValueError(f"end timestamp {timestamp} precedes last event at {last.timestamp}")
        self._append(GanttEvent(timestamp=timestamp, kind=EventKind.END))
        self._closed = True

    def _append(self, event: GanttEvent) -> None:
        if self._capacity is not None and len(self._events) >= self._capacity:
            raise AllocationError(f"event log capacity of {self._capacity} events exhausted")
        try:
            self._events.append(event)
        except MemoryError as exc:
            raise AllocationError("unable to grow event log") from exc


def iter_segments(events) -> Iterator[Tuple[int, int, GanttEvent]]:
    """
    Yield ``(start, end, event)`` for every non-terminal event in a timeline.
    """
    events = list(events)
    for current, following in zip(events, events[1:]):
        yield current.timestamp, following.timestamp, current
