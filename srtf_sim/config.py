from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .process_set import ProcessSet

# Input bounds
MIN_PROCESSES = 1
MAX_PROCESSES = 10

# Multiple of the outstanding work allowed before the loop is declared stuck.
ITERATION_CEILING_FACTOR = 4


class TickMode(str, Enum):
    UNIT = "unit"
    JUMP = "jump"


@dataclass
class SimulationConfig:
    """
    Knobs for a single simulation run.

    ``iteration_ceiling`` overrides the computed bound on elapsed ticks and
    ``max_events`` caps the event log (``None`` means unbounded).
    """

    tick_mode: TickMode = TickMode.UNIT
    max_processes: int = MAX_PROCESSES
    iteration_ceiling: Optional[int] = None
    max_events: Optional[int] = None

    def ceiling_for(self, process_set: "ProcessSet") -> int:
        if self.iteration_ceiling is not None:
            return self.iteration_ceiling
        # Idle time can never exceed the latest arrival.
        return process_set.max_arrival + ITERATION_CEILING_FACTOR * process_set.outstanding_work + 1
