from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every failure surfaced by the simulator."""


class ConfigurationError(SchedulerError, ValueError):
    """
    Invalid input: bad arrival/burst values, process count out of bounds,
    or nothing to average over.
    """


class NonConvergenceError(SchedulerError):
    """The tick loop ran past its iteration ceiling."""

    def __init__(self, message: str, ticks: int, ceiling: int) -> None:
        super().__init__(message)
        self.ticks = ticks
        self.ceiling = ceiling


class AllocationError(SchedulerError):
    """The event log could not grow."""


class SimulationCancelled(SchedulerError):
    """A cancellation request was honoured at a tick boundary."""

    def __init__(self, current_time: int) -> None:
        super().__init__(f"Simulation cancelled at t={current_time}")
        self.current_time = current_time
