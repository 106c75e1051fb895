"""
SRTF scheduling simulator package.

Simulates preemptive Shortest-Remaining-Time-First CPU scheduling over a
fixed set of processes and reports per-process metrics plus a compressed
Gantt timeline.
"""

from .engine import simulate, start_simulation_thread
from .errors import (
    AllocationError,
    ConfigurationError,
    NonConvergenceError,
    SchedulerError,
    SimulationCancelled,
)
from .models import Process

__all__ = [
    "AllocationError",
    "ConfigurationError",
    "NonConvergenceError",
    "Process",
    "SchedulerError",
    "SimulationCancelled",
    "cli",
    "simulate",
    "start_simulation_thread",
]
