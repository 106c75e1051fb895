from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Iterable, Optional

from .config import SimulationConfig, TickMode
from .errors import NonConvergenceError, SimulationCancelled
from .events import EventKind, EventLog
from .metrics import compute_process_metrics, summarize_process_metrics
from .models import Process, ScheduleResult
from .process_set import ProcessRecord, ProcessSet
from .selector import select_next

logger = logging.getLogger(__name__)


class SimulationDriver:
    """
    Owns the clock and the event log and advances the process set until
    every process has completed.

    In ``TickMode.UNIT`` each loop iteration is one time unit. ``TickMode.JUMP``
    advances straight to the next arrival or completion; the selected process
    cannot change in between, so the log and metrics are identical.
    """

    def __init__(
        self,
        process_set: ProcessSet,
        config: Optional[SimulationConfig] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self.process_set = process_set
        self.config = config or SimulationConfig()
        self.cancel_event = cancel_event
        self.log = EventLog(capacity=self.config.max_events)
        self.current_time = 0
        self.ticks = 0
        self.completed_count = process_set.completed_count
        self._ceiling = self.config.ceiling_for(process_set)

    def run(self) -> EventLog:
        total = len(self.process_set)
        logger.info(
            "Starting SRTF simulation: %d processes (%d pre-resolved), mode=%s, ceiling=%d",
            total,
            self.completed_count,
            self.config.tick_mode.value,
            self._ceiling,
        )

        while self.completed_count < total:
            if self.cancel_event is not None and self.cancel_event.is_set():
                raise SimulationCancelled(self.current_time)
            if self.ticks >= self._ceiling:
                raise NonConvergenceError(
                    f"Simulation exceeded {self._ceiling} ticks with "
                    f"{total - self.completed_count} processes unfinished",
                    ticks=self.ticks,
                    ceiling=self._ceiling,
                )
            self.step()

        self.log.close(self.current_time)
        logger.info("Simulation finished at t=%d after %d events", self.current_time, len(self.log) - 1)
        return self.log

    def step(self) -> None:
        """Apply one loop iteration of the state machine."""
        proc = select_next(self.process_set, self.current_time)
        if proc is None:
            self._idle()
        else:
            self._execute(proc)

    def _execute(self, proc: ProcessRecord) -> None:
        if not proc.started:
            proc.mark_started(self.current_time)

        if self.log.record(self.current_time, EventKind.RUN, proc.pid):
            logger.debug("t=%d: switch to %s (remaining %d)", self.current_time, proc.pid, proc.remaining_time)

        ticks = 1
        if self.config.tick_mode is TickMode.JUMP:
            ticks = proc.remaining_time
            nxt = self.process_set.next_arrival_after(self.current_time)
            if nxt is not None:
                ticks = min(ticks, nxt - self.current_time)

        ticks = self._clamp(ticks)
        proc.run(ticks)
        self._advance(ticks)

        if proc.remaining_time == 0:
            proc.mark_completed(self.current_time)
            self.completed_count += 1
            logger.debug("t=%d: %s completed", self.current_time, proc.pid)

    def _idle(self) -> None:
        if self.log.record(self.current_time, EventKind.IDLE):
            logger.debug("t=%d: CPU idle", self.current_time)

        ticks = 1
        if self.config.tick_mode is TickMode.JUMP:
            nxt = self.process_set.next_arrival_after(self.current_time)
            if nxt is None:
                raise NonConvergenceError(
                    f"No pending process can become eligible after t={self.current_time}",
                    ticks=self.ticks,
                    ceiling=self._ceiling,
                )
            ticks = self._clamp(nxt - self.current_time)
        self._advance(ticks)

    def _clamp(self, ticks: int) -> int:
        # A jump never carries the clock past the ceiling.
        return max(1, min(ticks, self._ceiling - self.ticks))

    def _advance(self, ticks: int) -> None:
        self.current_time += ticks
        self.ticks += ticks


def simulate(
    processes: Iterable[Process],
    config: Optional[SimulationConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> ScheduleResult:
    """
    Run SRTF over ``processes`` and return metrics plus the Gantt timeline.

    Raises ConfigurationError before anything runs if the input is invalid;
    NonConvergenceError, AllocationError and SimulationCancelled abort the
    run without producing metrics.
    """
    config = config or SimulationConfig()
    process_set = ProcessSet.from_processes(processes, max_processes=config.max_processes)

    driver = SimulationDriver(process_set, config, cancel_event=cancel_event)
    log = driver.run()

    rows = compute_process_metrics(process_set)
    summary = summarize_process_metrics(rows)

    return ScheduleResult(
        tick_mode=config.tick_mode,
        processes=rows,
        timeline=log.events,
        summary=summary,
        elapsed_ticks=driver.ticks,
    )


def start_simulation_thread(
    processes: Iterable[Process],
    config: Optional[SimulationConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> "Future[ScheduleResult]":
    """
    Run ``simulate`` on a daemon thread and hand back a future that resolves
    to the ScheduleResult or to the exception that aborted the run.
    """
    processes = list(processes)
    future: "Future[ScheduleResult]" = Future()

    def _target() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = simulate(processes, config, cancel_event=cancel_event)
        except Exception as exc:  # noqa: BLE001
            future.set_exception(exc)
        else:
            future.set_result(result)

    thread = threading.Thread(target=_target, name="srtf-simulation", daemon=True)
    thread.start()
    return future
