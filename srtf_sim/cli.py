from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import MAX_PROCESSES, MIN_PROCESSES, SimulationConfig, TickMode
from .engine import simulate, start_simulation_thread
from .errors import ConfigurationError, SchedulerError
from .gantt import build_rich_gantt
from .metrics import cpu_utilization
from .models import Process, ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger("srtf_sim")

EXIT_CONFIG_ERROR = 2
EXIT_RUN_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="srtf-sim",
        description="Preemptive Shortest-Remaining-Time-First CPU scheduling simulator.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every context switch.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Simulate a workload file.")
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    _add_common_options(run_parser)
    run_parser.add_argument(
        "--background",
        action="store_true",
        help="Run the simulation on a worker thread and wait for its result.",
    )

    interactive_parser = subparsers.add_parser(
        "interactive",
        help="Enter processes at the prompt and simulate them.",
    )
    _add_common_options(interactive_parser)

    return parser


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--tick-mode",
        choices=[m.value for m in TickMode],
        default=TickMode.UNIT.value,
        help="Advance one time unit per step, or jump to the next boundary (default: unit).",
    )
    parser.add_argument(
        "--max-processes",
        type=int,
        default=MAX_PROCESSES,
        help=f"Upper bound on the number of processes (default: {MAX_PROCESSES}).",
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] SRTF ({result.tick_mode.value} ticks)")
    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Complete",
        "Turnaround",
        "Wait",
        "Response",
    ]
    show_remaining = any(p.original_remaining is not None for p in result.processes)
    if show_remaining:
        headers.append("Remaining (input)")

    proc_table = Table(title="SRTF performance results", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h == "PID" else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        row = [
            p.pid + (" *" if p.pre_resolved else ""),
            str(p.arrival_time),
            str(p.burst_time),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
            "-" if p.response_time is None else str(p.response_time),
        ]
        if show_remaining:
            row.append("" if p.original_remaining is None else str(p.original_remaining))
        proc_table.add_row(*row)

    console.print(proc_table)
    if any(p.pre_resolved for p in result.processes):
        console.print("[dim]* completion time supplied, not simulated[/dim]")
    console.print()

    if result.summary:
        sys_table = Table(title="Averages", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")
        sys_table.add_row("Avg turnaround", f"{result.summary.avg_turnaround:.2f}")
        sys_table.add_row("Avg waiting", f"{result.summary.avg_waiting:.2f}")
        sys_table.add_row("CPU utilization", f"{cpu_utilization(result.timeline)*100:.1f}%")
        console.print(sys_table)
        console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)


def _run(processes: List[Process], config: SimulationConfig, background: bool) -> ScheduleResult:
    if background:
        future = start_simulation_thread(processes, config)
        return future.result()
    return simulate(processes, config)


def _prompt_int(prompt: str, minimum: int, maximum: Optional[int] = None) -> int:
    """
    Ask until the answer is an integer within bounds.
    """
    while True:
        raw = input(prompt).strip()
        try:
            value = int(raw)
        except ValueError:
            value = None
        if value is not None and value >= minimum and (maximum is None or value <= maximum):
            return value
        bound = f">= {minimum}" if maximum is None else f"between {minimum} and {maximum}"
        print(f"  Invalid input. Please enter a whole number {bound}.")


def _collect_processes(max_processes: int) -> List[Process]:
    count = _prompt_int(f"Enter number of processes (1-{max_processes}): ", 1, max_processes)

    processes: List[Process] = []
    for i in range(1, count + 1):
        print(f"\nProcess P{i}:")
        arrival = _prompt_int("  Arrival Time (>=0): ", 0)
        burst = _prompt_int("  Burst Time (>0): ", 1)
        processes.append(Process(pid=f"P{i}", arrival_time=arrival, burst_time=burst))
    return processes


def _interactive_loop(config: SimulationConfig, console: Console) -> int:
    console.print("[bold cyan]SRTF Process Scheduling Simulation[/bold cyan]")

    while True:
        try:
            processes = _collect_processes(config.max_processes)
        except (EOFError, KeyboardInterrupt):
            console.print("\n[yellow]Input closed, exiting.[/yellow]")
            return 1

        try:
            result = simulate(processes, config)
        except SchedulerError as exc:
            console.print(f"[red]Error: {escape(str(exc))}[/red]")
        else:
            console.print()
            _print_result(result, console)

        try:
            again = input("\nRun again? [y/N]: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            return 0
        if again not in {"y", "yes"}:
            return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    console = Console()

    try:
        if args.max_processes < MIN_PROCESSES:
            raise ConfigurationError(
                f"--max-processes must be at least {MIN_PROCESSES}, got {args.max_processes}"
            )
        config = SimulationConfig(
            tick_mode=TickMode(args.tick_mode),
            max_processes=args.max_processes,
        )

        if args.command == "run":
            processes = load_workload(Path(args.workload), max_processes=config.max_processes)
            result = _run(processes, config, background=args.background)
            _print_result(result, console)
            return 0

        if args.command == "interactive":
            return _interactive_loop(config, console)
    except ConfigurationError as exc:
        logger.debug("configuration error", exc_info=True)
        console.print(f"[red]Configuration error: {escape(str(exc))}[/red]")
        return EXIT_CONFIG_ERROR
    except SchedulerError as exc:
        logger.debug("simulation failed", exc_info=True)
        console.print(f"[red]Simulation failed: {escape(str(exc))}[/red]")
        return EXIT_RUN_ERROR
    except OSError as exc:
        console.print(f"[red]Cannot read workload: {escape(str(exc))}[/red]")
        return EXIT_CONFIG_ERROR

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
