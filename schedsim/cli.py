from __future__ import annotations

import argparse
import logging
import sys
from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, ALIASES, QUANTUM_ALGORITHMS, run_all
from .config import DEFAULT_ALGORITHMS, DEFAULT_QUANTUM, SimulationConfig
from .errors import SchedulerError
from .gantt import build_rich_gantt
from .logs import configure_logging
from .models import Batch, ScheduleResult
from .workload_io import load_batch, parse_text

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, Priority, SJF/SRTF, RR).",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="Process list (text, .json or .csv). Reads text from stdin when omitted.",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(DEFAULT_ALGORITHMS),
        choices=sorted(set(ALGORITHMS) | set(ALIASES)),
        help="Algorithms to run, in order (default: fcfs priority sjf rr).",
    )
    parser.add_argument(
        "--gantt",
        action="store_true",
        help="Show a Gantt chart for each algorithm.",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Finish with a table comparing average metrics across algorithms.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling decisions to stderr.",
    )
    return parser


def _print_result(result: ScheduleResult, console: Console, config: SimulationConfig) -> None:
    title = result.algorithm
    if result.quantum is not None:
        title += f" Quantum = {result.quantum}"

    console.print("\n*********")
    console.print(f"[bold]{title}[/bold]")

    if config.show_gantt:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    proc_table = Table(box=box.SIMPLE_HEAVY)
    for h in ("Processes", "Burst time", "Waiting time", "Turn around time"):
        proc_table.add_column(h, justify="center" if h == "Processes" else "right")

    report = result.report
    for row in report.rows:
        proc_table.add_row(
            escape(row.pid),
            str(row.burst_time),
            str(row.waiting_time),
            str(row.turnaround_time),
        )

    console.print(proc_table)
    prec = config.precision
    console.print(f"Average waiting time = {report.average_waiting_time:.{prec}f}")
    console.print(f"Average turn around time = {report.average_turnaround_time:.{prec}f}")


def _print_comparison(results: List[ScheduleResult], console: Console, config: SimulationConfig) -> None:
    prec = config.precision
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput (proc/time)", justify="right")
    summary_table.add_column("CPU utilization", justify="right")

    for result in results:
        report = result.report
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{report.average_waiting_time:.{prec}f}",
            f"{report.average_turnaround_time:.{prec}f}",
            f"{report.throughput:.3f}",
            f"{report.cpu_utilization*100:.1f}%",
        )

    console.print()
    console.print(summary_table)


def _read_batch(config: SimulationConfig) -> Batch:
    if config.workload is None:
        logger.debug("Reading processes from stdin")
        return parse_text(sys.stdin)
    return load_batch(config.workload)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = SimulationConfig.from_args(args)
    configure_logging(config.verbose)

    console = Console()
    err_console = Console(stderr=True)

    if config.quantum <= 0 and any(ALIASES.get(a, a) in QUANTUM_ALGORITHMS for a in config.algorithms):
        parser.error("--quantum must be a positive integer")

    try:
        batch = _read_batch(config)
        results = run_all(batch, config.algorithms, quantum=config.quantum)
    except OSError:
        err_console.print(f"[red]Error: Could not open file {escape(str(config.workload))}[/red]")
        return 1
    except SchedulerError as exc:
        err_console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    for result in results:
        _print_result(result, console, config)

    if config.compare:
        _print_comparison(results, console, config)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
