from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm, run_all
from .config import DEFAULT_ALGORITHMS, DEFAULT_LOG_LEVEL, LOG_DATE_FORMAT, LOG_FORMAT, WaitModel
from .gantt import build_rich_gantt, render_gantt
from .models import InvalidProcessError, ScheduleReport
from .workload_io import WorkloadError, load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="batch-scheduler",
        description="Batch CPU scheduling simulator (FCFS, SJF, Priority with aging, RR).",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging verbosity (default: {DEFAULT_LOG_LEVEL}).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Schedule a workload and show Gantt chart and timing table.")
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(DEFAULT_ALGORITHMS),
        help="Algorithms to run, in order (default: fcfs sjf priority rr).",
    )
    run_parser.add_argument(
        "--wait-model",
        choices=[m.value for m in WaitModel],
        default=WaitModel.SERVICE.value,
        help="How waiting time is computed (default: service).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Render the Gantt chart as plain text instead of a colored panel.",
    )
    run_parser.add_argument(
        "--dispatches",
        action="store_true",
        help="Also show the slices actually dispatched by the simulation.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(DEFAULT_ALGORITHMS),
        help="Algorithms to compare (default: fcfs sjf priority rr).",
    )
    compare_parser.add_argument(
        "--wait-model",
        choices=[m.value for m in WaitModel],
        default=WaitModel.SERVICE.value,
        help="How waiting time is computed (default: service).",
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _print_title(console: Console, title: str) -> None:
    rule = "-" * (len(title) * 2)
    console.print(rule)
    console.print(" " * (len(title) // 2), title)
    console.print(rule)


def _build_schedule_table(report: ScheduleReport) -> Table:
    avg = report.averages
    footers = ["", "", "", "", "", "", ""]
    if avg is not None:
        footers[4] = f"Average\n{avg.avg_waiting:.2f}"
        footers[5] = f"Average\n{avg.avg_turnaround:.2f}"
        footers[6] = f"Throughput\n{avg.throughput:.2f}/t"
    else:
        footers[4] = footers[5] = footers[6] = "n/a"

    headers = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]
    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    for h, footer in zip(headers, footers):
        justify = "center" if h in {"ID", "Priority"} else "right"
        table.add_column(h, justify=justify, footer=footer)

    for row in report.rows:
        table.add_row(
            row.pid,
            str(row.priority),
            str(row.burst_time),
            str(row.arrival_time),
            str(row.waiting_time),
            str(row.turnaround_time),
            str(row.completion_time),
        )
    return table


def _print_report(report: ScheduleReport, console: Console, plain: bool = False, dispatches: bool = False) -> None:
    _print_title(console, report.title)

    if plain:
        console.print(render_gantt(report.timeline), highlight=False, markup=False)
    else:
        panel, time_marks = build_rich_gantt(report.timeline, title="Gantt schedule")
        console.print(panel)
        if time_marks:
            console.print(time_marks, highlight=False)

    if dispatches:
        panel, time_marks = build_rich_gantt(report.dispatches, title="Dispatched slices")
        console.print(panel)
        if time_marks:
            console.print(time_marks, highlight=False)

    console.print()
    console.print(_build_schedule_table(report))
    console.print()


def _print_comparison(reports: List[ScheduleReport], console: Console, workload_path: Path) -> None:
    summary_table = Table(title=f"Algorithm comparison: {workload_path}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for report in reports:
        avg = report.averages
        if avg is None:
            summary_table.add_row(report.algorithm, "n/a", "n/a", "n/a")
            continue
        summary_table.add_row(
            report.algorithm,
            f"{avg.avg_waiting:.2f}",
            f"{avg.avg_turnaround:.2f}",
            f"{avg.throughput:.3f}",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    console = Console()

    try:
        workload_path = Path(args.workload)
        processes = load_workload(workload_path)
        wait_model = WaitModel(args.wait_model)

        if args.command == "run":
            for alg in args.algorithms:
                report = run_algorithm(alg, processes, wait_model=wait_model)
                _print_report(report, console, plain=args.plain, dispatches=args.dispatches)
            return 0

        if args.command == "compare":
            reports = run_all(processes, algorithms=args.algorithms, wait_model=wait_model)
            _print_comparison(reports, console, workload_path)
            return 0
    except (WorkloadError, InvalidProcessError) as exc:
        logger.debug("Rejected workload %s", args.workload, exc_info=True)
        console.print(f"Error: {exc}", style="red", markup=False)
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
