from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .config import WaitModel
from .models import Process, ProcessRow, RunInterval, ScheduleAverages, ScheduleReport


def accumulate_timeline(run_order: Sequence[Process]) -> Tuple[List[ProcessRow], List[RunInterval]]:
    """
    Walk processes in the order they run and derive their timing.

    The service clock starts at 0 and advances by each burst, so a process
    waits for everything scheduled before it:

        wait       = max(0, clock - arrival)
        turnaround = burst + wait
        completion = burst + arrival + wait

    If a process arrives after the clock the CPU sits idle until it does.
    """
    clock = 0
    rows: List[ProcessRow] = []
    timeline: List[RunInterval] = []

    for p in run_order:
        waiting_time = max(0, clock - p.arrival_time)
        start_time = p.arrival_time + waiting_time
        turnaround_time = p.burst_time + waiting_time
        completion_time = p.burst_time + p.arrival_time + waiting_time

        rows.append(
            ProcessRow(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
                completion_time=completion_time,
            )
        )
        timeline.append(RunInterval(pid=p.pid, start_time=start_time, end_time=completion_time))

        clock = completion_time

    return rows, timeline


def elapsed_rows(finished: Sequence[Tuple[Process, int]]) -> List[ProcessRow]:
    """
    Per-process rows from actual completion times: wait = completion - arrival - burst.
    """
    rows: List[ProcessRow] = []
    for p, completion_time in finished:
        turnaround_time = completion_time - p.arrival_time
        rows.append(
            ProcessRow(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=turnaround_time - p.burst_time,
                turnaround_time=turnaround_time,
                completion_time=completion_time,
            )
        )
    return rows


def summarize_rows(rows: Sequence[ProcessRow]) -> Optional[ScheduleAverages]:
    """
    Average wait, average turnaround and throughput (count / last completion).

    Returns None for an empty batch rather than dividing by zero.
    """
    if not rows:
        return None

    n = len(rows)
    last_completion = max(r.completion_time for r in rows)
    return ScheduleAverages(
        avg_waiting=sum(r.waiting_time for r in rows) / n,
        avg_turnaround=sum(r.turnaround_time for r in rows) / n,
        throughput=n / last_completion,
    )


def build_report(
    algorithm: str,
    title: str,
    finished: Sequence[Tuple[Process, int]],
    dispatches: Sequence[RunInterval],
    wait_model: WaitModel = WaitModel.SERVICE,
) -> ScheduleReport:
    """
    Assemble a ScheduleReport from the finish order of a simulated run.

    `finished` pairs each process with the time its last slice ended, in the
    order the processes finished.
    """
    wait_model = WaitModel(wait_model)
    if wait_model is WaitModel.ELAPSED:
        rows = elapsed_rows(finished)
        timeline = list(dispatches)
    else:
        rows, timeline = accumulate_timeline([p for p, _ in finished])

    return ScheduleReport(
        algorithm=algorithm,
        title=title,
        rows=rows,
        timeline=timeline,
        dispatches=list(dispatches),
        averages=summarize_rows(rows),
        wait_model=wait_model,
    )
