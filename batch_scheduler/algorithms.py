from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Iterable, List, Optional, Tuple

from .config import ALGORITHM_TITLES, DEFAULT_ALGORITHMS, RR_QUANTUM, WaitModel
from .metrics import accumulate_timeline, build_report
from .models import Process, RunInterval, ScheduleReport, validate_processes

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class _Job:
    """
    Private per-run working state for one process.

    Aging and round-robin bookkeeping mutate this copy, never the caller's
    Process.
    """

    process: Process
    priority: int
    remaining: int
    completion_time: int = 0

    @classmethod
    def from_process(cls, p: Process) -> "_Job":
        return cls(process=p, priority=p.priority, remaining=p.burst_time)


Selector = Callable[[List[_Job]], _Job]
AfterDispatch = Callable[[List[_Job]], None]


def _simulate_admission(
    processes: List[Process],
    select: Selector,
    quantum: Optional[int] = None,
    after_dispatch: Optional[AfterDispatch] = None,
) -> Tuple[List[_Job], List[RunInterval]]:
    """
    Drive jobs through the not-arrived -> ready -> finished partitions.

    At every decision point all processes with arrival <= clock are admitted
    to the ready list (in arrival order, ties by input order), `select` picks
    one and it runs for its whole remaining burst, or for at most `quantum`
    units when a quantum is given. An unfinished job goes back to the tail of
    the ready list before newly arrived processes are admitted. When nothing
    is ready the clock jumps to the next arrival.

    Returns the jobs in the order they finished and the dispatch log, with
    back-to-back slices of the same job merged.
    """
    not_arrived: Deque[_Job] = deque(
        sorted((_Job.from_process(p) for p in processes), key=lambda j: j.process.arrival_time)
    )
    ready: List[_Job] = []
    finished: List[_Job] = []
    dispatches: List[RunInterval] = []
    last_job: Optional[_Job] = None
    clock = 0

    def admit(current_time: int) -> None:
        while not_arrived and not_arrived[0].process.arrival_time <= current_time:
            job = not_arrived.popleft()
            logger.debug("t=%d: %s arrives (arrival=%d)", current_time, job.process.pid, job.process.arrival_time)
            ready.append(job)

    admit(clock)

    while ready or not_arrived:
        if not ready:
            # CPU idle until the next arrival
            clock = not_arrived[0].process.arrival_time
            admit(clock)
            continue

        job = select(ready)
        ready.remove(job)

        run_time = job.remaining if quantum is None else min(quantum, job.remaining)
        start_time = clock
        clock += run_time
        job.remaining -= run_time

        if last_job is job and dispatches and dispatches[-1].end_time == start_time:
            previous = dispatches.pop()
            dispatches.append(RunInterval(pid=previous.pid, start_time=previous.start_time, end_time=clock))
        else:
            dispatches.append(RunInterval(pid=job.process.pid, start_time=start_time, end_time=clock))
        last_job = job

        if job.remaining > 0:
            ready.append(job)
        else:
            job.completion_time = clock
            finished.append(job)
            logger.debug("t=%d: %s finished", clock, job.process.pid)

        if after_dispatch is not None:
            after_dispatch(ready)

        admit(clock)

    return finished, dispatches


def _completions(jobs: Iterable[_Job]) -> List[Tuple[Process, int]]:
    return [(job.process, job.completion_time) for job in jobs]


def _finish(
    name: str,
    title: Optional[str],
    finished: List[Tuple[Process, int]],
    dispatches: List[RunInterval],
    wait_model: WaitModel,
) -> ScheduleReport:
    report = build_report(
        algorithm=ALGORITHM_TITLES[name],
        title=ALGORITHM_TITLES[name] if title is None else title,
        finished=finished,
        dispatches=dispatches,
        wait_model=wait_model,
    )
    logger.info("%s: scheduled %d processes, run order %s", report.algorithm, len(report.rows), report.run_order)
    return report


def schedule_fcfs(
    processes: Iterable[Process],
    title: Optional[str] = None,
    wait_model: WaitModel = WaitModel.SERVICE,
) -> ScheduleReport:
    """
    First-Come First-Serve (non-preemptive).

    Processes run strictly in the order given; arrival time only affects the
    waiting time, never the order.
    """
    procs = validate_processes(processes)
    rows, timeline = accumulate_timeline(procs)
    finished = [(p, row.completion_time) for p, row in zip(procs, rows)]
    return _finish("fcfs", title, finished, timeline, wait_model)


def _shortest_burst(ready: List[_Job]) -> _Job:
    # min() keeps the first of equal keys, i.e. the earliest admitted
    return min(ready, key=lambda j: j.process.burst_time)


def schedule_sjf(
    processes: Iterable[Process],
    title: Optional[str] = None,
    wait_model: WaitModel = WaitModel.SERVICE,
) -> ScheduleReport:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and not yet
    run, choose the one with the smallest burst time. Ties go to whichever
    was admitted first.
    """
    procs = validate_processes(processes)
    finished, dispatches = _simulate_admission(procs, select=_shortest_burst)
    return _finish("sjf", title, _completions(finished), dispatches, wait_model)


def _highest_priority(ready: List[_Job]) -> _Job:
    return min(ready, key=lambda j: j.priority)


def _age(ready: List[_Job]) -> None:
    """
    Every job still waiting moves one step closer to the front, never below 1.
    """
    for job in ready:
        if job.priority > 1:
            job.priority -= 1
            logger.debug("%s aged to priority %d", job.process.pid, job.priority)


def schedule_priority(
    processes: Iterable[Process],
    title: Optional[str] = None,
    wait_model: WaitModel = WaitModel.SERVICE,
) -> ScheduleReport:
    """
    Priority scheduling (non-preemptive) with aging.

    Lower numeric priority value means higher priority. After each dispatch
    the priority of every process left waiting is decremented by 1, floored
    at 1, so long waiters cannot starve. Aging works on a private copy; the
    reported priority is the caller's original value.
    """
    procs = validate_processes(processes)
    finished, dispatches = _simulate_admission(procs, select=_highest_priority, after_dispatch=_age)
    return _finish("priority", title, _completions(finished), dispatches, wait_model)


def _rotation_head(ready: List[_Job]) -> _Job:
    return ready[0]


def schedule_rr(
    processes: Iterable[Process],
    title: Optional[str] = None,
    wait_model: WaitModel = WaitModel.SERVICE,
) -> ScheduleReport:
    """
    Round Robin with a fixed quantum of one time unit.

    The head of the rotation runs for one unit and then moves to the tail,
    or leaves the rotation once its remaining burst reaches zero. Processes
    that arrived during the unit join the tail afterwards.

    With WaitModel.SERVICE the rows are computed by walking the finish order
    with the cumulative service clock, which only approximates the true
    round-robin wait when processes are preempted more than once. Use
    WaitModel.ELAPSED for wait = completion - arrival - burst.
    """
    procs = validate_processes(processes)
    finished, dispatches = _simulate_admission(procs, select=_rotation_head, quantum=RR_QUANTUM)
    return _finish("rr", title, _completions(finished), dispatches, wait_model)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}


def run_algorithm(
    name: str,
    processes: Iterable[Process],
    title: Optional[str] = None,
    wait_model: WaitModel = WaitModel.SERVICE,
) -> ScheduleReport:
    """
    Dispatch to the requested algorithm by name (fcfs, sjf, priority, rr).
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, title=title, wait_model=wait_model)


def run_all(
    processes: Iterable[Process],
    algorithms: Optional[List[str]] = None,
    wait_model: WaitModel = WaitModel.SERVICE,
) -> List[ScheduleReport]:
    """
    Run several disciplines over the same batch. Invalid input fails before
    any of them runs.
    """
    procs = validate_processes(processes)
    names = DEFAULT_ALGORITHMS if algorithms is None else algorithms
    return [run_algorithm(name, procs, wait_model=wait_model) for name in names]
