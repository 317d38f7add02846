from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .config import WaitModel


class InvalidProcessError(ValueError):
    """
    A process record violates the input contract (burst > 0, arrival >= 0).
    """

    def __init__(self, pid: str, field_name: str, value: int, message: str):
        self.pid = pid
        self.field = field_name
        self.value = value
        super().__init__(f"Process {pid!r}: {field_name}={value} {message}")


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass(frozen=True)
class RunInterval:
    """
    One contiguous span during which a process holds the CPU.
    """

    pid: str
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessRow:
    pid: str
    priority: int
    burst_time: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass(frozen=True)
class ScheduleAverages:
    avg_waiting: float
    avg_turnaround: float
    throughput: float


@dataclass(frozen=True)
class ScheduleReport:
    algorithm: str
    title: str
    rows: List[ProcessRow] = field(default_factory=list)
    timeline: List[RunInterval] = field(default_factory=list)
    dispatches: List[RunInterval] = field(default_factory=list)
    # None when there was nothing to schedule.
    averages: Optional[ScheduleAverages] = None
    wait_model: WaitModel = WaitModel.SERVICE

    @property
    def run_order(self) -> List[str]:
        return [row.pid for row in self.rows]

    @property
    def is_empty(self) -> bool:
        return not self.rows


def validate_processes(processes: Iterable[Process]) -> List[Process]:
    """
    Check every record before any scheduling happens and return them as a list.

    Raises InvalidProcessError for the first record with a non-positive burst
    or a negative arrival time.
    """
    checked: List[Process] = []
    for p in processes:
        if p.burst_time <= 0:
            raise InvalidProcessError(p.pid, "burst_time", p.burst_time, "must be positive")
        if p.arrival_time < 0:
            raise InvalidProcessError(p.pid, "arrival_time", p.arrival_time, "must not be negative")
        checked.append(p)
    return checked
