"""
Batch scheduler package.

Simulates FCFS, SJF, Priority (with aging) and Round-Robin scheduling over a
fixed batch of processes and reports Gantt timelines and timing metrics.
"""

from .algorithms import ALGORITHMS, run_algorithm, run_all, schedule_fcfs, schedule_priority, schedule_rr, schedule_sjf
from .config import WaitModel
from .models import InvalidProcessError, Process, ProcessRow, RunInterval, ScheduleAverages, ScheduleReport

__all__ = [
    "ALGORITHMS",
    "InvalidProcessError",
    "Process",
    "ProcessRow",
    "RunInterval",
    "ScheduleAverages",
    "ScheduleReport",
    "WaitModel",
    "run_algorithm",
    "run_all",
    "schedule_fcfs",
    "schedule_priority",
    "schedule_rr",
    "schedule_sjf",
]
