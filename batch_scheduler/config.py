from __future__ import annotations

from enum import Enum
from typing import Dict, List


class WaitModel(str, Enum):
    """
    How per-process waiting time is derived for a finished schedule.

    SERVICE walks the run order with a cumulative service clock. For the
    preemptive round-robin discipline this is an approximation, since a
    process may run in several disjoint slices.

    ELAPSED uses the dispatch log instead: wait = completion - arrival - burst.
    """

    SERVICE = "service"
    ELAPSED = "elapsed"


# Order matches the order the disciplines are run and printed.
DEFAULT_ALGORITHMS: List[str] = ["fcfs", "sjf", "priority", "rr"]

ALGORITHM_TITLES: Dict[str, str] = {
    "fcfs": "First-come, first-serve",
    "sjf": "Shortest-job-first",
    "priority": "Priority",
    "rr": "Round-robin",
}

RR_QUANTUM = 1

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(message)s"
LOG_DATE_FORMAT = "[%X]"
