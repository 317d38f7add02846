from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Mapping, Sequence

from .models import Process, validate_processes

logger = logging.getLogger(__name__)


class WorkloadError(ValueError):
    """
    A workload file could not be read or contains a malformed entry.
    """


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a validated list of Process objects.

    CSV files may carry a `pid,arrival_time,burst_time[,priority]` header.
    Without one, every row is read positionally as `id,burst,arrival[,priority]`.
    A missing priority defaults to 0.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.debug("Loaded %d processes from %s", len(processes), path)
    return validate_processes(processes)


def _load_json(path: Path) -> List[Process]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as exc:
        raise WorkloadError(f"Cannot read workload {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise WorkloadError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            rows = [row for row in csv.reader(f) if row and any(cell.strip() for cell in row)]
    except OSError as exc:
        raise WorkloadError(f"Cannot read workload {path}: {exc}") from exc
    except csv.Error as exc:
        raise WorkloadError(f"Invalid CSV in {path}: {exc}") from exc

    if not rows:
        return []

    header = [cell.strip().lower() for cell in rows[0]]
    if "pid" in header:
        return [_process_from_mapping(dict(zip(header, row))) for row in rows[1:]]
    return [_process_from_row(row) for row in rows]


def _process_from_row(row: Sequence[str]) -> Process:
    if len(row) not in (3, 4):
        raise WorkloadError(f"Expected 3 or 4 columns (id,burst,arrival[,priority]), got {len(row)}: {row!r}")
    try:
        pid = row[0].strip()
        burst_time = int(row[1])
        arrival_time = int(row[2])
        priority = int(row[3]) if len(row) == 4 and row[3].strip() else 0
    except ValueError as exc:
        raise WorkloadError(f"Invalid process row: {row!r}") from exc

    return Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority)


def _process_from_mapping(mapping: Mapping) -> Process:
    try:
        pid = str(mapping["pid"])
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = int(priority_val) if priority_val not in (None, "") else 0
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
