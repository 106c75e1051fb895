from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Optional

from .config import MAX_PROCESSES
from .errors import ConfigurationError
from .models import Process
from .process_set import validate_processes

logger = logging.getLogger(__name__)


def load_workload(path: str | Path, max_processes: int = MAX_PROCESSES) -> List[Process]:
    """
    Load and validate a workload from a JSON or CSV file.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise ConfigurationError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    validate_processes(processes, max_processes=max_processes)
    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Malformed JSON workload {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise ConfigurationError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _strict_int(value) -> int:
    # Floats and booleans would be silently truncated by int().
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"expected an integer, got {value!r}")


def _optional_int(value) -> Optional[int]:
    if value in (None, ""):
        return None
    return _strict_int(value)


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"])
        arrival_time = _strict_int(mapping["arrival_time"])
        burst_time = _strict_int(mapping["burst_time"])
        remaining_time = _optional_int(mapping.get("remaining_time"))
        completion_time = _optional_int(mapping.get("completion_time"))
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        remaining_time=remaining_time,
        completion_time=completion_time,
    )
