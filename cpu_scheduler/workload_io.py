from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Mapping, Optional

from .errors import WorkloadError
from .models import ProcessDescriptor


def load_workload(path: str | Path) -> List[ProcessDescriptor]:
    """
    Load a workload from a JSON or CSV file into a list of ProcessDescriptor objects.

    Processes without a ``pid`` are numbered by position, starting at 1.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[ProcessDescriptor]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"{path}: invalid JSON ({exc})") from exc
        except UnicodeDecodeError as exc:
            raise WorkloadError(f"{path}: not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    processes: List[ProcessDescriptor] = []
    for index, entry in enumerate(raw, start=1):
        if not isinstance(entry, Mapping):
            raise WorkloadError(f"Invalid process entry: {entry!r}")
        processes.append(_process_from_mapping(entry, index))

    return processes


def _load_csv(path: Path) -> List[ProcessDescriptor]:
    with path.open("r", encoding="utf-8", newline="") as f:
        try:
            rows = list(csv.DictReader(f))
        except UnicodeDecodeError as exc:
            raise WorkloadError(f"{path}: not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc

    return [_process_from_mapping(row, index) for index, row in enumerate(rows, start=1)]


def _optional(mapping: Mapping, key: str) -> Optional[str]:
    value = mapping.get(key)
    if value is None or str(value).strip() == "":
        return None
    return str(value).strip()


def _int_field(mapping: Mapping, key: str, default: Optional[int] = None) -> int:
    """
    Read an integer field; ``default`` of None makes the field required.

    Only ints and integer strings are accepted, so ``2.9`` is rejected
    rather than truncated.
    """
    value = mapping.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise WorkloadError(f"Invalid process entry: missing '{key}' in {dict(mapping)!r}")
        return default

    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise WorkloadError(f"Invalid process entry: '{key}' must be an integer, got {value!r}")


def _process_from_mapping(mapping: Mapping, index: int) -> ProcessDescriptor:
    pid = _int_field(mapping, "pid", default=index)
    arrival_time = _int_field(mapping, "arrival_time")
    burst_time = _int_field(mapping, "burst_time")
    priority = _int_field(mapping, "priority", default=0)

    name = _optional(mapping, "name") or f"P{pid}"

    return ProcessDescriptor(
        pid=pid,
        name=name,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def parse_process_spec(spec: str, pid: int) -> ProcessDescriptor:
    """
    Build a descriptor from ``name:arrival:burst[:priority]``.
    """
    parts = [part.strip() for part in spec.split(":")]
    if len(parts) not in (3, 4) or not parts[0]:
        raise WorkloadError(f"Invalid process spec '{spec}' (expected name:arrival:burst[:priority])")

    try:
        arrival_time = int(parts[1])
        burst_time = int(parts[2])
        priority = int(parts[3]) if len(parts) == 4 else 0
    except ValueError as exc:
        raise WorkloadError(f"Invalid process spec '{spec}': times and priority must be integers") from exc

    return ProcessDescriptor(
        pid=pid,
        name=parts[0],
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
