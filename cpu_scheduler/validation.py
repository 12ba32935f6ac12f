from __future__ import annotations

from typing import Iterable, Set

from .errors import InvalidProcess, InvalidQuantum
from .models import ProcessDescriptor


def validate_quantum(quantum) -> int:
    # bool is an int subclass; True is not a time slice
    if isinstance(quantum, bool) or not isinstance(quantum, int):
        raise InvalidQuantum(f"Round Robin quantum must be an integer, got {quantum!r}")
    if quantum <= 0:
        raise InvalidQuantum(f"Round Robin quantum must be positive, got {quantum}")
    return quantum


def validate_processes(processes: Iterable[ProcessDescriptor]) -> None:
    """
    Reject the whole run if any descriptor is unusable.

    Nothing is scheduled from a set that fails here, so a caller never sees
    a partial schedule.
    """
    seen: Set[int] = set()
    for p in processes:
        label = p.name or f"#{p.pid}"
        if p.pid <= 0:
            raise InvalidProcess(f"Process {label}: id must be a positive integer, got {p.pid}")
        if p.pid in seen:
            raise InvalidProcess(f"Process {label}: duplicate id {p.pid}")
        if not p.name or not p.name.strip():
            raise InvalidProcess(f"Process #{p.pid}: name must not be empty")
        if p.arrival_time < 0:
            raise InvalidProcess(f"Process {label}: arrival_time must be >= 0, got {p.arrival_time}")
        if p.burst_time <= 0:
            raise InvalidProcess(f"Process {label}: burst_time must be > 0, got {p.burst_time}")
        seen.add(p.pid)
