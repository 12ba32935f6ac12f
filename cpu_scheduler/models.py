from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import UnknownAlgorithm


@dataclass(frozen=True)
class ProcessDescriptor:
    pid: int
    name: str
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass(frozen=True)
class ExecutionInterval:
    """
    One contiguous slice of execution for a process, ``[start, end)``.
    """

    pid: int
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start


class Algorithm(Enum):
    FCFS = "fcfs"
    ROUND_ROBIN = "rr"
    PRIORITY = "priority"
    SJF = "sjf"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def preemptive(self) -> bool:
        return self is Algorithm.ROUND_ROBIN

    @classmethod
    def parse(cls, value: "Algorithm | str") -> "Algorithm":
        if isinstance(value, Algorithm):
            return value
        key = "-".join(str(value).strip().lower().replace("_", " ").replace("-", " ").split())
        try:
            return _ALIASES[key]
        except KeyError:
            raise UnknownAlgorithm(f"Unknown algorithm '{value}' (use fcfs, rr, priority, sjf)") from None


_LABELS = {
    Algorithm.FCFS: "FCFS",
    Algorithm.ROUND_ROBIN: "Round Robin",
    Algorithm.PRIORITY: "Priority",
    Algorithm.SJF: "SJF",
}

_ALIASES = {
    "fcfs": Algorithm.FCFS,
    "rr": Algorithm.ROUND_ROBIN,
    "round-robin": Algorithm.ROUND_ROBIN,
    "roundrobin": Algorithm.ROUND_ROBIN,
    "priority": Algorithm.PRIORITY,
    "priority-scheduling": Algorithm.PRIORITY,
    "sjf": Algorithm.SJF,
}


@dataclass
class ProcessMetrics:
    pid: int
    name: str
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: int = 0
    slices: int = 1


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int


@dataclass
class ScheduleResult:
    algorithm: Algorithm
    quantum: Optional[int]
    descriptors: List[ProcessDescriptor] = field(default_factory=list)
    intervals: List[ExecutionInterval] = field(default_factory=list)
    processes: List[ProcessMetrics] = field(default_factory=list)
    system: Optional[SystemMetrics] = None

    def name_of(self, pid: int) -> str:
        for p in self.descriptors:
            if p.pid == pid:
                return p.name
        return f"P{pid}"
