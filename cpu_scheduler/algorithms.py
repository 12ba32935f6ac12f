from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, Iterable, List, Optional, Sequence, Tuple

from .metrics import compute_process_metrics, compute_system_metrics
from .models import Algorithm, ExecutionInterval, ProcessDescriptor, ScheduleResult
from .validation import validate_processes, validate_quantum

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2

OrderingKey = Callable[[ProcessDescriptor], Tuple[int, ...]]

ORDERING_KEYS: Dict[Algorithm, OrderingKey] = {
    Algorithm.FCFS: lambda p: (p.arrival_time,),
    Algorithm.SJF: lambda p: (p.arrival_time, p.burst_time),
    # higher priority value is more urgent
    Algorithm.PRIORITY: lambda p: (p.arrival_time, -p.priority),
}


def schedule_in_order(processes: Sequence[ProcessDescriptor], key: OrderingKey) -> List[ExecutionInterval]:
    """
    Non-preemptive scheduling: sort once, then run each process to completion.

    The sort is stable, so processes with equal keys keep their input order.
    When the clock is behind the next process's arrival the CPU idles; the
    gap shows up only as the next interval's start.
    """
    time = 0
    timeline: List[ExecutionInterval] = []

    for p in sorted(processes, key=key):
        if time < p.arrival_time:
            logger.debug("CPU idle from %d to %d", time, p.arrival_time)
            time = p.arrival_time

        interval = ExecutionInterval(pid=p.pid, start=time, end=time + p.burst_time)
        logger.debug("%s runs [%d, %d)", p.name, interval.start, interval.end)
        timeline.append(interval)
        time = interval.end

    return timeline


def schedule_fcfs(processes: Sequence[ProcessDescriptor]) -> List[ExecutionInterval]:
    """
    First-Come First-Serve: by arrival time, ties in input order.
    """
    return schedule_in_order(processes, ORDERING_KEYS[Algorithm.FCFS])


def schedule_sjf(processes: Sequence[ProcessDescriptor]) -> List[ExecutionInterval]:
    """
    Shortest Job First (non-preemptive): by arrival time, then shorter burst.
    """
    return schedule_in_order(processes, ORDERING_KEYS[Algorithm.SJF])


def schedule_priority(processes: Sequence[ProcessDescriptor]) -> List[ExecutionInterval]:
    """
    Priority (non-preemptive): by arrival time, then higher priority value.
    """
    return schedule_in_order(processes, ORDERING_KEYS[Algorithm.PRIORITY])


def schedule_round_robin(processes: Sequence[ProcessDescriptor], quantum: int) -> List[ExecutionInterval]:
    """
    Round Robin with a fixed time quantum.

    The queue is seeded in input order, not arrival order. A process is only
    checked against the clock when it reaches the head of the queue, so a
    late arrival listed early makes the clock jump forward to its arrival
    while others that arrived sooner wait behind it.
    """
    remaining = {p.pid: p.burst_time for p in processes}
    queue: Deque[ProcessDescriptor] = deque(processes)

    time = 0
    timeline: List[ExecutionInterval] = []

    while queue:
        p = queue.popleft()

        if time < p.arrival_time:
            logger.debug("CPU idle from %d to %d", time, p.arrival_time)
            time = p.arrival_time

        run_time = min(quantum, remaining[p.pid])
        timeline.append(ExecutionInterval(pid=p.pid, start=time, end=time + run_time))
        time += run_time
        remaining[p.pid] -= run_time

        if remaining[p.pid] > 0:
            logger.debug("%s preempted at %d, %d remaining", p.name, time, remaining[p.pid])
            queue.append(p)
        else:
            logger.debug("%s finished at %d", p.name, time)

    return timeline


def simulate(
    processes: Iterable[ProcessDescriptor],
    algorithm: Algorithm | str,
    quantum: Optional[int] = None,
) -> List[ExecutionInterval]:
    """
    Compute the execution intervals for ``processes`` under ``algorithm``.

    ``quantum`` only applies to Round Robin and defaults to
    ``DEFAULT_QUANTUM`` there. All validation happens before anything is
    scheduled; an empty process set gives an empty schedule.
    """
    algorithm = Algorithm.parse(algorithm)
    processes = list(processes)

    if algorithm is Algorithm.ROUND_ROBIN:
        quantum = validate_quantum(DEFAULT_QUANTUM if quantum is None else quantum)
    validate_processes(processes)

    if not processes:
        return []

    if algorithm is Algorithm.ROUND_ROBIN:
        timeline = schedule_round_robin(processes, quantum)
    else:
        timeline = schedule_in_order(processes, ORDERING_KEYS[algorithm])

    logger.info(
        "%s scheduled %d processes in %d intervals, finishing at %d",
        algorithm.label,
        len(processes),
        len(timeline),
        timeline[-1].end,
    )
    return timeline


def run_algorithm(
    name: Algorithm | str,
    processes: Iterable[ProcessDescriptor],
    quantum: Optional[int] = None,
) -> ScheduleResult:
    """
    Run one simulation and attach per-process and system metrics.
    """
    algorithm = Algorithm.parse(name)
    processes = list(processes)
    if algorithm.preemptive:
        quantum = DEFAULT_QUANTUM if quantum is None else quantum
    else:
        quantum = None

    intervals = simulate(processes, algorithm, quantum=quantum)

    return ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        descriptors=processes,
        intervals=intervals,
        processes=compute_process_metrics(processes, intervals),
        system=compute_system_metrics(intervals),
    )


def compare(
    processes: Iterable[ProcessDescriptor],
    algorithms: Iterable[Algorithm | str],
    quantum: Optional[int] = None,
) -> List[ScheduleResult]:
    """
    Run several algorithms over the same descriptors.

    Runs share nothing but the (frozen) descriptors, so the order they run in
    does not affect any result.
    """
    processes = list(processes)
    return [run_algorithm(alg, processes, quantum=quantum) for alg in algorithms]
