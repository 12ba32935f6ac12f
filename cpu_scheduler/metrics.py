from __future__ import annotations

from typing import Dict, List, Sequence

from .models import ExecutionInterval, ProcessDescriptor, ProcessMetrics, SystemMetrics


def compute_process_metrics(
    processes: Sequence[ProcessDescriptor],
    intervals: Sequence[ExecutionInterval],
) -> List[ProcessMetrics]:
    """
    Derive per-process timings from a schedule, in input order.

    A process split into several slices starts at its first slice and
    completes at the end of its last one.
    """
    by_pid: Dict[int, List[ExecutionInterval]] = {}
    for interval in intervals:
        by_pid.setdefault(interval.pid, []).append(interval)

    metrics: List[ProcessMetrics] = []
    for p in processes:
        slices = by_pid.get(p.pid)
        if not slices:
            continue

        start_time = min(s.start for s in slices)
        completion_time = max(s.end for s in slices)
        turnaround_time = completion_time - p.arrival_time

        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                name=p.name,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=start_time,
                completion_time=completion_time,
                waiting_time=turnaround_time - p.burst_time,
                turnaround_time=turnaround_time,
                response_time=start_time - p.arrival_time,
                priority=p.priority,
                slices=len(slices),
            )
        )

    return metrics


def compute_system_metrics(intervals: Sequence[ExecutionInterval]) -> SystemMetrics:
    """
    CPU busy time, idle time and makespan, measured from time 0.
    """
    if not intervals:
        return SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0)

    makespan = max(i.end for i in intervals)
    cpu_busy_time = sum(i.duration for i in intervals)

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=makespan - cpu_busy_time,
        makespan=makespan,
    )


def summarize_process_metrics(processes: List[ProcessMetrics]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }
