"""
CPU scheduler package.

Simulates FCFS, Round Robin, Priority and SJF scheduling on a single
processor and reports the resulting execution intervals.
"""

from .algorithms import run_algorithm, simulate
from .errors import InvalidProcess, InvalidQuantum, SchedulingError
from .models import Algorithm, ExecutionInterval, ProcessDescriptor

__all__ = [
    "Algorithm",
    "ExecutionInterval",
    "InvalidProcess",
    "InvalidQuantum",
    "ProcessDescriptor",
    "SchedulingError",
    "run_algorithm",
    "simulate",
]
