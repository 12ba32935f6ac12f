from __future__ import annotations


class SchedulingError(ValueError):
    """Base class for inputs the scheduler refuses to run."""


class InvalidQuantum(SchedulingError):
    pass


class InvalidProcess(SchedulingError):
    pass


class UnknownAlgorithm(SchedulingError):
    pass


class WorkloadError(SchedulingError):
    """
    A workload file or process spec could not be turned into descriptors.
    """
