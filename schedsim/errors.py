from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for rejected scheduler input."""


class InvalidBatch(SchedulerError):
    """The batch is empty or missing; no engine may run on it."""


class InvalidProcess(SchedulerError):
    """A process record violates its construction invariants."""


class InvalidQuantum(SchedulerError):
    """Round Robin was given a quantum that is not a positive integer."""
