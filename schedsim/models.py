from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from .errors import InvalidProcess


@dataclass
class ProcessRecord:
    """
    One process in a batch.

    Only ``waiting_time`` and ``turnaround_time`` are written by the engines;
    everything else comes from the input source.
    """

    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 0
    waiting_time: int = 0
    turnaround_time: int = 0

    def __post_init__(self) -> None:
        if self.burst_time <= 0:
            raise InvalidProcess(f"Process {self.pid!r}: burst time must be positive, got {self.burst_time}")
        if self.arrival_time < 0:
            raise InvalidProcess(f"Process {self.pid!r}: arrival time must be non-negative, got {self.arrival_time}")

    @property
    def completion_time(self) -> int:
        return self.arrival_time + self.turnaround_time


Batch = List[ProcessRecord]


def clone_batch(batch: Batch) -> Batch:
    """
    Return an independent copy of the batch with the computed fields reset.
    """
    return [replace(p, waiting_time=0, turnaround_time=0) for p in batch]


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int


@dataclass
class ProcessRow:
    pid: str
    burst_time: int
    waiting_time: int
    turnaround_time: int


@dataclass
class BatchReport:
    rows: List[ProcessRow]
    average_waiting_time: float
    average_turnaround_time: float
    makespan: int = 0
    cpu_busy_time: int = 0
    throughput: float = 0.0
    cpu_utilization: float = 0.0


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: Batch = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    report: Optional[BatchReport] = None
