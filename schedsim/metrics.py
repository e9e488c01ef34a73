from __future__ import annotations

from typing import List

from .errors import InvalidBatch
from .models import Batch, BatchReport, ProcessRow


def aggregate(batch: Batch) -> BatchReport:
    """
    Summarize a scheduled batch: per-process rows, average waiting and
    turnaround times, plus throughput and CPU utilization over the makespan.
    """
    if not batch:
        raise InvalidBatch("Cannot aggregate an empty batch")

    n = len(batch)
    rows: List[ProcessRow] = [
        ProcessRow(
            pid=p.pid,
            burst_time=p.burst_time,
            waiting_time=p.waiting_time,
            turnaround_time=p.turnaround_time,
        )
        for p in batch
    ]

    makespan = max(p.completion_time for p in batch)
    cpu_busy_time = sum(p.burst_time for p in batch)

    return BatchReport(
        rows=rows,
        average_waiting_time=sum(p.waiting_time for p in batch) / n,
        average_turnaround_time=sum(p.turnaround_time for p in batch) / n,
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        throughput=n / makespan if makespan > 0 else 0.0,
        cpu_utilization=cpu_busy_time / makespan if makespan > 0 else 0.0,
    )

