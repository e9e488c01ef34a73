from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Dict, Iterable, List, Optional

from .config import DEFAULT_QUANTUM
from .errors import InvalidBatch, InvalidQuantum
from .metrics import aggregate
from .models import Batch, ScheduledSlice, ScheduleResult, clone_batch
from .ordering import by_arrival, by_priority, stable_argsort, stable_sort

logger = logging.getLogger(__name__)


def _record_slice(timeline: Optional[List[ScheduledSlice]], pid: str, start: int, end: int) -> None:
    if timeline is None or end <= start:
        return
    last = timeline[-1] if timeline else None
    if last is not None and last.pid == pid and last.end_time == start:
        last.end_time = end
    else:
        timeline.append(ScheduledSlice(pid=pid, start_time=start, end_time=end))


def _fcfs_pass(batch: Batch, timeline: Optional[List[ScheduledSlice]] = None) -> Batch:
    """
    Serve the batch strictly in list order, one process at a time.

    The CPU idles until a process arrives if the previous one finished
    earlier.
    """
    service_time = 0
    for i, p in enumerate(batch):
        if i == 0:
            service_time = p.arrival_time
        else:
            prev = batch[i - 1]
            service_time = max(service_time + prev.burst_time, p.arrival_time)

        p.waiting_time = max(0, service_time - p.arrival_time)
        p.turnaround_time = p.burst_time + p.waiting_time
        _record_slice(timeline, p.pid, service_time, service_time + p.burst_time)

    return batch


def compute_fcfs(batch: Batch, timeline: Optional[List[ScheduledSlice]] = None) -> Batch:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Simultaneous arrivals run in input order. The batch is returned in
    dispatch order.
    """
    ordered = stable_sort(batch, by_arrival)
    batch[:] = ordered
    return _fcfs_pass(batch, timeline)


def compute_priority(batch: Batch, timeline: Optional[List[ScheduledSlice]] = None) -> Batch:
    """
    Static Priority scheduling (non-preemptive).

    Higher numeric priority runs earlier; equal priorities keep input
    order. The reordered batch is then served first-come first-serve.
    """
    ordered = stable_sort(batch, by_priority, descending=True)
    batch[:] = ordered
    return _fcfs_pass(batch, timeline)


def compute_srtf(batch: Batch, timeline: Optional[List[ScheduledSlice]] = None) -> Batch:
    """
    Shortest Remaining Time First (preemptive SJF).

    Among arrived, unfinished processes the one with the least remaining
    time runs; ties go to the earliest process in the batch. When nothing
    is runnable the clock jumps straight to the next arrival.
    """
    remaining = [p.burst_time for p in batch]
    n = len(batch)
    completed = 0
    time = 0

    def next_arrival_after(t: int) -> Optional[int]:
        future = [p.arrival_time for i, p in enumerate(batch) if remaining[i] > 0 and p.arrival_time > t]
        return min(future) if future else None

    while completed < n:
        shortest = -1
        for i, p in enumerate(batch):
            if p.arrival_time <= time and remaining[i] > 0:
                if shortest == -1 or remaining[i] < remaining[shortest]:
                    shortest = i

        if shortest == -1:
            nxt = next_arrival_after(time)
            logger.debug("SRTF: CPU idle from %d to %d", time, nxt)
            time = nxt
            continue

        # Run until completion or the next arrival; the choice cannot change in between.
        current = batch[shortest]
        nxt = next_arrival_after(time)
        run_time = remaining[shortest] if nxt is None else min(remaining[shortest], nxt - time)

        _record_slice(timeline, current.pid, time, time + run_time)
        time += run_time
        remaining[shortest] -= run_time

        if remaining[shortest] == 0:
            completed += 1
            current.waiting_time = max(0, time - current.burst_time - current.arrival_time)
            current.turnaround_time = current.burst_time + current.waiting_time
            logger.debug("SRTF: %s completed at %d (wait %d)", current.pid, time, current.waiting_time)

    return batch


def compute_rr(
    batch: Batch,
    quantum: Optional[int] = None,
    timeline: Optional[List[ScheduledSlice]] = None,
) -> Batch:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive during a slice join the ready queue ahead of the
    process that was just preempted.
    """
    if quantum is None or quantum <= 0:
        raise InvalidQuantum("Round Robin requires a positive quantum (use --quantum)")

    remaining = [p.burst_time for p in batch]
    arrival_order = stable_argsort(batch, by_arrival)
    n = len(batch)

    ready: deque[int] = deque()
    next_idx = 0
    completed = 0
    time = 0

    def enqueue_arrivals(current_time: int) -> None:
        nonlocal next_idx
        while next_idx < n and batch[arrival_order[next_idx]].arrival_time <= current_time:
            ready.append(arrival_order[next_idx])
            next_idx += 1

    enqueue_arrivals(time)

    while completed < n:
        if not ready:
            nxt = batch[arrival_order[next_idx]].arrival_time
            logger.debug("RR: CPU idle from %d to %d", time, nxt)
            time = nxt
            enqueue_arrivals(time)
            continue

        curr = ready.popleft()
        p = batch[curr]

        run_time = min(quantum, remaining[curr])
        _record_slice(timeline, p.pid, time, time + run_time)
        time += run_time
        remaining[curr] -= run_time

        # Arrivals during this slice queue up before the preempted process.
        enqueue_arrivals(time)

        if remaining[curr] > 0:
            ready.append(curr)
        else:
            completed += 1
            p.waiting_time = max(0, time - p.burst_time - p.arrival_time)
            p.turnaround_time = p.burst_time + p.waiting_time
            logger.debug("RR: %s completed at %d (wait %d)", p.pid, time, p.waiting_time)

    return batch


Engine = Callable[..., Batch]

ALGORITHMS: Dict[str, Engine] = {
    "fcfs": compute_fcfs,
    "priority": compute_priority,
    "srtf": compute_srtf,
    "rr": compute_rr,
}

ALIASES = {"sjf": "srtf"}

LABELS = {
    "fcfs": "FCFS",
    "priority": "Priority",
    "srtf": "SJF",
    "rr": "RR",
}

QUANTUM_ALGORITHMS = {"rr"}


def validate_batch(batch: Optional[Batch]) -> Batch:
    if not batch:
        raise InvalidBatch("No processes to schedule")
    return batch


def run_algorithm(name: str, batch: Batch, quantum: Optional[int] = None) -> ScheduleResult:
    """
    Run one policy on its own clone of the batch and aggregate the outcome.

    Round Robin falls back to the default quantum when none is given.
    """
    key = name.lower()
    key = ALIASES.get(key, key)
    if key not in ALGORITHMS:
        raise ValueError(f"Unknown or unimplemented algorithm '{name}'")

    validate_batch(batch)
    clone = clone_batch(batch)
    timeline: List[ScheduledSlice] = []

    if key in QUANTUM_ALGORITHMS:
        if quantum is None:
            quantum = DEFAULT_QUANTUM
        processes = ALGORITHMS[key](clone, quantum, timeline=timeline)
    else:
        processes = ALGORITHMS[key](clone, timeline=timeline)
        quantum = None

    logger.info("%s scheduled %d processes", LABELS[key], len(processes))
    return ScheduleResult(
        algorithm=LABELS[key],
        quantum=quantum,
        processes=processes,
        timeline=timeline,
        report=aggregate(processes),
    )


def run_all(batch: Batch, algorithms: Iterable[str], quantum: Optional[int] = None) -> List[ScheduleResult]:
    validate_batch(batch)
    return [run_algorithm(name, batch, quantum=quantum) for name in algorithms]
