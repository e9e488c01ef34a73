import pytest

from schedsim.algorithms import compute_fcfs, compute_rr
from schedsim.errors import InvalidBatch
from schedsim.metrics import aggregate
from schedsim.models import ProcessRecord


def test_single_process_average_is_its_own_wait():
    batch = compute_fcfs([ProcessRecord("A", arrival_time=3, burst_time=4)])
    report = aggregate(batch)
    assert report.average_waiting_time == 0
    assert report.average_turnaround_time == 4
    assert report.makespan == 7
    assert report.throughput == pytest.approx(1 / 7)
    assert report.cpu_utilization == pytest.approx(4 / 7)


def test_averages_are_unrounded():
    batch = compute_rr(
        [
            ProcessRecord("1", arrival_time=0, burst_time=5),
            ProcessRecord("2", arrival_time=1, burst_time=3),
            ProcessRecord("3", arrival_time=2, burst_time=1),
        ],
        quantum=2,
    )
    report = aggregate(batch)
    assert report.average_waiting_time == pytest.approx(10 / 3)
    assert report.average_turnaround_time == pytest.approx(19 / 3)
    assert report.cpu_busy_time == 9
    assert report.makespan == 9
    assert report.cpu_utilization == pytest.approx(1.0)


def test_rows_follow_batch_order():
    batch = compute_fcfs(
        [
            ProcessRecord("late", arrival_time=4, burst_time=1),
            ProcessRecord("early", arrival_time=0, burst_time=2),
        ]
    )
    report = aggregate(batch)
    assert [(r.pid, r.burst_time, r.waiting_time, r.turnaround_time) for r in report.rows] == [
        ("early", 2, 0, 2),
        ("late", 1, 0, 1),
    ]


def test_empty_batch_is_rejected():
    with pytest.raises(InvalidBatch):
        aggregate([])
