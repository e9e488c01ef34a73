"""
Schedsim package.

Simulates classical uniprocessor CPU scheduling policies (FCFS, Priority,
SRTF and Round Robin) over a batch of processes and reports waiting and
turnaround times.
"""

__all__ = ["algorithms", "cli", "metrics", "models"]
