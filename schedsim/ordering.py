"""
Ordering predicates used by the engines.

Each ordering is an explicit key function handed to a stable sort, so the
sort direction and the field it looks at are visible at the call site.
"""

from __future__ import annotations

from operator import attrgetter
from typing import Any, Callable, List

from .models import Batch, ProcessRecord

SortKey = Callable[[ProcessRecord], Any]


def by_field(name: str) -> SortKey:
    return attrgetter(name)


by_arrival = by_field("arrival_time")
by_priority = by_field("priority")


def stable_sort(batch: Batch, key: SortKey, descending: bool = False) -> Batch:
    """
    Return a new list ordered by ``key``. Equal keys keep their input order
    in both directions.
    """
    return sorted(batch, key=key, reverse=descending)


def stable_argsort(batch: Batch, key: SortKey) -> List[int]:
    """
    Indices of ``batch`` in ascending ``key`` order, ties by index.
    """
    return sorted(range(len(batch)), key=lambda i: key(batch[i]))
