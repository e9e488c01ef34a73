from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, List, TextIO

from .errors import InvalidBatch, InvalidProcess
from .models import Batch, ProcessRecord

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("pid", "burst_time", "arrival_time", "priority")


def load_batch(path: str | Path) -> Batch:
    """
    Load a batch from a text, JSON or CSV file into a list of ProcessRecord objects.

    Raises OSError (FileNotFoundError and friends) when the file cannot be
    opened, InvalidBatch when it holds no processes, is not UTF-8 text or
    repeats a pid.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    try:
        if suffix == ".json":
            batch = _check_unique_pids(_load_json(path))
        elif suffix == ".csv":
            batch = _check_unique_pids(_load_csv(path))
        else:
            with path.open("r", encoding="utf-8") as f:
                batch = parse_text(f)
    except UnicodeDecodeError as exc:
        raise InvalidBatch(f"{path} is not UTF-8 text: {exc}") from exc

    if not batch:
        raise InvalidBatch(f"No processes to schedule in {path}")
    logger.debug("Loaded %d processes from %s", len(batch), path)
    return batch


def parse_text(stream: TextIO) -> Batch:
    """
    Parse one process per line: ``pid burst_time arrival_time priority``.

    Blank lines and ``#`` comments are skipped.
    """
    processes: Batch = []
    seen = set()
    try:
        for lineno, raw in enumerate(stream, start=1):
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            parts = line.split()
            if len(parts) != len(TEXT_FIELDS):
                raise InvalidProcess(
                    f"Line {lineno}: expected {len(TEXT_FIELDS)} fields ({' '.join(TEXT_FIELDS)}), got {len(parts)}"
                )
            try:
                process = _process_from_mapping(dict(zip(TEXT_FIELDS, parts)))
            except InvalidProcess as exc:
                raise InvalidProcess(f"Line {lineno}: {exc}") from exc
            if process.pid in seen:
                raise InvalidBatch(f"Line {lineno}: duplicate pid {process.pid!r}")
            seen.add(process.pid)
            processes.append(process)
    except UnicodeDecodeError as exc:
        raise InvalidBatch(f"Process list is not UTF-8 text: {exc}") from exc
    return processes


def _check_unique_pids(batch: Batch) -> Batch:
    seen = set()
    for p in batch:
        if p.pid in seen:
            raise InvalidBatch(f"Duplicate pid {p.pid!r}")
        seen.add(p.pid)
    return batch


def _load_json(path: Path) -> Batch:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidBatch(f"Malformed JSON workload {path}: {exc}") from exc

    if not isinstance(raw, Iterable) or isinstance(raw, (str, dict)):
        raise InvalidBatch("JSON workload must be a list of process objects")

    processes: Batch = []
    for entry in raw:
        processes.append(_process_from_mapping(entry))

    return processes


def _load_csv(path: Path) -> Batch:
    processes: List[ProcessRecord] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _as_int(value) -> int:
    # JSON floats and booleans would otherwise be truncated silently by int().
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"expected an integer, got {value!r}")
    return int(value)


def _process_from_mapping(mapping) -> ProcessRecord:
    try:
        pid = str(mapping["pid"])
        arrival_time = _as_int(mapping["arrival_time"])
        burst_time = _as_int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _as_int(priority_val) if priority_val not in (None, "") else 0
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise InvalidProcess(f"Invalid process entry: {mapping!r}") from exc

    return ProcessRecord(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
