from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_QUANTUM = 2
DEFAULT_ALGORITHMS: Tuple[str, ...] = ("fcfs", "priority", "sjf", "rr")


@dataclass(frozen=True)
class SimulationConfig:
    """
    Settings for one CLI run, resolved from argparse defaults.
    """

    workload: Optional[str] = None
    quantum: int = DEFAULT_QUANTUM
    algorithms: Tuple[str, ...] = DEFAULT_ALGORITHMS
    precision: int = 2
    show_gantt: bool = False
    compare: bool = False
    verbose: bool = False

    @classmethod
    def from_args(cls, args) -> "SimulationConfig":
        return cls(
            workload=args.file,
            quantum=args.quantum,
            algorithms=tuple(args.algorithms),
            show_gantt=args.gantt,
            compare=args.compare,
            verbose=args.verbose,
        )
