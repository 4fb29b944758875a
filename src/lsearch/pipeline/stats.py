"""Operational statistics gathered while stages run.

Nothing here feeds back into scoring; the report is printed on ``--stats``.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List


@dataclass(slots=True)
class OperationStats:
    """Running averages for one ``scorer(target)`` key."""

    name: str
    n: int = 0
    avg_time: float = 0.0
    avg_size: float = 0.0

    def record(self, elapsed_us: float, content_len: int) -> None:
        self.avg_time = (self.n * self.avg_time + elapsed_us) / (self.n + 1)
        self.avg_size = (self.n * self.avg_size + content_len) / (self.n + 1)
        self.n += 1

    def __str__(self) -> str:
        return (
            f"{self.name} [n={self.n}, avg_t={self.avg_time:.1f}μs, "
            f"avg_s={self.avg_size:.1f}]"
        )


@dataclass(slots=True)
class StageStats:
    loader: str
    operation_order: List[str]
    operations: Dict[str, OperationStats] = field(default_factory=dict)
    elapsed_ns: int = 0

    @contextmanager
    def time_operation(self, key: str, content_len: int) -> Iterator[None]:
        """Time one scorer invocation and fold it into the running averages."""
        start = time.perf_counter_ns()
        try:
            yield
        finally:
            elapsed_us = (time.perf_counter_ns() - start) / 1000.0
            operation = self.operations.get(key)
            if operation is None:
                operation = self.operations[key] = OperationStats(key)
            operation.record(elapsed_us, content_len)

    @contextmanager
    def time_stage(self) -> Iterator[None]:
        start = time.perf_counter_ns()
        try:
            yield
        finally:
            self.elapsed_ns += time.perf_counter_ns() - start

    def __str__(self) -> str:
        lines = [f"\t{self.loader} [t={self.elapsed_ns / 1000.0:.1f}μs]"]
        for key in self.operation_order:
            operation = self.operations.get(key)
            if operation is None:
                lines.append(f"\t\t{key} (Never executed)")
            else:
                lines.append(f"\t\t{operation}")
        return "\n".join(lines)


@dataclass(slots=True)
class RunStatistics:
    stages: List[StageStats] = field(default_factory=list)

    def add_stage(self, loader: str, operation_order: List[str]) -> StageStats:
        stage_stats = StageStats(loader=loader, operation_order=list(operation_order))
        self.stages.append(stage_stats)
        return stage_stats

    def report(self) -> str:
        lines = ["Operational Statistics"]
        lines.extend(str(stage_stats) for stage_stats in self.stages)
        return "\n".join(lines)
