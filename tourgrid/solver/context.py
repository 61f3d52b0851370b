"""
Search Context Module - Private working state for one solve call.
"""

import time
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .board import TourGrid
from .solution import SearchMetrics


@dataclass
class SearchContext:
    """
    Per-call state owned by a single search.

    A fresh context is built for every solve call, so concurrent calls on
    the same TourSolver never share a working buffer.

    Attributes:
        size: Grid side length N
        cells: Row-major working copy of the grid; mutated in place
        offsets: Ordered offsets of the selected variant
        node_limit: Placements allowed before the search gives up
        metrics: Counters filled in during the search
        start_time: perf_counter value when the search began
    """
    size: int
    cells: List[int]
    offsets: Tuple[Tuple[int, int], ...]
    node_limit: int
    metrics: SearchMetrics = field(default_factory=SearchMetrics)
    start_time: float = field(default_factory=time.perf_counter)

    @classmethod
    def from_grid(cls, grid: TourGrid, offsets: Sequence[Tuple[int, int]],
                  node_limit: int, metrics: SearchMetrics) -> 'SearchContext':
        """Build a context around a fresh copy of the grid cells."""
        return cls(
            size=grid.size,
            cells=grid.flatten(),
            offsets=tuple(offsets),
            node_limit=node_limit,
            metrics=metrics,
        )

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def mark(self, row: int, col: int, step: int) -> None:
        self.cells[row * self.size + col] = step

    def unmark(self, row: int, col: int) -> None:
        self.cells[row * self.size + col] = 0

    def budget_exceeded(self) -> bool:
        """True once nodes_visited has gone past node_limit."""
        return self.metrics.nodes_visited > self.node_limit

    def elapsed_ms(self) -> float:
        """Milliseconds since the search began."""
        return (time.perf_counter() - self.start_time) * 1000
