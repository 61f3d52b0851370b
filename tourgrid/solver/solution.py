"""
Solution Module - Result of a tour search and its statistics.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .board import TourGrid
from .errors import SearchCutoff, SearchExhausted
from .position import Position

NO_SOLUTION_MESSAGE = "No solution found from here"


class TourOutcome(Enum):
    """
    Terminal outcome of a solve call.

    States:
        SOLVED: Steps complete the tour (possibly empty)
        EXHAUSTED: Every branch tried, no completion exists
        CUTOFF: Node budget exceeded, inconclusive
    """
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    CUTOFF = "cutoff"


@dataclass
class SearchMetrics:
    """
    Instrumentation for one solve call.

    Attributes:
        nodes_visited: Candidate placements made (root not counted)
        max_depth: Deepest number of placements on the current path
        degree_probes: Warnsdorff degree evaluations
        backtracks: Placements undone after a failed branch
        computation_time_ms: Wall time of the search
        node_limit: Cutoff bound in force
        variant: Move variant name
        tie_break: Tie-break policy description
    """
    nodes_visited: int = 0
    max_depth: int = 0
    degree_probes: int = 0
    backtracks: int = 0
    computation_time_ms: float = 0.0
    node_limit: int = 0
    variant: str = ""
    tie_break: str = ""

    def as_dict(self) -> dict:
        return {
            "nodes_visited": self.nodes_visited,
            "max_depth": self.max_depth,
            "degree_probes": self.degree_probes,
            "backtracks": self.backtracks,
            "computation_time_ms": round(self.computation_time_ms, 3),
            "node_limit": self.node_limit,
            "variant": self.variant,
            "tie_break": self.tie_break,
        }


@dataclass
class TourResult:
    """
    Result of a tour search.

    Attributes:
        outcome: SOLVED, EXHAUSTED or CUTOFF
        start: Search root
        steps: Positions completing the tour, empty unless SOLVED
        first_step: Step number assigned to steps[0]
        start_claimed: True if the solver treated an unvisited start as step
                       first_step - 1 in its working copy
        metrics: Search statistics
    """
    outcome: TourOutcome
    start: Position
    steps: Tuple[Position, ...] = ()
    first_step: int = 1
    start_claimed: bool = False
    metrics: SearchMetrics = field(default_factory=SearchMetrics)

    @property
    def success(self) -> bool:
        return self.outcome is TourOutcome.SOLVED

    @property
    def was_cutoff(self) -> bool:
        """True if the search gave up on its node budget."""
        return self.outcome is TourOutcome.CUTOFF

    @property
    def is_exhausted(self) -> bool:
        """True if the search proved no completion exists."""
        return self.outcome is TourOutcome.EXHAUSTED

    @property
    def step_count(self) -> int:
        return len(self.steps)

    def __bool__(self) -> bool:
        return self.success

    def apply_to(self, grid: TourGrid) -> TourGrid:
        """
        Replay the steps onto a grid snapshot.

        If the start was claimed by the solver it is marked first. The
        given grid is unchanged.

        Raises:
            SearchExhausted: If the search failed (nothing to apply)
            SearchCutoff: If the search ran out of budget
        """
        self.raise_for_failure()
        if self.start_claimed:
            grid = grid.apply_steps([self.start], self.first_step - 1)
        return grid.apply_steps(self.steps, self.first_step)

    def raise_for_failure(self) -> None:
        """Raise the matching SolveFailed subclass unless SOLVED."""
        if self.outcome is TourOutcome.EXHAUSTED:
            raise SearchExhausted(
                f"No tour completion exists from {self.start}",
                self.metrics.nodes_visited,
            )
        if self.outcome is TourOutcome.CUTOFF:
            raise SearchCutoff(
                f"Search stopped after {self.metrics.nodes_visited} nodes "
                f"(limit {self.metrics.node_limit})",
                self.metrics.nodes_visited,
            )

    def summary(self) -> str:
        """One-line host-facing description."""
        if not self.success:
            return NO_SOLUTION_MESSAGE
        if not self.steps:
            return "Tour already complete"
        return f"Tour completed in {self.step_count} steps"

    def describe(self) -> Optional[str]:
        """Diagnostic detail separating cutoff from exhaustion."""
        m = self.metrics
        if self.outcome is TourOutcome.CUTOFF:
            return f"gave up after {m.nodes_visited} nodes (limit {m.node_limit})"
        if self.outcome is TourOutcome.EXHAUSTED:
            return f"search space exhausted after {m.nodes_visited} nodes"
        return None
