"""
Tour Solver Module - Warnsdorff-ordered backtracking search with a node cutoff.

Given a partially filled grid and the current position, finds an order in
which to visit every remaining cell using only legal offset moves.

Algorithm:
    1. Candidates are the unvisited in-bounds cells one jump away
    2. Each candidate is scored by its degree: onward moves available from
       it if it were occupied (scoped sentinel probe, always restored)
    3. Candidates are tried in ascending degree order; ties are resolved by
       the injected tie-break policy
    4. A failed branch is undone exactly before the next candidate is tried
    5. Every placement counts as a node; past node_limit the search stops

The search is incomplete by construction: CUTOFF means no tour was found
within budget, not that none exists. EXHAUSTED is a definitive answer.

Descent uses an explicit frame stack rather than Python recursion, so grids
with more cells than the interpreter recursion limit are handled too.
"""

import logging
from typing import List, Optional, Tuple, Union

from .board import TourGrid
from .context import SearchContext
from .errors import InvalidStart, NoStartPosition, StepMismatch
from .geometry import MoveVariant, degree, legal_cells, offsets_for, parse_variant
from .position import Position
from .solution import SearchMetrics, TourOutcome, TourResult
from .tiebreak import TieBreakPolicy, create_tie_break, get_default_tie_break_name

logger = logging.getLogger(__name__)

# Default placement budget per solve call
DEFAULT_NODE_LIMIT = 250_000


class TourSolver:
    """
    Tour-completion solver for one move variant.

    The solver object holds configuration only. Each solve() call works on
    its own copy of the grid and never mutates the caller's grid.

    Attributes:
        variant: Move variant used for every call
        node_limit: Placements allowed per call before giving up
        tie_break: Ordering policy for equal-degree candidates
        last_metrics: Statistics of the most recent call
    """

    def __init__(self, variant: Union[MoveVariant, str] = MoveVariant.KNIGHT,
                 node_limit: int = DEFAULT_NODE_LIMIT,
                 tie_break: Union[TieBreakPolicy, str, None] = None):
        """
        Initialize solver.

        Args:
            variant: Move variant or its name
            node_limit: Cutoff bound, must be >= 0
            tie_break: Policy instance, registered policy name, or None
                       for the stable policy

        Raises:
            InvalidVariant: If variant is unknown
            ValueError: If node_limit is negative or the policy name unknown
        """
        self.variant = parse_variant(variant)
        if node_limit < 0:
            raise ValueError(f"node_limit must be >= 0, got {node_limit}")
        self.node_limit = node_limit
        if tie_break is None:
            tie_break = get_default_tie_break_name()
        if isinstance(tie_break, str):
            tie_break = create_tie_break(tie_break)
        self.tie_break = tie_break
        self.offsets = offsets_for(self.variant)
        self.last_metrics = SearchMetrics()

    def solve(self, grid, start, next_step: Optional[int] = None) -> TourResult:
        """
        Complete the tour from start.

        Args:
            grid: TourGrid or 2D list snapshot; never mutated
            start: Current position (Position or (row, col)). With visited
                   cells it must be the last visited cell; on an empty grid
                   any cell, which becomes step 1
            next_step: Step number for the first newly visited cell.
                       Defaults to visited cells + 1; if given it must match.

        Returns:
            TourResult with outcome SOLVED, EXHAUSTED or CUTOFF

        Raises:
            NoStartPosition: If start is None
            InvalidGrid: If the snapshot breaks the grid invariants
            InvalidStart: If start is outside the grid or does not
                          continue the visited chain
            StepMismatch: If next_step disagrees with the grid
        """
        if start is None:
            raise NoStartPosition("Cannot solve without a current position")

        snapshot = TourGrid.coerce(grid)
        snapshot.validate()
        origin = Position.of(start)
        if not origin.in_bounds(snapshot.size):
            raise InvalidStart(
                f"Start {origin} outside {snapshot.size}x{snapshot.size} grid"
            )

        # The search must continue the existing chain from its last cell
        last = snapshot.last_position
        if last is not None and origin != last:
            raise InvalidStart(
                f"Start {origin} is not the last visited cell {last}"
            )

        expected = snapshot.next_step
        if next_step is not None and next_step != expected:
            raise StepMismatch(
                f"next_step={next_step} but grid has {expected - 1} visited cells"
            )

        metrics = SearchMetrics(
            node_limit=self.node_limit,
            variant=self.variant.value,
            tie_break=self.tie_break.describe(),
        )
        self.last_metrics = metrics
        self.tie_break.reset()

        context = SearchContext.from_grid(snapshot, self.offsets, self.node_limit, metrics)

        # On an empty grid the start becomes step 1 of the working copy
        start_claimed = last is None
        first_step = expected
        if start_claimed:
            context.mark(origin.row, origin.col, first_step)
            first_step += 1

        logger.debug(
            f"Solving {snapshot.size}x{snapshot.size} {self.variant.value} tour "
            f"from {origin}, first step {first_step}"
        )

        outcome, path = self._search(context, origin, first_step)
        metrics.computation_time_ms = context.elapsed_ms()

        if outcome is TourOutcome.CUTOFF:
            logger.warning(
                f"Search cut off after {metrics.nodes_visited} nodes "
                f"(limit {self.node_limit})"
            )
        else:
            logger.info(
                f"Search {outcome.value}: {len(path)} steps, "
                f"{metrics.nodes_visited} nodes, {metrics.computation_time_ms:.1f}ms"
            )

        return TourResult(
            outcome=outcome,
            start=origin,
            steps=tuple(Position(r, c) for r, c in path),
            first_step=first_step,
            start_claimed=start_claimed,
            metrics=metrics,
        )

    def _search(self, context: SearchContext, origin: Position,
                first_step: int) -> Tuple[TourOutcome, List[Tuple[int, int]]]:
        """
        Depth-first search from origin.

        Returns:
            (outcome, placed cells); the path is only meaningful when SOLVED
        """
        last_step = context.cell_count
        if first_step > last_step:
            return TourOutcome.SOLVED, []

        metrics = context.metrics
        path: List[Tuple[int, int]] = []
        # One frame per level: candidate iterator of the cell on top of path
        stack = [iter(self._ordered_candidates(context, origin.row, origin.col))]
        step = first_step

        while stack:
            candidate = next(stack[-1], None)

            if candidate is None:
                stack.pop()
                if path:
                    row, col = path.pop()
                    context.unmark(row, col)
                    metrics.backtracks += 1
                    step -= 1
                continue

            metrics.nodes_visited += 1
            if context.budget_exceeded():
                return TourOutcome.CUTOFF, []

            row, col = candidate
            context.mark(row, col, step)
            path.append(candidate)
            if len(path) > metrics.max_depth:
                metrics.max_depth = len(path)

            if step == last_step:
                return TourOutcome.SOLVED, path

            step += 1
            stack.append(iter(self._ordered_candidates(context, row, col)))

        return TourOutcome.EXHAUSTED, []

    def _ordered_candidates(self, context: SearchContext, row: int,
                            col: int) -> List[Tuple[int, int]]:
        """Legal targets from (row, col), Warnsdorff-ordered."""
        targets = legal_cells(context.cells, context.size, row, col, context.offsets)
        scored = [
            (degree(context.cells, context.size, r, c, context.offsets), (r, c))
            for r, c in targets
        ]
        context.metrics.degree_probes += len(scored)
        return [cell for _, cell in self.tie_break.order(scored)]


def solve_tour(grid, start, variant: Union[MoveVariant, str] = MoveVariant.KNIGHT,
               next_step: Optional[int] = None,
               node_limit: int = DEFAULT_NODE_LIMIT,
               tie_break: Union[TieBreakPolicy, str, None] = None) -> TourResult:
    """
    Convenience wrapper: build a TourSolver and run one solve call.

    Example:
        result = solve_tour(TourGrid.empty(5), (0, 0), "knight")
        if result:
            print([str(p) for p in result.steps])
    """
    solver = TourSolver(variant=variant, node_limit=node_limit, tie_break=tie_break)
    return solver.solve(grid, start, next_step=next_step)
