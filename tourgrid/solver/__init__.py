"""
Solver Package - Tour completion for jump-move grid puzzles.

The player fills an N×N grid by jumping with a fixed offset pattern (knight
or square), visiting each cell once. This package finds the rest of the
tour from the current position.

Public API:
    - TourGrid: Immutable grid snapshot
    - Position: Cell coordinate
    - MoveVariant: Named jump pattern
    - moves(): Legal destinations from a position
    - TourSolver / solve_tour(): Warnsdorff backtracking search
    - TourResult / TourOutcome / SearchMetrics: Search result and statistics
    - best_next_move() / is_dead_end(): Single-step advice
    - create_tie_break(): Tie-break policy factory

Usage:
    from tourgrid.solver import TourGrid, TourSolver

    grid = TourGrid.from_path(5, [(0, 0)])
    solver = TourSolver("knight")
    result = solver.solve(grid, (0, 0))

    if result.success:
        grid = result.apply_to(grid)
    else:
        print(result.summary(), result.describe())
"""

# Core data structures
from .position import Position
from .board import TourGrid
from .solution import (
    NO_SOLUTION_MESSAGE,
    SearchMetrics,
    TourOutcome,
    TourResult,
)
from .errors import (
    InvalidGrid,
    InvalidStart,
    InvalidVariant,
    NoStartPosition,
    SearchCutoff,
    SearchExhausted,
    SolveFailed,
    StepMismatch,
    TourError,
)

# Geometry
from .geometry import (
    MOVE_OFFSETS,
    MoveVariant,
    get_variant_names,
    is_legal_move,
    moves,
    offsets_for,
    parse_variant,
)

# Search
from .solver import DEFAULT_NODE_LIMIT, TourSolver, solve_tour
from .tiebreak import (
    RandomTieBreak,
    StableTieBreak,
    TieBreakPolicy,
    create_tie_break,
    get_default_tie_break_name,
    get_tie_break_info,
    get_tie_break_names,
    register_tie_break,
)
from .advice import best_next_move, is_dead_end, reachable_count

__all__ = [
    # Data structures
    "Position",
    "TourGrid",
    "TourResult",
    "TourOutcome",
    "SearchMetrics",
    "NO_SOLUTION_MESSAGE",
    # Errors
    "TourError",
    "NoStartPosition",
    "InvalidVariant",
    "InvalidGrid",
    "InvalidStart",
    "StepMismatch",
    "SolveFailed",
    "SearchExhausted",
    "SearchCutoff",
    # Geometry
    "MoveVariant",
    "MOVE_OFFSETS",
    "offsets_for",
    "moves",
    "is_legal_move",
    "parse_variant",
    "get_variant_names",
    # Search
    "TourSolver",
    "solve_tour",
    "DEFAULT_NODE_LIMIT",
    "TieBreakPolicy",
    "StableTieBreak",
    "RandomTieBreak",
    "create_tie_break",
    "get_tie_break_names",
    "get_tie_break_info",
    "get_default_tie_break_name",
    "register_tie_break",
    # Advice
    "best_next_move",
    "is_dead_end",
    "reachable_count",
]
