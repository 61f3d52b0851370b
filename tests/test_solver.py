"""
Test script for tour solver validation

Covers:
1. Complete tours on solvable boards (knight and square variants)
2. Exhaustion on boards without a tour
3. Already-complete grids
4. Node cutoff and its instrumentation
5. Purity of the caller's grid and degree-probe reversibility
6. Boundary errors

Usage:
    pytest tests/test_solver.py
"""

import copy
import inspect
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tourgrid.solver import (
    DEFAULT_NODE_LIMIT,
    InvalidGrid,
    InvalidStart,
    InvalidVariant,
    NoStartPosition,
    Position,
    RandomTieBreak,
    SearchCutoff,
    SearchExhausted,
    StepMismatch,
    TourGrid,
    TourOutcome,
    TourSolver,
    is_legal_move,
    solve_tour,
)
from tourgrid.solver import solver as solver_module


def assert_valid_completion(grid, result, variant):
    """Steps, together with the start, extend the grid into a complete tour."""
    assert result.success
    path = [result.start] + list(result.steps)

    for prev, nxt in zip(path, path[1:]):
        assert is_legal_move(prev, nxt, variant), f"{prev} -> {nxt}"

    completed = result.apply_to(grid)
    completed.validate()
    assert completed.is_complete

    # Each step was unvisited before and got a contiguous step number
    for i, pos in enumerate(result.steps):
        assert grid.get_cell(pos.row, pos.col) == 0
        assert completed.get_cell(pos.row, pos.col) == result.first_step + i


def test_knight_5x5_from_empty_grid():
    """Empty 5x5, start (0,0): 24 steps forming a Hamiltonian path."""
    grid = TourGrid.empty(5)
    result = solve_tour(grid, (0, 0), "knight")

    assert result.outcome is TourOutcome.SOLVED
    assert result.step_count == 24
    assert result.start_claimed
    assert result.first_step == 2

    cells = {result.start} | set(result.steps)
    assert len(cells) == 25
    assert_valid_completion(grid, result, "knight")


def test_knight_5x5_start_already_marked():
    """Host convention: the start is visited before the solver is asked."""
    grid = TourGrid.from_path(5, [(0, 0)])
    result = TourSolver("knight").solve(grid, (0, 0), next_step=2)

    assert result.success
    assert not result.start_claimed
    assert result.first_step == 2
    assert result.step_count == 24
    assert_valid_completion(grid, result, "knight")


def test_knight_continues_partial_tour():
    """Solving from a prefix of a found tour yields the same remainder."""
    full = solve_tour(TourGrid.from_path(5, [(0, 0)]), (0, 0), "knight")
    played = [Position(0, 0)] + list(full.steps[:4])
    grid = TourGrid.from_path(5, played)

    result = TourSolver("knight").solve(grid, played[-1])

    assert result.success
    assert result.first_step == 6
    assert result.steps == full.steps[4:]
    assert result.metrics.nodes_visited <= full.metrics.nodes_visited
    assert_valid_completion(grid, result, "knight")


@pytest.mark.parametrize("size", [6, 8])
def test_knight_larger_boards(size):
    """Warnsdorff ordering finds corner tours on standard boards."""
    grid = TourGrid.from_path(size, [(0, 0)])
    result = TourSolver("knight").solve(grid, (0, 0))

    assert result.success
    assert result.step_count == size * size - 1
    assert_valid_completion(grid, result, "knight")


def test_square_variant_10x10():
    """Square jumps (3 straight, 2 diagonal) cover a 10x10 grid."""
    grid = TourGrid.from_path(10, [(0, 0)])
    result = TourSolver("square").solve(grid, (0, 0))

    assert result.success
    assert result.step_count == 99
    assert_valid_completion(grid, result, "square")


def test_search_depth_not_bound_by_recursion_limit():
    """A 63-step tour is found with only ~50 spare interpreter frames."""
    grid = TourGrid.from_path(8, [(0, 0)])
    saved = sys.getrecursionlimit()
    sys.setrecursionlimit(len(inspect.stack()) + 50)
    try:
        result = TourSolver("knight").solve(grid, (0, 0))
    finally:
        sys.setrecursionlimit(saved)

    assert result.success
    assert result.metrics.max_depth == 63


@pytest.mark.parametrize("start", [(r, c) for r in range(3) for c in range(3)])
def test_knight_3x3_is_exhausted(start):
    """No knight's tour exists on 3x3; the search proves it cheaply."""
    result = solve_tour(TourGrid.empty(3), start, "knight")

    assert result.outcome is TourOutcome.EXHAUSTED
    assert result.is_exhausted
    assert not result.was_cutoff
    assert not result
    assert result.steps == ()
    assert result.metrics.nodes_visited < 1000
    assert result.metrics.nodes_visited < DEFAULT_NODE_LIMIT

    with pytest.raises(SearchExhausted):
        result.raise_for_failure()
    with pytest.raises(SearchExhausted):
        result.apply_to(TourGrid.empty(3))


def test_complete_grid_returns_empty_success():
    """A fully visited grid is already done: no steps, no nodes."""
    first = solve_tour(TourGrid.empty(5), (0, 0), "knight")
    full = first.apply_to(TourGrid.empty(5))
    assert full.is_complete

    result = TourSolver("knight").solve(full, full.last_position, next_step=26)

    assert result.success
    assert result.steps == ()
    assert result.metrics.nodes_visited == 0
    assert result.summary() == "Tour already complete"


def test_single_cell_board():
    """1x1 board: claiming the start completes the tour."""
    result = solve_tour(TourGrid.empty(1), (0, 0))

    assert result.success
    assert result.steps == ()
    assert result.start_claimed


def test_cutoff_is_distinguishable():
    """A tiny budget on a solvable board reports CUTOFF, not EXHAUSTED."""
    solver = TourSolver("knight", node_limit=1)
    result = solver.solve(TourGrid.empty(8), (0, 0))

    assert result.outcome is TourOutcome.CUTOFF
    assert result.was_cutoff
    assert not result.is_exhausted
    assert result.steps == ()
    assert result.metrics.nodes_visited > result.metrics.node_limit == 1
    assert solver.last_metrics is result.metrics
    assert "gave up" in result.describe()
    assert result.summary() == "No solution found from here"

    with pytest.raises(SearchCutoff) as excinfo:
        result.raise_for_failure()
    assert excinfo.value.nodes_visited == result.metrics.nodes_visited


def test_metrics_reset_per_call():
    """Each call starts its counters from zero."""
    solver = TourSolver("knight")
    solver.solve(TourGrid.empty(3), (0, 0))
    first = solver.last_metrics.nodes_visited

    solver.solve(TourGrid.empty(3), (0, 0))
    assert solver.last_metrics.nodes_visited == first

    solver.solve(TourGrid.empty(3), (1, 1))
    assert solver.last_metrics.nodes_visited == 0


def test_metrics_contents():
    result = solve_tour(TourGrid.from_path(5, [(0, 0)]), (0, 0), "knight")
    m = result.metrics

    assert m.nodes_visited >= 24
    assert m.max_depth == 24
    assert m.degree_probes > 0
    assert m.backtracks == m.nodes_visited - 24
    assert m.variant == "knight"
    assert m.tie_break == "stable"
    assert m.node_limit == DEFAULT_NODE_LIMIT
    assert m.computation_time_ms >= 0.0
    assert set(m.as_dict()) >= {"nodes_visited", "max_depth"}


def test_caller_grid_unchanged():
    """Nested-list input is not mutated on success or failure."""
    solvable = TourGrid.from_path(5, [(0, 0)]).to_list()
    hopeless = TourGrid.from_path(3, [(0, 0)]).to_list()
    solvable_copy = copy.deepcopy(solvable)
    hopeless_copy = copy.deepcopy(hopeless)

    assert TourSolver("knight").solve(solvable, (0, 0)).success
    assert not TourSolver("knight").solve(hopeless, (0, 0)).success

    assert solvable == solvable_copy
    assert hopeless == hopeless_copy


def test_degree_probe_reversible_during_search(monkeypatch):
    """Every degree probe in a real search leaves the working copy intact."""
    original = solver_module.degree
    probes = []

    def checked_degree(cells, size, row, col, offsets):
        before = list(cells)
        d = original(cells, size, row, col, offsets)
        assert cells == before
        probes.append(d)
        return d

    monkeypatch.setattr(solver_module, "degree", checked_degree)
    result = solve_tour(TourGrid.empty(5), (0, 0), "knight")

    assert result.success
    assert len(probes) == result.metrics.degree_probes


def test_failure_is_repeatable():
    """Identical inputs give the same outcome type twice."""
    grid = TourGrid.from_path(4, [(0, 0)])
    solver = TourSolver("knight")

    first = solver.solve(grid, (0, 0))
    second = solver.solve(grid, (0, 0))

    assert first.outcome is second.outcome
    assert first.metrics.nodes_visited == second.metrics.nodes_visited


def test_stable_tie_break_is_deterministic():
    grid = TourGrid.from_path(6, [(0, 0)])
    a = TourSolver("knight").solve(grid, (0, 0))
    b = TourSolver("knight", tie_break="stable").solve(grid, (0, 0))

    assert a.steps == b.steps


def test_seeded_random_tie_break():
    """Same seed, same tour; the tour is valid either way."""
    grid = TourGrid.from_path(6, [(0, 0)])
    solver = TourSolver("knight", tie_break=RandomTieBreak(seed=11))

    a = solver.solve(grid, (0, 0))
    b = solver.solve(grid, (0, 0))

    assert a.success and b.success
    assert a.steps == b.steps
    assert a.metrics.tie_break == "random(seed=11)"
    assert_valid_completion(grid, a, "knight")

    other = TourSolver("knight", tie_break=RandomTieBreak(seed=12)).solve(grid, (0, 0))
    assert other.success
    assert_valid_completion(grid, other, "knight")


def test_boundary_errors():
    """Bad input is rejected before the search starts."""
    grid = TourGrid.from_path(5, [(0, 0)])
    solver = TourSolver("knight")

    with pytest.raises(NoStartPosition):
        solver.solve(grid, None)
    with pytest.raises(InvalidStart):
        solver.solve(grid, (5, 0))
    with pytest.raises(StepMismatch):
        solver.solve(grid, (0, 0), next_step=5)
    with pytest.raises(InvalidGrid):
        solver.solve([[1, 0], [3, 0]], (0, 0))
    with pytest.raises(InvalidVariant):
        TourSolver("rook")
    with pytest.raises(ValueError):
        TourSolver("knight", node_limit=-1)
    with pytest.raises(ValueError):
        TourSolver("knight", tie_break="coin-flip")


def test_start_must_continue_visited_chain():
    """On a partial tour only the last visited cell may be the start."""
    grid = TourGrid.from_path(5, [(0, 0), (1, 2)])
    solver = TourSolver("knight")

    # Unvisited cell that is not a jump from the last cell
    with pytest.raises(InvalidStart):
        solver.solve(grid, (4, 4))
    # Unvisited cell that is a jump away still skips the host's move
    with pytest.raises(InvalidStart):
        solver.solve(grid, (2, 4))
    # Visited, but in the middle of the chain
    with pytest.raises(InvalidStart):
        solver.solve(grid, (0, 0))

    result = solver.solve(grid, (1, 2))
    assert not result.start_claimed
    assert_valid_completion(grid, result, "knight")


def test_start_accepts_position_or_tuple():
    grid = TourGrid.from_path(5, [(0, 0)])
    a = solve_tour(grid, Position(0, 0))
    b = solve_tour(grid, [0, 0])

    assert a.steps == b.steps
