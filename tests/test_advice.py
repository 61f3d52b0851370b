"""
Tests for single-step advice: Warnsdorff tip, dead-end detection and
reachability.

Usage:
    pytest tests/test_advice.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tourgrid.solver import (
    Position,
    TourGrid,
    best_next_move,
    is_dead_end,
    reachable_count,
    solve_tour,
)


def test_tip_prefers_first_of_equal_degrees():
    """From the corner both moves have degree 5; offset order wins."""
    grid = TourGrid.from_path(5, [(0, 0)])

    assert best_next_move(grid, (0, 0), "knight") == Position(1, 2)


def test_tip_prefers_lowest_degree():
    """A corner with no exits left beats cells that still have some."""
    # From (1,2): (0,0) has degree 0 once (2,1) is taken
    grid = TourGrid.from_path(5, [(2, 1), (1, 2)])
    tip = best_next_move(grid, (1, 2), "knight")

    assert tip == Position(0, 0)


def test_tip_without_position_or_moves():
    grid = TourGrid.from_path(3, [(1, 1)])

    assert best_next_move(grid, None, "knight") is None
    assert best_next_move(grid, (1, 1), "knight") is None


def test_tip_does_not_modify_grid():
    grid = TourGrid.from_path(5, [(0, 0)])
    before = grid.to_list()
    best_next_move(grid, (0, 0), "square")

    assert grid.to_list() == before


def test_dead_end():
    """Stuck with cells left is a dead end; a finished tour is not."""
    stuck = TourGrid.from_path(3, [(1, 1)])
    assert is_dead_end(stuck, (1, 1), "knight")
    assert not is_dead_end(stuck, None, "knight")

    open_grid = TourGrid.from_path(5, [(0, 0)])
    assert not is_dead_end(open_grid, (0, 0), "knight")

    result = solve_tour(open_grid, (0, 0), "knight")
    full = result.apply_to(open_grid)
    assert not is_dead_end(full, full.last_position, "knight")


def test_reachable_count_proves_3x3_hopeless():
    """The 3x3 centre is unreachable, so fewer cells are reachable than open."""
    grid = TourGrid.from_path(3, [(0, 0)])
    unvisited = grid.cell_count - grid.visited_count()

    assert reachable_count(grid, (0, 0), "knight") == 7
    assert unvisited == 8
