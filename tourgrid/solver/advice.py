"""
Advice Module - Single-step hints and dead-end detection for a live grid.

These helpers read a snapshot only; they never place steps.
"""

from collections import deque
from typing import Optional, Union

from .board import TourGrid
from .geometry import MoveVariant, degree, legal_cells, moves, offsets_for
from .position import Position


def best_next_move(grid: TourGrid, position,
                   variant: Union[MoveVariant, str]) -> Optional[Position]:
    """
    Suggest the next move by Warnsdorff's rule.

    Picks the legal move with the fewest onward options. Among equal
    degrees the first in offset order wins.

    Args:
        grid: Current grid snapshot
        position: Current position, or None before the first move
        variant: Move variant

    Returns:
        Suggested Position, or None if there is no current position or
        no legal move
    """
    if position is None:
        return None
    origin = Position.of(position)
    offsets = offsets_for(variant)
    cells = grid.flatten()

    best = None
    best_degree = None
    for r, c in legal_cells(cells, grid.size, origin.row, origin.col, offsets):
        d = degree(cells, grid.size, r, c, offsets)
        if best_degree is None or d < best_degree:
            best = Position(r, c)
            best_degree = d
    return best


def is_dead_end(grid: TourGrid, position, variant: Union[MoveVariant, str]) -> bool:
    """
    True when the player is stuck: a current position exists, unvisited
    cells remain, and no legal move is available.
    """
    if position is None or grid.is_complete:
        return False
    return len(moves(grid, position, variant)) == 0


def reachable_count(grid: TourGrid, position, variant: Union[MoveVariant, str]) -> int:
    """
    Count unvisited cells reachable from position through unvisited cells.

    A result below the number of unvisited cells proves the tour cannot be
    completed. The converse does not hold.
    """
    origin = Position.of(position)
    offsets = offsets_for(variant)
    cells = grid.flatten()
    size = grid.size

    seen = set()
    queue = deque([(origin.row, origin.col)])
    while queue:
        row, col = queue.popleft()
        for target in legal_cells(cells, size, row, col, offsets):
            if target not in seen:
                seen.add(target)
                queue.append(target)
    return len(seen)
