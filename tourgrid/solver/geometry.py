"""
Move Geometry Module - Offset tables and legal-destination enumeration.

Two layers:
    - moves() works on a TourGrid snapshot and returns Position objects.
    - legal_cells() / degree() work on a flat mutable buffer (row-major list)
      and plain (row, col) tuples. The solver uses these on its private copy.

Offset order is fixed per variant and drives stable tie-breaking.
"""

from enum import Enum
from typing import Dict, List, MutableSequence, Sequence, Tuple, Union

from .errors import InvalidVariant
from .position import Position

Offset = Tuple[int, int]

# Marks a cell as provisionally occupied during a degree probe
SENTINEL = -1


class MoveVariant(str, Enum):
    """Named jump patterns."""
    KNIGHT = "knight"
    SQUARE = "square"


MOVE_OFFSETS: Dict[MoveVariant, Tuple[Offset, ...]] = {
    MoveVariant.KNIGHT: (
        (-2, -1), (-2, 1),
        (-1, -2), (-1, 2),
        (1, -2), (1, 2),
        (2, -1), (2, 1),
    ),
    MoveVariant.SQUARE: (
        (-3, 0), (3, 0),
        (0, -3), (0, 3),
        (-2, -2), (-2, 2),
        (2, -2), (2, 2),
    ),
}


def parse_variant(value: Union[MoveVariant, str]) -> MoveVariant:
    """
    Resolve a variant tag.

    Args:
        value: MoveVariant member or its name ("knight", "SQUARE", ...)

    Returns:
        MoveVariant

    Raises:
        InvalidVariant: If the tag names no known variant
    """
    if isinstance(value, MoveVariant):
        return value
    if isinstance(value, str):
        try:
            return MoveVariant(value.strip().lower())
        except ValueError:
            pass
    available = ", ".join(v.value for v in MoveVariant)
    raise InvalidVariant(f"Unknown move variant: {value!r}. Available: {available}")


def get_variant_names() -> List[str]:
    """List the names of all move variants."""
    return [v.value for v in MoveVariant]


def offsets_for(variant: Union[MoveVariant, str]) -> Tuple[Offset, ...]:
    """
    Get the ordered offset list for a variant.

    Returns:
        Tuple of (dr, dc) pairs, never empty
    """
    return MOVE_OFFSETS[parse_variant(variant)]


def is_legal_move(origin, target, variant: Union[MoveVariant, str]) -> bool:
    """Check whether target is one offset jump away from origin."""
    delta = Position.of(origin).delta(Position.of(target))
    return delta in offsets_for(variant)


def moves(grid, position, variant: Union[MoveVariant, str]) -> List[Position]:
    """
    Enumerate legal destinations from a position.

    Keeps destinations inside the grid whose cell is unvisited (0).
    Output follows offset-list order.

    Args:
        grid: TourGrid snapshot
        position: Origin cell
        variant: Move variant

    Returns:
        List of destination Positions
    """
    origin = Position.of(position)
    size = grid.size
    result = []
    for dr, dc in offsets_for(variant):
        target = origin.offset(dr, dc)
        if target.in_bounds(size) and grid.get_cell(target.row, target.col) == 0:
            result.append(target)
    return result


def legal_cells(
    cells: Sequence[int],
    size: int,
    row: int,
    col: int,
    offsets: Sequence[Offset]
) -> List[Tuple[int, int]]:
    """Flat-buffer version of moves(): unvisited in-bounds (row, col) targets."""
    result = []
    for dr, dc in offsets:
        r = row + dr
        c = col + dc
        if 0 <= r < size and 0 <= c < size and cells[r * size + c] == 0:
            result.append((r, c))
    return result


def degree(
    cells: MutableSequence[int],
    size: int,
    row: int,
    col: int,
    offsets: Sequence[Offset]
) -> int:
    """
    Warnsdorff degree of a candidate cell.

    Marks the cell with SENTINEL, counts onward moves, then restores it to 0.
    The buffer is identical before and after the call.
    """
    index = row * size + col
    cells[index] = SENTINEL
    count = len(legal_cells(cells, size, row, col, offsets))
    cells[index] = 0
    return count
