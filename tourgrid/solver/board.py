"""
Tour Grid Module - Immutable N×N snapshot of a partially completed tour.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import InvalidGrid
from .position import Position


@dataclass(frozen=True)
class TourGrid:
    """
    Immutable tour grid.

    Uses tuple-of-tuples for hashability and immutability.
    Each cell is 0 (unvisited) or the 1-based step at which it was visited.

    Attributes:
        grid: Tuple of row tuples
    """
    grid: Tuple[Tuple[int, ...], ...]

    @classmethod
    def empty(cls, size: int) -> 'TourGrid':
        """
        Create an unvisited size×size grid.

        Raises:
            InvalidGrid: If size is not positive
        """
        if size <= 0:
            raise InvalidGrid(f"Grid size must be positive, got {size}")
        return cls(grid=tuple((0,) * size for _ in range(size)))

    @classmethod
    def from_2d_list(cls, rows: Sequence[Sequence[int]]) -> 'TourGrid':
        """
        Create a validated TourGrid from a 2D list.

        The input is copied; later changes to it do not affect the grid.

        Args:
            rows: 2D list of step numbers (0 for unvisited)

        Returns:
            TourGrid instance

        Raises:
            InvalidGrid: If the data breaks the grid invariants
        """
        grid = cls(grid=tuple(tuple(_step_value(v) for v in row) for row in rows))
        grid.validate()
        return grid

    @classmethod
    def from_path(cls, size: int, path: Iterable) -> 'TourGrid':
        """
        Build a grid by visiting path positions in order (steps 1, 2, ...).

        Moves are not checked against any variant; only bounds and revisits.

        Raises:
            InvalidGrid: If a position is out of bounds or repeated
        """
        cells = [[0] * size for _ in range(size)]
        for step, item in enumerate(path, start=1):
            pos = Position.of(item)
            if not pos.in_bounds(size):
                raise InvalidGrid(f"Path position {pos} outside {size}x{size} grid")
            if cells[pos.row][pos.col] != 0:
                raise InvalidGrid(f"Path revisits {pos}")
            cells[pos.row][pos.col] = step
        return cls(grid=tuple(tuple(row) for row in cells))

    @classmethod
    def coerce(cls, value) -> 'TourGrid':
        """Accept an existing TourGrid or a 2D list."""
        if isinstance(value, TourGrid):
            return value
        return cls.from_2d_list(value)

    def validate(self) -> None:
        """
        Check the grid invariants.

        Square shape, no negative cells, and the positive step numbers are
        exactly 1..visited_count with no duplicates or gaps.

        Raises:
            InvalidGrid: On the first violation found
        """
        size = len(self.grid)
        if size == 0:
            raise InvalidGrid("Grid has no rows")
        for r, row in enumerate(self.grid):
            if len(row) != size:
                raise InvalidGrid(f"Row {r} has {len(row)} cells, expected {size}")

        arr = self.to_array()
        if (arr < 0).any():
            raise InvalidGrid("Grid contains negative cells")

        steps = np.sort(arr[arr > 0])
        expected = np.arange(1, steps.size + 1)
        if not np.array_equal(steps, expected):
            raise InvalidGrid(
                f"Visited steps must be 1..{steps.size} without gaps or duplicates"
            )

    def diff(self, other: 'TourGrid') -> List[Tuple[int, int]]:
        """
        Find cells that differ between this grid and another.

        Returns:
            List of (row, col) tuples where cells differ
        """
        if not isinstance(other, TourGrid):
            raise TypeError("Can only diff against another TourGrid")
        if self.size != other.size:
            raise ValueError(f"Grid sizes differ: {self.size} vs {other.size}")

        changed = np.argwhere(self.to_array() != other.to_array())
        return [(int(r), int(c)) for r, c in changed]

    def apply_steps(self, steps: Iterable, first_step: Optional[int] = None) -> 'TourGrid':
        """
        Write a step sequence into a new grid.

        Original grid is unchanged.

        Args:
            steps: Positions to visit, in order
            first_step: Step number of the first position
                        (defaults to next_step)

        Returns:
            New TourGrid with the positions marked

        Raises:
            InvalidGrid: If a position is out of bounds or already visited
        """
        step = self.next_step if first_step is None else first_step
        new_grid = self.to_list()
        for item in steps:
            pos = Position.of(item)
            if not pos.in_bounds(self.size):
                raise InvalidGrid(f"Step {step} at {pos} is outside the grid")
            if new_grid[pos.row][pos.col] != 0:
                raise InvalidGrid(f"Step {step} revisits {pos}")
            new_grid[pos.row][pos.col] = step
            step += 1
        return TourGrid(grid=tuple(tuple(row) for row in new_grid))

    def get_cell(self, row: int, col: int) -> int:
        """
        Get value at a cell.

        Raises:
            IndexError: If the cell lies outside the grid
        """
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"Cell ({row},{col}) outside {self.size}x{self.size} grid")
        return self.grid[row][col]

    def is_visited(self, position) -> bool:
        pos = Position.of(position)
        return self.get_cell(pos.row, pos.col) > 0

    def visited_count(self) -> int:
        """Number of cells with a step number."""
        return int(np.count_nonzero(self.to_array() > 0))

    @property
    def size(self) -> int:
        """Side length N."""
        return len(self.grid)

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    @property
    def next_step(self) -> int:
        """Step number the next visited cell will receive."""
        return self.visited_count() + 1

    @property
    def is_complete(self) -> bool:
        """True once every cell has been visited."""
        return self.visited_count() == self.cell_count

    @property
    def last_position(self) -> Optional[Position]:
        """Cell holding the highest step, or None on an empty grid."""
        arr = self.to_array()
        if not (arr > 0).any():
            return None
        r, c = np.unravel_index(int(np.argmax(arr)), arr.shape)
        return Position(int(r), int(c))

    def path(self) -> List[Position]:
        """Visited positions ordered by step number."""
        visited = [
            (value, Position(r, c))
            for r, row in enumerate(self.grid)
            for c, value in enumerate(row)
            if value > 0
        ]
        visited.sort(key=lambda item: item[0])
        return [pos for _, pos in visited]

    def flatten(self) -> List[int]:
        """Row-major mutable copy of the cells."""
        return [value for row in self.grid for value in row]

    def to_list(self) -> List[List[int]]:
        """
        Convert to mutable 2D list representation.

        Returns:
            2D list representation of the grid
        """
        return [list(row) for row in self.grid]

    def to_array(self) -> np.ndarray:
        """Copy of the cells as an N×N int32 array."""
        return np.array(self.grid, dtype=np.int32).reshape(self.size, self.size)


def _step_value(value) -> int:
    """
    Convert a cell value to int without truncation.

    Raises:
        InvalidGrid: If the value is not a whole number
    """
    try:
        step = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidGrid(f"Cell value {value!r} is not an integer")
    if step != value:
        raise InvalidGrid(f"Cell value {value!r} is not an integer")
    return step
