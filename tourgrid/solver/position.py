"""
Position Module - A single cell coordinate on the tour grid.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple, Union


@dataclass(frozen=True)
class Position:
    """
    Immutable (row, col) cell coordinate.

    Attributes:
        row: Row index, 0-based
        col: Column index, 0-based
    """
    row: int
    col: int

    @classmethod
    def of(cls, value: Union['Position', Sequence[int]]) -> 'Position':
        """
        Coerce a Position or a (row, col) pair into a Position.

        Args:
            value: Existing Position or 2-item sequence

        Returns:
            Position instance

        Raises:
            TypeError: If value is not a pair of ints
        """
        if isinstance(value, Position):
            return value
        try:
            row, col = value
        except (TypeError, ValueError):
            raise TypeError(f"Expected (row, col) pair, got {value!r}")
        return cls(row=int(row), col=int(col))

    def offset(self, dr: int, dc: int) -> 'Position':
        """Return the position shifted by (dr, dc)."""
        return Position(self.row + dr, self.col + dc)

    def in_bounds(self, size: int) -> bool:
        """Check both coordinates lie in [0, size)."""
        return 0 <= self.row < size and 0 <= self.col < size

    def delta(self, other: 'Position') -> Tuple[int, int]:
        """Offset (dr, dc) leading from this position to other."""
        return (other.row - self.row, other.col - self.col)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"
