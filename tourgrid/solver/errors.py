"""
Errors Module - Exception taxonomy for tour solving.

Boundary errors (bad variant, bad grid, missing start) are raised before any
search begins. Search failures are reported as TourResult outcomes; the
SolveFailed family is only raised on request via TourResult.raise_for_failure().
"""


class TourError(ValueError):
    """Base class for invalid solver input."""


class NoStartPosition(TourError):
    """Solve was requested without a current position."""


class InvalidVariant(TourError):
    """Unknown move-variant tag."""


class InvalidGrid(TourError):
    """Grid snapshot is not square or its step numbers are inconsistent."""


class InvalidStart(TourError):
    """Start position lies outside the grid."""


class StepMismatch(TourError):
    """Explicit next step disagrees with the number of visited cells."""


class SolveFailed(Exception):
    """
    No completion was found.

    Attributes:
        nodes_visited: Placements tried before giving up
    """

    def __init__(self, message: str, nodes_visited: int = 0):
        super().__init__(message)
        self.nodes_visited = nodes_visited


class SearchExhausted(SolveFailed):
    """Every branch was tried; no completion exists from this state."""


class SearchCutoff(SolveFailed):
    """Node budget ran out before the search finished. Inconclusive."""
