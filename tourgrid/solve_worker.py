"""
Solve Worker Module for Tour Grid Solver

Provides a background QThread worker that runs one "solve from here" search
off the UI thread. Communicates with the UI via Qt signals for thread-safe
result delivery. Playback of the returned steps is left to the host.
"""

import logging
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal

from tourgrid.solver import Position, TourError, TourGrid, TourResult, TourSolver


# Configure module logger
logger = logging.getLogger(__name__)


class SolveWorker(QThread):
    """
    Background worker thread for a single solve call.

    The grid is snapshotted at construction, so the host may keep mutating
    its live grid while the search runs.

    Signals:
        status_changed(str): Emitted when the worker starts and finishes
        solution_ready(object): Emitted with the TourResult (any outcome)
        error_occurred(str): Emitted when the input is rejected

    Example:
        worker = SolveWorker(grid, current_pos, TourSolver("knight"))
        worker.solution_ready.connect(host.play_back)
        worker.start()
    """

    status_changed = pyqtSignal(str)
    solution_ready = pyqtSignal(object)  # Emits TourResult
    error_occurred = pyqtSignal(str)

    def __init__(self, grid, start, solver: TourSolver):
        """
        Initialize the solve worker.

        Malformed input is not raised here; it is reported through
        error_occurred when the worker runs.

        Args:
            grid: TourGrid or 2D list; copied immediately
            start: Current position
            solver: Configured solver
        """
        super().__init__()
        self._solver = solver
        self._grid: Optional[TourGrid] = None
        self._start: Optional[Position] = None
        self._input_error: Optional[str] = None
        self.result: Optional[TourResult] = None

        try:
            self._grid = TourGrid.coerce(grid)
            self._start = Position.of(start) if start is not None else None
        except (ValueError, TypeError) as e:
            # TourError is a ValueError
            self._input_error = str(e)

    def run(self):
        """Run the search once and emit its result."""
        self.status_changed.emit("Solving")
        logger.info(f"Solve worker started from {self._start}")

        try:
            if self._input_error is not None:
                raise TourError(self._input_error)
            self.result = self._solver.solve(self._grid, self._start)
        except TourError as e:
            logger.error(f"Solve rejected: {e}")
            self.error_occurred.emit(str(e))
            self.status_changed.emit("Error")
            return

        self.solution_ready.emit(self.result)
        self.status_changed.emit(self.result.summary())
        logger.info(f"Solve worker finished: {self.result.outcome.value}")
