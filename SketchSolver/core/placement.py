"""Placement and lifecycle of recognised results on the canvas.

Each placement is held back by a short single-shot timer so results fade in
rather than snapping onto the sketch. Timers are owned by the manager, so
`clear_all()` retracts placements that have not committed yet.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from SketchSolver.core.models import PlacedResult, Point, RecognitionResult

logger = logging.getLogger(__name__)


class PlacementManager(QObject):
    resultPlaced = pyqtSignal(int)  # index of the new entry
    resultMoved = pyqtSignal(int)   # index of the moved entry
    cleared = pyqtSignal()

    def __init__(
        self,
        delay_ms: int = 1000,
        default_anchor: Tuple[float, float] = (10.0, 200.0),
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._delay_ms = max(0, int(delay_ms))
        self._default_anchor = Point(*default_anchor)
        self._results: List[PlacedResult] = []
        self._pending: List[QTimer] = []
        self.last_anchor: Point = self._default_anchor

    # -------- Public API --------
    def place(self, result: RecognitionResult, anchor: Optional[Point] = None) -> None:
        """Schedule `result` to appear at `anchor` after the placement delay."""
        position = anchor if anchor is not None else self.last_anchor
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(self._delay_ms)
        timer.timeout.connect(lambda: self._commit(timer, result, position))
        self._pending.append(timer)
        timer.start()

    def reposition(self, index: int, position: Point) -> None:
        """Move one entry; every other entry keeps its position."""
        if not 0 <= index < len(self._results):
            raise IndexError(f"No placed result at index {index}")
        self._results[index].position = position
        self.last_anchor = position
        self.resultMoved.emit(index)

    def clear_all(self) -> None:
        retracted = len(self._pending)
        for timer in self._pending:
            timer.stop()
            timer.deleteLater()
        self._pending.clear()
        self._results.clear()
        self.last_anchor = self._default_anchor
        if retracted:
            logger.info("Retracted %d pending placement(s)", retracted)
        self.cleared.emit()

    def results(self) -> List[PlacedResult]:
        return list(self._results)

    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def default_anchor(self) -> Point:
        return self._default_anchor

    def __len__(self) -> int:
        return len(self._results)

    def __getitem__(self, index: int) -> PlacedResult:
        return self._results[index]

    # -------- Internals --------
    def _commit(self, timer: QTimer, result: RecognitionResult, position: Point) -> None:
        if timer not in self._pending:
            return
        self._pending.remove(timer)
        timer.deleteLater()
        self._results.append(PlacedResult.from_result(result, position))
        self.last_anchor = position
        index = len(self._results) - 1
        logger.debug("Placed %r at (%.1f, %.1f)", self._results[index].text, position.x, position.y)
        self.resultPlaced.emit(index)
