"""Submission orchestration between the canvas and the recognition service.

One submission at a time: the snapshot and a copy of the variable store go
to a `RecognitionWorker` on its own thread. When the worker reports back on
the UI thread, a successful response is applied in two passes (assignments
into the store, then every result to the placement manager). Failures leave
the store and the placements untouched.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from SketchSolver.core.models import Point, RecognitionResult, Snapshot
from SketchSolver.core.placement import PlacementManager
from SketchSolver.core.variables import VariableStore
from SketchSolver.services.extraction.bounding_box import extract_bounding_box
from SketchSolver.services.recognition.worker import RecognitionWorker, start_worker

logger = logging.getLogger(__name__)


class RecognitionOrchestrator(QObject):
    submissionStarted = pyqtSignal()
    submissionSucceeded = pyqtSignal(list)  # RecognitionResult list, service order
    submissionFailed = pyqtSignal(str)
    submissionRejected = pyqtSignal(str)

    def __init__(
        self,
        client,
        placement: PlacementManager,
        variables: Optional[VariableStore] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._client = client
        self._placement = placement
        self.variables = variables if variables is not None else VariableStore()
        self._ticket = 0
        self._active: Optional[int] = None
        self._anchors: Dict[int, Optional[Point]] = {}
        self._threads: Dict[int, Tuple[QThread, RecognitionWorker]] = {}

    def isBusy(self) -> bool:
        return self._active is not None

    def submit(self, snapshot: Snapshot) -> bool:
        """Send `snapshot` with the current variables; False if rejected."""
        if self._active is not None:
            msg = "A submission is already in progress"
            logger.warning(msg)
            self.submissionRejected.emit(msg)
            return False

        bbox = extract_bounding_box(snapshot)
        if bbox is None:
            logger.info("Submitting an empty canvas; results will use the last anchor")
            anchor = None
        else:
            anchor = bbox.center()

        self._ticket += 1
        ticket = self._ticket
        self._active = ticket
        self._anchors[ticket] = anchor

        worker = RecognitionWorker(self._client, ticket, snapshot, self.variables.as_dict())
        worker.succeeded.connect(self._onSucceeded)
        worker.failed.connect(self._onFailed)
        thread = start_worker(worker, self, on_finished=self._onThreadFinished)
        self._threads[ticket] = (thread, worker)

        logger.info("Submission #%d started", ticket)
        self.submissionStarted.emit()
        return True

    def discard_pending(self) -> None:
        """Forget the in-flight submission; its response will be dropped."""
        if self._active is not None:
            logger.info("Discarding in-flight submission #%d", self._active)
            self._anchors.pop(self._active, None)
        self._active = None

    def shutdown(self, wait_ms: int = 2000) -> None:
        """Stop tracking submissions and wait briefly for worker threads."""
        self.discard_pending()
        for thread, _worker in list(self._threads.values()):
            thread.quit()
            thread.wait(wait_ms)
        self._threads.clear()

    def apply_results(self, results: List[RecognitionResult], anchor: Optional[Point]) -> None:
        """Apply a validated response: bind assignments, then place every result."""
        for r in results:
            if r.is_assignment:
                self.variables.set(r.expression, r.value)
                logger.info("Bound %s = %s", r.expression, r.value)
        for r in results:
            self._placement.place(r, anchor)

    # -------- Worker callbacks (UI thread) --------
    @pyqtSlot(int, list)
    def _onSucceeded(self, ticket: int, results: list) -> None:
        if ticket != self._active:
            logger.info("Dropping stale response for submission #%d", ticket)
            self._anchors.pop(ticket, None)
            return
        anchor = self._anchors.pop(ticket, None)
        self._active = None
        self.apply_results(results, anchor)
        self.submissionSucceeded.emit(results)

    @pyqtSlot(int, str)
    def _onFailed(self, ticket: int, errmsg: str) -> None:
        if ticket != self._active:
            logger.info("Ignoring failure of discarded submission #%d: %s", ticket, errmsg)
            self._anchors.pop(ticket, None)
            return
        self._anchors.pop(ticket, None)
        self._active = None
        self.submissionFailed.emit(errmsg)

    @pyqtSlot()
    def _onThreadFinished(self) -> None:
        # Release the worker only once its thread has stopped.
        thread = self.sender()
        for ticket, (t, _worker) in list(self._threads.items()):
            if t is thread:
                del self._threads[ticket]
                break
