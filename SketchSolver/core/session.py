"""Session state for one sketch-and-solve workspace.

`SketchSession` owns the stroke surface, the orchestrator (and through it
the variable store) and the placement manager, and is the only object the
UI talks to. A session lasts from one reset to the next.

Phases:
    IDLE -> DRAWING (pointer down) -> IDLE (pointer up/leave)
    IDLE -> SUBMITTING (submit) -> IDLE (response or failure)
    any  -> RESETTING (reset) -> IDLE

Drawing stays possible while a submission is outstanding; `phase` reports
DRAWING during an active stroke and SUBMITTING otherwise.
"""
from __future__ import annotations

import enum
import logging
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from SketchSolver.core.models import Point
from SketchSolver.core.placement import PlacementManager
from SketchSolver.core.stroke_surface import ColorLike, StrokeSurface
from SketchSolver.core.variables import VariableStore
from SketchSolver.services.extraction.bounding_box import extract_bounding_box
from SketchSolver.services.recognition.orchestrator import RecognitionOrchestrator

logger = logging.getLogger(__name__)


class SessionPhase(enum.Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    SUBMITTING = "submitting"
    RESETTING = "resetting"


class SketchSession(QObject):
    phaseChanged = pyqtSignal(object)  # SessionPhase
    surfaceChanged = pyqtSignal()
    errorOccurred = pyqtSignal(str)
    submitted = pyqtSignal(list)       # results of a successful submission

    def __init__(
        self,
        surface: StrokeSurface,
        orchestrator: RecognitionOrchestrator,
        placement: PlacementManager,
        skip_empty: bool = False,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.surface = surface
        self.orchestrator = orchestrator
        self.placement = placement
        self.skip_empty = skip_empty
        self._resetting = False
        self._phase = SessionPhase.IDLE

        orchestrator.submissionStarted.connect(self._syncPhase)
        orchestrator.submissionSucceeded.connect(self._onSucceeded)
        orchestrator.submissionFailed.connect(self._onFailed)
        orchestrator.submissionRejected.connect(self.errorOccurred)

    @property
    def variables(self) -> VariableStore:
        return self.orchestrator.variables

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    # -------- Pointer input --------
    def begin_stroke(self, p: Point) -> None:
        self.surface.begin_stroke(p)
        self._syncPhase()

    def extend_stroke(self, p: Point) -> None:
        if not self.surface.drawing:
            return
        self.surface.extend_stroke(p)
        self.surfaceChanged.emit()

    def end_stroke(self) -> None:
        self.surface.end_stroke()
        self._syncPhase()

    def set_color(self, color: ColorLike) -> None:
        self.surface.set_color(color)

    # -------- Submit / reset --------
    def submit(self) -> bool:
        """Snapshot the surface and hand it to the orchestrator."""
        snapshot = self.surface.snapshot()
        if snapshot is None:
            logger.debug("Submit ignored: surface not initialized")
            return False
        if self.skip_empty and extract_bounding_box(snapshot) is None:
            logger.info("Submit skipped: canvas is empty")
            return False
        return self.orchestrator.submit(snapshot)

    def reset(self) -> None:
        """Clear surface, variables and placements as one step."""
        self._resetting = True
        self._syncPhase()
        try:
            self.orchestrator.discard_pending()
            self.placement.clear_all()
            self.variables.reset()
            self.surface.end_stroke()
            self.surface.clear()
            self.surfaceChanged.emit()
            logger.info("Session reset")
        finally:
            self._resetting = False
            self._syncPhase()

    # -------- Orchestrator callbacks --------
    def _onSucceeded(self, results: list) -> None:
        self.surface.clear()
        self.surfaceChanged.emit()
        self._syncPhase()
        self.submitted.emit(results)

    def _onFailed(self, errmsg: str) -> None:
        # Strokes stay on the surface so the user can resubmit.
        self._syncPhase()
        self.errorOccurred.emit(errmsg)

    def _computePhase(self) -> SessionPhase:
        if self._resetting:
            return SessionPhase.RESETTING
        if self.surface.drawing:
            return SessionPhase.DRAWING
        if self.orchestrator.isBusy():
            return SessionPhase.SUBMITTING
        return SessionPhase.IDLE

    def _syncPhase(self) -> None:
        phase = self._computePhase()
        if phase is not self._phase:
            self._phase = phase
            self.phaseChanged.emit(phase)
