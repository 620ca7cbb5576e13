"""Primary application window.

A toolbar (Reset, colour swatches, Run) above the sketch canvas. Results
returned by the recognition service appear as draggable labels on top of
the canvas; errors are reported in the status bar.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

from PyQt6.QtCore import QPoint, QSize
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QLabel, QMainWindow, QToolBar

from SketchSolver.core.config import AppConfig, load_config
from SketchSolver.core.models import Point
from SketchSolver.core.placement import PlacementManager
from SketchSolver.core.session import SessionPhase, SketchSession
from SketchSolver.core.stroke_surface import StrokeSurface
from SketchSolver.services.recognition import create_recognition_client
from SketchSolver.services.recognition.orchestrator import RecognitionOrchestrator
from SketchSolver.services.typeset import create_renderer
from SketchSolver.ui.components.color_swatches import ColorSwatchBar
from SketchSolver.ui.components.result_label import DraggableResultLabel
from SketchSolver.ui.custom_widget.sketch_canvas import SketchCanvas

logger = logging.getLogger(__name__)

_PHASE_TEXT = {
    SessionPhase.IDLE: "Ready",
    SessionPhase.DRAWING: "Drawing",
    SessionPhase.SUBMITTING: "Solving…",
    SessionPhase.RESETTING: "Resetting",
}


def build_session(cfg: AppConfig, client=None, parent=None) -> SketchSession:
    """Wire surface, placement, orchestrator and session from config."""
    surface = StrokeSurface(stroke_width=cfg.canvas.stroke_width, color=cfg.canvas.default_color)
    placement = PlacementManager(delay_ms=cfg.placement.delay_ms,
                                 default_anchor=cfg.placement.default_anchor, parent=parent)
    if client is None:
        client = create_recognition_client(cfg)
    orchestrator = RecognitionOrchestrator(client, placement, parent=parent)
    return SketchSession(surface, orchestrator, placement,
                         skip_empty=cfg.recognition.skip_empty, parent=parent)


class MainWindow(QMainWindow):
    """Main application window: toolbar plus sketch canvas with result overlays."""

    def __init__(self, cfg: Optional[AppConfig] = None, client=None, renderer=None):
        super().__init__()
        self.setWindowTitle("Sketch Solver")
        self.resize(1200, 800)
        self._cfg = cfg or load_config()
        self.session = build_session(self._cfg, client=client, parent=self)
        self._renderer = renderer or create_renderer(self._cfg)
        self._labels: Dict[int, DraggableResultLabel] = {}
        self._createActions()
        self._createToolbar()
        self._createLayout()
        self._connectSignals()

    # ----------------------- UI Construction -----------------------
    def _createActions(self):
        self.actReset = QAction("Reset", self)
        self.actReset.setShortcut(QKeySequence("Ctrl+R"))
        self.actRun = QAction("Run", self)
        self.actRun.setShortcut(QKeySequence("Ctrl+Return"))

    def _createToolbar(self):
        tb = QToolBar("Main")
        tb.setIconSize(QSize(16, 16))
        tb.setMovable(False)
        tb.addAction(self.actReset)
        tb.addSeparator()
        self.swatches = ColorSwatchBar(parent=tb)
        tb.addWidget(self.swatches)
        tb.addSeparator()
        tb.addAction(self.actRun)
        self.addToolBar(tb)

    def _createLayout(self):
        self.canvas = SketchCanvas(self.session, background=self._cfg.canvas.background, parent=self)
        self.setCentralWidget(self.canvas)
        self._phaseLabel = QLabel(_PHASE_TEXT[SessionPhase.IDLE], self)
        self.statusBar().addPermanentWidget(self._phaseLabel)

    def _connectSignals(self):
        self.actReset.triggered.connect(self.session.reset)
        self.actRun.triggered.connect(self.session.submit)
        self.swatches.colorSelected.connect(self.session.set_color)
        placement = self.session.placement
        placement.resultPlaced.connect(self._onResultPlaced)
        placement.cleared.connect(self._clearLabels)
        self.session.phaseChanged.connect(self._onPhaseChanged)
        self.session.errorOccurred.connect(self._onError)
        self.session.submitted.connect(self._onSubmitted)

    # ----------------------- Handlers -----------------------
    def _onResultPlaced(self, index: int):
        entry = self.session.placement[index]
        pm = self._renderer.render(entry.latex)
        label = DraggableResultLabel(index, pm, entry.text, self.canvas)
        label.move(int(entry.position.x), int(entry.position.y))
        label.dragFinished.connect(self._onLabelDragged)
        label.show()
        self._labels[index] = label

    def _onLabelDragged(self, index: int, pos: QPoint):
        try:
            self.session.placement.reposition(index, Point(pos.x(), pos.y()))
        except IndexError:
            # Label outlived a reset; nothing to update.
            logger.debug("Drag on stale result label %d", index)

    def _clearLabels(self):
        for label in self._labels.values():
            label.hide()
            label.deleteLater()
        self._labels.clear()

    def _onPhaseChanged(self, phase: SessionPhase):
        self._phaseLabel.setText(_PHASE_TEXT.get(phase, str(phase)))

    def _onError(self, message: str):
        logger.warning("Submission problem: %s", message)
        self.statusBar().showMessage(f"Error: {message}", 8000)

    def _onSubmitted(self, results: list):
        self.statusBar().showMessage(f"Received {len(results)} result(s)", 4000)

    def closeEvent(self, event):  # noqa: D401
        self.session.orchestrator.shutdown()
        super().closeEvent(event)


def create_app_window(cfg: Optional[AppConfig] = None) -> MainWindow:
    return MainWindow(cfg)
