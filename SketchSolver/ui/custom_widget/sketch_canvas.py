"""
Sketch canvas widget.

Features:
- Paints the session's stroke surface over a solid background
- Left press/move/release draws a stroke; leaving the widget ends it
- Allocates the surface buffer at the widget size on first show
- Hosts result labels as child widgets so they overlay the sketch

Coordinates:
- Pointer positions are widget-local and map 1:1 to surface pixels
"""
from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QMouseEvent, QPainter
from PyQt6.QtWidgets import QWidget

from SketchSolver.core.models import Point
from SketchSolver.core.session import SketchSession


class SketchCanvas(QWidget):
    def __init__(self, session: SketchSession, background: str = "#000000", parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._session = session
        self._background = QColor(background)
        self.setMouseTracking(False)
        self.setCursor(Qt.CursorShape.CrossCursor)
        self.setMinimumSize(320, 240)
        session.surfaceChanged.connect(self.update)

    @property
    def session(self) -> SketchSession:
        return self._session

    def ensureSurface(self) -> None:
        """Initialize the surface at the current widget size if needed."""
        surface = self._session.surface
        if not surface.is_ready():
            surface.initialize(self.width(), self.height())

    # -------- Qt overrides --------
    def showEvent(self, event):  # noqa: D401
        self.ensureSurface()
        super().showEvent(event)

    def paintEvent(self, event):  # noqa: D401
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)
        image = self._session.surface.image()
        if image is not None:
            painter.drawImage(0, 0, image)
        painter.end()

    def mousePressEvent(self, event: QMouseEvent):  # noqa: D401
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self._session.begin_stroke(Point(pos.x(), pos.y()))
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):  # noqa: D401
        pos = event.position()
        self._session.extend_stroke(Point(pos.x(), pos.y()))

    def mouseReleaseEvent(self, event: QMouseEvent):  # noqa: D401
        if event.button() == Qt.MouseButton.LeftButton:
            self._session.end_stroke()
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):  # noqa: D401
        self._session.end_stroke()
        super().leaveEvent(event)
