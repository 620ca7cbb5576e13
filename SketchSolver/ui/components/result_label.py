from __future__ import annotations
from typing import Optional

from PyQt6.QtCore import QPoint, Qt, pyqtSignal
from PyQt6.QtGui import QMouseEvent, QPixmap
from PyQt6.QtWidgets import QLabel, QWidget


class DraggableResultLabel(QLabel):
    """Rendered result shown on top of the canvas.

    The label follows the pointer while dragged and reports its final
    top-left position (parent coordinates) through `dragFinished`.
    """
    dragFinished = pyqtSignal(int, QPoint)  # placement index, new position

    def __init__(self, index: int, pixmap: QPixmap, text: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.index = index
        self._grab_offset: Optional[QPoint] = None
        self.setPixmap(pixmap)
        self.setToolTip(text)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self.setCursor(Qt.CursorShape.OpenHandCursor)
        self.adjustSize()

    def mousePressEvent(self, event: QMouseEvent):  # noqa: D401
        if event.button() == Qt.MouseButton.LeftButton:
            self._grab_offset = event.position().toPoint()
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            self.raise_()
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):  # noqa: D401
        if self._grab_offset is None:
            return
        target = self.mapToParent(event.position().toPoint()) - self._grab_offset
        self.move(target)
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent):  # noqa: D401
        if event.button() == Qt.MouseButton.LeftButton and self._grab_offset is not None:
            self._grab_offset = None
            self.setCursor(Qt.CursorShape.OpenHandCursor)
            self.dragFinished.emit(self.index, self.pos())
            event.accept()
            return
        super().mouseReleaseEvent(event)
