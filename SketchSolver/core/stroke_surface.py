"""Raster drawing surface backing the sketch canvas.

The surface owns a transparent `QImage`; strokes are painted straight into
it segment by segment. Until `initialize()` has been called there is no
buffer and every operation quietly does nothing.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

import numpy as np
from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QColor, QImage, QPainter, QPen

from SketchSolver.core.models import Point, Snapshot

logger = logging.getLogger(__name__)

ColorLike = Union[QColor, str]


def qimage_to_rgba(image: QImage) -> np.ndarray:
    """Copy a `QImage` into a (height, width, 4) RGBA uint8 array."""
    rgba = image.convertToFormat(QImage.Format.Format_RGBA8888)
    w, h = rgba.width(), rgba.height()
    if w == 0 or h == 0:
        return np.zeros((h, w, 4), dtype=np.uint8)
    ptr = rgba.constBits()
    ptr.setsize(rgba.sizeInBytes())
    # Rows may be padded; slice them back to exactly width * 4 bytes.
    buf = np.frombuffer(ptr, dtype=np.uint8).reshape(h, rgba.bytesPerLine())
    return buf[:, : w * 4].reshape(h, w, 4).copy()


class StrokeSurface:
    def __init__(self, stroke_width: int = 3, color: ColorLike = "#ffffff"):
        self._image: Optional[QImage] = None
        self._stroke_width = stroke_width
        self._color = QColor(color)
        self._drawing = False
        self._last: Optional[QPointF] = None

    # -------- Lifecycle --------
    def initialize(self, width: int, height: int) -> bool:
        """Allocate a transparent buffer of the given size.

        Refused while a stroke is in progress so the buffer never changes
        size mid-draw.
        """
        if self._drawing:
            logger.debug("Ignoring surface re-init during an active stroke")
            return False
        width, height = max(1, int(width)), max(1, int(height))
        image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        image.fill(Qt.GlobalColor.transparent)
        self._image = image
        logger.debug("Surface initialized at %dx%d", width, height)
        return True

    def is_ready(self) -> bool:
        return self._image is not None

    @property
    def drawing(self) -> bool:
        return self._drawing

    @property
    def color(self) -> QColor:
        return QColor(self._color)

    @property
    def stroke_width(self) -> int:
        return self._stroke_width

    def image(self) -> Optional[QImage]:
        return self._image

    def size(self) -> tuple[int, int]:
        if self._image is None:
            return (0, 0)
        return (self._image.width(), self._image.height())

    # -------- Strokes --------
    def begin_stroke(self, p: Point) -> None:
        if self._image is None or self._drawing:
            return
        self._drawing = True
        self._last = QPointF(p.x, p.y)

    def extend_stroke(self, p: Point) -> None:
        if self._image is None or not self._drawing or self._last is None:
            return
        end = QPointF(p.x, p.y)
        painter = QPainter(self._image)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            pen = QPen(self._color)
            pen.setWidth(self._stroke_width)
            pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
            painter.setPen(pen)
            painter.drawLine(self._last, end)
        finally:
            painter.end()
        self._last = end

    def end_stroke(self) -> None:
        self._drawing = False
        self._last = None

    def set_color(self, color: ColorLike) -> None:
        c = QColor(color)
        if not c.isValid():
            logger.warning("Ignoring invalid stroke color %r", color)
            return
        self._color = c

    def clear(self) -> None:
        if self._image is None:
            return
        self._image.fill(Qt.GlobalColor.transparent)

    def snapshot(self) -> Optional[Snapshot]:
        if self._image is None:
            return None
        return Snapshot.from_rgba(qimage_to_rgba(self._image))
