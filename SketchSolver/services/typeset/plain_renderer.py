"""Plain-text fallback renderer.

Draws the sanitized expression with the default UI font onto a transparent
pixmap. Used when mathtext is disabled or cannot parse an expression.
"""
from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QFontMetrics, QPainter, QPixmap

from .latex import sanitize_latex

PADDING = 4


class PlainTextRenderer:
    def __init__(self, pointsize: int = 18, color: str = "#ffffff"):
        self.pointsize = pointsize
        self.color = color

    def render(self, latex: str) -> QPixmap:
        text = sanitize_latex(latex)
        font = QFont()
        font.setPointSize(self.pointsize)
        metrics = QFontMetrics(font)
        w = max(1, metrics.horizontalAdvance(text)) + 2 * PADDING
        h = metrics.height() + 2 * PADDING
        pm = QPixmap(w, h)
        pm.fill(Qt.GlobalColor.transparent)
        painter = QPainter(pm)
        try:
            painter.setRenderHint(QPainter.RenderHint.TextAntialiasing, True)
            painter.setFont(font)
            painter.setPen(QColor(self.color))
            painter.drawText(PADDING, PADDING + metrics.ascent(), text)
        finally:
            painter.end()
        return pm
