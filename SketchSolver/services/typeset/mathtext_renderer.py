"""Render result expressions with matplotlib's mathtext engine.

mathtext understands a subset of TeX, so the LaTeX is sanitized first and
anything it still rejects falls back to the plain renderer.
"""
from __future__ import annotations

import io
import logging

from matplotlib.figure import Figure
from PyQt6.QtGui import QPixmap

from .latex import sanitize_latex
from .plain_renderer import PlainTextRenderer

logger = logging.getLogger(__name__)


class MathTextRenderer:
    def __init__(self, fontsize: int = 28, dpi: int = 100, color: str = "#ffffff"):
        self.fontsize = fontsize
        self.dpi = dpi
        self.color = color
        self._fallback = PlainTextRenderer(pointsize=max(8, fontsize // 2), color=color)

    def render_png(self, latex: str) -> bytes:
        """Render `latex` into transparent PNG bytes.

        Raises ValueError when mathtext cannot parse the expression.
        """
        s = f"${sanitize_latex(latex)}$"
        fig = Figure(dpi=self.dpi)
        fig.patch.set_alpha(0.0)
        fig.text(0, 0, s, fontsize=self.fontsize, color=self.color)
        buf = io.BytesIO()
        fig.savefig(buf, format="png", bbox_inches="tight", pad_inches=0.05, transparent=True)
        return buf.getvalue()

    def render(self, latex: str) -> QPixmap:
        try:
            data = self.render_png(latex)
        except ValueError as e:
            logger.warning("mathtext could not render %r (%s); using plain text", latex, e)
            return self._fallback.render(latex)
        pm = QPixmap()
        if not pm.loadFromData(data, "PNG"):
            logger.warning("Rendered PNG for %r could not be decoded; using plain text", latex)
            return self._fallback.render(latex)
        return pm
