"""Typesetting backends for placed results.

`create_renderer(cfg=None)` prefers the `TYPESET_BACKEND` environment
variable, then `cfg.typeset.backend`. Supported: `mathtext` (default),
`plain`. Every backend exposes `render(latex) -> QPixmap`.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from SketchSolver.core.config import AppConfig
from .mathtext_renderer import MathTextRenderer
from .plain_renderer import PlainTextRenderer

logger = logging.getLogger(__name__)


def create_renderer(cfg: Optional[AppConfig] = None):
    tc = (cfg or AppConfig()).typeset
    name = (os.getenv("TYPESET_BACKEND") or tc.backend or "mathtext").strip().lower()
    if name in ("mathtext", "matplotlib", "latex"):
        logger.info("Using mathtext renderer")
        return MathTextRenderer(fontsize=tc.fontsize, dpi=tc.dpi, color=tc.color)
    if name in ("plain", "text"):
        logger.info("Using plain text renderer")
        return PlainTextRenderer(pointsize=max(8, tc.fontsize // 2), color=tc.color)
    msg = f"Unknown typeset backend '{name}'. Supported: mathtext, plain"
    logger.error(msg)
    raise RuntimeError(msg)


__all__ = ["create_renderer", "MathTextRenderer", "PlainTextRenderer"]
