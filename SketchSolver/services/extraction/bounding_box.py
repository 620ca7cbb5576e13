"""Tight bounding box of drawn content in a surface snapshot.

Background pixels are fully transparent, so any pixel whose alpha exceeds
`CONTENT_ALPHA_THRESHOLD` counts as ink. The whole alpha plane is scanned on
every call; this runs once per submission, not per stroke.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from SketchSolver.core.models import BoundingBox, Snapshot

logger = logging.getLogger(__name__)

CONTENT_ALPHA_THRESHOLD = 0


def content_mask(snapshot: Snapshot, threshold: int = CONTENT_ALPHA_THRESHOLD) -> np.ndarray:
    """Boolean (height, width) mask of content pixels."""
    return snapshot.alpha > threshold


def extract_bounding_box(snapshot: Snapshot, threshold: int = CONTENT_ALPHA_THRESHOLD) -> Optional[BoundingBox]:
    """Return the minimal rectangle covering all content pixels.

    Returns None when the snapshot holds no content at all (including a
    zero-sized snapshot); callers pick their own fallback position.
    """
    if snapshot.width == 0 or snapshot.height == 0:
        return None
    mask = content_mask(snapshot, threshold)
    rows = np.flatnonzero(mask.any(axis=1))
    if rows.size == 0:
        logger.debug("No content found in %dx%d snapshot", snapshot.width, snapshot.height)
        return None
    cols = np.flatnonzero(mask.any(axis=0))
    return BoundingBox(
        min_x=int(cols[0]),
        min_y=int(rows[0]),
        max_x=int(cols[-1]),
        max_y=int(rows[-1]),
    )
