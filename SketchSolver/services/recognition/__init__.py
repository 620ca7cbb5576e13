"""Recognition service package: HTTP client, wire schema and orchestrator.

`create_recognition_client(cfg=None)` prefers the `SKETCH_SOLVER_API_URL`
environment variable, then `cfg.recognition.api_url`.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from SketchSolver.core.config import AppConfig
from .client import RecognitionClient

logger = logging.getLogger(__name__)


def create_recognition_client(cfg: Optional[AppConfig] = None) -> RecognitionClient:
    cfg = cfg or AppConfig()
    rc = cfg.recognition
    base_url = os.getenv("SKETCH_SOLVER_API_URL") or rc.api_url
    logger.info("Using recognition service at %s%s", base_url.rstrip("/"), rc.endpoint)
    return RecognitionClient(base_url, endpoint=rc.endpoint, timeout=rc.timeout)


__all__ = ["RecognitionClient", "create_recognition_client"]
