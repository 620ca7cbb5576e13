"""Configuration schema and environment loading.

Defaults live on the dataclasses; `load_config()` reads a `.env` file (via
python-dotenv) and applies any `SKETCH_SOLVER_*` overrides found in the
environment.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
from typing import Callable, Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8900"


@dataclass
class CanvasConfig:
    stroke_width: int = 3
    default_color: str = "#ffffff"
    background: str = "#000000"


@dataclass
class RecognitionConfig:
    api_url: str = DEFAULT_API_URL
    endpoint: str = "/calculate"
    timeout: float = 30.0
    skip_empty: bool = False  # when True, an empty canvas is never submitted


@dataclass
class PlacementConfig:
    delay_ms: int = 1000
    default_anchor: Tuple[float, float] = (10.0, 200.0)


@dataclass
class TypesetConfig:
    backend: str = "mathtext"  # or: plain
    fontsize: int = 28
    dpi: int = 100
    color: str = "#ffffff"


@dataclass
class AppConfig:
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    recognition: RecognitionConfig = field(default_factory=RecognitionConfig)
    placement: PlacementConfig = field(default_factory=PlacementConfig)
    typeset: TypesetConfig = field(default_factory=TypesetConfig)


def _env(name: str, convert: Callable[[str], object]):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return convert(raw.strip())
    except ValueError:
        logger.warning("Ignoring invalid value for %s: %r", name, raw)
        return None


def _as_bool(raw: str) -> bool:
    val = raw.lower()
    if val in ("1", "true", "yes", "on"):
        return True
    if val in ("0", "false", "no", "off"):
        return False
    raise ValueError(raw)


def load_config(env_file: Optional[str | Path] = None) -> AppConfig:
    """Build an `AppConfig` from defaults, a `.env` file and the environment.

    Variables that are already set in the process environment win over the
    `.env` file. `VITE_API_URL` is honoured for compatibility with existing
    deployments of the web front-end.
    """
    load_dotenv(dotenv_path=env_file)
    cfg = AppConfig()

    api_url = _env("SKETCH_SOLVER_API_URL", str) or _env("VITE_API_URL", str)
    if api_url:
        cfg.recognition.api_url = api_url.rstrip("/")
    timeout = _env("SKETCH_SOLVER_TIMEOUT", float)
    if timeout is not None:
        cfg.recognition.timeout = timeout
    skip_empty = _env("SKETCH_SOLVER_SKIP_EMPTY", _as_bool)
    if skip_empty is not None:
        cfg.recognition.skip_empty = skip_empty

    delay = _env("SKETCH_SOLVER_PLACEMENT_DELAY_MS", int)
    if delay is not None:
        cfg.placement.delay_ms = max(0, delay)

    stroke_width = _env("SKETCH_SOLVER_STROKE_WIDTH", int)
    if stroke_width is not None and stroke_width > 0:
        cfg.canvas.stroke_width = stroke_width

    backend = _env("TYPESET_BACKEND", str)
    if backend:
        cfg.typeset.backend = backend.lower()

    logger.debug("Loaded config: %s", cfg)
    return cfg
