import os
import sys
from pathlib import Path

# Headless Qt for widget and QImage tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add the project root (one level up from 'test') to sys.path
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import numpy as np
import pytest

from SketchSolver.core.errors import ServiceFailure
from SketchSolver.core.models import RecognitionResult, Snapshot


class FakeClient:
    """Stands in for RecognitionClient; records every call it receives."""

    def __init__(self, results=None, error=None):
        self.results = list(results or [])
        self.error = error
        self.calls = []

    def recognize(self, snapshot, variables):
        self.calls.append((snapshot, dict(variables)))
        if self.error is not None:
            raise self.error
        return list(self.results)


@pytest.fixture
def make_snapshot():
    """Build a snapshot of the given size with opaque pixels at `points`."""
    def _make(width=20, height=20, points=()):
        arr = np.zeros((height, width, 4), dtype=np.uint8)
        for x, y in points:
            arr[y, x] = (255, 255, 255, 255)
        return Snapshot.from_rgba(arr)
    return _make


@pytest.fixture
def assignment_client():
    return FakeClient([RecognitionResult("x", "5", True)])


@pytest.fixture
def failing_client():
    return FakeClient(error=ServiceFailure("Recognition request failed: connection refused"))


@pytest.fixture
def make_orchestrator():
    """Build orchestrator + placement pairs; worker threads are joined on teardown."""
    from SketchSolver.core.placement import PlacementManager
    from SketchSolver.services.recognition.orchestrator import RecognitionOrchestrator

    created = []

    def _make(client, delay_ms=0):
        placement = PlacementManager(delay_ms=delay_ms, default_anchor=(10, 200))
        orch = RecognitionOrchestrator(client, placement)
        created.append(orch)
        return orch, placement

    yield _make
    for orch in created:
        orch.shutdown()
