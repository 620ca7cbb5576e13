import pytest
from conftest import FakeClient
from PyQt6.QtCore import QEvent, QPoint, QPointF, Qt
from PyQt6.QtGui import QColor, QMouseEvent

from SketchSolver.core.config import AppConfig
from SketchSolver.core.errors import ServiceFailure
from SketchSolver.core.models import Point, RecognitionResult
from SketchSolver.core.session import SessionPhase
from SketchSolver.services.extraction.bounding_box import extract_bounding_box
from SketchSolver.services.typeset import PlainTextRenderer
from SketchSolver.ui.main_window import MainWindow


@pytest.fixture
def make_window(qtbot):
    def _make(client):
        cfg = AppConfig()
        cfg.placement.delay_ms = 0
        win = MainWindow(cfg, client=client, renderer=PlainTextRenderer())
        qtbot.addWidget(win)
        win.show()
        qtbot.waitExposed(win)
        return win
    return _make


def _mouse(kind, x, y, button=Qt.MouseButton.LeftButton):
    buttons = Qt.MouseButton.NoButton if kind == QEvent.Type.MouseButtonRelease else button
    p = QPointF(x, y)
    return QMouseEvent(kind, p, p, button, buttons, Qt.KeyboardModifier.NoModifier)


def _drag(canvas, start, end):
    canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, *start))
    canvas.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, *end, button=Qt.MouseButton.NoButton))
    canvas.mouseReleaseEvent(_mouse(QEvent.Type.MouseButtonRelease, *end))


def test_canvas_allocates_surface_on_show(make_window):
    win = make_window(FakeClient())
    surface = win.session.surface
    assert surface.is_ready()
    w, h = surface.size()
    assert w >= 320 and h >= 240


def test_mouse_drag_draws_stroke(make_window):
    win = make_window(FakeClient())
    _drag(win.canvas, (30, 40), (90, 70))
    box = extract_bounding_box(win.session.surface.snapshot())
    assert box is not None
    assert box.min_x <= 30 and box.max_x >= 90
    assert win.session.phase is SessionPhase.IDLE


def test_swatch_changes_stroke_color(make_window):
    win = make_window(FakeClient())
    win.swatches.buttons()[1].click()
    assert win.session.surface.color == QColor("#ee3333")


def test_run_places_label_and_reset_clears(qtbot, make_window):
    win = make_window(FakeClient([RecognitionResult("x", "5", True)]))
    _drag(win.canvas, (30, 40), (90, 70))

    with qtbot.waitSignal(win.session.submitted, timeout=3000):
        win.actRun.trigger()
    qtbot.waitUntil(lambda: len(win._labels) == 1, timeout=2000)
    entry = win.session.placement[0]
    label = win._labels[0]
    assert label.pos() == QPoint(int(entry.position.x), int(entry.position.y))
    assert label.toolTip() == "x = 5"
    assert win.session.variables.get("x") == "5"

    label.dragFinished.emit(0, QPoint(200, 120))
    assert win.session.placement[0].position == Point(200, 120)

    win.actReset.trigger()
    assert win._labels == {}
    assert len(win.session.variables) == 0
    assert len(win.session.placement) == 0


def test_failure_is_reported_in_status_bar(qtbot, make_window):
    win = make_window(FakeClient(error=ServiceFailure("Recognition service returned HTTP 500", 500)))
    _drag(win.canvas, (10, 10), (20, 20))
    with qtbot.waitSignal(win.session.errorOccurred, timeout=3000):
        win.actRun.trigger()
    assert "HTTP 500" in win.statusBar().currentMessage()
    assert extract_bounding_box(win.session.surface.snapshot()) is not None


def test_stale_label_drag_is_ignored(make_window):
    win = make_window(FakeClient())
    win._onLabelDragged(3, QPoint(1, 1))
    assert len(win.session.placement) == 0
