from conftest import FakeClient

from SketchSolver.core.models import Point, RecognitionResult


def test_assignment_binds_and_is_placed(qtbot, make_orchestrator, assignment_client, make_snapshot):
    orch, placement = make_orchestrator(assignment_client)
    snap = make_snapshot(40, 40, points=[(10, 10), (20, 30)])

    with qtbot.waitSignal(orch.submissionSucceeded, timeout=3000) as blocker:
        assert orch.submit(snap) is True
    assert blocker.args == [[RecognitionResult("x", "5", True)]]
    assert orch.variables.get("x") == "5"

    qtbot.waitUntil(lambda: len(placement) == 1, timeout=2000)
    assert placement[0].text == "x = 5"
    assert placement[0].position == Point(15.0, 20.0)  # bounding-box center
    assert not orch.isBusy()


def test_request_carries_current_variables(qtbot, make_orchestrator, make_snapshot):
    client = FakeClient([RecognitionResult("y", "x + 1", False)])
    orch, _ = make_orchestrator(client)
    orch.variables.set("x", "5")
    with qtbot.waitSignal(orch.submissionSucceeded, timeout=3000):
        orch.submit(make_snapshot(points=[(1, 1)]))
    assert client.calls[0][1] == {"x": "5"}


def test_every_result_is_placed_in_order(qtbot, make_orchestrator, make_snapshot):
    results = [
        RecognitionResult("a", "1", True),
        RecognitionResult("a + 1", "2", False),
        RecognitionResult("a", "1", True),
    ]
    orch, placement = make_orchestrator(FakeClient(results))
    with qtbot.waitSignal(orch.submissionSucceeded, timeout=3000):
        orch.submit(make_snapshot(points=[(2, 2)]))
    qtbot.waitUntil(lambda: len(placement) == 3, timeout=2000)
    assert [p.text for p in placement.results()] == ["a = 1", "a + 1 = 2", "a = 1"]


def test_failure_leaves_state_unchanged(qtbot, make_orchestrator, failing_client, make_snapshot):
    orch, placement = make_orchestrator(failing_client)
    orch.variables.set("x", "3")

    with qtbot.waitSignal(orch.submissionFailed, timeout=3000) as blocker:
        orch.submit(make_snapshot(points=[(4, 4)]))
    assert "connection refused" in blocker.args[0]
    assert orch.variables.as_dict() == {"x": "3"}
    assert len(placement) == 0 and placement.pending_count() == 0
    assert not orch.isBusy()


def test_second_submit_rejected_while_in_flight(qtbot, make_orchestrator, assignment_client, make_snapshot):
    orch, _ = make_orchestrator(assignment_client)
    snap = make_snapshot(points=[(1, 1)])
    with qtbot.waitSignal(orch.submissionSucceeded, timeout=3000):
        assert orch.submit(snap) is True
        with qtbot.waitSignal(orch.submissionRejected, timeout=1000):
            assert orch.submit(snap) is False
    assert len(assignment_client.calls) == 1


def test_empty_canvas_uses_last_anchor(qtbot, make_orchestrator, make_snapshot):
    orch, placement = make_orchestrator(FakeClient([RecognitionResult("0", "0", False)]))
    with qtbot.waitSignal(orch.submissionSucceeded, timeout=3000):
        orch.submit(make_snapshot())
    qtbot.waitUntil(lambda: len(placement) == 1, timeout=2000)
    assert placement[0].position == Point(10, 200)


def test_discarded_submission_is_not_applied(qtbot, make_orchestrator, assignment_client, make_snapshot):
    orch, placement = make_orchestrator(assignment_client)
    orch.submit(make_snapshot(points=[(1, 1)]))
    orch.discard_pending()
    assert not orch.isBusy()

    with qtbot.assertNotEmitted(orch.submissionSucceeded, wait=300):
        pass
    assert orch.variables.get("x") is None
    assert len(placement) == 0 and placement.pending_count() == 0


def test_empty_response_places_nothing(qtbot, make_orchestrator, make_snapshot):
    orch, placement = make_orchestrator(FakeClient([]))
    with qtbot.waitSignal(orch.submissionSucceeded, timeout=3000) as blocker:
        orch.submit(make_snapshot(points=[(1, 1)]))
    assert blocker.args == [[]]
    assert placement.pending_count() == 0


def test_worker_threads_are_released_after_many_submissions(qtbot, make_orchestrator, make_snapshot):
    orch, _ = make_orchestrator(FakeClient([]))
    snap = make_snapshot(points=[(1, 1)])
    for _ in range(200):
        with qtbot.waitSignal(orch.submissionSucceeded, timeout=3000):
            assert orch.submit(snap) is True
    qtbot.waitUntil(lambda: len(orch._threads) == 0, timeout=3000)


def test_worker_lives_in_the_recognition_package():
    from SketchSolver.services.recognition import orchestrator

    assert orchestrator.RecognitionWorker.__module__ == "SketchSolver.services.recognition.worker"
    assert orchestrator.start_worker.__module__ == "SketchSolver.services.recognition.worker"
