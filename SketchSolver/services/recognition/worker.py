from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from PyQt6.QtCore import QObject, Qt, QThread, pyqtSignal, pyqtSlot

from SketchSolver.core.errors import SketchSolverError
from SketchSolver.core.models import Snapshot

logger = logging.getLogger(__name__)


class RecognitionWorker(QObject):
    """Runs one blocking recognition request in a background QThread.

    The worker receives its own copies of the snapshot and variables and
    never touches session state; results travel back through signals.

    Emits:
        - succeeded(ticket, results): list of RecognitionResult in service order
        - failed(ticket, errmsg): transport, service or schema error
        - finished(): always, after succeeded/failed
    """
    succeeded = pyqtSignal(int, list)
    failed = pyqtSignal(int, str)
    finished = pyqtSignal()

    def __init__(self, client, ticket: int, snapshot: Snapshot, variables: Dict[str, str]):
        super().__init__()
        self._client = client
        self._ticket = ticket
        self._snapshot = snapshot
        self._variables = dict(variables)

    @pyqtSlot()
    def run(self):
        try:
            results = self._client.recognize(self._snapshot, self._variables)
        except SketchSolverError as e:
            logger.warning("Recognition #%d failed: %s", self._ticket, e)
            self.failed.emit(self._ticket, str(e))
        except Exception as e:
            logger.exception("Unexpected error in recognition #%d", self._ticket)
            self.failed.emit(self._ticket, f"Unexpected error: {e}")
        else:
            self.succeeded.emit(self._ticket, list(results))
        finally:
            self.finished.emit()


def start_worker(worker: QObject, parent: QObject, on_finished: Optional[Callable[[], None]] = None) -> QThread:
    """Move `worker` onto a new QThread owned by `parent` and start it.

    `on_finished` is connected to the thread's `finished` signal before the
    thread starts, and ahead of the thread's own deleteLater. The caller
    keeps a reference to `worker` until then.
    """
    thread = QThread(parent)
    worker.moveToThread(thread)
    thread.started.connect(worker.run)
    # Direct: the thread stops itself without waiting on the UI event loop.
    worker.finished.connect(thread.quit, Qt.ConnectionType.DirectConnection)
    if on_finished is not None:
        thread.finished.connect(on_finished)
    thread.finished.connect(thread.deleteLater)
    thread.start()
    return thread
