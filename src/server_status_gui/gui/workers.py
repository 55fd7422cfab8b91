from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from PySide6.QtCore import QObject, QRunnable, Signal, Slot


class WorkerSignals(QObject):
    # (request id, payload)
    result = Signal(int, object)
    error = Signal(int, str)
    finished = Signal()


@dataclass(frozen=True)
class WorkerJob:
    req_id: int
    fn: Callable[[], Any]


class Worker(QRunnable):
    """Runs one feed fetch on the thread pool and reports back through signals."""

    def __init__(self, job: WorkerJob) -> None:
        super().__init__()
        self.job = job
        self.signals = WorkerSignals()
        self.setAutoDelete(False)

    @Slot()
    def run(self) -> None:
        try:
            res = self.job.fn()
            self.signals.result.emit(self.job.req_id, res)
        except Exception as e:  # noqa: BLE001
            self.signals.error.emit(self.job.req_id, str(e))
        finally:
            self.signals.finished.emit()
