# app/utils/async_utils.py
import sys
import traceback
from typing import Any, Callable
from PyQt6.QtCore import QObject, pyqtSignal, QRunnable


class WorkerSignals(QObject):
    """
    Signals emitted by a Worker. They live on the thread that created the
    worker, so connected slots of objects on that thread run there too.
    - result: object returned by the task
    - error: tuple (exctype, value, traceback.format_exc())
    - finished: No data, always emitted last
    """

    result = pyqtSignal(object)
    error = pyqtSignal(tuple)  # exctype, value, traceback
    finished = pyqtSignal()


class Worker(QRunnable):
    """Runs a single callable on a QThreadPool thread."""

    def __init__(self, fn: Callable, *args: Any, **kwargs: Any):
        super().__init__()
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.signals = WorkerSignals()

    def run(self):
        try:
            result = self.fn(*self.args, **self.kwargs)
        except Exception:
            exctype, value = sys.exc_info()[:2]
            self.signals.error.emit((exctype, value, traceback.format_exc()))
        else:
            self.signals.result.emit(result)
        finally:
            self.signals.finished.emit()
