"""Task runner - executes service coroutines off the Qt thread."""

import asyncio
import logging
import threading
from typing import Any, Awaitable, Callable, Optional, Protocol

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

logger = logging.getLogger(__name__)

ResultCallback = Callable[[Any], None]
ErrorCallback = Callable[[Exception], None]


class TaskRunner(Protocol):
    """Runs a coroutine and reports its outcome through callbacks."""

    def submit(
        self,
        coro: Awaitable[Any],
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ) -> None: ...


class EventLoopThread:
    """
    A single asyncio event loop running in a daemon thread.

    All store calls share this one loop, so the async Firestore client and
    the caches are only ever touched from one thread.
    """

    def __init__(self) -> None:
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever, name="wordbook-store-loop", daemon=True
        )
        self._thread.start()

    def run(self, coro: Awaitable[Any]) -> Any:
        """Block the calling thread until ``coro`` finishes on the loop."""
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result()

    def stop(self) -> None:
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=5)


class WorkerSignals(QObject):
    """
    Signals for communicating results from worker threads.

    QRunnable doesn't inherit from QObject, so we need a separate
    QObject to hold the signals.
    """
    finished = Signal()
    error = Signal(object)  # Exception
    result = Signal(object)


class StoreTaskWorker(QRunnable):
    """
    Worker that waits on a store coroutine in a pool thread.

    The coroutine itself runs on the shared event loop; the worker only
    blocks until it is done and emits the outcome.
    """

    def __init__(self, loop_thread: EventLoopThread, coro: Awaitable[Any]):
        super().__init__()
        self.loop_thread = loop_thread
        self.coro = coro
        self.signals = WorkerSignals()
        self.setAutoDelete(True)

    @Slot()
    def run(self):
        try:
            result = self.loop_thread.run(self.coro)
            self.signals.result.emit(result)
        except Exception as e:
            logger.exception("Store task failed")
            self.signals.error.emit(e)
        finally:
            self.signals.finished.emit()


class QtTaskRunner:
    """TaskRunner for the desktop app: callbacks arrive on the Qt thread."""

    def __init__(
        self,
        loop_thread: Optional[EventLoopThread] = None,
        pool: Optional[QThreadPool] = None,
    ):
        self.loop_thread = loop_thread or EventLoopThread()
        self.pool = pool or QThreadPool.globalInstance()
        # Keep signal holders alive until their worker reports back.
        self._live_signals: set[WorkerSignals] = set()

    def submit(
        self,
        coro: Awaitable[Any],
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ) -> None:
        worker = StoreTaskWorker(self.loop_thread, coro)
        signals = worker.signals
        self._live_signals.add(signals)
        signals.result.connect(on_result)
        signals.error.connect(on_error)
        signals.finished.connect(lambda: self._live_signals.discard(signals))
        self.pool.start(worker)

    def shutdown(self) -> None:
        self.pool.waitForDone()
        self.loop_thread.stop()
