"""Tests for the event loop thread and the Qt task runner."""

import asyncio
import time

import pytest
from PySide6.QtWidgets import QApplication

from wordbook_manager.services import EventLoopThread, QtTaskRunner, StoreTaskWorker


def ensure_qt_app():
    if QApplication.instance() is None:
        QApplication([])


async def answer():
    await asyncio.sleep(0)
    return 42


async def fail():
    await asyncio.sleep(0)
    raise RuntimeError("boom")


@pytest.fixture
def loop_thread():
    thread = EventLoopThread()
    yield thread
    thread.stop()


def test_event_loop_thread_returns_result(loop_thread):
    assert loop_thread.run(answer()) == 42


def test_event_loop_thread_propagates_errors(loop_thread):
    with pytest.raises(RuntimeError, match="boom"):
        loop_thread.run(fail())


def test_worker_emits_result_then_finished(loop_thread):
    ensure_qt_app()
    events = []
    worker = StoreTaskWorker(loop_thread, answer())
    worker.signals.result.connect(lambda value: events.append(("result", value)))
    worker.signals.error.connect(lambda error: events.append(("error", error)))
    worker.signals.finished.connect(lambda: events.append(("finished", None)))

    worker.run()

    assert events == [("result", 42), ("finished", None)]


def test_worker_emits_error(loop_thread):
    ensure_qt_app()
    errors = []
    worker = StoreTaskWorker(loop_thread, fail())
    worker.signals.error.connect(errors.append)

    worker.run()

    assert len(errors) == 1
    assert isinstance(errors[0], RuntimeError)


def test_qt_task_runner_delivers_result_on_qt_thread(loop_thread):
    ensure_qt_app()
    runner = QtTaskRunner(loop_thread=loop_thread)
    results, errors = [], []

    runner.submit(answer(), results.append, errors.append)

    deadline = time.monotonic() + 5
    while not results and not errors and time.monotonic() < deadline:
        QApplication.processEvents()
        time.sleep(0.01)
    runner.pool.waitForDone()

    assert results == [42]
    assert errors == []
