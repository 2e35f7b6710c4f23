"""Tests for codacy_exporter.pipeline.dispatcher covering the worker bound and fault isolation.

Run with coverage:
    pytest tests/test_dispatcher.py --maxfail=1 -v --cov=codacy_exporter.pipeline.dispatcher --cov-report=term-missing
"""

import threading
import time

import pytest

from codacy_exporter.pipeline.dispatcher import Dispatcher


def test_rejects_empty_pool():
    with pytest.raises(ValueError):
        Dispatcher(0)


def test_never_exceeds_worker_bound():
    lock = threading.Lock()
    state = {"active": 0, "peak": 0, "done": 0}

    def task():
        with lock:
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
        time.sleep(0.02)
        with lock:
            state["active"] -= 1
            state["done"] += 1

    with Dispatcher(3) as dispatcher:
        for _ in range(12):
            dispatcher.submit(task)
        assert dispatcher.submitted == 12

    assert state["done"] == 12
    assert state["peak"] <= 3


def test_submit_returns_before_task_finishes():
    release = threading.Event()
    dispatcher = Dispatcher(1)
    try:
        started = time.monotonic()
        future = dispatcher.submit(release.wait)
        assert time.monotonic() - started < 0.5
        assert not future.done()
    finally:
        release.set()
        dispatcher.shutdown()


def test_crashing_task_does_not_stop_siblings(capsys):
    ran = []

    def explode():
        raise RuntimeError("kaboom")

    with Dispatcher(1) as dispatcher:
        future = dispatcher.submit(explode, label="alpha")
        dispatcher.submit(lambda: ran.append("beta"))

    assert future.exception() is None
    assert ran == ["beta"]
    assert "alpha" in capsys.readouterr().out
