"""Tests for codacy_exporter.pipeline.tracker covering concurrent recording and waiting.

Run with coverage:
    pytest tests/test_tracker.py --maxfail=1 -v --cov=codacy_exporter.pipeline.tracker --cov-report=term-missing
"""

import threading
import time

import pytest

from codacy_exporter.pipeline.tracker import CompletionTracker, JobOutcome


def test_outcome_constructors():
    ok = JobOutcome.success("alpha", ["Style"])
    assert ok.succeeded and ok.reason is None and ok.failed_categories == ["Style"]
    bad = JobOutcome.failure("beta", "timeout")
    assert not bad.succeeded and bad.reason == "timeout"


def test_rejects_negative_size():
    with pytest.raises(ValueError):
        CompletionTracker(-1)


def test_empty_tracker_is_complete_immediately():
    tracker = CompletionTracker(0)
    assert tracker.is_complete()
    assert tracker.wait(timeout=0) is True


def test_record_counts_and_rejects_overflow():
    tracker = CompletionTracker(2)
    tracker.record(JobOutcome.success("alpha"))
    assert not tracker.is_complete()
    tracker.record(JobOutcome.failure("beta", "boom"))
    assert tracker.is_complete()
    assert tracker.recorded == 2
    assert [outcome.repository for outcome in tracker.failures()] == ["beta"]

    with pytest.raises(RuntimeError):
        tracker.record(JobOutcome.success("gamma"))
    assert tracker.recorded == 2


def test_wait_times_out_while_incomplete():
    tracker = CompletionTracker(1)
    assert tracker.wait(timeout=0.05) is False


def test_concurrent_records_are_all_counted():
    count = 200
    tracker = CompletionTracker(count)
    start = threading.Event()

    def worker(idx):
        start.wait()
        tracker.record(JobOutcome.success(f"repo-{idx}"))

    threads = [threading.Thread(target=worker, args=(idx,)) for idx in range(count)]
    for thread in threads:
        thread.start()
    start.set()
    assert tracker.wait(timeout=5)
    for thread in threads:
        thread.join()

    repos = {outcome.repository for outcome in tracker.outcomes()}
    assert len(repos) == count


def test_wait_wakes_when_last_outcome_lands():
    tracker = CompletionTracker(1)

    def late_record():
        time.sleep(0.05)
        tracker.record(JobOutcome.success("alpha"))

    thread = threading.Thread(target=late_record)
    thread.start()
    assert tracker.wait(timeout=5) is True
    thread.join()
