"""Bounded worker pool that runs repository jobs in the background."""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

DEFAULT_NAME = "CodacyTool"


class Dispatcher:
    """Run submitted tasks on at most `workers` threads.

    `submit` only enqueues and returns; a task that raises is logged and
    dropped at the worker boundary so the pool and sibling tasks keep going.
    Tasks are expected to report their own outcome.
    """

    def __init__(self, workers: int, name: str = DEFAULT_NAME) -> None:
        if workers < 1:
            raise ValueError(f"worker pool size must be >= 1, got {workers}")
        self.workers = workers
        self.name = name
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix=name)
        self._lock = threading.Lock()
        self._submitted = 0

    @property
    def submitted(self) -> int:
        with self._lock:
            return self._submitted

    def submit(self, task: Callable[[], Any], label: Optional[str] = None) -> Future:
        with self._lock:
            self._submitted += 1
        return self._executor.submit(self._run, task, label or getattr(task, "__name__", repr(task)))

    def _run(self, task: Callable[[], Any], label: str) -> None:
        try:
            task()
        except Exception as exc:
            print(f"[error] {self.name}: task {label} crashed: {exc!r}")

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "Dispatcher":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown(wait=True)


__all__ = ["Dispatcher", "DEFAULT_NAME"]
