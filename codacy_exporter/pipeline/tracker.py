"""Thread-safe bookkeeping of terminal job outcomes."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class JobOutcome:
    """Terminal result of one repository job."""

    repository: str
    succeeded: bool
    reason: Optional[str] = None
    failed_categories: List[str] = field(default_factory=list)

    @classmethod
    def success(cls, repository: str, failed_categories: Optional[List[str]] = None) -> "JobOutcome":
        return cls(repository, True, None, list(failed_categories or []))

    @classmethod
    def failure(cls, repository: str, reason: str) -> "JobOutcome":
        return cls(repository, False, reason)


class CompletionTracker:
    """Collect exactly `expected` outcomes and let the controller block until they land.

    Workers call `record` concurrently and in any order; the controller calls
    `wait`, which sleeps on a condition variable and wakes when the last
    outcome is recorded.
    """

    def __init__(self, expected: int) -> None:
        if expected < 0:
            raise ValueError(f"expected job count must be >= 0, got {expected}")
        self._expected = expected
        self._outcomes: List[JobOutcome] = []
        self._cond = threading.Condition()

    @property
    def expected(self) -> int:
        return self._expected

    @property
    def recorded(self) -> int:
        with self._cond:
            return len(self._outcomes)

    def record(self, outcome: JobOutcome) -> None:
        with self._cond:
            if len(self._outcomes) >= self._expected:
                raise RuntimeError(
                    f"outcome for {outcome.repository} exceeds the {self._expected} dispatched jobs"
                )
            self._outcomes.append(outcome)
            if len(self._outcomes) == self._expected:
                self._cond.notify_all()

    def is_complete(self) -> bool:
        with self._cond:
            return len(self._outcomes) == self._expected

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until every outcome is recorded; False if `timeout` ran out first."""
        with self._cond:
            return self._cond.wait_for(lambda: len(self._outcomes) == self._expected, timeout=timeout)

    def outcomes(self) -> List[JobOutcome]:
        with self._cond:
            return list(self._outcomes)

    def failures(self) -> List[JobOutcome]:
        return [outcome for outcome in self.outcomes() if not outcome.succeeded]


__all__ = ["JobOutcome", "CompletionTracker"]
