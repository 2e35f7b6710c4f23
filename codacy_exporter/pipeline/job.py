"""Fetch-then-publish unit of work for a single repository."""

from __future__ import annotations

import enum
from typing import Callable, Dict, List, Optional

from ..retrieval.config import CodacyContext
from .tracker import CompletionTracker, JobOutcome

Fetcher = Callable[[CodacyContext, str], Dict[str, int]]
Publisher = Callable[[str, Dict[str, int]], List[str]]


class JobState(enum.Enum):
    CREATED = "created"
    FETCHING = "fetching"
    FETCH_FAILED = "fetch_failed"
    PUBLISHING = "publishing"
    PUBLISHED = "published"
    PUBLISH_FAILED = "publish_failed"


TERMINAL_STATES = frozenset({JobState.FETCH_FAILED, JobState.PUBLISHED, JobState.PUBLISH_FAILED})


class Job:
    """Bind one repository to the fetch and publish collaborators.

    `run` records exactly one outcome on the tracker whichever path it takes,
    including collaborators that misbehave. Publishing only happens after a
    successful fetch.
    """

    def __init__(
        self,
        repository: str,
        context: CodacyContext,
        tracker: CompletionTracker,
        fetch: Fetcher,
        publish: Publisher,
    ) -> None:
        self.repository = repository
        self.context = context
        self.tracker = tracker
        self.fetch = fetch
        self.publish = publish
        self.state = JobState.CREATED
        self.outcome: Optional[JobOutcome] = None

    def __repr__(self) -> str:
        return f"Job({self.repository!r}, state={self.state.value})"

    def run(self) -> JobOutcome:
        if self.state is not JobState.CREATED:
            raise RuntimeError(f"{self!r} has already been run")

        try:
            outcome = self._execute()
        except Exception as exc:
            failed_state = JobState.FETCH_FAILED if self.state is JobState.FETCHING else JobState.PUBLISH_FAILED
            stage = "fetch" if failed_state is JobState.FETCH_FAILED else "publish"
            self.state = failed_state
            print(f"[error] {self.repository}: {stage} step failed: {exc!r}")
            outcome = JobOutcome.failure(self.repository, f"{stage}: {exc}")

        # the only place an outcome is recorded
        self.outcome = outcome
        self.tracker.record(outcome)
        return outcome

    def _execute(self) -> JobOutcome:
        self.state = JobState.FETCHING
        counts = self.fetch(self.context, self.repository)

        self.state = JobState.PUBLISHING
        failed_categories = self.publish(self.repository, counts)
        if not isinstance(failed_categories, list):
            raise TypeError(f"publisher returned {type(failed_categories).__name__}, expected a list")

        self.state = JobState.PUBLISHED
        if failed_categories:
            print(f"[warn] {self.repository}: {len(failed_categories)}/{len(counts)} categories not pushed")
        return JobOutcome.success(self.repository, failed_categories)


__all__ = ["Job", "JobState", "TERMINAL_STATES", "Fetcher", "Publisher"]
