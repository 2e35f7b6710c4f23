"""Concurrent export pipeline: jobs, bounded dispatcher and completion tracking."""

from .dispatcher import Dispatcher
from .job import Job, JobState
from .runner import main, run_jobs
from .tracker import CompletionTracker, JobOutcome

__all__ = ["CompletionTracker", "Dispatcher", "Job", "JobOutcome", "JobState", "main", "run_jobs"]
