"""Entry points for exporting Codacy issue counts to the pushgateway."""

from __future__ import annotations

import sys
from typing import Iterable, List, Optional

import requests

from ..publishing.pushgateway import PushgatewayPublisher
from ..retrieval.collectors import get_category_counts, list_repositories
from ..retrieval.config import CodacyContext
from ..retrieval.http_client import CodacyAPIError

from .config import PipelineSettings, parse_args, resolve_settings
from .dispatcher import Dispatcher
from .job import Fetcher, Job, Publisher
from .tracker import CompletionTracker, JobOutcome


def run_jobs(
    repositories: Iterable[str],
    context: CodacyContext,
    *,
    workers: int,
    fetch: Fetcher,
    publish: Publisher,
) -> List[JobOutcome]:
    """Fan one job per repository out over `workers` threads and wait for all outcomes."""
    repos = list(repositories)
    tracker = CompletionTracker(len(repos))
    with Dispatcher(workers) as dispatcher:
        for repo in repos:
            job = Job(repo, context, tracker, fetch, publish)
            dispatcher.submit(job.run, label=repo)
        tracker.wait()
    return tracker.outcomes()


def _build_publisher(settings: PipelineSettings) -> PushgatewayPublisher:
    return PushgatewayPublisher(settings.pushgateway_url, dry_run=settings.dry_run)


def _print_summary(outcomes: List[JobOutcome]) -> None:
    failed = [outcome for outcome in outcomes if not outcome.succeeded]
    partial = [outcome for outcome in outcomes if outcome.succeeded and outcome.failed_categories]
    print(f"  {len(outcomes) - len(failed)} succeeded, {len(failed)} failed, {len(partial)} with unpushed categories")
    for outcome in failed:
        print(f"  [failed] {outcome.repository}: {outcome.reason}")


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: list repositories, export each one, report when all are done."""

    try:
        settings = resolve_settings(parse_args(argv))
    except ValueError as exc:
        print(f"[error] invalid configuration: {exc}")
        sys.exit(1)
    if not settings.api_token or not settings.organization:
        print("[error] Codacy API token and organization are required "
              "(CODACY_API_TOKEN / CODACY_ORGANIZATION or local_secrets.json).")
        sys.exit(1)
    context = settings.context()

    repos = list(settings.repositories)
    if not repos:
        try:
            repos = list_repositories(context)
        except (requests.RequestException, CodacyAPIError) as exc:
            print(f"[error] could not list repositories for {context.organization}: {exc}")
            return

    print(f"Processing {len(repos)} repos with {settings.workers} workers...")
    outcomes = run_jobs(
        repos,
        context,
        workers=settings.workers,
        fetch=get_category_counts,
        publish=_build_publisher(settings).publish,
    )
    print("\nAll repositories processed.")
    _print_summary(outcomes)


if __name__ == "__main__":
    main()
