"""Minimal pushgateway publisher for per-repository Codacy issue gauges."""

from __future__ import annotations

from typing import Dict, List, Optional

from prometheus_client import CollectorRegistry, Gauge
from prometheus_client.exposition import push_to_gateway

METRIC_NAME = "codacy_issues_metric"
METRIC_HELP = "Number of issues in Codacy code"
PUSH_JOB = "codacy_issues_metric"
PUSH_TIMEOUT = 10


class PushgatewayPublisher:
    """Push one gauge sample per issue category, grouped by category and repository."""

    def __init__(
        self,
        gateway: str,
        job: str = PUSH_JOB,
        metric_name: str = METRIC_NAME,
        metric_help: str = METRIC_HELP,
        timeout: Optional[float] = PUSH_TIMEOUT,
        dry_run: bool = False,
    ) -> None:
        self.gateway = gateway
        self.job = job
        self.metric_name = metric_name
        self.metric_help = metric_help
        self.timeout = timeout
        self.dry_run = dry_run

    def grouping_key(self, repository: str, category: str) -> Dict[str, str]:
        return {"Categories": category, "Repository": repository}

    def push_category(self, repository: str, category: str, count: int) -> None:
        """Push a single sample; raises whatever the pushgateway call raises."""
        grouping = self.grouping_key(repository, category)
        if self.dry_run:
            print(f"[dry-run] {self.metric_name}{grouping} = {count}")
            return

        # fresh registry per push so concurrent jobs never share a gauge
        registry = CollectorRegistry()
        gauge = Gauge(self.metric_name, self.metric_help, registry=registry)
        gauge.set(float(count))
        push_to_gateway(
            self.gateway,
            job=self.job,
            registry=registry,
            grouping_key=grouping,
            timeout=self.timeout,
        )

    def publish(self, repository: str, counts: Dict[str, int]) -> List[str]:
        """Push every category of `counts`; return the categories whose push failed.

        A failed push is logged and the remaining categories are still attempted.
        """
        failed: List[str] = []
        for category, count in counts.items():
            try:
                self.push_category(repository, category, count)
            except Exception as exc:
                print(f"[warn] could not push {category}, {repository} to pushgateway: {exc}")
                failed.append(category)
        return failed


__all__ = ["PushgatewayPublisher", "METRIC_NAME", "METRIC_HELP", "PUSH_JOB", "PUSH_TIMEOUT"]
