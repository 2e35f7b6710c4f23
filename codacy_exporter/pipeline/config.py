"""Configuration helpers for the Codacy-to-pushgateway run."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..retrieval.config import DEFAULT_PROVIDER, CodacyContext
from ..secrets import load_local_secrets, secret_section

DEFAULT_PUSHGATEWAY = "localhost:9091"
DEFAULT_WORKERS = 8


@dataclass(frozen=True)
class PipelineSettings:
    """Resolved runtime settings for one export run."""

    api_token: Optional[str]
    provider: str
    organization: Optional[str]
    pushgateway_url: str
    workers: int
    dry_run: bool
    repositories: Tuple[str, ...] = ()

    def context(self) -> CodacyContext:
        if not self.api_token or not self.organization:
            raise ValueError("api token and organization are required")
        return CodacyContext(
            api_token=self.api_token,
            organization=self.organization,
            provider=self.provider,
        )


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the export entry point."""

    parser = argparse.ArgumentParser(
        description="Push Codacy issue counts per repository and category to a Prometheus pushgateway.",
    )
    parser.add_argument("repositories", nargs="*", help="only process these repositories")
    parser.add_argument("--api-token")
    parser.add_argument("--provider")
    parser.add_argument("--organization")
    parser.add_argument("--pushgateway")
    parser.add_argument("--workers", type=int)
    parser.add_argument("--dry-run", action="store_true")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    parser = build_arg_parser()
    return parser.parse_args(argv)


def _first(*values: Any) -> Any:
    for value in values:
        if value not in (None, ""):
            return value
    return None


def _worker_count(value: Any) -> int:
    try:
        workers = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"worker pool size must be an integer, got {value!r}") from None
    if workers < 1:
        raise ValueError(f"worker pool size must be >= 1, got {workers}")
    return workers


def resolve_settings(
    args: Optional[argparse.Namespace] = None,
    secrets: Optional[Dict[str, Any]] = None,
) -> PipelineSettings:
    """Merge CLI flags, environment variables and the local secrets file, in that order.

    Raises ValueError for an unusable worker pool size.
    """

    args = args or parse_args([])
    secrets = load_local_secrets() if secrets is None else secrets
    codacy = secret_section(secrets, "codacy")
    pushgateway = secret_section(secrets, "pushgateway")

    workers = _first(args.workers, os.getenv("CODACY_WORKERS"), DEFAULT_WORKERS)
    return PipelineSettings(
        api_token=_first(args.api_token, os.getenv("CODACY_API_TOKEN"), codacy.get("api_token")),
        provider=_first(args.provider, os.getenv("CODACY_PROVIDER"), codacy.get("provider"), DEFAULT_PROVIDER),
        organization=_first(args.organization, os.getenv("CODACY_ORGANIZATION"), codacy.get("organization")),
        pushgateway_url=_first(args.pushgateway, os.getenv("PUSHGATEWAY_URL"), pushgateway.get("url"), DEFAULT_PUSHGATEWAY),
        workers=_worker_count(workers),
        dry_run=bool(args.dry_run),
        repositories=tuple(repo.strip() for repo in args.repositories if repo.strip()),
    )


__all__ = [
    "DEFAULT_PUSHGATEWAY",
    "DEFAULT_WORKERS",
    "PipelineSettings",
    "build_arg_parser",
    "parse_args",
    "resolve_settings",
]
