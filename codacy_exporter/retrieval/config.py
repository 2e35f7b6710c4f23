"""Central configuration constants for talking to the Codacy API."""

from __future__ import annotations

import os
from dataclasses import dataclass

USER_AGENT = "codacy-pushgateway-exporter/0.1"
BASE_URL = os.getenv("CODACY_BASE_URL", "https://app.codacy.com/api/v3")
DEFAULT_PROVIDER = "gh"
PER_PAGE = 100
REQUEST_TIMEOUT = int(os.getenv("CODACY_REQUEST_TIMEOUT", "10"))
MAX_PAGES_REPOS = int(os.getenv("MAX_PAGES_REPOS", "0"))  # 0 = no cap


@dataclass(frozen=True)
class CodacyContext:
    """Read-only credentials and addressing shared by every job of a run."""

    api_token: str
    organization: str
    provider: str = DEFAULT_PROVIDER
    base_url: str = BASE_URL
    timeout: float = REQUEST_TIMEOUT

    @property
    def organization_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/analysis/organizations/{self.provider}/{self.organization}"


__all__ = [
    "USER_AGENT",
    "BASE_URL",
    "DEFAULT_PROVIDER",
    "PER_PAGE",
    "REQUEST_TIMEOUT",
    "MAX_PAGES_REPOS",
    "CodacyContext",
]
