"""Single-attempt HTTP helpers for the Codacy REST API."""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from .config import USER_AGENT, CodacyContext


class CodacyAPIError(RuntimeError):
    """Raised when Codacy answers with a non-2xx status or an undecodable body."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def codacy_headers(context: CodacyContext) -> Dict[str, str]:
    """Build request headers carrying the API token for `context`."""
    return {
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
        "api-token": context.api_token,
    }


def log_http_error(resp: requests.Response, url: str) -> None:
    """Print a short, human-readable message when Codacy returns an error."""
    try:
        body = resp.json()
    except ValueError:
        body = {"text": (resp.text or "")[:300]}
    if not isinstance(body, dict):
        body = {"text": str(body)[:300]}
    msg = body.get("message") or body.get("error") or body.get("text")
    print(f"[error] HTTP {resp.status_code} for {url}\n  -> {msg}")


def get_json(context: CodacyContext, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """GET `url` once and return the decoded JSON object.

    Transport failures and timeouts surface as `requests.RequestException`;
    non-2xx answers and bodies that are not a JSON object raise `CodacyAPIError`.
    No retry is attempted.
    """
    resp = requests.get(url, headers=codacy_headers(context), params=params, timeout=context.timeout)
    if not 200 <= resp.status_code < 300:
        log_http_error(resp, url)
        raise CodacyAPIError(f"HTTP {resp.status_code} for {url}", url, resp.status_code)

    try:
        body = resp.json()
    except ValueError as exc:
        raise CodacyAPIError(f"invalid JSON from {url}: {exc}", url, resp.status_code) from exc
    if not isinstance(body, dict):
        raise CodacyAPIError(f"unexpected payload type {type(body).__name__} from {url}", url, resp.status_code)
    return body


__all__ = ["CodacyAPIError", "codacy_headers", "log_http_error", "get_json"]
