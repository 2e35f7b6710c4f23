"""Codacy collectors: list an organization's repositories and read their issue categories."""

from __future__ import annotations

from typing import Any, Dict, List
from urllib.parse import quote

from .config import MAX_PAGES_REPOS, PER_PAGE, CodacyContext
from .http_client import CodacyAPIError, get_json


def _data_entries(body: Dict[str, Any], url: str) -> List[Dict[str, Any]]:
    data = body.get("data")
    if data is None:
        return []
    if not isinstance(data, list):
        raise CodacyAPIError(f"'data' is not a list in response from {url}", url)
    for entry in data:
        if not isinstance(entry, dict):
            raise CodacyAPIError(f"unexpected entry {entry!r} in response from {url}", url)
    return data


def _repository_name(entry: Dict[str, Any], url: str) -> str:
    repository = entry.get("repository")
    name = repository.get("name") if isinstance(repository, dict) else None
    if not isinstance(name, str) or not name:
        raise CodacyAPIError(f"repository entry without a name: {entry!r}", url)
    return name


def list_repositories(context: CodacyContext, *, max_pages: int = MAX_PAGES_REPOS) -> List[str]:
    """Return repository names for the organization, following the pagination cursor."""
    url = f"{context.organization_url}/repositories"
    names: List[str] = []
    cursor = None
    page = 1
    while True:
        if max_pages and page > max_pages:
            break
        params: Dict[str, Any] = {"limit": PER_PAGE}
        if cursor:
            params["cursor"] = cursor
        body = get_json(context, url, params=params)

        names.extend(_repository_name(entry, url) for entry in _data_entries(body, url))

        pagination = body.get("pagination") or {}
        if not isinstance(pagination, dict):
            raise CodacyAPIError(f"'pagination' is not an object in response from {url}", url)
        cursor = pagination.get("cursor")
        if cursor is not None and not isinstance(cursor, str):
            raise CodacyAPIError(f"invalid pagination cursor {cursor!r} from {url}", url)
        if not cursor:
            break
        page += 1
    return names


def get_category_counts(context: CodacyContext, repository: str) -> Dict[str, int]:
    """Return `{categoryType: totalResults}` for one repository.

    Raises on any transport, status or decode problem so that callers never
    see a partially parsed mapping.
    """
    url = f"{context.organization_url}/repositories/{quote(repository, safe='')}/category-overviews"
    body = get_json(context, url)

    counts: Dict[str, int] = {}
    for entry in _data_entries(body, url):
        category_obj = entry.get("category")
        category = category_obj.get("categoryType") if isinstance(category_obj, dict) else None
        total = entry.get("totalResults")
        if not isinstance(category, str) or not category:
            raise CodacyAPIError(f"category entry without categoryType for {repository}", url)
        if isinstance(total, bool) or not isinstance(total, int) or total < 0:
            raise CodacyAPIError(f"invalid totalResults {total!r} for {repository}/{category}", url)
        counts[category] = total
    return counts


__all__ = ["list_repositories", "get_category_counts"]
