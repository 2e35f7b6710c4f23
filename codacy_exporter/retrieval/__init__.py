"""Codacy API access: repository listing and per-category issue counts."""

from .collectors import get_category_counts, list_repositories
from .config import CodacyContext
from .http_client import CodacyAPIError

__all__ = ["CodacyAPIError", "CodacyContext", "get_category_counts", "list_repositories"]
