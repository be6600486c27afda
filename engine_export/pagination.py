"""
Paged result collection.

The API returns at most 20 results per page, so listing endpoints are read
in two phases: a probe request for meta.page.total_pages, then one request
per page (pages are 1-indexed).
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from engine_export.client import EngineAPIClient
from engine_export.exceptions import MalformedResponseError
from engine_export.progress import NullProgress, ProgressReporter

logger = logging.getLogger(__name__)

PAGE_SIZE = 20


def page_body(current: int, size: int = PAGE_SIZE) -> dict:
    return {"page": {"size": size, "current": current}}


def total_pages(endpoint: str, response: Any) -> int:
    """Read meta.page.total_pages from a listing response."""
    try:
        pages = response["meta"]["page"]["total_pages"]
    except (KeyError, TypeError):
        raise MalformedResponseError(endpoint, "missing meta.page.total_pages")
    if not isinstance(pages, int) or isinstance(pages, bool) or pages < 0:
        raise MalformedResponseError(endpoint, f"invalid total_pages {pages!r}")
    return pages


def page_results(endpoint: str, response: Any) -> List[Any]:
    results = response.get("results") if isinstance(response, dict) else None
    if not isinstance(results, list):
        raise MalformedResponseError(endpoint, "missing results list")
    return results


class Paginator:
    """Collects every result of a paged listing endpoint."""

    def __init__(
        self,
        client: EngineAPIClient,
        progress: Optional[ProgressReporter] = None,
        page_size: int = PAGE_SIZE,
    ):
        self.client = client
        self.progress = progress or NullProgress()
        self.page_size = page_size

    def paginate(self, endpoint: str, label: Optional[str] = None) -> List[Any]:
        """
        Fetch all results for an endpoint.

        Issues exactly 1 + total_pages requests. Results keep page order,
        then in-page order. Any failing request aborts the whole listing.
        """
        probe = self.client.get(endpoint)
        pages = total_pages(endpoint, probe)
        logger.debug(f"{endpoint}: {pages} page(s)")

        items: List[Any] = []
        self.progress.start(label or f"Getting {endpoint}", pages)
        try:
            for page in range(1, pages + 1):
                response = self.client.get(endpoint, page_body(page, self.page_size))
                items.extend(page_results(endpoint, response))
                self.progress.advance()
        finally:
            self.progress.finish()

        logger.info(f"Fetched {len(items)} {endpoint} result(s) from {pages} page(s)")
        return items
