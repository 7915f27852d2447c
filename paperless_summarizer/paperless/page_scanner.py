"""
Page Scanner - follows the paginated document listing end to end.

One pagination loop serves both workflows. The caller supplies an on_page
callback that classifies the documents of each page:

    - summarization: collect ids of documents without a summary note
    - cleanup: delete the summary notes found on the page

The crawl starts at <base>/documents/?ordering=-id and follows "next" until
it is absent. A "next" that does not start with the base URL is never
followed; the crawl stops and the offending URL is logged.
"""

from __future__ import annotations

from typing import Callable

import requests

from paperless_summarizer.config import CLEANUP_MAX_PAGE_TIMEOUTS
from paperless_summarizer.logging_config import debug_log, error, info, warning

from .client import PaperlessClient
from .models import SearchPage


class PageScanner:
    """
    Crawls every listing page and hands each one to a callback.

    Attributes:
        client: Document service client.
        base_url: Prefix every followed "next" URL must start with.
        request_timeout: Deadline in seconds for each page request (None = none).
        tolerate_timeouts: If True, a timed-out page request is logged and
            abandoned instead of aborting the crawl.
        max_page_timeouts: Consecutive timeouts on one page before the crawl
            gives up (only with tolerate_timeouts).
        stop_reason: Why the last scan ended before the final page, or None
            if it reached the end.
    """

    def __init__(
        self,
        client: PaperlessClient,
        request_timeout: float | None = None,
        tolerate_timeouts: bool = False,
        max_page_timeouts: int = CLEANUP_MAX_PAGE_TIMEOUTS,
    ):
        self.client = client
        self.base_url = client.base_url
        self.request_timeout = request_timeout
        self.tolerate_timeouts = tolerate_timeouts
        self.max_page_timeouts = max_page_timeouts
        self.stop_reason: str | None = None

    def is_trusted_next(self, next_url: str) -> bool:
        """Simple prefix containment check against the base URL."""
        return next_url.startswith(self.base_url)

    def scan(self, on_page: Callable[[SearchPage], None]) -> int:
        """
        Visit every page of the listing.

        Args:
            on_page: Called once per page whose results are well-formed.

        Returns:
            int: Number of pages fetched successfully

        Raises:
            RequestError: If a page request returns a non-success status
            MalformedDataError: If a page body cannot be parsed
            requests.exceptions.RequestException: On network failure (and on
                timeout unless tolerate_timeouts is set)
        """
        next_page: str | None = self.client.documents_seed_url()
        self.stop_reason = None
        pages = 0
        timeouts = 0

        while next_page:
            try:
                page = self.client.list_documents_page(next_page, timeout=self.request_timeout)
            except requests.exceptions.Timeout:
                if not self.tolerate_timeouts:
                    raise
                timeouts += 1
                warning(f"[SCAN] Request timeout on {next_page} ({timeouts}/{self.max_page_timeouts})")
                if timeouts >= self.max_page_timeouts:
                    self.stop_reason = f"Giving up after {timeouts} timeouts on {next_page}"
                    error(f"[SCAN] {self.stop_reason}")
                    break
                continue

            timeouts = 0
            pages += 1

            if page.results is None:
                error(f"[SCAN] Invalid results format for page {next_page}. Skipping page.")
            else:
                on_page(page)

            if page.next and not self.is_trusted_next(page.next):
                self.stop_reason = f"Received invalid next page URL: {page.next}"
                error(f"[SCAN] {self.stop_reason}")
                break

            next_page = page.next
            if next_page:
                debug_log(f"[SCAN] Page {pages} processed. Continue with next page on {next_page}")

        info(f"[SCAN] Crawl finished after {pages} page(s)")
        return pages
