"""
Cleanup Orchestrator - removes previously written summary notes.

Two modes, selected by a single argument:

    all       Crawl every listing page and delete every note containing the
              marker. The deletions of one page run concurrently and all of
              them settle before the next page is requested. Each listing
              request must finish within 30 seconds; a timeout is logged
              and the page requested again. A crawl that stops early is
              reported as incomplete.
    <id>      Fetch the notes of one document and delete its marker notes
              one at a time.

A failed deletion is logged and never blocks the other deletions.
"""

from __future__ import annotations

import threading
from typing import Callable

import requests

from paperless_summarizer.config import (
    CLEANUP_ALL_TOKEN,
    CLEANUP_MAX_WORKERS,
    CLEANUP_REQUEST_TIMEOUT_SECONDS,
)
from paperless_summarizer.exceptions import MalformedDataError, RequestError, UsageError
from paperless_summarizer.logging_config import error, info, warning
from paperless_summarizer.paperless.client import PaperlessClient
from paperless_summarizer.paperless.models import SearchPage
from paperless_summarizer.paperless.page_scanner import PageScanner
from paperless_summarizer.parallel import (
    ExecutorStrategy,
    ParallelTaskRunner,
    SequentialStrategy,
    ThreadPoolStrategy,
)
from paperless_summarizer.summarization.markers import marked_notes
from paperless_summarizer.summarization.result_types import CleanupResult

USAGE = f"Usage: paperless-cleanup-notes <{CLEANUP_ALL_TOKEN}|number>"


def parse_cleanup_target(argument: str) -> str | int:
    """
    Validate the cleanup argument.

    Args:
        argument: Literal "all" or a positive decimal document id

    Returns:
        "all" or the document id as int

    Raises:
        UsageError: For any other value
    """
    if argument == CLEANUP_ALL_TOKEN:
        return CLEANUP_ALL_TOKEN
    if argument.isascii() and argument.isdigit() and int(argument) > 0:
        return int(argument)
    raise UsageError(
        f'Invalid command {argument!r}. Use "{CLEANUP_ALL_TOKEN}" or a positive number as document ID.'
    )


class CleanupOrchestrator:
    """
    Deletes AI summary notes from the document service.

    Attributes:
        client: Document service client.
        marker: Summary marker substring.
        max_workers: Concurrent deletions per page in all-mode.
        request_timeout: Timeout for each listing request in all-mode.
    """

    def __init__(
        self,
        client: PaperlessClient,
        marker: str,
        max_workers: int = CLEANUP_MAX_WORKERS,
        request_timeout: float = CLEANUP_REQUEST_TIMEOUT_SECONDS,
    ):
        if not marker:
            raise ValueError("marker must not be empty")
        self.client = client
        self.marker = marker
        self.max_workers = max_workers
        self.request_timeout = request_timeout

    def run(self, target: str | int) -> CleanupResult:
        """Dispatch to all-mode or single-document mode."""
        if target == CLEANUP_ALL_TOKEN:
            return self.delete_all_summaries()
        return self.delete_ai_notes_at_document(target)

    def _delete_notes(
        self,
        pairs: list[tuple[int, int]],
        strategy: ExecutorStrategy,
        result: CleanupResult,
        client_for_thread: Callable[[], PaperlessClient],
    ) -> None:
        """Delete (document_id, note_id) pairs and wait for every outcome."""
        if not pairs:
            return

        def delete(pair: tuple[int, int]) -> int:
            document_id, note_id = pair
            info(f"[CLEANUP] Deleting note with ID {note_id} for document with ID {document_id}...")
            return client_for_thread().delete_note(document_id, note_id)

        by_id = {f"{d}:{n}": (d, n) for d, n in pairs}

        def deleted(task_id: str, status: int) -> None:
            result.deleted_notes.append(by_id[task_id])

        def failed(task_id: str, exc: Exception) -> None:
            document_id, note_id = by_id[task_id]
            error(f"[CLEANUP] Error deleting note with ID {note_id} (document {document_id}): {exc}")
            result.failed_notes.append((document_id, note_id))

        runner = ParallelTaskRunner(strategy=strategy, on_task_complete=deleted, on_task_failed=failed)
        runner.run(delete, list(by_id.items()))

    def delete_all_summaries(self) -> CleanupResult:
        """
        Crawl all pages and delete every marker note.

        Each deletion worker thread talks to the service through its own
        clone of the client. If the crawl stops before the last page, the
        result carries the reason in abort_reason.

        Returns:
            CleanupResult: Counts of deleted and failed notes

        Raises:
            RequestError: If a listing request returns a non-success status
            requests.exceptions.RequestException: On non-timeout network errors
        """
        result = CleanupResult()
        scanner = PageScanner(
            self.client,
            request_timeout=self.request_timeout,
            tolerate_timeouts=True,
        )
        worker_state = threading.local()
        worker_clients: list[PaperlessClient] = []
        clients_lock = threading.Lock()

        def client_for_thread() -> PaperlessClient:
            client = getattr(worker_state, 'client', None)
            if client is None:
                client = worker_state.client = self.client.clone()
                with clients_lock:
                    worker_clients.append(client)
            return client

        try:
            with ThreadPoolStrategy(max_workers=self.max_workers) as strategy:

                def delete_page_summaries(page: SearchPage) -> None:
                    result.pages_scanned += 1
                    pairs: list[tuple[int, int]] = []
                    for document in page.results:
                        if document.id is None or document.notes is None:
                            error(f"[CLEANUP] Skipping invalid document: {document}")
                            result.skipped_documents += 1
                            continue
                        pairs.extend(
                            (document.id, note.id)
                            for note in marked_notes(document.notes, self.marker)
                            if note.id is not None
                        )
                    self._delete_notes(pairs, strategy, result, client_for_thread)
                    info(f"[CLEANUP] Page processed... {len(pairs)} summary note(s) handled on this page.")

                try:
                    scanner.scan(delete_page_summaries)
                    result.abort_reason = scanner.stop_reason
                except MalformedDataError as e:
                    # No safe way to find the next page without a parsed body
                    error(f"[CLEANUP] {e}")
                    result.abort_reason = str(e)
        finally:
            for client in worker_clients:
                client.close()

        info(f"[CLEANUP] Deleted {len(result.deleted_notes)} note(s), "
             f"{len(result.failed_notes)} failed, {result.skipped_documents} document(s) skipped")
        if not result.completed:
            warning(f"[CLEANUP] Crawl incomplete, summary notes may remain: {result.abort_reason}")
        return result

    def delete_ai_notes_at_document(self, document_id: int) -> CleanupResult:
        """
        Delete the marker notes of one document.

        Args:
            document_id: Document to clean

        Returns:
            CleanupResult: Counts of deleted and failed notes

        Raises:
            MalformedDataError: If the notes endpoint returns something other
                than a list
        """
        result = CleanupResult()
        info(f"[CLEANUP] Checking for AI-Notes at document with ID {document_id}")

        try:
            notes = self.client.fetch_notes(document_id)
        except (RequestError, requests.exceptions.RequestException) as e:
            error(f"[CLEANUP] Failed to fetch notes for document {document_id}: {e}")
            return result

        info(f"[CLEANUP] Found {len(notes)} notes at document with ID {document_id}")
        pairs = [
            (document_id, note.id)
            for note in marked_notes(notes, self.marker)
            if note.id is not None
        ]
        self._delete_notes(pairs, SequentialStrategy(), result, lambda: self.client)
        return result
