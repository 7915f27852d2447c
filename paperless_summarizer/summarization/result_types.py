"""
Result types for the summarization and cleanup runs.

Simple dataclasses reporting what a run did, so entry points can log a
closing line and set an exit status.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SummaryRunResult:
    """
    Outcome of one summarization batch.

    Attributes:
        processed_ids: Documents that received a summary note, in order.
        failed_ids: Documents whose processing raised, mapped to the error text.
        saved_files: Local summary files written (when enabled).
    """
    processed_ids: list[int] = field(default_factory=list)
    failed_ids: dict[int, str] = field(default_factory=dict)
    saved_files: list[str] = field(default_factory=list)

    @property
    def documents_processed(self) -> int:
        return len(self.processed_ids)

    @property
    def documents_failed(self) -> int:
        return len(self.failed_ids)


@dataclass
class CleanupResult:
    """
    Outcome of a cleanup run.

    Attributes:
        deleted_notes: (document_id, note_id) pairs deleted successfully.
        failed_notes: (document_id, note_id) pairs whose deletion raised.
        skipped_documents: Documents skipped for malformed data.
        pages_scanned: Listing pages visited (all-mode only).
        abort_reason: Why an all-mode crawl stopped before the last page.
    """
    deleted_notes: list[tuple[int, int]] = field(default_factory=list)
    failed_notes: list[tuple[int, int]] = field(default_factory=list)
    skipped_documents: int = 0
    pages_scanned: int = 0
    abort_reason: str | None = None

    @property
    def completed(self) -> bool:
        """True unless the crawl was cut short."""
        return self.abort_reason is None
