"""
Marker-based classification of summary notes.

A note is an AI summary note iff its text contains the configured marker as
a substring. Partial matches count: provenance metadata surrounds the marker
in the note body.
"""

from __future__ import annotations

from paperless_summarizer.logging_config import info
from paperless_summarizer.paperless.models import Document, Note, SearchPage
from paperless_summarizer.paperless.page_scanner import PageScanner


def has_summary_note(document: Document, marker: str) -> bool:
    """True if any note of the document contains the marker."""
    return any(note.contains_marker(marker) for note in document.notes or [])


def marked_notes(notes: list[Note], marker: str) -> list[Note]:
    """Notes whose text contains the marker, in their original order."""
    return [note for note in notes if note.contains_marker(marker)]


def find_unsummarized_document_ids(scanner: PageScanner, marker: str) -> list[int]:
    """
    Collect ids of documents that carry no summary note.

    Documents without an id are skipped.

    Args:
        scanner: Page scanner over the document listing
        marker: Summary marker substring

    Returns:
        list[int]: Unsummarized ids in crawl order (newest first)

    Raises:
        Any page fetch error; no partial result is returned.
    """
    unsummarized_ids: list[int] = []

    def collect(page: SearchPage) -> None:
        for document in page.results:
            if document.id is None:
                continue
            if not has_summary_note(document, marker):
                unsummarized_ids.append(document.id)
        info(f"[SCAN] Page processed... {len(unsummarized_ids)} missing summaries found until now.")

    scanner.scan(collect)
    return unsummarized_ids
