"""
Summarization Package for Paperless Summarizer.

    from paperless_summarizer.summarization import (
        SummaryWriter, compose_note_body,
        find_unsummarized_document_ids, has_summary_note, marked_notes,
        SummaryRunResult, CleanupResult,
    )

Flow:
    PageScanner -> find_unsummarized_document_ids -> SummaryWriter
                                                      (fetch -> Ollama -> note -> file)
"""

from .markers import find_unsummarized_document_ids, has_summary_note, marked_notes
from .result_types import CleanupResult, SummaryRunResult
from .summary_writer import SummaryWriter, compose_note_body

__all__ = [
    'SummaryWriter',
    'compose_note_body',
    'find_unsummarized_document_ids',
    'has_summary_note',
    'marked_notes',
    'SummaryRunResult',
    'CleanupResult',
]
