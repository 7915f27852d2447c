"""Client, data types and pagination for the Paperless document service."""

from .client import PaperlessClient, init_headers
from .models import Document, Note, SearchPage
from .page_scanner import PageScanner

__all__ = [
    'PaperlessClient',
    'init_headers',
    'Document',
    'Note',
    'SearchPage',
    'PageScanner',
]
