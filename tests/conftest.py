"""
Shared fixtures for the Paperless Summarizer tests.

FakePaperlessClient stands in for PaperlessClient: it serves listing pages
from an in-memory document store, records every request, and applies note
deletions to the store so repeated runs see the result of earlier ones.
"""

import sys
import threading
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from paperless_summarizer.exceptions import RequestError
from paperless_summarizer.paperless.models import Document, Note, SearchPage

BASE_URL = "http://paperless.local/api"


class FakePaperlessClient:
    """In-memory document service."""

    def __init__(self, documents: dict, page_layout: list[list[int]], base_url: str = BASE_URL):
        """
        Args:
            documents: document id -> {"content": str, "notes": [note dicts]}
            page_layout: document ids per page, in crawl order
        """
        self.base_url = base_url
        self.documents = documents
        self.page_layout = page_layout
        self.requested_urls: list[str] = []
        self.request_timeouts: list = []
        self.deleted: list[tuple[int, int]] = []
        self.posted: list[tuple[int, str]] = []
        self.fetched_documents: list[int] = []
        self.failing_deletes: set[tuple[int, int]] = set()
        self.next_overrides: dict[int, str] = {}
        self.clones = 0
        self._lock = threading.Lock()

    def clone(self) -> "FakePaperlessClient":
        with self._lock:
            self.clones += 1
        return self

    def close(self) -> None:
        pass

    def documents_seed_url(self) -> str:
        return f"{self.base_url}/documents/?ordering=-id"

    def _page_url(self, index: int) -> str:
        if index == 0:
            return self.documents_seed_url()
        return f"{self.base_url}/documents/?ordering=-id&page={index + 1}"

    def list_documents_page(self, url: str, timeout=None) -> SearchPage:
        self.requested_urls.append(url)
        self.request_timeouts.append(timeout)
        index = [self._page_url(i) for i in range(len(self.page_layout))].index(url)
        results = []
        for document_id in self.page_layout[index]:
            data = self.documents[document_id]
            results.append({
                'id': data.get('id', document_id),
                'title': f"Document {document_id}",
                'notes': data.get('notes', []),
            })
        next_url = self.next_overrides.get(index)
        if next_url is None and index + 1 < len(self.page_layout):
            next_url = self._page_url(index + 1)
        return SearchPage.from_dict({
            'count': len(self.documents),
            'next': next_url,
            'previous': None,
            'results': results,
        })

    def fetch_document(self, document_id: int) -> Document:
        self.fetched_documents.append(document_id)
        data = self.documents[document_id]
        return Document.from_dict({'id': document_id, 'content': data.get('content'),
                                   'notes': data.get('notes', [])})

    def fetch_notes(self, document_id: int) -> list[Note]:
        return [Note.from_dict(n) for n in self.documents[document_id].get('notes', [])]

    def post_note(self, document_id: int, text: str) -> dict:
        self.posted.append((document_id, text))
        return {'id': document_id}

    def delete_note(self, document_id: int, note_id: int) -> int:
        with self._lock:
            if (document_id, note_id) in self.failing_deletes:
                raise RequestError('note deletion', 500, 'Internal Server Error',
                                   f"{self.base_url}/documents/{document_id}/notes/?id={note_id}")
            self.deleted.append((document_id, note_id))
            notes = self.documents[document_id]['notes']
            self.documents[document_id]['notes'] = [n for n in notes if n['id'] != note_id]
        return 200


@pytest.fixture
def three_page_client():
    """Three pages; documents 9 and 5 already carry a summary note."""
    documents = {
        9: {'content': 'nine', 'notes': [{'id': 1, 'note': 'Sum\n\nModel-Configuration:{}\nAI_SUMMARY'}]},
        8: {'content': 'eight', 'notes': []},
        7: {'content': 'seven', 'notes': [{'id': 2, 'note': 'call the bank'}]},
        6: {'content': 'six', 'notes': [{'id': 3, 'note': 'unrelated'}, {'id': 4, 'note': 'also unrelated'}]},
        5: {'content': 'five', 'notes': [{'id': 5, 'note': 'x'}, {'id': 6, 'note': 'prefixAI_SUMMARYsuffix'}]},
        4: {'content': 'four', 'notes': [{'id': 7}]},
    }
    return FakePaperlessClient(documents, [[9, 8], [7, 6], [5, 4]])
