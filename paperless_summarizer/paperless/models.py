"""
Data types for the Paperless document service.

These are lenient views over the JSON the service returns. Parsing never
rejects a document for a missing id or malformed notes; callers decide
whether such a document is skipped. Only a structurally unusable response
raises MalformedDataError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _optional_int(value: Any) -> int | None:
    # bool is an int subclass but never a valid id
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


@dataclass
class Note:
    """
    A note attached to a document.

    Attributes:
        id: Note id, unique per document.
        note: Free text body (may be absent).
        created: Creation timestamp as sent by the service.
        document: Back-reference to the owning document id.
        user: Back-reference to the author id.
    """
    id: int | None
    note: str | None = None
    created: str | None = None
    document: int | None = None
    user: Any = None
    deleted_at: str | None = None
    restored_at: str | None = None
    transaction_id: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Note:
        text = data.get('note')
        return cls(
            id=_optional_int(data.get('id')),
            note=text if isinstance(text, str) else None,
            created=data.get('created'),
            document=_optional_int(data.get('document')),
            user=data.get('user'),
            deleted_at=data.get('deleted_at'),
            restored_at=data.get('restored_at'),
            transaction_id=_optional_int(data.get('transaction_id')),
        )

    def contains_marker(self, marker: str) -> bool:
        """True if the note text contains the marker anywhere."""
        return self.note is not None and marker in self.note


@dataclass
class Document:
    """
    A document as returned by the listing or detail endpoints.

    Attributes:
        id: Document id (None when the service sent malformed data).
        content: Full text body; often omitted on list views.
        title: Document title.
        created: Creation timestamp.
        notes: Notes in service order, or None when absent or not a list.
    """
    id: int | None
    content: str | None = None
    title: str | None = None
    created: str | None = None
    notes: list[Note] | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Document:
        raw_notes = data.get('notes')
        notes = None
        if isinstance(raw_notes, list):
            notes = [Note.from_dict(n) for n in raw_notes if isinstance(n, dict)]
        content = data.get('content')
        return cls(
            id=_optional_int(data.get('id')),
            content=content if isinstance(content, str) else None,
            title=data.get('title'),
            created=data.get('created'),
            notes=notes,
        )


@dataclass
class SearchPage:
    """
    One page of the paginated document listing.

    Attributes:
        results: Documents on this page, or None when the field is missing
            or not a list.
        next: Absolute URL of the next page, None on the last page.
        previous: Absolute URL of the previous page.
        count: Total number of documents across all pages.
    """
    results: list[Document] | None
    next: str | None = None
    previous: str | None = None
    count: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> SearchPage:
        raw_results = data.get('results')
        results = None
        if isinstance(raw_results, list):
            results = [Document.from_dict(d) if isinstance(d, dict) else Document(id=None)
                       for d in raw_results]
        next_url = data.get('next')
        return cls(
            results=results,
            next=str(next_url) if next_url else None,
            previous=data.get('previous'),
            count=_optional_int(data.get('count')),
        )
