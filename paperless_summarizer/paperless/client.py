"""
HTTP client for the Paperless document service.

Wraps the remote operations the summarizer and cleanup workflows need:
listing pages, fetching a document or its notes, posting and deleting notes.
Every request carries "Authorization: Token <apiKey>"; write requests also
send "Content-Type: application/json".

No retries are attempted. A non-success status raises RequestError with the
upstream status text verbatim; network failures propagate as requests
exceptions. The caller decides whether to continue or abort.
"""

from __future__ import annotations

import socket
import threading
import time

import requests
from urllib3.exceptions import ReadTimeoutError

from paperless_summarizer.config import AUTH_HEADER_SCHEME, DOCUMENTS_ORDERING
from paperless_summarizer.exceptions import MalformedDataError, RequestError
from paperless_summarizer.logging_config import debug_log

from .models import Document, Note, SearchPage


def init_headers(api_key: str) -> dict[str, str]:
    """Build the authorization header for the document service."""
    return {'Authorization': f"{AUTH_HEADER_SCHEME} {api_key}"}


def _abort_response(response: requests.Response) -> None:
    """Shut down the socket under a streamed response so a blocked read returns."""
    connection = getattr(response.raw, 'connection', None)
    sock = getattr(connection, 'sock', None)
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError as e:
        debug_log(f"[PAPERLESS] Socket already closed while aborting request: {e}")


def _is_read_timeout(exc: requests.exceptions.RequestException) -> bool:
    # requests wraps a body read timeout in ConnectionError, not Timeout
    reason = exc.args[0] if exc.args else None
    return isinstance(reason, ReadTimeoutError)


def get_with_deadline(session: requests.Session, url: str, timeout: float) -> requests.Response:
    """
    GET a URL and read its whole body within `timeout` seconds.

    The timeout passed to requests only bounds each socket operation. Here
    the body is streamed while a timer armed with the remaining time shuts
    the connection down, so a stalled or trickling response is cut off at
    the deadline.

    Returns:
        requests.Response: Response with its content already loaded

    Raises:
        requests.exceptions.Timeout: If the deadline passes or a read times out
    """
    started = time.monotonic()
    response = session.get(url, timeout=timeout, stream=True)
    if not response.ok:
        response.close()
        return response

    expired = threading.Event()

    def expire():
        expired.set()
        _abort_response(response)

    remaining = max(timeout - (time.monotonic() - started), 0)
    timer = threading.Timer(remaining, expire)
    timer.daemon = True
    timer.start()
    try:
        response.content
    except requests.exceptions.RequestException as e:
        if expired.is_set() or _is_read_timeout(e):
            response.close()
            raise requests.exceptions.Timeout(f"Request exceeded {timeout}s: {url}") from e
        raise
    finally:
        timer.cancel()

    if expired.is_set():
        response.close()
        raise requests.exceptions.Timeout(f"Request exceeded {timeout}s: {url}")
    return response


class PaperlessClient:
    """
    Client for the document service REST API.

    Attributes:
        base_url: API root without trailing slash (e.g. https://host/api).
        session: requests.Session holding the auth header.

    A client and its session belong to one thread. Concurrent workers use
    their own copy from clone().
    """

    def __init__(self, base_url: str, api_key: str, session: requests.Session | None = None):
        """
        Initialize the client.

        Args:
            base_url: API root; a trailing slash is removed.
            api_key: Static API token.
            session: Optional pre-built session (mainly for tests).
        """
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self._api_key = api_key
        self.session.headers.update(init_headers(api_key))

    def clone(self) -> PaperlessClient:
        """New client for the same service with its own session."""
        return PaperlessClient(self.base_url, self._api_key)

    def close(self) -> None:
        self.session.close()

    def documents_seed_url(self) -> str:
        """First listing page, newest documents first."""
        return f"{self.base_url}/documents/?ordering={DOCUMENTS_ORDERING}"

    def document_url(self, document_id: int) -> str:
        return f"{self.base_url}/documents/{document_id}/"

    def notes_url(self, document_id: int) -> str:
        return f"{self.base_url}/documents/{document_id}/notes/"

    def _check(self, response: requests.Response, action: str) -> requests.Response:
        if not response.ok:
            raise RequestError(action, response.status_code, response.reason, response.url)
        return response

    @staticmethod
    def _json(response: requests.Response, action: str):
        try:
            return response.json()
        except ValueError as e:
            raise MalformedDataError(
                f"Failed to parse JSON response of {action} request ({response.url}): {e}"
            ) from e

    def fetch_document(self, document_id: int) -> Document:
        """
        Fetch a single document including its content.

        Raises:
            RequestError: If the service returns a non-success status
            MalformedDataError: If the body is not a JSON object
        """
        url = self.document_url(document_id)
        debug_log(f"[PAPERLESS] GET {url}")
        response = self._check(self.session.get(url), 'document fetch')
        data = self._json(response, 'document fetch')
        if not isinstance(data, dict):
            raise MalformedDataError(f"Unexpected data format for document ID {document_id}")
        return Document.from_dict(data)

    def fetch_notes(self, document_id: int) -> list[Note]:
        """
        Fetch the notes sub-resource of a document.

        Raises:
            RequestError: If the service returns a non-success status
            MalformedDataError: If the body is not a list of notes
        """
        url = self.notes_url(document_id)
        debug_log(f"[PAPERLESS] GET {url}")
        response = self._check(self.session.get(url), 'notes fetch')
        data = self._json(response, 'notes fetch')
        if not isinstance(data, list):
            raise MalformedDataError(f"Unexpected data format for notes at document ID {document_id}")
        return [Note.from_dict(n) for n in data if isinstance(n, dict)]

    def list_documents_page(self, url: str, timeout: float | None = None) -> SearchPage:
        """
        Fetch one listing page (the seed URL or a previous page's next).

        Args:
            url: Absolute listing URL
            timeout: Optional deadline in seconds for the whole request,
                body included

        Raises:
            RequestError: If the service returns a non-success status
            MalformedDataError: If the body cannot be parsed as a JSON object
            requests.exceptions.Timeout: If the deadline passes
        """
        debug_log(f"[PAPERLESS] GET {url}")
        if timeout is None:
            response = self.session.get(url)
        else:
            response = get_with_deadline(self.session, url, timeout)
        self._check(response, 'search')
        data = self._json(response, 'search')
        if not isinstance(data, dict):
            raise MalformedDataError(f"Unexpected data format for listing page {url}")
        return SearchPage.from_dict(data)

    def post_note(self, document_id: int, text: str) -> dict:
        """
        Append a note to a document.

        Returns:
            dict: The resource returned by the service

        Raises:
            RequestError: If the service returns a non-success status
        """
        url = self.notes_url(document_id)
        debug_log(f"[PAPERLESS] POST {url} ({len(text)} chars)")
        response = self._check(
            self.session.post(url, json={'note': text}, headers={'Content-Type': 'application/json'}),
            'note posting',
        )
        return self._json(response, 'note posting')

    def delete_note(self, document_id: int, note_id: int) -> int:
        """
        Delete one note of a document.

        Returns:
            int: HTTP status code of the response

        Raises:
            RequestError: If the service returns a non-success status
        """
        url = self.notes_url(document_id)
        debug_log(f"[PAPERLESS] DELETE {url}?id={note_id}")
        response = self._check(
            self.session.delete(url, params={'id': note_id}),
            'note deletion',
        )
        return response.status_code
