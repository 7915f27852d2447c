"""
Tests for the listing request deadline against a real local HTTP server.

The server sends headers and then either stalls mid-body or trickles the
body one byte at a time. In both cases the whole request must end at the
deadline with requests.exceptions.Timeout.
"""

import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from paperless_summarizer.cleanup import CleanupOrchestrator
from paperless_summarizer.paperless.client import PaperlessClient
from paperless_summarizer.paperless.page_scanner import PageScanner

LISTING_BODY = json.dumps({
    'count': 1,
    'next': None,
    'previous': None,
    'results': [{'id': 1, 'title': 'x' * 400, 'notes': []}],
}).encode('utf-8')


class ListingHandler(BaseHTTPRequestHandler):
    protocol_version = 'HTTP/1.1'

    def do_GET(self):
        self.server.requests_seen += 1
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(LISTING_BODY)))
        self.end_headers()
        try:
            if self.server.mode == 'stall':
                self.wfile.write(LISTING_BODY[:10])
                self.wfile.flush()
                self.server.release.wait(10)
            elif self.server.mode == 'trickle':
                for i in range(len(LISTING_BODY)):
                    if self.server.release.is_set():
                        break
                    self.wfile.write(LISTING_BODY[i:i + 1])
                    self.wfile.flush()
                    time.sleep(0.05)
            else:
                self.wfile.write(LISTING_BODY)
        except OSError:
            # Client hung up at its deadline
            self.close_connection = True

    def log_message(self, format, *args):
        pass


@pytest.fixture
def listing_server():
    server = ThreadingHTTPServer(('127.0.0.1', 0), ListingHandler)
    server.daemon_threads = True
    server.mode = 'ok'
    server.requests_seen = 0
    server.release = threading.Event()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.release.set()
    server.shutdown()
    server.server_close()


def make_client(server):
    session = requests.Session()
    session.trust_env = False  # never route localhost through a proxy
    return PaperlessClient(f"http://127.0.0.1:{server.server_port}/api", 'token', session=session)


class TestListingDeadline:

    def test_complete_response_within_deadline(self, listing_server):
        client = make_client(listing_server)

        page = client.list_documents_page(client.documents_seed_url(), timeout=5)

        assert [d.id for d in page.results] == [1]

    def test_stalled_body_times_out(self, listing_server):
        listing_server.mode = 'stall'
        client = make_client(listing_server)

        started = time.monotonic()
        with pytest.raises(requests.exceptions.Timeout):
            client.list_documents_page(client.documents_seed_url(), timeout=0.5)

        assert time.monotonic() - started < 2.5

    def test_trickling_body_cut_off_at_deadline(self, listing_server):
        """Bytes keep arriving, but the whole request is bounded."""
        listing_server.mode = 'trickle'
        client = make_client(listing_server)

        started = time.monotonic()
        with pytest.raises(requests.exceptions.Timeout):
            client.list_documents_page(client.documents_seed_url(), timeout=0.5)

        # The full body would take over 20 seconds at this rate
        assert time.monotonic() - started < 2.5


class TestScannerAgainstSlowServer:

    def test_stalled_pages_are_tolerated(self, listing_server):
        listing_server.mode = 'stall'
        scanner = PageScanner(make_client(listing_server), request_timeout=0.5,
                              tolerate_timeouts=True, max_page_timeouts=2)

        assert scanner.scan(lambda page: None) == 0
        assert listing_server.requests_seen == 2
        assert "2 timeouts" in scanner.stop_reason

    def test_trickled_pages_are_tolerated(self, listing_server):
        listing_server.mode = 'trickle'
        scanner = PageScanner(make_client(listing_server), request_timeout=0.5,
                              tolerate_timeouts=True, max_page_timeouts=2)

        started = time.monotonic()
        assert scanner.scan(lambda page: None) == 0
        assert time.monotonic() - started < 5

    def test_cleanup_reports_incomplete_crawl(self, listing_server):
        listing_server.mode = 'stall'
        orchestrator = CleanupOrchestrator(make_client(listing_server), 'AI_SUMMARY', request_timeout=0.3)

        result = orchestrator.delete_all_summaries()

        assert result.completed is False
        assert "timeouts" in result.abort_reason
        assert result.deleted_notes == []
