"""
Tests for the summarize and cleanup entry points.

Both must fail before any request is made when their input is invalid.
"""

from unittest.mock import patch

import pytest

from paperless_summarizer import cleanup_notes, main as summarize
from paperless_summarizer.exceptions import RequestError
from paperless_summarizer.summarization import CleanupResult, SummaryRunResult


@pytest.fixture
def paperless_env(monkeypatch):
    monkeypatch.setenv('PAPERLESS_TOKEN', 'abc123')
    monkeypatch.setenv('PAPERLESS_URL', 'http://paperless.local/api/')
    for name in ('SUMMARY_MARKER', 'SUMMARIZER_CONFIG_FILE', 'CONTEXT_LENGTH', 'OUTPUT_TXT'):
        monkeypatch.delenv(name, raising=False)


class TestSummarizeMain:

    def test_missing_token_fails_before_fetch(self, monkeypatch):
        monkeypatch.delenv('PAPERLESS_TOKEN', raising=False)
        monkeypatch.setenv('PAPERLESS_URL', 'http://paperless.local/api')

        with patch.object(summarize, 'PaperlessClient') as client_cls:
            assert summarize.main() == 1

        client_cls.assert_not_called()

    def test_malformed_url_fails_before_fetch(self, monkeypatch):
        monkeypatch.setenv('PAPERLESS_TOKEN', 'abc123')
        monkeypatch.setenv('PAPERLESS_URL', 'paperless.local')

        with patch.object(summarize, 'PaperlessClient') as client_cls:
            assert summarize.main() == 1

        client_cls.assert_not_called()

    def test_scan_failure_returns_error(self, paperless_env):
        with patch.object(summarize, 'PaperlessClient'), \
                patch.object(summarize, 'find_unsummarized_document_ids',
                             side_effect=RequestError('search', 403, 'Forbidden', 'u')), \
                patch.object(summarize, 'SummaryWriter') as writer_cls:
            assert summarize.main() == 1

        writer_cls.assert_not_called()

    def test_summarizes_found_documents(self, paperless_env):
        with patch.object(summarize, 'PaperlessClient') as client_cls, \
                patch.object(summarize, 'find_unsummarized_document_ids', return_value=[8, 7]) as find, \
                patch.object(summarize, 'SummaryWriter') as writer_cls:
            writer_cls.return_value.process_documents.return_value = SummaryRunResult(processed_ids=[8, 7])

            assert summarize.main() == 0

        client_cls.assert_called_once_with('http://paperless.local/api', 'abc123')
        assert find.call_args.args[1] == 'AI_SUMMARY'
        writer_cls.return_value.process_documents.assert_called_once_with([8, 7])


class TestCleanupMain:

    @pytest.mark.parametrize("argument", ["-5", "0", "abc"])
    def test_usage_error_makes_no_request(self, paperless_env, argument):
        with patch.object(cleanup_notes, 'PaperlessClient') as client_cls:
            with pytest.raises(SystemExit) as exc_info:
                cleanup_notes.main([argument])

        assert exc_info.value.code == 2
        client_cls.assert_not_called()

    def test_missing_argument(self, paperless_env):
        with pytest.raises(SystemExit) as exc_info:
            cleanup_notes.main([])
        assert exc_info.value.code == 2

    def test_missing_environment(self, monkeypatch):
        monkeypatch.delenv('PAPERLESS_TOKEN', raising=False)
        monkeypatch.delenv('PAPERLESS_URL', raising=False)

        with patch.object(cleanup_notes, 'PaperlessClient') as client_cls:
            assert cleanup_notes.main(['all']) == 1

        client_cls.assert_not_called()

    def test_single_document(self, paperless_env):
        with patch.object(cleanup_notes, 'PaperlessClient'), \
                patch.object(cleanup_notes, 'CleanupOrchestrator') as orchestrator_cls:
            orchestrator_cls.return_value.run.return_value = CleanupResult(deleted_notes=[(7, 1)])

            assert cleanup_notes.main(['7']) == 0

        orchestrator_cls.return_value.run.assert_called_once_with(7)
        assert orchestrator_cls.call_args.args[1] == 'AI_SUMMARY'

    def test_failed_deletions_set_exit_status(self, paperless_env):
        with patch.object(cleanup_notes, 'PaperlessClient'), \
                patch.object(cleanup_notes, 'CleanupOrchestrator') as orchestrator_cls:
            orchestrator_cls.return_value.run.return_value = CleanupResult(failed_notes=[(7, 1)])

            assert cleanup_notes.main(['all']) == 1

        orchestrator_cls.return_value.run.assert_called_once_with('all')

    def test_fatal_request_error(self, paperless_env):
        with patch.object(cleanup_notes, 'PaperlessClient'), \
                patch.object(cleanup_notes, 'CleanupOrchestrator') as orchestrator_cls:
            orchestrator_cls.return_value.run.side_effect = RequestError('search', 401, 'Unauthorized', 'u')

            assert cleanup_notes.main(['all']) == 1

    def test_incomplete_crawl_sets_exit_status(self, paperless_env):
        with patch.object(cleanup_notes, 'PaperlessClient'), \
                patch.object(cleanup_notes, 'CleanupOrchestrator') as orchestrator_cls:
            orchestrator_cls.return_value.run.return_value = CleanupResult(
                deleted_notes=[(9, 1)], abort_reason="Giving up after 3 timeouts")

            assert cleanup_notes.main(['all']) == 1
