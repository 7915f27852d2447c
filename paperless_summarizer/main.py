"""
Paperless Summarizer - summarization entry point.

Takes no arguments; behaviour is driven by the environment:

    PAPERLESS_TOKEN, PAPERLESS_URL      (required)
    OUTPUT_TXT, OUTPUT_PATH             local copies of each summary
    MODEL_NAME, SUMMARY_PROMPT, SUMMARY_MARKER, CONTEXT_LENGTH
    OLLAMA_HOST, SUMMARIZER_CONFIG_FILE, DEBUG

Scans the document service for documents without a summary note, then
summarizes them one at a time, newest first.
"""

import sys

from paperless_summarizer.ai import OllamaClient, SummaryGenerator
from paperless_summarizer.config import DEBUG_MODE
from paperless_summarizer.exceptions import ConfigurationError, PaperlessSummarizerError
from paperless_summarizer.logging_config import critical, info
from paperless_summarizer.paperless import PageScanner, PaperlessClient
from paperless_summarizer.settings import (
    load_environment_configuration,
    load_summarizer_configuration,
)
from paperless_summarizer.summarization import SummaryWriter, find_unsummarized_document_ids


def main() -> int:
    """
    Summarize every document that lacks a summary note.

    Returns:
        int: Process exit status (0 on success, 1 on a fatal error)
    """
    try:
        environment = load_environment_configuration()
        configuration = load_summarizer_configuration()
    except ConfigurationError as e:
        critical(f"[MAIN] {e}", exc_info=False)
        return 1

    info(f"[MAIN] Using model {configuration.model_name} at {environment.ollama_host}")
    client = PaperlessClient(environment.paperless_url, environment.api_key)

    try:
        document_ids = find_unsummarized_document_ids(PageScanner(client), configuration.summary_marker)
    except PaperlessSummarizerError as e:
        critical(f"[MAIN] Document scan aborted: {e}")
        return 1

    info(f"[MAIN] {len(document_ids)} document(s) without summary found")

    generator = SummaryGenerator(configuration, OllamaClient(environment.ollama_host))
    # Stream generated text to stdout while debugging
    writer = SummaryWriter(client, generator, configuration, environment, display=DEBUG_MODE)
    writer.process_documents(document_ids)
    return 0


if __name__ == "__main__":
    sys.exit(main())
