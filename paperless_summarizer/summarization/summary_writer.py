"""
Summary Writer - the main summarization loop.

For each unsummarized document id, strictly one at a time and in crawl
order:

1. Fetch the full document (missing content fails this document only)
2. Generate a summary
3. Post the composite note: summary, configuration snapshot, marker
4. Optionally write the plain summary to <output>/<id>_summary.txt

Any exception while handling one document is logged with its id and the
loop moves on to the next document.
"""

from __future__ import annotations

from paperless_summarizer.ai.summary_generator import SummaryGenerator
from paperless_summarizer.config import MODEL_CONFIGURATION_LABEL
from paperless_summarizer.exceptions import MalformedDataError
from paperless_summarizer.logging_config import error, info
from paperless_summarizer.paperless.client import PaperlessClient
from paperless_summarizer.settings import EnvironmentConfiguration, SummarizerConfiguration
from paperless_summarizer.utils.file_utils import save_summary_to_file

from .result_types import SummaryRunResult


def compose_note_body(summary: str, configuration: SummarizerConfiguration) -> str:
    """
    Build the note text written back to the document service.

    The body ends with the bare marker on its own line, which is what later
    identifies the note as AI-generated.
    """
    return (
        f"{summary}\n\n"
        f"{MODEL_CONFIGURATION_LABEL}{configuration.to_json()}\n"
        f"{configuration.summary_marker}"
    )


class SummaryWriter:
    """
    Fetches, summarizes and annotates documents one by one.

    Attributes:
        client: Document service client.
        generator: Summary generator.
        configuration: Summarizer configuration (embedded in each note).
        environment: Connection and output settings.
        display: Mirror generated text to stdout while streaming.
    """

    def __init__(
        self,
        client: PaperlessClient,
        generator: SummaryGenerator,
        configuration: SummarizerConfiguration,
        environment: EnvironmentConfiguration,
        display: bool = False,
    ):
        self.client = client
        self.generator = generator
        self.configuration = configuration
        self.environment = environment
        self.display = display

    def process_document(self, document_id: int) -> str | None:
        """
        Summarize one document and post the note.

        Returns:
            str | None: Path of the local summary file, if one was written

        Raises:
            MalformedDataError: If the document has no content
            RequestError: If a document service request fails
            GenerationError: If summary generation fails
        """
        document = self.client.fetch_document(document_id)
        if not document.content:
            raise MalformedDataError('Malformed document content. Skipping document.')

        summary = self.generator.summarize(document.content, display=self.display)

        info(f"[WRITER] Posting document summary for document with ID {document_id}...")
        self.client.post_note(document_id, compose_note_body(summary, self.configuration))

        if self.environment.save_txt_summary:
            return str(save_summary_to_file(document_id, summary, self.environment.save_txt_path))
        return None

    def process_documents(self, document_ids: list[int]) -> SummaryRunResult:
        """
        Run the summarization loop over the given ids.

        Args:
            document_ids: Ids in the order they should be processed

        Returns:
            SummaryRunResult: Processed and failed ids
        """
        result = SummaryRunResult()

        for document_id in document_ids:
            info(f"[WRITER] Processing document with ID {document_id}...")
            try:
                saved_file = self.process_document(document_id)
            except Exception as e:
                error(f"[WRITER] Error while processing document {document_id}: {e}", exc_info=True)
                result.failed_ids[document_id] = str(e)
                continue

            result.processed_ids.append(document_id)
            if saved_file:
                result.saved_files.append(saved_file)

        info(
            f"[WRITER] Finished: {result.documents_processed} summarized, "
            f"{result.documents_failed} failed"
        )
        return result
