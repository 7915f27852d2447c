"""
Summary Generator - turns document text into a summary via Ollama.

The prompt is the configured prefix and the document text joined by a
single space. The streamed fragments are concatenated in arrival order;
with display enabled each fragment is also written to the progress sink as
it arrives.

CONTEXT_LENGTH is part of the configuration but is not sent to the model.
Document text is passed uncapped; truncation inside the model's own context
window is not visible here.
"""

from __future__ import annotations

import sys
from typing import TextIO

from paperless_summarizer.logging_config import Timer
from paperless_summarizer.settings import SummarizerConfiguration

from .ollama_client import OllamaClient


class SummaryGenerator:
    """
    Generates summaries with the configured model and prompt.

    Attributes:
        configuration: Immutable summarizer configuration.
        client: Ollama client used for streaming generation.
        progress_sink: Stream fragments are mirrored to when display is on.
    """

    def __init__(
        self,
        configuration: SummarizerConfiguration,
        client: OllamaClient,
        progress_sink: TextIO | None = None,
    ):
        self.configuration = configuration
        self.client = client
        self.progress_sink = progress_sink

    def build_prompt(self, text: str) -> str:
        return f"{self.configuration.summary_prompt} {text}"

    def summarize(self, text: str, display: bool = False) -> str:
        """
        Summarize the given text.

        Args:
            text: Document content
            display: Mirror each fragment to the progress sink as it arrives

        Returns:
            str: Concatenation of all streamed fragments

        Raises:
            GenerationError: If the generation endpoint fails
        """
        sink = (self.progress_sink or sys.stdout) if display else None
        fragments = self.client.generate_stream(
            model=self.configuration.model_name,
            prompt=self.build_prompt(text),
        )

        summary = ''
        with Timer(f"[OLLAMA] Summary with {self.configuration.model_name}"):
            for fragment in fragments:
                summary += fragment
                if sink is not None:
                    sink.write(fragment)
                    sink.flush()

        return summary
