"""
Ollama REST client for streaming text generation.

POST /api/generate with {"model", "prompt", "stream": true} returns
newline-delimited JSON. Each line carries a partial "response"; the final
line has "done": true. The client exposes this as a lazy iterator of text
fragments in arrival order. The iterator is finite and cannot be restarted.
"""

from __future__ import annotations

import json
from typing import Any, Iterator

import requests

from paperless_summarizer.config import OLLAMA_API_BASE
from paperless_summarizer.exceptions import GenerationError
from paperless_summarizer.logging_config import debug_log


class OllamaClient:
    """
    Thin client for the Ollama generate endpoint.

    Attributes:
        api_base: Ollama server root (e.g. http://localhost:11434).
        session: requests.Session used for all calls.
    """

    def __init__(self, api_base: str = OLLAMA_API_BASE, session: requests.Session | None = None):
        self.api_base = api_base.rstrip('/')
        self.session = session or requests.Session()

    def generate_stream(
        self,
        model: str,
        prompt: str,
        options: dict[str, Any] | None = None,
    ) -> Iterator[str]:
        """
        Stream a completion as text fragments.

        Args:
            model: Model name known to the Ollama server
            prompt: Full prompt text
            options: Optional model options (e.g. {"num_ctx": 8192})

        Yields:
            str: Partial response fragments in arrival order

        Raises:
            GenerationError: If Ollama returns an error status or error line
        """
        payload: dict[str, Any] = {
            "model": model,
            "prompt": prompt,
            "stream": True,
        }
        if options:
            payload["options"] = options

        url = f"{self.api_base}/api/generate"
        debug_log(f"[OLLAMA GENERATE] Model: {model}, prompt length: {len(prompt)} chars")

        try:
            response = self.session.post(url, json=payload, stream=True)
        except requests.exceptions.ConnectionError as e:
            raise GenerationError(
                f"Cannot connect to Ollama at {self.api_base}. "
                "Is Ollama running? Start with: ollama serve"
            ) from e

        with response:
            if response.status_code != 200:
                raise GenerationError(f"Ollama returned status {response.status_code}: {response.text}")

            for line in response.iter_lines(decode_unicode=True):
                if not line:
                    continue
                try:
                    part = json.loads(line)
                except json.JSONDecodeError as e:
                    raise GenerationError(f"Unparsable chunk from Ollama: {line[:100]}") from e

                if part.get('error'):
                    raise GenerationError(f"Ollama error: {part['error']}")

                fragment = part.get('response', '')
                if fragment:
                    yield fragment

                if part.get('done'):
                    debug_log(f"[OLLAMA GENERATE] Done: {part.get('eval_count', 0)} tokens")
                    break
