"""
Paperless Summarizer AI Module
Streams summaries from a local Ollama server.
"""

from .ollama_client import OllamaClient
from .summary_generator import SummaryGenerator

__all__ = ['OllamaClient', 'SummaryGenerator']
