"""
Paperless Summarizer

Adds AI-generated summaries to Paperless documents as notes, using a local
Ollama model, and removes them again on request.

Entry points:
    paperless-summarize        summarize documents lacking a summary note
    paperless-cleanup-notes    delete summary notes (all, or one document)
"""

__version__ = "1.0.0"
