"""
Utility Modules for Paperless Summarizer

- Local summary file output
"""

from .file_utils import save_summary_to_file

__all__ = ['save_summary_to_file']
