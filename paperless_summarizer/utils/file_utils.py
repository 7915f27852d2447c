"""Local text output of generated summaries."""

from pathlib import Path

from paperless_summarizer.config import SUMMARY_FILE_SUFFIX
from paperless_summarizer.logging_config import debug_log


def save_summary_to_file(document_id: int, summary: str, save_path: str = '') -> Path:
    """
    Write a summary to <save_path>/<document_id>_summary.txt.

    The directory is created if missing; an existing file is overwritten.

    Args:
        document_id: Id used to name the file
        summary: Summary text (plain, without note metadata)
        save_path: Target directory ('' = current working directory)

    Returns:
        Path: The written file
    """
    out_path = Path(save_path or '.').resolve()
    out_path.mkdir(parents=True, exist_ok=True)

    file_path = out_path / f"{document_id}{SUMMARY_FILE_SUFFIX}"
    file_path.write_text(summary, encoding='utf-8')
    debug_log(f"[OUTPUT] Saved summary for document {document_id} to {file_path}")
    return file_path
