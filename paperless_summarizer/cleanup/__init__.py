"""Removal of previously written summary notes."""

from .cleanup_orchestrator import CleanupOrchestrator, parse_cleanup_target

__all__ = ['CleanupOrchestrator', 'parse_cleanup_target']
