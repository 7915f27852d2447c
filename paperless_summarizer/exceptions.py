"""
Error kinds raised by the summarizer and cleanup workflows.

All errors derive from PaperlessSummarizerError so entry points can report
them uniformly. Timeouts are surfaced as requests.exceptions.Timeout.
"""


class PaperlessSummarizerError(Exception):
    """Base class for all application errors."""


class ConfigurationError(PaperlessSummarizerError):
    """Missing or invalid configuration; raised before any network activity."""


class RequestError(PaperlessSummarizerError):
    """
    Non-success HTTP status from the document service.

    Attributes:
        status_code: HTTP status returned by the service.
        reason: Upstream status text, kept verbatim.
        url: Requested URL.
    """

    def __init__(self, action: str, status_code: int, reason: str, url: str):
        self.action = action
        self.status_code = status_code
        self.reason = reason
        self.url = url
        super().__init__(f"Error during {action} request: {status_code} {reason} ({url})")


class MalformedDataError(PaperlessSummarizerError):
    """Response data that does not match the expected shape."""


class GenerationError(PaperlessSummarizerError):
    """The text generation endpoint failed or returned an error."""


class UsageError(PaperlessSummarizerError):
    """Invalid command-line usage."""
