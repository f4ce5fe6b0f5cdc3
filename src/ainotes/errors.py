from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Note not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class TooShortError(UserError):
    """Raised when text is too short to summarize."""

    def __init__(self, message: str = "Text is too short to summarize") -> None:
        super().__init__(message)


class SummaryError(Exception):
    """Base class for failures of the primary summarization path.

    These never reach the caller: the summary service answers them with
    the local extractive summary.
    """


class UpstreamError(SummaryError):
    """Raised when the summarization provider fails, times out or rejects the request."""


class NoSummaryExtractedError(SummaryError):
    """Raised when the provider answered but no known response field held text."""
