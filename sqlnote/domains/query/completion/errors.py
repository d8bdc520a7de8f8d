"""Exceptions raised by the completion engine."""


class CompletionError(Exception):
    """Base class for completion engine errors."""


class InvalidArgumentError(CompletionError, ValueError):
    """A caller passed a malformed buffer, cursor or vocabulary."""


class MetadataError(CompletionError):
    """Schema metadata could not be read from the database.

    The underlying driver exception, if any, is available as ``__cause__``.
    """

    def __init__(self, message: str, *, connection_name: str | None = None):
        self.connection_name = connection_name
        super().__init__(message)


class NotReadyError(CompletionError):
    """No candidate vocabulary has been built yet for this engine."""

    def __init__(self, message: str = "Completion vocabulary has not been built yet"):
        super().__init__(message)
