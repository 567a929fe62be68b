"""Exceptions raised by syndbind."""


class FeedException(Exception):
    """Base class for every feed-related error."""


class ParsingFeedException(FeedException):
    """Raised when a feed document cannot be parsed into wire beans."""

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        column_number: int | None = None,
    ):
        super().__init__(message)
        self.line_number = line_number
        self.column_number = column_number


class UnsupportedFeedTypeError(FeedException, ValueError):
    """Raised when no converter, parser or generator handles a feed type."""


class CopyFromError(FeedException):
    """Raised when a value cannot be copied by a CopyFromHelper."""


class CopyFromTypeError(CopyFromError, TypeError):
    """Raised when copy_from receives a source of the wrong interface."""


class CloneNotSupportedError(FeedException):
    """Raised when a bean holds a nested value that cannot be cloned."""
