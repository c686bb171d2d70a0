"""Custom exception types for the :mod:`slimpdf.compress` package."""

from __future__ import annotations


class SlimPDFError(Exception):
    """Base exception for all :mod:`slimpdf` related errors."""


class InvalidPDFError(SlimPDFError):
    """Raised when a PDF document cannot be loaded or is malformed."""


class CompressionError(SlimPDFError):
    """Raised when every compression strategy failed for a document."""

    def __init__(self, message: str, *, primary_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.primary_error = primary_error


class ConfigurationError(SlimPDFError, ValueError):
    """Raised when compression options or policy values are invalid."""


class StreamClosedError(SlimPDFError):
    """Raised when data is written to a compression stream after it was closed."""
