"""Exception types shared by the REST clients and the batch fetchers."""
from __future__ import annotations

from typing import Optional


class BiolookupError(Exception):
    """Base class for all biolookup errors."""


class RecordLookupError(BiolookupError):
    """
    A single record could not be retrieved.

    Raised when the remote service is unreachable, answers with a
    non-success status, or returns a body that cannot be decoded.
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.key = key
        self.url = url
        self.status_code = status_code


class InvalidIdentifierError(RecordLookupError, ValueError):
    """Identifier rejected before any request was made."""


class UnknownFeatureError(BiolookupError, ValueError):
    """Overlap feature name is not one the Ensembl REST API recognises."""


class BatchCancelledError(BiolookupError):
    """Batch was cancelled before this key was looked up."""


def describe_exception(exc: BaseException) -> str:
    """Human readable text stored on a failed outcome."""
    if isinstance(exc, RecordLookupError):
        text = str(exc) or "lookup failed"
        if exc.status_code is not None and str(exc.status_code) not in text:
            text = f"{text} (HTTP {exc.status_code})"
        return text
    message = str(exc)
    if not message:
        return type(exc).__name__
    return f"{type(exc).__name__}: {message}"


__all__ = [
    "BiolookupError",
    "RecordLookupError",
    "InvalidIdentifierError",
    "UnknownFeatureError",
    "BatchCancelledError",
    "describe_exception",
]
