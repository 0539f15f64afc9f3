"""Utility modules."""

from .errors import (
    BatchCancelledError,
    BiolookupError,
    InvalidIdentifierError,
    RecordLookupError,
    UnknownFeatureError,
    describe_exception,
)
