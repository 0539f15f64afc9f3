"""Tests for error descriptions."""

from biolookup.utils.errors import (
    InvalidIdentifierError,
    RecordLookupError,
    UnknownFeatureError,
    describe_exception,
)


class TestDescribeException:
    def test_lookup_error_with_status(self):
        exc = RecordLookupError("No record for P99999", status_code=404)
        assert describe_exception(exc) == "No record for P99999 (HTTP 404)"

    def test_status_not_repeated(self):
        exc = RecordLookupError("Ensembl returned HTTP 503 for /lookup/id/ENSG1", status_code=503)
        assert describe_exception(exc) == "Ensembl returned HTTP 503 for /lookup/id/ENSG1"

    def test_other_exception(self):
        assert describe_exception(TimeoutError("read timed out")) == "TimeoutError: read timed out"
        assert describe_exception(RuntimeError()) == "RuntimeError"


def test_hierarchy():
    """Validation errors are also ValueErrors for callers that catch those."""
    assert issubclass(InvalidIdentifierError, RecordLookupError)
    assert issubclass(InvalidIdentifierError, ValueError)
    assert issubclass(UnknownFeatureError, ValueError)
