"""
biolookup: batch lookups against the Ensembl and UniProt REST APIs.

Keys are resolved one at a time, in order, with a fixed pause after every
request; a key that fails is recorded in place instead of aborting the batch.
"""

from biolookup.models.outcomes import BatchResult, Failure, FetchOutcome, Success
from biolookup.services.batch_fetcher import BatchFetcher, RecordLookupService, fetch_all
from biolookup.utils.errors import RecordLookupError

__version__ = "0.1.0"

__all__ = [
    "BatchFetcher",
    "BatchResult",
    "Failure",
    "FetchOutcome",
    "RecordLookupError",
    "RecordLookupService",
    "Success",
    "fetch_all",
]
