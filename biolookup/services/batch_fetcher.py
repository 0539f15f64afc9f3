"""
Sequential batch retrieval with per-key failure isolation.

One lookup is issued per key, in input order, followed by one throttle wait
(also after the last key). A key whose lookup raises is recorded as a
``Failure`` at its position and the batch carries on, so the result always
has one outcome per input key.
"""

from __future__ import annotations

import threading
from typing import Any, Iterable, List, Optional, Protocol

from biolookup.config import get_config
from biolookup.logging_utils import get_logger
from biolookup.models.outcomes import BatchResult, Failure, FetchOutcome, Success
from biolookup.services.throttle import FixedDelayThrottle, Throttle
from biolookup.utils.errors import BatchCancelledError, describe_exception

logger = get_logger(__name__)

CANCELLED_DESCRIPTION = "Cancelled before lookup"


class RecordLookupService(Protocol):
    """Anything that can retrieve one record for one key."""

    def fetch(self, key: str) -> Any:
        """Return the record for ``key`` or raise ``RecordLookupError``."""
        ...


def normalize_keys(keys: Optional[Iterable[str]]) -> List[str]:
    """Materialise ``keys`` into a list, rejecting inputs that are not key sequences."""
    if keys is None:
        raise TypeError("keys must be a sequence of identifiers, not None")
    if isinstance(keys, (str, bytes)):
        raise TypeError(
            "keys must be a sequence of identifiers, not a single string; "
            "wrap a single key in a list"
        )
    return list(keys)


def cancelled_outcome(key: str) -> Failure:
    return Failure(key, CANCELLED_DESCRIPTION, BatchCancelledError(CANCELLED_DESCRIPTION))


def is_cancelled(cancel_event) -> bool:
    """True once ``cancel_event`` (threading or asyncio Event) has been set."""
    return cancel_event is not None and cancel_event.is_set()


def pad_cancelled(outcomes: List[FetchOutcome], keys: List[str]) -> None:
    """Append a cancelled ``Failure`` for every key not yet looked up."""
    done = len(outcomes)
    logger.info("[BATCH] Cancelled after %d of %d lookups", done, len(keys))
    outcomes.extend(cancelled_outcome(k) for k in keys[done:])


class BatchFetcher:
    """
    Resolve an ordered batch of keys against a lookup service.

    Args:
        lookup: Service whose ``fetch(key)`` retrieves a single record
        throttle: Policy applied after every lookup; built from ``delay`` if omitted
        delay: Seconds to wait after every lookup (defaults to the configured batch delay)
    """

    def __init__(
        self,
        lookup: RecordLookupService,
        throttle: Optional[Throttle] = None,
        delay: Optional[float] = None,
    ):
        if throttle is not None and delay is not None:
            raise ValueError("Pass either throttle or delay, not both")
        if throttle is None:
            if delay is None:
                delay = get_config().batch.inter_request_delay
            throttle = FixedDelayThrottle(delay)
        self.lookup = lookup
        self.throttle = throttle

    def fetch_one(self, key: str) -> FetchOutcome:
        """Look up a single key, converting any failure into a ``Failure``."""
        try:
            record = self.lookup.fetch(key)
        except Exception as e:
            description = describe_exception(e)
            logger.warning("[BATCH] Lookup failed for %s: %s", key, description)
            return Failure(key, description, e)
        return Success(key, record)

    def fetch_all(
        self,
        keys: Iterable[str],
        cancel_event: Optional[threading.Event] = None,
    ) -> BatchResult:
        """
        Fetch one record per key, preserving input order.

        If ``cancel_event`` is set, no further lookups or waits happen and
        every remaining key is recorded as a cancelled ``Failure``.

        Returns:
            BatchResult with exactly one outcome per input key
        """
        keys = normalize_keys(keys)
        outcomes: List[FetchOutcome] = []

        for key in keys:
            if is_cancelled(cancel_event):
                pad_cancelled(outcomes, keys)
                break
            outcomes.append(self.fetch_one(key))
            if is_cancelled(cancel_event):
                pad_cancelled(outcomes, keys)
                break
            self.throttle.wait()

        result = BatchResult(outcomes)
        logger.info(
            "[BATCH] Fetched %d keys: %d succeeded, %d failed",
            len(result),
            len(result.successes),
            len(result.failures),
        )
        return result


def fetch_all(
    keys: Iterable[str],
    lookup: RecordLookupService,
    inter_request_delay: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
) -> BatchResult:
    """
    Fetch one record per key from ``lookup``, waiting ``inter_request_delay``
    seconds after every lookup.

    Per-key failures are returned as ``Failure`` outcomes; only invalid
    arguments raise.
    """
    fetcher = BatchFetcher(lookup, delay=inter_request_delay)
    return fetcher.fetch_all(keys, cancel_event=cancel_event)


__all__ = [
    "RecordLookupService",
    "BatchFetcher",
    "fetch_all",
    "normalize_keys",
    "CANCELLED_DESCRIPTION",
]
