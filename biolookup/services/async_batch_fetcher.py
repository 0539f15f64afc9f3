"""Async counterpart of ``BatchFetcher`` for coroutine-based lookup services."""

from __future__ import annotations

import asyncio
from typing import Any, Iterable, List, Optional, Protocol

from biolookup.config import get_config
from biolookup.logging_utils import get_logger
from biolookup.models.outcomes import BatchResult, Failure, FetchOutcome, Success
from biolookup.services.batch_fetcher import is_cancelled, normalize_keys, pad_cancelled
from biolookup.services.throttle import AsyncFixedDelayThrottle, AsyncThrottle
from biolookup.utils.errors import describe_exception

logger = get_logger(__name__)


class AsyncRecordLookupService(Protocol):
    async def fetch(self, key: str) -> Any:
        ...


class AsyncBatchFetcher:
    """
    Same contract as ``BatchFetcher``: strictly sequential, one throttle wait
    after every lookup, one outcome per key. Awaiting lets other tasks run
    while a lookup or a wait is in progress, but lookups within one batch
    never overlap.
    """

    def __init__(
        self,
        lookup: AsyncRecordLookupService,
        throttle: Optional[AsyncThrottle] = None,
        delay: Optional[float] = None,
    ):
        if throttle is not None and delay is not None:
            raise ValueError("Pass either throttle or delay, not both")
        if throttle is None:
            if delay is None:
                delay = get_config().batch.inter_request_delay
            throttle = AsyncFixedDelayThrottle(delay)
        self.lookup = lookup
        self.throttle = throttle

    async def fetch_one(self, key: str) -> FetchOutcome:
        try:
            record = await self.lookup.fetch(key)
        except Exception as e:
            description = describe_exception(e)
            logger.warning("[BATCH] Lookup failed for %s: %s", key, description)
            return Failure(key, description, e)
        return Success(key, record)

    async def fetch_all(
        self,
        keys: Iterable[str],
        cancel_event: Optional[asyncio.Event] = None,
    ) -> BatchResult:
        keys = normalize_keys(keys)
        outcomes: List[FetchOutcome] = []

        for key in keys:
            if is_cancelled(cancel_event):
                pad_cancelled(outcomes, keys)
                break
            outcomes.append(await self.fetch_one(key))
            if is_cancelled(cancel_event):
                pad_cancelled(outcomes, keys)
                break
            await self.throttle.wait()

        result = BatchResult(outcomes)
        logger.info(
            "[BATCH] Fetched %d keys: %d succeeded, %d failed",
            len(result),
            len(result.successes),
            len(result.failures),
        )
        return result


async def fetch_all_async(
    keys: Iterable[str],
    lookup: AsyncRecordLookupService,
    inter_request_delay: Optional[float] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> BatchResult:
    """Async form of ``fetch_all``."""
    fetcher = AsyncBatchFetcher(lookup, delay=inter_request_delay)
    return await fetcher.fetch_all(keys, cancel_event=cancel_event)


__all__ = ["AsyncRecordLookupService", "AsyncBatchFetcher", "fetch_all_async"]
