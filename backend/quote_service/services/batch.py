"""
Concurrent batch resolution.

Every item of a batch is scheduled before any of them is awaited, and results
are assembled positionally, so output order always follows input order no
matter which provider call finishes first.

The two batch kinds deliberately differ in what they forgive:
  - price batches turn a provider "not found" into a zero-price sentinel
  - ticker batches treat any failed call as fatal; only an empty search
    result becomes a null slot
Any provider error aborts the whole batch. Sibling calls already in flight are
left to finish on their own; their results are discarded.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Coroutine, Iterable, List, Optional, Sequence, TypeVar

from loguru import logger

from quote_service.core.errors import UpstreamNotFoundError
from quote_service.models.records import PriceRecord, StockRequest, TickerRecord
from quote_service.services.market import full_symbol
from quote_service.services.outcome import ProviderOutcome
from quote_service.services.resolvers import not_found_record, price_record, ticker_record
from quote_service.services.yahoo_client import YahooClient

T = TypeVar("T")


@dataclass(frozen=True)
class BatchPolicy:
    name: str
    tolerate_not_found: bool


PRICE_BATCH = BatchPolicy("prices", tolerate_not_found=True)
TICKER_BATCH = BatchPolicy("tickers", tolerate_not_found=False)


async def _gather(calls: Sequence[Coroutine[Any, Any, T]], max_concurrency: int = 0) -> List[T]:
    """
    asyncio.gather with an optional cap on how many calls run at once.
    The first exception propagates; calls already started are not cancelled,
    calls still waiting for a slot are dropped.
    """
    if max_concurrency <= 0:
        return list(await asyncio.gather(*calls))

    sem = asyncio.Semaphore(max_concurrency)
    aborted = False

    async def _bounded(call: Coroutine[Any, Any, T]) -> Optional[T]:
        nonlocal aborted
        async with sem:
            if aborted:
                call.close()
                return None
            try:
                return await call
            except Exception:
                aborted = True
                raise

    return list(await asyncio.gather(*(_bounded(c) for c in calls)))


def _settle(outcome: ProviderOutcome, policy: BatchPolicy, key: str) -> ProviderOutcome:
    """Raise for outcomes the policy does not absorb, pass the rest through."""
    if outcome.is_error:
        logger.error(f"{policy.name} batch aborted by {key}: {outcome.error}")
        raise outcome.error
    if outcome.is_not_found:
        if not policy.tolerate_not_found:
            logger.error(f"{policy.name} batch aborted: {key} not found")
            raise UpstreamNotFoundError(f"{key} not found")
        logger.warning(f"Unknown instrument: {key}")
    return outcome


async def resolve_prices(
    client: YahooClient,
    requests: Iterable[StockRequest],
    *,
    max_concurrency: int = 0,
    policy: BatchPolicy = PRICE_BATCH,
) -> List[PriceRecord]:
    """
    Price every request with a ticker. Requests without one are skipped and
    produce no element, so the output can be shorter than the input.
    """
    wanted = [r for r in requests if r.ticker]

    async def _one(req: StockRequest) -> PriceRecord:
        outcome = _settle(await client.fetch_chart(full_symbol(req.ticker, req.market)), policy, req.ticker)
        if outcome.is_not_found:
            return not_found_record(req.ticker)
        return price_record(req.ticker, outcome.payload)

    records = await _gather([_one(r) for r in wanted], max_concurrency)
    logger.info(f"Resolved {len(records)} prices")
    return records


async def resolve_tickers(
    client: YahooClient,
    isins: Iterable[str],
    *,
    max_concurrency: int = 0,
    policy: BatchPolicy = TICKER_BATCH,
) -> List[Optional[TickerRecord]]:
    """One slot per identifier; None where the search matched nothing."""
    codes = list(isins)

    async def _one(isin: str) -> Optional[TickerRecord]:
        outcome = _settle(await client.search_by_identifier(isin), policy, isin)
        if outcome.is_not_found:
            return None
        return ticker_record(isin, outcome.payload)

    records = await _gather([_one(c) for c in codes], max_concurrency)
    hits = sum(1 for r in records if r is not None)
    logger.info(f"Resolved {hits} tickers for {len(codes)} identifiers")
    return records
