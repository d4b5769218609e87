from __future__ import annotations

from typing import List, Optional

from loguru import logger

from quote_service.models.records import PriceRecord, TickerRecord
from quote_service.models.yahoo import ChartMeta, SearchQuote
from quote_service.services.market import full_symbol
from quote_service.services.yahoo_client import YahooClient


def price_record(ticker: str, meta: ChartMeta) -> PriceRecord:
    return PriceRecord(symbol=ticker, price=meta.regularMarketPrice, currency=meta.currency)


def not_found_record(ticker: str) -> PriceRecord:
    """Sentinel for a ticker the provider does not know."""
    return PriceRecord(symbol=ticker, price=0, currency=None)


def ticker_record(isin: str, quotes: List[SearchQuote]) -> Optional[TickerRecord]:
    if not quotes:
        logger.warning(f"No ticker found for ISIN: {isin}")
        return None
    return TickerRecord(isin=isin, ticker=quotes[0].symbol)


async def resolve_price(client: YahooClient, ticker: Optional[str], market: Optional[str]) -> Optional[PriceRecord]:
    """
    Current price for one instrument, or None when the provider has nothing
    or the call failed. Never raises on provider failures.
    """
    if not ticker:
        return None

    outcome = await client.fetch_chart(full_symbol(ticker, market))
    if outcome.is_not_found:
        logger.warning(f"Unknown instrument: {ticker} (market={market})")
        return None
    if outcome.is_error:
        logger.error(f"Price lookup failed for {ticker}: {outcome.error}")
        return None
    return price_record(ticker, outcome.payload)


async def resolve_ticker(client: YahooClient, isin: str) -> Optional[TickerRecord]:
    outcome = await client.search_by_identifier(isin)
    if not outcome.ok:
        logger.error(f"Ticker search failed for {isin}: {outcome.error or outcome.kind}")
        return None
    return ticker_record(isin, outcome.payload)
