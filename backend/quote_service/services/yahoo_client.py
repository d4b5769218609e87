from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import ValidationError

from quote_service.core.errors import (
    UpstreamHTTPError,
    UpstreamPayloadError,
    UpstreamTransportError,
)
from quote_service.core.settings import settings
from quote_service.models.yahoo import ChartResponse, SearchResponse
from quote_service.services.outcome import ProviderOutcome

CHART_PARAMS = {"interval": "1d", "range": "1d"}
SEARCH_PARAMS = {"quotesCount": 1, "newsCount": 0}


class YahooClient:
    """
    Async Yahoo Finance client. One call per method invocation: no retries,
    no caching. Every failure is folded into a ProviderOutcome instead of
    raising, so callers decide whether it is fatal.
    """
    def __init__(
        self,
        chart_url: str = settings.yahoo_chart_url,
        search_url: str = settings.yahoo_search_url,
        timeout_s: float = settings.http_timeout_s,
        user_agent: str = settings.yahoo_user_agent,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.chart_url = chart_url.rstrip("/")
        self.search_url = search_url
        self.client = httpx.AsyncClient(
            timeout=timeout_s,
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json, text/plain, */*",
            },
            follow_redirects=True,
            transport=transport,
        )

    async def close(self):
        await self.client.aclose()

    async def _get(self, url: str, params: Dict[str, Any], *, not_found_recoverable: bool) -> ProviderOutcome:
        try:
            r = await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            return ProviderOutcome.failed(UpstreamTransportError(f"request failed: {e!r}", url=url))

        if r.status_code == 404 and not_found_recoverable:
            return ProviderOutcome.not_found()
        if r.status_code >= 400:
            return ProviderOutcome.failed(UpstreamHTTPError(r.status_code, url=url))

        try:
            return ProviderOutcome.success(r.json())
        except ValueError as e:
            return ProviderOutcome.failed(UpstreamPayloadError(f"body is not JSON: {e}", url=url))

    async def fetch_chart(self, symbol: str) -> ProviderOutcome:
        """
        One-day chart for a fully qualified symbol (ticker + exchange suffix).
        Success payload is the ChartMeta of the first chart result.
        """
        url = f"{self.chart_url}/{quote(symbol, safe='')}"
        outcome = await self._get(url, CHART_PARAMS, not_found_recoverable=True)
        if not outcome.ok:
            return outcome

        try:
            chart = ChartResponse.model_validate(outcome.payload).chart
        except ValidationError as e:
            return ProviderOutcome.failed(
                UpstreamPayloadError(f"unexpected chart payload for {symbol}: {e}", url=url)
            )
        if not chart.result:
            # 2xx without any chart result: nothing to price
            logger.debug(f"empty chart result for {symbol} error={chart.error}")
            return ProviderOutcome.not_found()
        return ProviderOutcome.success(chart.result[0].meta)

    async def search_by_identifier(self, code: str) -> ProviderOutcome:
        """
        Instrument search for an ISIN-like code. Success payload is the
        (possibly empty) list of SearchQuote. No status is treated as not-found.
        """
        outcome = await self._get(
            self.search_url, {"q": code, **SEARCH_PARAMS}, not_found_recoverable=False
        )
        if not outcome.ok:
            return outcome

        try:
            data = SearchResponse.model_validate(outcome.payload)
        except ValidationError as e:
            return ProviderOutcome.failed(
                UpstreamPayloadError(f"unexpected search payload for {code}: {e}", url=self.search_url)
            )
        return ProviderOutcome.success(data.quotes or [])


# Singleton accessor; async so it runs on the event loop, never two at once
_client: Optional[YahooClient] = None

async def get_yahoo_client() -> YahooClient:
    global _client
    if _client is None:
        _client = YahooClient()
    return _client

async def close_yahoo_client() -> None:
    global _client
    if _client is not None:
        await _client.close()
        _client = None
