import asyncio
from typing import Any, Dict, List, Set, Tuple

import httpx
import pytest
from loguru import logger

from quote_service.services.yahoo_client import YahooClient

CHART_PREFIX = "/v8/finance/chart/"


def chart_body(price: float, currency: str = "USD") -> Dict[str, Any]:
    return {
        "chart": {
            "result": [{"meta": {"regularMarketPrice": price, "currency": currency}, "timestamp": []}],
            "error": None,
        }
    }


def search_body(*symbols: str) -> Dict[str, Any]:
    return {"quotes": [{"symbol": s, "exchange": "KSC"} for s in symbols], "news": []}


class FakeYahoo:
    """
    Stand-in for both Yahoo endpoints. Chart entries are keyed by the full
    symbol, search entries by the ``q`` parameter. Unknown chart symbols get
    a 404, unknown search codes an empty quotes list.
    """
    def __init__(self):
        self.charts: Dict[str, Tuple[int, Any]] = {}
        self.searches: Dict[str, Tuple[int, Any]] = {}
        self.delays: Dict[str, float] = {}
        self.broken: Set[str] = set()
        self.requests: List[httpx.Request] = []
        self.completed: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def chart(self, symbol: str, price: float, currency: str = "USD", delay: float = 0.0):
        self.charts[symbol] = (200, chart_body(price, currency))
        if delay:
            self.delays[symbol] = delay

    def search(self, code: str, *symbols: str, delay: float = 0.0):
        self.searches[code] = (200, search_body(*symbols))
        if delay:
            self.delays[code] = delay

    @property
    def chart_symbols(self) -> List[str]:
        return [r.url.path[len(CHART_PREFIX):] for r in self.requests if r.url.path.startswith(CHART_PREFIX)]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if request.url.path.startswith(CHART_PREFIX):
                key = request.url.path[len(CHART_PREFIX):]
                status, body = self.charts.get(key, (404, {"chart": {"result": None, "error": {"code": "Not Found"}}}))
            else:
                key = request.url.params["q"]
                status, body = self.searches.get(key, (200, search_body()))

            if self.delays.get(key):
                await asyncio.sleep(self.delays[key])
            if key in self.broken:
                raise httpx.ConnectError("connection refused", request=request)
            self.completed.append(key)

            if isinstance(body, (dict, list)):
                return httpx.Response(status, json=body)
            return httpx.Response(status, content=body)
        finally:
            self.in_flight -= 1


@pytest.fixture
def fake():
    return FakeYahoo()


@pytest.fixture
def client(fake):
    c = YahooClient(transport=httpx.MockTransport(fake.handler))
    yield c
    asyncio.run(c.close())


@pytest.fixture
def log_records():
    records = []
    handler_id = logger.add(lambda m: records.append(m.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
