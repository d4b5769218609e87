import asyncio

from quote_service.models.records import PriceRecord, TickerRecord
from quote_service.services.resolvers import resolve_price, resolve_ticker


def test_resolve_price_us(client, fake):
    fake.chart("AAPL", 189.5, "USD")
    rec = asyncio.run(resolve_price(client, "AAPL", "US"))
    assert rec == PriceRecord(symbol="AAPL", price=189.5, currency="USD")
    assert fake.chart_symbols == ["AAPL"]


def test_resolve_price_non_us_adds_suffix_but_echoes_ticker(client, fake):
    fake.chart("005930.KS", 71000, "KRW")
    rec = asyncio.run(resolve_price(client, "005930", "KR"))
    assert rec == PriceRecord(symbol="005930", price=71000, currency="KRW")
    assert fake.chart_symbols == ["005930.KS"]


def test_resolve_price_empty_ticker_makes_no_call(client, fake):
    assert asyncio.run(resolve_price(client, "", "US")) is None
    assert asyncio.run(resolve_price(client, None, "US")) is None
    assert fake.requests == []


def test_resolve_price_not_found_is_none(client, fake, log_records):
    assert asyncio.run(resolve_price(client, "NOPE", "US")) is None
    assert any(r["level"].name == "WARNING" and "NOPE" in r["message"] for r in log_records)


def test_resolve_price_error_is_none(client, fake, log_records):
    fake.charts["AAPL"] = (503, {})
    assert asyncio.run(resolve_price(client, "AAPL", "US")) is None
    assert any(r["level"].name == "ERROR" for r in log_records)


def test_resolve_ticker(client, fake):
    fake.search("US0378331005", "AAPL")
    rec = asyncio.run(resolve_ticker(client, "US0378331005"))
    assert rec == TickerRecord(isin="US0378331005", ticker="AAPL")


def test_resolve_ticker_zero_matches(client, fake, log_records):
    assert asyncio.run(resolve_ticker(client, "XX0000000000")) is None
    assert any(r["level"].name == "WARNING" for r in log_records)


def test_resolve_ticker_error_is_none(client, fake):
    fake.search("US0378331005", "AAPL")
    fake.broken.add("US0378331005")
    assert asyncio.run(resolve_ticker(client, "US0378331005")) is None


def test_resolve_price_empty_chart_result_warning(client, fake, log_records):
    fake.charts["AAPL"] = (200, {"chart": {"result": [], "error": None}})
    assert asyncio.run(resolve_price(client, "AAPL", "US")) is None
    warnings = [r["message"] for r in log_records if r["level"].name == "WARNING"]
    assert warnings == ["Unknown instrument: AAPL (market=US)"]
