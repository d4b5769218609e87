from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger

from quote_service.core.errors import UpstreamError
from quote_service.core.settings import settings
from quote_service.models.records import PriceRecord, StocksQuery, TickerRecord, TickersQuery
from quote_service.services import batch, resolvers
from quote_service.services.yahoo_client import YahooClient, get_yahoo_client

router = APIRouter()

@router.get("/ping")
def ping() -> str:
    return "pong"

@router.get("/stock", response_model=Optional[PriceRecord])
async def get_stock(
    ticker: str = Query(..., description="Ticker without exchange suffix"),
    market: str = Query(..., description='"US" or any other code for the non-US exchange'),
    client: YahooClient = Depends(get_yahoo_client),
):
    return await resolvers.resolve_price(client, ticker, market)

@router.get("/ticker", response_model=Optional[TickerRecord])
async def get_ticker(
    isin: str = Query(..., description="ISIN or other identifier to search for"),
    client: YahooClient = Depends(get_yahoo_client),
):
    return await resolvers.resolve_ticker(client, isin)

@router.post("/stocks", response_model=List[PriceRecord])
async def get_stocks(payload: StocksQuery, client: YahooClient = Depends(get_yahoo_client)):
    try:
        return await batch.resolve_prices(
            client, payload.stocks, max_concurrency=settings.batch_max_concurrency
        )
    except UpstreamError as e:
        logger.exception(f"Price batch of {len(payload.stocks)} failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

@router.post("/tickers", response_model=List[Optional[TickerRecord]])
async def get_tickers(payload: TickersQuery, client: YahooClient = Depends(get_yahoo_client)):
    try:
        return await batch.resolve_tickers(
            client, payload.isinList, max_concurrency=settings.batch_max_concurrency
        )
    except UpstreamError as e:
        logger.exception(f"Ticker batch of {len(payload.isinList)} failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
