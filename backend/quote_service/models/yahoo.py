"""
Shapes of the Yahoo Finance payloads we read.

Only the fields the resolvers consume are declared; everything else in the
provider's JSON is ignored. A payload that does not fit raises
``pydantic.ValidationError`` which the client turns into an
``UpstreamPayloadError``.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict

class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore")

class ChartMeta(_Lenient):
    regularMarketPrice: float
    currency: Optional[str] = None

class ChartResult(_Lenient):
    meta: ChartMeta

class Chart(_Lenient):
    result: Optional[List[ChartResult]] = None
    error: Optional[Dict[str, Any]] = None

class ChartResponse(_Lenient):
    chart: Chart

class SearchQuote(_Lenient):
    symbol: str

class SearchResponse(_Lenient):
    # Shape: {"quotes": [{"symbol": "005930.KS", ...}], "news": [...], ...}
    quotes: Optional[List[SearchQuote]] = None
