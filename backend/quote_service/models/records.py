from typing import List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

class StockRequest(BaseModel):
    # batch input used "country" for the market code; accept both spellings
    ticker: Optional[str] = None
    market: Optional[str] = Field(default=None, validation_alias=AliasChoices("market", "country"))

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

class PriceRecord(BaseModel):
    symbol: str
    price: float
    currency: Optional[str] = None

class TickerRecord(BaseModel):
    isin: str
    ticker: Optional[str] = None

class StocksQuery(BaseModel):
    stocks: List[StockRequest]

class TickersQuery(BaseModel):
    isinList: List[str]
