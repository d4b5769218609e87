from typing import Optional

from quote_service.core.settings import settings

US_MARKET = "US"
NON_US_SUFFIX = settings.non_us_suffix

def resolve_suffix(code: Optional[str], non_us_suffix: str = NON_US_SUFFIX) -> str:
    """
    Map a caller's market/country code to the provider's ticker suffix.
    Only an exact "US" means no suffix; every other value (blank and unknown
    codes included) gets the non-US exchange suffix.
    """
    if code == US_MARKET:
        return ""
    return non_us_suffix

def full_symbol(ticker: str, market: Optional[str], non_us_suffix: str = NON_US_SUFFIX) -> str:
    return f"{ticker}{resolve_suffix(market, non_us_suffix)}"
