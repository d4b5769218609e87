# backend/quote_service/core/settings.py
import os
from pathlib import Path
from typing import List
from pydantic import BaseModel
from dotenv import load_dotenv

# Resolve backend directory and load .env explicitly
BACKEND_DIR = Path(__file__).resolve().parents[2]  # .../backend
load_dotenv(BACKEND_DIR / ".env")  # do NOT set override=True; shell exports still win

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

class Settings(BaseModel):
    env: str = os.getenv("APP_ENV", "dev")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "4000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    http_timeout_s: float = float(os.getenv("HTTP_TIMEOUT_S", "5"))
    yahoo_chart_url: str = os.getenv("YAHOO_CHART_URL", "https://query1.finance.yahoo.com/v8/finance/chart")
    yahoo_search_url: str = os.getenv("YAHOO_SEARCH_URL", "https://query2.finance.yahoo.com/v1/finance/search")
    yahoo_user_agent: str = os.getenv("YAHOO_USER_AGENT", DEFAULT_USER_AGENT)
    non_us_suffix: str = os.getenv("NON_US_SUFFIX", ".KS")
    # 0 = every batch item in flight at once
    batch_max_concurrency: int = int(os.getenv("BATCH_MAX_CONCURRENCY", "0"))
    cors_origins: List[str] = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
        if o.strip()
    ]

settings = Settings()
