# backend/quote_service/main.py
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from quote_service.core.settings import settings
from quote_service.api.routes_quotes import router as quotes_router
from quote_service.services.yahoo_client import close_yahoo_client

logger.remove()
logger.add(sys.stderr, level=settings.log_level)

@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    # shared upstream pool lives as long as the app
    await close_yahoo_client()

app = FastAPI(title="Quote Service API", version="0.1.0", lifespan=lifespan)

# CORS for local dev frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(quotes_router, tags=["quotes"])

@app.get("/healthz")
def healthz():
    return {"ok": True}

@app.get("/health")
def health():
    logger.info("Health check ok")
    return {"status": "ok", "env": settings.env}

def run():
    logger.info(f"Server ready at http://{settings.host}:{settings.port}/")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())

if __name__ == "__main__":
    run()
