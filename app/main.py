from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import time

from app.config import (
    ALLOWED_ORIGINS,
    LOG_JSON,
    LOG_LEVEL,
    SEED_SAMPLE_DATA,
    SERVICE_NAME,
    SERVICE_VERSION,
    SPORTSDATA_RATE_LIMIT_MAX_REQUESTS,
    SPORTSDATA_RATE_LIMIT_WINDOW,
)
from app.db import init_db
from app.middleware.rate_limit import FixedWindowRateLimitMiddleware, get_client_key
from app.routers import games, guest, health, predict, sportsdata, teams
from app.services.data_ingestion import seed_sample_data
from app.utils.logging import setup_logging, request_logger

logger = setup_logging(level=LOG_LEVEL, json_format=LOG_JSON)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if SEED_SAMPLE_DATA:
        seed_sample_data()
    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="""
# NFL Game Predictor API

Predicts NFL game scores from season statistics.

## Models

- **fixed**: hardcoded weights, used when a request carries no settings
- **enhanced**: tunable weights (`recentForm`, `homeFieldAdvantage`,
  `defensiveStrength`, `fpiEdge`), clamped to their allowed ranges

Predictions are deterministic: the same matchup and season always give the same score.

## Guests

Anonymous devices get a limited number of free saved predictions before the paywall.

## Rate Limits

- `/sportsdata`: 100 requests per minute per client
    """,
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Predictions", "description": "Game score predictions"},
        {"name": "Teams", "description": "Teams and season statistics"},
        {"name": "Games", "description": "Season scoreboard grouped by week"},
        {"name": "Guest", "description": "Guest sessions and free prediction credits"},
        {"name": "SportsData", "description": "SportsData.io NFL API proxy"},
    ]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With"],
    expose_headers=["X-Process-Time", "X-RateLimit-Limit", "X-RateLimit-Remaining"],
)

app.add_middleware(
    FixedWindowRateLimitMiddleware,
    max_requests=SPORTSDATA_RATE_LIMIT_MAX_REQUESTS,
    window_seconds=SPORTSDATA_RATE_LIMIT_WINDOW,
    protected_paths=["/sportsdata"],
)

app.include_router(health.router)
app.include_router(predict.router)
app.include_router(teams.router)
app.include_router(games.router)
app.include_router(guest.router)
app.include_router(sportsdata.router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time
    process_time_ms = process_time * 1000

    if process_time > 1.0:
        logger.warning(f"Slow request: {request.method} {request.url.path} took {process_time:.2f}s")

    request_logger.log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=process_time_ms,
        client_ip=get_client_key(request)
    )

    response.headers["X-Process-Time"] = str(round(process_time_ms, 2))

    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    request_logger.log_error(
        message=f"Unhandled exception: {type(exc).__name__}",
        exception=exc,
        path=request.url.path,
        client_ip=get_client_key(request)
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "An internal error occurred",
            "type": type(exc).__name__
        }
    )


@app.get("/", tags=["Health"])
def root():
    return {
        "name": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "docs": "/docs",
        "redoc": "/redoc",
        "endpoints": [
            "/health",
            "/predict",
            "/teams",
            "/team-stats",
            "/games",
            "/guest/ensure",
            "/guest/predict",
            "/sportsdata/{path}",
        ],
    }
