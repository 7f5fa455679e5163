import logging
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.routes import health, nba_data
from app.config import settings
from app.exceptions import (
    ConfigurationError,
    NoGamesFoundError,
    OddsAPIError,
    ProviderError,
    ProviderTimeoutError,
    TeamNotFoundError,
)
from app.services.metrics import metrics_service
from app.services.rate_limiter import limiter

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "/api/v1/nba-data",
    "/api/v1/matchup",
    "/api/v1/briefing",
    "/api/v1/health",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting NBA odds proxy")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Caching: {'enabled' if settings.enable_cache else 'disabled'} (ttl={settings.cache_ttl_seconds}s)")
    if not settings.odds_api_key:
        logger.warning("ODDS_API_KEY is not set; /api/v1/nba-data will fail until it is configured")
    yield
    # Shutdown
    logger.info("Shutting down NBA odds proxy")


app = FastAPI(
    title="nba-odds-proxy",
    description="Caching proxy that turns NBA moneyline odds into per-team dashboard data",
    version=settings.app_version,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# Request logging + metrics middleware
@app.middleware("http")
async def request_log_middleware(request: Request, call_next):
    """Tag the request with a short id, log it and track metrics."""
    request_id = uuid.uuid4().hex[:9]
    request.state.request_id = request_id

    # Skip metrics for health/metrics endpoints
    track = request.url.path not in ("/health", "/metrics")

    start_time = time.time()
    if track:
        metrics_service.track_request()

    # Unhandled errors escape call_next and become a 500 at the outer boundary
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        latency_ms = (time.time() - start_time) * 1000
        logger.info(f"[{request_id}] {request.method} {request.url.path} -> {status_code} ({latency_ms:.0f}ms)")

        if track:
            metrics_service.track_latency(latency_ms)
            if status_code >= 400:
                metrics_service.track_error()


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


# Exception handlers
@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"[{_request_id(request)}] Configuration error: {exc.message} - {exc.details}")
    return JSONResponse(status_code=500, content=exc.to_dict())


@app.exception_handler(ProviderTimeoutError)
async def timeout_handler(request: Request, exc: ProviderTimeoutError):
    logger.error(f"[{_request_id(request)}] Provider timeout: {exc.message} - {exc.details}")
    return JSONResponse(status_code=504, content=exc.to_dict())


@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError):
    logger.error(f"[{_request_id(request)}] Provider error: {exc.message} - {exc.details}")
    status = exc.status_code if exc.status_code and 400 <= exc.status_code < 600 else 502
    return JSONResponse(status_code=status, content=exc.to_dict())


@app.exception_handler(NoGamesFoundError)
async def no_games_handler(request: Request, exc: NoGamesFoundError):
    logger.info(f"[{_request_id(request)}] No games found for {exc.sport}")
    return JSONResponse(status_code=404, content=exc.to_dict())


@app.exception_handler(TeamNotFoundError)
async def team_not_found_handler(request: Request, exc: TeamNotFoundError):
    logger.info(f"[{_request_id(request)}] Team not found: {exc.team_id}")
    return JSONResponse(status_code=404, content=exc.to_dict())


@app.exception_handler(OddsAPIError)
async def odds_api_error_handler(request: Request, exc: OddsAPIError):
    logger.error(f"[{_request_id(request)}] OddsAPI error: {exc.message} - {exc.details}")
    return JSONResponse(status_code=500, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"[{_request_id(request)}] Unhandled error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": str(exc) if settings.is_development else "Something went wrong",
        },
    )


# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(nba_data.router, prefix="/api/v1", tags=["nba"])


@app.get("/metrics")
async def get_metrics():
    """Get API metrics (requests, latency, cache stats)."""
    return metrics_service.get_metrics()


@app.post("/metrics/reset")
async def reset_metrics():
    """Reset all metrics counters."""
    metrics_service.reset()
    return {"status": "reset"}


# Legacy endpoint for backward compatibility
@app.get("/api/nba-data", include_in_schema=False)
async def legacy_nba_data(request: Request):
    target = "/api/v1/nba-data"
    if request.url.query:
        target = f"{target}?{request.url.query}"
    return RedirectResponse(target, status_code=302)


@app.api_route(
    "/api/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def api_not_found(request: Request, path: str):
    return JSONResponse(
        status_code=404,
        content={
            "error": "NOT_FOUND",
            "message": f"API endpoint {request.url.path} not found",
            "availableEndpoints": AVAILABLE_ENDPOINTS,
        },
    )


# SPA fallback: built frontend assets, else index.html
@app.get("/{full_path:path}", include_in_schema=False)
async def spa_fallback(request: Request, full_path: str):
    dist = Path(settings.static_dist_path).resolve()
    requested = (dist / full_path).resolve()
    if full_path and requested.is_relative_to(dist) and requested.is_file():
        return FileResponse(requested)

    index = dist / "index.html"
    if index.is_file():
        logger.info(f"[{_request_id(request)}] SPA fallback for: {request.url.path}")
        return FileResponse(index)

    return JSONResponse(
        status_code=404,
        content={"error": "NOT_FOUND", "message": "Frontend build not found"},
    )
