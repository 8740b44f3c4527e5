"""
Media dashboard gateway - FastAPI application.

Proxies the dashboard's browser requests to:
- Radarr (movies, lookup, queue, disk space, status)
- Sonarr (series, lookup, queue, health, profiles)
- the Emby/Jellyfin media server (subtitle streams, playback reports)

Upstream credentials never leave the server. Every failure reaches the browser
as `{"error": <message>}` with a meaningful status code.
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routers import media_server, radarr, sonarr
from mediadash.config import get_settings
from mediadash.errors import GatewayError

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level = (os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_cors_origins() -> list[str]:
    """
    Get CORS allowed origins from environment.
    Set CORS_ALLOW_ORIGINS as comma-separated list of origins.
    Example: CORS_ALLOW_ORIGINS=http://dashboard.lan:3000,http://localhost:3000
    """
    origins_str = os.getenv("CORS_ALLOW_ORIGINS", "")
    if not origins_str:
        return []
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    configure_logging()
    logger.info("Starting up media dashboard gateway...")
    settings = get_settings()
    for upstream in (settings.radarr, settings.sonarr, settings.media_server):
        if upstream.is_configured:
            logger.info(f"{upstream.service} upstream: {upstream.base_url}")
        else:
            logger.warning(
                f"{upstream.service} upstream not configured ({upstream.url_env}/{upstream.key_env}); "
                "its endpoints will answer 500"
            )
    yield
    logger.info("Shutting down media dashboard gateway...")


app = FastAPI(
    title="Media Dashboard Gateway",
    description="Server-side proxy for Radarr, Sonarr and Emby/Jellyfin",
    version="0.1.0",
    lifespan=lifespan,
)

# If no origins configured, allows all origins but disables credentials
cors_origins = get_cors_origins()
allow_credentials = len(cors_origins) > 0

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if cors_origins else ["*"],
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc.__cause__)
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part not in ("query", "body", "path"))
        problems.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse({"error": "; ".join(problems) or "Invalid request"}, status_code=400)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse({"error": "Internal server error"}, status_code=500)


app.include_router(radarr.router, prefix="/api")
app.include_router(sonarr.router, prefix="/api")
app.include_router(media_server.router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "mediadash-gateway"}


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}
