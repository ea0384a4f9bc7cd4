"""FastAPI application entry point with lifespan, logging, and middleware."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.models import HealthResponse
from app.routers import movies
from app.services.dispatcher import MovieDispatcher

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def _log_environment() -> None:
    # Lengths only, the key itself must never reach the logs.
    logger.info(
        "Environment check: SUPABASE_URL length=%d  SUPABASE_ANON_KEY length=%d",
        len(settings.supabase_url), len(settings.supabase_anon_key),
    )
    missing = settings.missing_fields()
    if missing:
        logger.warning("Missing configuration: %s; every request will be refused", ", ".join(missing))


@asynccontextmanager
async def lifespan(app: FastAPI):
    dispatcher = MovieDispatcher(settings)
    movies.init_router(dispatcher)
    app.state.dispatcher = dispatcher

    _log_environment()
    logger.info("Application started: backend=%s", settings.supabase_url or "<unset>")
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Movies API",
    description=(
        "CRUD endpoints for a movies table, proxied to a Supabase "
        "(PostgREST) data API."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s → %d  (%.0f ms)",
        request.method, request.url.path, response.status_code, elapsed,
    )
    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "An internal error occurred.", "details": type(exc).__name__},
    )


@app.get("/health", response_model=HealthResponse, tags=["system"])
async def health():
    """Report whether the backend is configured and reachable."""
    dispatcher: MovieDispatcher = app.state.dispatcher
    if not dispatcher.settings.is_configured:
        return HealthResponse(
            status="misconfigured",
            configured=False,
            supabase={"missing": dispatcher.settings.missing_fields()},
        )

    supabase_status = await dispatcher.service.health_check()
    overall = "healthy" if supabase_status.get("authorized") else "degraded"
    return HealthResponse(status=overall, configured=True, supabase=supabase_status)


app.include_router(movies.router)
