"""SafePath API - FastAPI application entry point.

Serves an incident density heatmap and risk-aware walking paths computed
from a pre-built, deduplicated snapshot of scored incident points.
"""

import math
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from safepath.api.v1 import admin, heatmap, poi, routes, search
from safepath.config import get_settings
from safepath.core.exceptions import SafePathException
from safepath.core.logging_config import get_logger, setup_logging
from safepath.core.middleware import RequestLoggingMiddleware
from safepath.core.rate_limit import limiter
from safepath.dependencies import get_snapshot_store
from safepath.repositories.snapshot_repository import SnapshotRepository, SnapshotStore

logger = get_logger(__name__)


def create_snapshot_store() -> SnapshotStore:
    """Load the configured snapshot, falling back to an empty one."""
    settings = get_settings()
    store = SnapshotStore()
    try:
        store.reload(SnapshotRepository(settings.HEATMAP_DATA_PATH, settings.POI_DATA_PATH))
    except SafePathException as e:
        logger.warning(f"Starting with an empty snapshot: {e.message}")
    return store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan events."""
    settings = get_settings()
    setup_logging()
    logger.info(f"Starting SafePath API in {settings.APP_ENV} mode")
    app.state.snapshot_store = create_snapshot_store()
    yield
    logger.info("Shutting down SafePath API")


app = FastAPI(
    title="SafePath API",
    description="""SafePath helps pedestrians avoid areas with a history of reported incidents.

Features: incident density heatmaps at three map resolutions with time-window and category filters, risk-aware walking paths annotated per segment with estimated risk and dominant incident category, point-of-interest lookup and place search.

Risk scores are heuristic and derived from case resolution status and season; they are not calibrated crime statistics.
    """,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "health", "description": "Health and readiness checks"},
        {"name": "heatmap", "description": "Incident density surface"},
        {"name": "path", "description": "Risk-aware walking paths"},
        {"name": "poi", "description": "Points of interest"},
        {"name": "search", "description": "Place search"},
        {"name": "admin", "description": "Snapshot maintenance"},
    ],
)

settings = get_settings()

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(RequestLoggingMiddleware)

# Added last, executes first
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SafePathException)
async def safepath_exception_handler(request: Request, exc: SafePathException):
    """Handle SafePath custom exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.__class__.__name__,
            "message": exc.message,
            "path": request.url.path,
        },
    )


def _json_safe(value):
    """Replace NaN and infinities, which JSON cannot carry, with their text."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return 422 for invalid requests, including ones carrying non-finite numbers."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(_json_safe(exc.errors()))},
    )


@app.get("/health", tags=["health"])
async def health_check():
    """Basic liveness check."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/ready", tags=["health"])
async def readiness_check(store: SnapshotStore = Depends(get_snapshot_store)):
    """Readiness check reporting the size of the served snapshot."""
    return {"status": "ready", "points": len(store.dataset), "pois": len(store.pois)}


app.include_router(heatmap.router, prefix="/api/v1/heatmap", tags=["heatmap"])
app.include_router(routes.router, prefix="/api/v1/path", tags=["path"])
app.include_router(poi.router, prefix="/api/v1/poi", tags=["poi"])
app.include_router(search.router, prefix="/api/v1/search", tags=["search"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["admin"])
