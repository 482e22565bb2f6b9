"""
FastAPI application for the scorecard analysis service.

Provides endpoints for:
- Analyzing uploaded provider scorecards
- Health checks
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import get_settings
from .models import HealthResponse
from .routers import scorecard
from .services.exceptions import ScorecardError, ValidationError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Scorecard Analysis Service...")
    settings = get_settings()
    if not settings.openai_api_key:
        logger.warning(
            "OPENAI_API_KEY is not set; analysis requests will fail until it is configured"
        )
    yield
    logger.info("Shutting down Scorecard Analysis Service...")


settings = get_settings()

app = FastAPI(
    title="Scorecard Analysis API",
    description="Provider performance measure extraction from healthcare scorecards",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        message="Scorecard Analysis API is running",
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__, message="Service is healthy")


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(scorecard.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(ScorecardError)
async def scorecard_error_handler(request: Request, exc: ScorecardError):
    """Render pipeline errors as {"error", "details"} JSON."""
    if exc.status_code >= 500:
        logger.error("%s: %s", type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Render malformed form data as a 400 in the same shape as pipeline errors."""
    errors = exc.errors()
    if any(tuple(e.get("loc", ()))[:2] == ("body", "files") for e in errors):
        message = "No files uploaded"
    else:
        message = "Invalid request"

    details = "; ".join(
        f"{'.'.join(str(part) for part in e.get('loc', ()))}: {e.get('msg', '')}"
        for e in errors
    )
    logger.info("Rejected malformed request: %s", details)
    error = ValidationError(message, details=details)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())
