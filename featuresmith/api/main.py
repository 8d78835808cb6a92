"""
Main FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from featuresmith import __version__
from featuresmith.config.logging_config import setup_logging
from featuresmith.config.settings import settings
from featuresmith.core.exceptions import FeatureSmithError
from featuresmith.monitoring.metrics import get_metrics

from .routes import analytics, features


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(settings.log_level, settings.log_file)
    logger.info(f"Starting FeatureSmith API Server - Environment: {settings.environment}")
    yield
    get_metrics().log_summary()
    logger.info("Shutting down FeatureSmith API Server")


app = FastAPI(
    title="FeatureSmith - AI Gherkin Feature Generation",
    description="Generate Cucumber feature files from user stories and score their quality and complexity",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(features.router, prefix="/api/features", tags=["features"])
app.include_router(analytics.router, prefix="/api/analytics", tags=["analytics"])


def _error_summary(errors: list) -> list:
    return [{"loc": list(error.get("loc", ())), "msg": error.get("msg", "")} for error in errors]


@app.exception_handler(FeatureSmithError)
async def featuresmith_error_handler(request: Request, exc: FeatureSmithError):
    """Map domain errors to their HTTP status with a {message} body."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400)."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    logger.warning(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(
        status_code=400,
        content={"message": message, "code": "VALIDATION_ERROR", "details": {"errors": _error_summary(errors)}},
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "FeatureSmith API",
        "version": __version__,
        "status": "operational",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}


@app.get("/api/metrics")
async def metrics():
    """Per-operation timing and error counters."""
    tracker = get_metrics()
    return {"summary": tracker.get_summary(), "operations": tracker.get_stats()}
