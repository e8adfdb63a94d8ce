"""Main FastAPI application for SoilWatch"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from .core.config import settings, DEV_SECRET_KEY
from .core.database import init_db, close_db
from .exceptions import ConfigurationError, SoilWatchException
from .logging_config import configure_logging, get_logger
from .middleware import RequestTracingMiddleware
from .routers import alerts, auth, health, metrics, readings, sensors, users, webhook
from .thresholds import load_threshold_table

configure_logging(log_level=settings.log_level, json_logs=settings.json_logs)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown"""
    # Startup
    logger.info("application_starting", app=settings.app_name, version=settings.app_version)

    if settings.is_production and settings.secret_key == DEV_SECRET_KEY:
        raise ConfigurationError("SECRET_KEY must be set in production")

    app.state.thresholds = load_threshold_table(settings.thresholds_file)
    logger.info("thresholds_loaded", source=settings.thresholds_file or "built-in")

    await init_db()

    yield

    # Shutdown
    logger.info("application_stopping")
    await close_db()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Soil sensor readings, threshold alerts and sensor ownership",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestTracingMiddleware)

app.include_router(health.router)
app.include_router(metrics.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(sensors.router)
app.include_router(readings.router)
app.include_router(alerts.router)
app.include_router(webhook.router)

# ============================================================
# Exception Handlers
# ============================================================

@app.exception_handler(SoilWatchException)
async def soilwatch_exception_handler(request: Request, exc: SoilWatchException):
    """Map domain exceptions to their HTTP status"""
    if exc.status_code >= 500:
        logger.error("request_error", error_code=exc.error_code, error=exc.message)
    else:
        logger.info("request_rejected", error_code=exc.error_code, status_code=exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies, missing fields and non-numeric path ids all answer 400"""
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": {"errors": errors}
        }
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.error("unhandled_exception", error=str(exc), exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_SERVER_ERROR",
            "message": "An unexpected error occurred",
            "details": {}
        }
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "status": "online"
    }
