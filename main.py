# main.py
"""
GymPortal API - Main Application.

FastAPI app with MongoDB backend.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from database import Database
from settings import settings
from app.middleware.db_middleware import LazyDatabaseMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware
from app.utils.errors import GymPortalException

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Sentry for error tracking
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR
            ),
        ],
    )
    logger.info(f"Sentry initialized ({settings.SENTRY_ENVIRONMENT})")
else:
    logger.warning("Sentry DSN not configured - error tracking disabled")

from app.routes import workout


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting GymPortal API...")
    # If initialization fails, lazy initialization will be used as fallback
    try:
        await Database.connect_db(settings.DATABASE_URL, settings.DATABASE_NAME)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.warning(f"Failed to initialize database at startup: {e}")
        logger.warning("Database will be initialized lazily on first request")

    yield

    await Database.close_db()
    logger.info("GymPortal API shutdown complete")


app = FastAPI(
    title="GymPortal API",
    version="1.0.0",
    description="Fitness center portal: workouts, completion calendar and history reports",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(LazyDatabaseMiddleware)


@app.exception_handler(GymPortalException)
async def gymportal_exception_handler(request: Request, exc: GymPortalException):
    """Render domain errors with their stable message."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.get("/health")
async def health_check():
    """Health check endpoint - fast response without database dependency."""
    return {
        "status": "ok",
        "environment": settings.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0"
    }


@app.get("/health/detailed")
async def health_check_detailed():
    """Detailed health check with MongoDB connectivity test."""
    try:
        mongo_ok = await Database.ping()
        return {
            "status": "ok" if mongo_ok else "degraded",
            "database": "mongodb",
            "database_connected": mongo_ok,
            "environment": settings.ENV,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": "1.0.0"
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return {
            "status": "error",
            "database": "mongodb",
            "database_connected": False,
            "environment": settings.ENV,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "error": str(e)
        }


app.include_router(workout.router, prefix="/workouts", tags=["Workouts"])


@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": "GymPortal API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
