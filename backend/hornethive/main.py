"""
HornetHive FastAPI Application
Main entry point for the backend API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hornethive.config import settings
from hornethive.database import check_db, close_db, init_db
from hornethive.errors import IdentityError
from hornethive.tasks.background import detached_tasks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and cleanup on shutdown.
    """
    from hornethive.logging_config import setup_logging
    setup_logging(log_dir=settings.log_dir, log_level=settings.log_level)

    logger.info("Starting HornetHive backend...")

    # In production, use Alembic migrations instead
    if settings.debug:
        await init_db()
        logger.info("Database initialized (debug mode)")

    yield

    logger.info("Shutting down HornetHive backend...")
    await detached_tasks.drain()
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title="HornetHive",
    description="Account signup, approval and login for HornetHive.",
    version="0.1.0",
    docs_url=f"{settings.api_prefix}/docs",
    openapi_url=f"{settings.api_prefix}/openapi.json",
    lifespan=lifespan,
)


@app.exception_handler(IdentityError)
async def identity_error_handler(request: Request, exc: IdentityError):
    if exc.http_status >= 500:
        logger.error(f"{exc.kind.value} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


# =============================================================================
# Health Check Endpoints
# =============================================================================

@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - API information."""
    return {
        "name": "HornetHive API",
        "version": "0.1.0",
        "docs": f"{settings.api_prefix}/docs",
        "status": "running"
    }


@app.get(f"{settings.api_prefix}/health", tags=["Health"])
async def health_check():
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "service": "hornethive-backend",
        "version": "0.1.0"
    }


@app.get(f"{settings.api_prefix}/health/db", tags=["Health"])
async def database_health():
    """Database connectivity check."""
    try:
        await check_db()
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "disconnected"},
        )


from hornethive.api import auth, users


# =============================================
# API Routers
# =============================================

app.include_router(auth.router, prefix=settings.api_prefix, tags=["Auth"])
app.include_router(users.router, prefix=f"{settings.api_prefix}/users", tags=["Users"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "hornethive.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
