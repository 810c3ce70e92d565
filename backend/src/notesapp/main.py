# Main application entry point
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import auth_router, health_router, notes_router
from .config import get_settings
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.redis_client import get_redis_client
from .database import create_tables, dispose_engine
from .exceptions import register_exception_handlers

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Starting Notes App",
        extra={"version": settings.app_version, "environment": settings.environment, "debug": settings.debug},
    )

    redis_client = get_redis_client()
    try:
        await redis_client.connect()
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Token revocation disabled until it is back.")

    # Tests run against their own engine and skip this
    if os.getenv("NOTESAPP_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping DB table creation due to NOTESAPP_SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    logger.info("Shutting down Notes App")
    await redis_client.disconnect()
    await dispose_engine()


app = FastAPI(
    title=settings.app_name,
    description="Personal notes manager API",
    version=settings.app_version,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router, prefix="/api")
app.include_router(notes_router, prefix="/api")
app.include_router(health_router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Notes App Backend Server is running!"}


@app.get("/api/test")
async def api_test():
    return {"message": "API endpoint is working!"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("notesapp.main:app", host=settings.host, port=settings.port, reload=settings.reload)
