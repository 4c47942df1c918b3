"""
pixelkit - Main FastAPI Application
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pixelkit import __version__
from pixelkit.api.exceptions import register_exception_handlers
from pixelkit.api.routers import image
from pixelkit.config import get_settings
from pixelkit.core.constants import SystemConstants
from pixelkit.services.image_service import ImageService

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format=SystemConstants.LOG_FORMAT,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    logger.info("Starting pixelkit server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")

    app.state.image_service = ImageService(settings)

    yield

    logger.info("pixelkit server stopped")


# Create FastAPI app
app = FastAPI(
    title="pixelkit",
    description="Pixel manipulation engine for RGBA images",
    version=__version__,
    lifespan=lifespan,
)

if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(image.router, prefix="/api/image", tags=["Image"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "pixelkit",
        "status": "running",
        "version": __version__,
        "endpoints": {
            "image": "/api/image",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "image_service": getattr(app.state, "image_service", None) is not None,
        },
    }


def run() -> None:
    """Run the API server with uvicorn."""
    uvicorn.run(
        "pixelkit.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        log_level=settings.system.log_level.lower(),
    )


if __name__ == "__main__":
    run()
