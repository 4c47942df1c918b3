"""
Shared FastAPI dependencies for pixelkit.
"""

import logging

from fastapi import HTTPException, Request

from pixelkit.services.image_service import ImageService

logger = logging.getLogger(__name__)


def get_image_service(request: Request) -> ImageService:
    """
    Get ImageService instance from app state.

    Args:
        request: FastAPI request object

    Returns:
        ImageService instance

    Raises:
        HTTPException: If the service is not initialized
    """
    try:
        return request.app.state.image_service
    except AttributeError as e:
        logger.error(f"Image service not initialized in app state: {e}")
        raise HTTPException(
            status_code=500, detail="Internal server error: Image service not initialized"
        )
