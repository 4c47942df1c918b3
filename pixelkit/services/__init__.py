"""
Service layer: orchestrates core operations for the API.
"""

from .image_service import ImageService

__all__ = ["ImageService"]
