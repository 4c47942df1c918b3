"""
Schemas Package

Pydantic schemas shared by the core operations (Rectangle, Offset, Color)
and by the API layer (request/response models).
"""

# Common models (core data structures)
from .common import Color, Offset, Rectangle

# Image operation models
from .image import (
    BlendRequest,
    BrightnessRequest,
    ColorizeRequest,
    ColorRemapRequest,
    CropRequest,
    FormatsResponse,
    GrayscaleRequest,
    ImageInfoResponse,
    ImageRequest,
    ImageResponse,
    MergeRequest,
    ScaleRequest,
    SuperscriptRequest,
    TrimRequest,
)

__all__ = [
    "Color",
    "Offset",
    "Rectangle",
    "BlendRequest",
    "BrightnessRequest",
    "ColorizeRequest",
    "ColorRemapRequest",
    "CropRequest",
    "FormatsResponse",
    "GrayscaleRequest",
    "ImageInfoResponse",
    "ImageRequest",
    "ImageResponse",
    "MergeRequest",
    "ScaleRequest",
    "SuperscriptRequest",
    "TrimRequest",
]
