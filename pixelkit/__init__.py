"""
pixelkit - pixel manipulation engine for RGBA raster buffers.

Every operation takes PixelBuffers and returns a new PixelBuffer; inputs
are never modified.
"""

from pixelkit.core import (
    DecodeError,
    EncodeError,
    GrayscaleMethod,
    Interpolation,
    InvalidRegion,
    OutOfBounds,
    PixelBuffer,
    PixelkitError,
    compose_mappers,
)
from pixelkit.core.image import (
    blend,
    change_brightness,
    color,
    crop,
    decode,
    encode,
    feather,
    grayscale,
    mask,
    merge,
    scale,
    scale_to_height,
    scale_to_width,
    superscript,
    tint,
    trim,
)
from pixelkit.schemas import Color, Offset, Rectangle

__version__ = "1.0.0"

__all__ = [
    "DecodeError",
    "EncodeError",
    "GrayscaleMethod",
    "Interpolation",
    "InvalidRegion",
    "OutOfBounds",
    "PixelBuffer",
    "PixelkitError",
    "compose_mappers",
    "blend",
    "change_brightness",
    "color",
    "crop",
    "decode",
    "encode",
    "feather",
    "grayscale",
    "mask",
    "merge",
    "scale",
    "scale_to_height",
    "scale_to_width",
    "superscript",
    "tint",
    "trim",
    "Color",
    "Offset",
    "Rectangle",
]
