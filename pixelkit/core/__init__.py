"""
Core modules for pixelkit
"""

from .buffer import PixelBuffer, compose_mappers
from .enums import GrayscaleMethod, Interpolation
from .exceptions import DecodeError, EncodeError, InvalidRegion, OutOfBounds, PixelkitError

__all__ = [
    "PixelBuffer",
    "compose_mappers",
    "GrayscaleMethod",
    "Interpolation",
    "DecodeError",
    "EncodeError",
    "InvalidRegion",
    "OutOfBounds",
    "PixelkitError",
]
