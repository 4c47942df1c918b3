"""
Exception hierarchy for pixelkit.

Every error raised on purpose by the library derives from PixelkitError,
so callers can catch the whole family or a single kind.
"""

from typing import Any, Dict, Optional


class PixelkitError(Exception):
    """Base exception for all pixelkit errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class OutOfBounds(PixelkitError, IndexError):
    """Raised when a pixel coordinate lies outside the buffer."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(
            f"Pixel ({x}, {y}) is outside the {width}x{height} buffer",
            {"x": x, "y": y, "width": width, "height": height},
        )
        self.x = x
        self.y = y


class InvalidRegion(PixelkitError, ValueError):
    """Raised when a crop rectangle exceeds the image bounds."""

    def __init__(self, region: Dict[str, int], width: int, height: int):
        super().__init__(
            f"Cannot crop to region {region} that exceeds the {width}x{height} image bounds",
            {"region": region, "width": width, "height": height},
        )
        self.region = region


class DecodeError(PixelkitError):
    """Raised when base64 text or image bytes cannot be decoded."""


class EncodeError(PixelkitError):
    """Raised when an image cannot be encoded to the requested format."""

    def __init__(self, message: str, format: Optional[str] = None):
        super().__init__(message, {"format": format} if format else None)
        self.format = format
