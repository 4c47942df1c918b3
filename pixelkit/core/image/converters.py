"""
Image format conversion utilities.

The codec boundary of pixelkit. Handles conversions between:
- PixelBuffer (RGBA)
- NumPy arrays (RGB(A), or BGR(A) for OpenCV callers)
- PIL Images
- Encoded image bytes and base64 strings

Compression itself is delegated to Pillow. Failures raise DecodeError or
EncodeError; nothing here returns None for a failed conversion.
"""

import base64
import io
import logging
from typing import List

import cv2
import numpy as np
from PIL import Image

from pixelkit.core.buffer import PixelBuffer
from pixelkit.core.constants import CodecConstants
from pixelkit.core.exceptions import DecodeError, EncodeError

logger = logging.getLogger(__name__)


def to_pil(image: PixelBuffer) -> Image.Image:
    """
    Convert PixelBuffer to PIL Image.

    Args:
        image: Source buffer

    Returns:
        PIL Image in RGBA mode
    """
    return Image.fromarray(image.to_array())


def from_pil(image: Image.Image) -> PixelBuffer:
    """
    Convert PIL Image to PixelBuffer.

    Args:
        image: PIL Image in any mode (palette transparency is kept)

    Returns:
        PixelBuffer
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return PixelBuffer.from_array(np.array(image), copy=False)


def to_numpy(image: PixelBuffer, bgr: bool = False) -> np.ndarray:
    """
    Convert PixelBuffer to NumPy array.

    Args:
        image: Source buffer
        bgr: If True, return BGRA channel order (OpenCV), else RGBA

    Returns:
        uint8 array of shape (height, width, 4)
    """
    array = image.to_array()
    if bgr and not image.is_empty:
        array = cv2.cvtColor(array, cv2.COLOR_RGBA2BGRA)
    return array


def from_numpy(array: np.ndarray, bgr: bool = False) -> PixelBuffer:
    """
    Convert NumPy array to PixelBuffer.

    Args:
        array: uint8 array, grayscale (h, w), 3 or 4 channels
        bgr: If True, the color channels are in OpenCV BGR(A) order

    Returns:
        PixelBuffer (opaque unless the array has an alpha channel)
    """
    if bgr and array.ndim == 3 and array.size > 0:
        if array.shape[2] == 3:
            array = cv2.cvtColor(array, cv2.COLOR_BGR2RGB)
        elif array.shape[2] == 4:
            array = cv2.cvtColor(array, cv2.COLOR_BGRA2RGBA)
    return PixelBuffer.from_array(array)


def resolve_format(format: str) -> str:
    """
    Map a format name or file extension to a Pillow format.

    Args:
        format: Name like "png", "PNG", ".jpg" or "tif"

    Returns:
        Pillow format name (e.g. "PNG", "JPEG")

    Raises:
        EncodeError: If Pillow cannot write the format
    """
    name = format.strip().lstrip(".").upper()
    name = CodecConstants.FORMAT_ALIASES.get(name, name)

    extensions = Image.registered_extensions()
    name = extensions.get(f".{name.lower()}", name)

    if name not in Image.SAVE:
        raise EncodeError(f"Unsupported image format: {format}", format=format)
    return name


def supported_formats() -> List[str]:
    """Names of all formats Pillow can write."""
    Image.init()
    return sorted(Image.SAVE)


def encode_bytes(
    image: PixelBuffer,
    format: str = CodecConstants.DEFAULT_FORMAT,
    quality: int = CodecConstants.DEFAULT_JPEG_QUALITY,
) -> bytes:
    """
    Encode a PixelBuffer into an image container.

    Args:
        image: Image to encode
        format: Image format (png, jpeg, webp, ...)
        quality: JPEG quality (1-100, ignored for other formats)

    Returns:
        Encoded image bytes

    Raises:
        EncodeError: Unsupported format, empty image or codec failure
    """
    pil_format = resolve_format(format)
    if image.is_empty:
        raise EncodeError(
            f"Cannot encode empty {image.width}x{image.height} image", format=format
        )

    try:
        pil_image = to_pil(image)
        if pil_format in CodecConstants.OPAQUE_FORMATS:
            pil_image = pil_image.convert("RGB")

        save_kwargs = {"format": pil_format}
        if pil_format == "JPEG":
            save_kwargs["quality"] = quality
            save_kwargs["optimize"] = True

        buffer = io.BytesIO()
        pil_image.save(buffer, **save_kwargs)
        return buffer.getvalue()

    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.error(f"Failed to encode image as {pil_format}: {e}")
        raise EncodeError(f"Failed to encode image as {pil_format}: {e}", format=format) from e


def decode_bytes(data: bytes) -> PixelBuffer:
    """
    Decode image container bytes into a PixelBuffer.

    Args:
        data: Encoded image (any format Pillow reads)

    Returns:
        PixelBuffer in RGBA

    Raises:
        DecodeError: Empty, unidentified, corrupt or truncated data
    """
    if not data:
        raise DecodeError("No image data to decode")

    try:
        with Image.open(io.BytesIO(data)) as pil_image:
            pil_image.load()
            return from_pil(pil_image)

    except (OSError, ValueError, SyntaxError, EOFError, Image.DecompressionBombError) as e:
        logger.error(f"Failed to decode image bytes: {e}")
        raise DecodeError(f"Failed to decode image bytes: {e}") from e


def encode(
    image: PixelBuffer,
    format: str = CodecConstants.DEFAULT_FORMAT,
    quality: int = CodecConstants.DEFAULT_JPEG_QUALITY,
) -> str:
    """
    Convert image to base64 string.

    Args:
        image: Image to encode
        format: Image format (png, jpeg, ...)
        quality: JPEG quality (1-100, ignored for other formats)

    Returns:
        Base64 encoded string (standard alphabet, padded)

    Raises:
        EncodeError: Unsupported format or codec failure
    """
    return base64.b64encode(encode_bytes(image, format, quality)).decode("ascii")


def decode(base64_string: str) -> PixelBuffer:
    """
    Convert base64 string to PixelBuffer.

    Args:
        base64_string: Base64 encoded image (standard alphabet with padding)

    Returns:
        PixelBuffer in RGBA

    Raises:
        DecodeError: Malformed base64 or unreadable image data
    """
    try:
        image_bytes = base64.b64decode(base64_string, validate=True)
    except (ValueError, TypeError) as e:
        logger.error(f"Failed to decode base64 image: {e}")
        raise DecodeError(f"Invalid base64 image data: {e}") from e

    return decode_bytes(image_bytes)
