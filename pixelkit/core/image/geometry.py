"""
Geometric image operations.

Handles size and region changes:
- Scaling (aspect-preserving by width or height, or to an exact size)
- Cropping to a rectangle
- Trimming transparent borders
"""

import logging
from typing import Dict, Optional, Union

import cv2
import numpy as np

from pixelkit.core.buffer import PixelBuffer
from pixelkit.core.constants import ChannelConstants, ProcessingConstants
from pixelkit.core.enums import Interpolation
from pixelkit.core.exceptions import InvalidRegion
from pixelkit.core.utils import round_half_up, to_channel_array
from pixelkit.schemas.common import Rectangle

logger = logging.getLogger(__name__)


def _cv2_interpolation(
    interpolation: Interpolation, src_size: tuple, dst_size: tuple
) -> int:
    if interpolation == Interpolation.NEAREST:
        return cv2.INTER_NEAREST
    if interpolation == Interpolation.SMOOTH and (
        dst_size[0] <= src_size[0] and dst_size[1] <= src_size[1]
    ):
        # Area averaging avoids aliasing when shrinking
        return cv2.INTER_AREA
    return cv2.INTER_LINEAR


def _resize_premultiplied(pixels: np.ndarray, width: int, height: int, flag: int) -> np.ndarray:
    """
    Resize RGBA pixels with alpha-weighted color mixing.

    Colors are premultiplied by alpha before resampling and divided back
    afterwards, so fully transparent pixels do not darken visible edges.
    """
    premultiplied = pixels.astype(np.float32)
    premultiplied[..., :3] *= premultiplied[..., 3:] / 255.0

    resized = cv2.resize(premultiplied, (width, height), interpolation=flag)
    alpha = resized[..., 3:]
    rgb = np.divide(
        resized[..., :3] * 255.0, alpha, out=np.zeros_like(resized[..., :3]), where=alpha > 0
    )
    return to_channel_array(round_half_up(np.concatenate([rgb, alpha], axis=-1)))


def scale(
    image: PixelBuffer,
    width: int,
    height: int,
    interpolation: Interpolation = Interpolation.SMOOTH,
) -> PixelBuffer:
    """
    Resample an image to an exact size.

    Args:
        image: Source image
        width: Target width (> 0)
        height: Target height (> 0)
        interpolation: Resampling filter, SMOOTH by default

    Returns:
        Scaled image
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Target size must be positive, got {width}x{height}")
    if image.is_empty:
        raise ValueError("Cannot scale an empty image")

    interpolation = Interpolation(interpolation)
    if image.size == (width, height):
        return image.copy()

    flag = _cv2_interpolation(interpolation, image.size, (width, height))
    if flag == cv2.INTER_NEAREST:
        resized = cv2.resize(image.to_array(), (width, height), interpolation=flag)
    else:
        resized = _resize_premultiplied(image.to_array(), width, height, flag)

    logger.debug(f"Scaled {image.width}x{image.height} to {width}x{height} ({interpolation.value})")
    return PixelBuffer.from_array(resized, copy=False)


def scale_to_width(
    image: PixelBuffer, width: int, interpolation: Interpolation = Interpolation.SMOOTH
) -> PixelBuffer:
    """
    Scale an image to the given width, keeping its aspect ratio.

    Args:
        image: Source image
        width: Target width
        interpolation: Resampling filter

    Returns:
        Scaled image with height round(original height * width / original width)
    """
    if image.is_empty:
        raise ValueError("Cannot scale an empty image")

    factor = width / image.width
    height = max(1, round_half_up(image.height * factor))
    return scale(image, width, height, interpolation)


def scale_to_height(
    image: PixelBuffer, height: int, interpolation: Interpolation = Interpolation.SMOOTH
) -> PixelBuffer:
    """
    Scale an image to the given height, keeping its aspect ratio.

    Args:
        image: Source image
        height: Target height
        interpolation: Resampling filter

    Returns:
        Scaled image with width round(original width * height / original height)
    """
    if image.is_empty:
        raise ValueError("Cannot scale an empty image")

    factor = height / image.height
    width = max(1, round_half_up(image.width * factor))
    return scale(image, width, height, interpolation)


def crop(image: PixelBuffer, region: Union[Rectangle, Dict[str, int]]) -> PixelBuffer:
    """
    Crop an image to a rectangle.

    Args:
        image: Source image
        region: Rectangle or dict with x, y, width, height

    Returns:
        Copy of the region, alpha preserved

    Raises:
        InvalidRegion: If the region has negative values or exceeds the image bounds
    """
    region = Rectangle.coerce(region)

    if not region.fits_within(image.width, image.height):
        raise InvalidRegion(region.to_dict(), image.width, image.height)

    return PixelBuffer.from_array(image.array[region.y : region.y2, region.x : region.x2])


def visible_bounds(image: PixelBuffer, max_alpha: int) -> Optional[Rectangle]:
    """
    Smallest rectangle enclosing every pixel with alpha > max_alpha.

    Rows and columns are bounded independently, so isolated visible pixels
    widen the box as well.

    Returns:
        Bounding Rectangle, or None if no pixel is visible
    """
    visible = image.array[..., ChannelConstants.ALPHA] > max_alpha
    rows = np.flatnonzero(visible.any(axis=1))
    if rows.size == 0:
        return None
    cols = np.flatnonzero(visible.any(axis=0))

    min_x, max_x = int(cols[0]), int(cols[-1])
    min_y, max_y = int(rows[0]), int(rows[-1])
    return Rectangle(x=min_x, y=min_y, width=max_x - min_x + 1, height=max_y - min_y + 1)


def trim(
    image: PixelBuffer, max_alpha: int = ProcessingConstants.DEFAULT_TRIM_MAX_ALPHA
) -> PixelBuffer:
    """
    Trim an image to its non-transparent pixels.

    Args:
        image: Source image
        max_alpha: Highest alpha (0-255) a pixel may have and still count as transparent

    Returns:
        Image cropped to the visible bounds; a 0x0 image if no pixel is visible
    """
    bounds = visible_bounds(image, max_alpha)
    if bounds is None:
        logger.debug(f"No pixel above alpha {max_alpha} in {image.width}x{image.height} image")
        return PixelBuffer.empty()

    logger.debug(f"Trimming {image.width}x{image.height} to {bounds.to_dict()}")
    return crop(image, bounds)
