"""
Compositing operations.

Layering images with alpha:
- alpha_over: straight-alpha "over" of two equally sized pixel arrays
- merge / blend: paint an overlay onto a base canvas, optionally feathered
- mask / tint: solid-color silhouettes of an image and their overlay
- superscript: shrink an image into a superscript position
"""

import logging
from typing import Optional, Union

import numpy as np

from pixelkit.core.buffer import ColorLike, PixelBuffer
from pixelkit.core.constants import ChannelConstants, ProcessingConstants
from pixelkit.core.image.geometry import scale
from pixelkit.core.utils import round_half_up, to_channel_array
from pixelkit.schemas.common import Color, Offset

logger = logging.getLogger(__name__)

OffsetLike = Union[Offset, tuple, dict, None]


def alpha_over(dst: np.ndarray, src: np.ndarray) -> np.ndarray:
    """
    Composite src over dst (Porter-Duff "over", straight alpha).

    Args:
        dst: RGBA uint8 array underneath
        src: RGBA uint8 array on top, same shape as dst

    Returns:
        New RGBA uint8 array
    """
    src_f = src.astype(np.float64)
    dst_f = dst.astype(np.float64)
    src_a = src_f[..., 3:] / 255.0
    dst_a = dst_f[..., 3:] / 255.0

    out_a = src_a + dst_a * (1.0 - src_a)
    weighted = src_f[..., :3] * src_a + dst_f[..., :3] * dst_a * (1.0 - src_a)
    # Fully transparent results keep the color underneath
    out_rgb = np.divide(weighted, out_a, out=dst_f[..., :3].copy(), where=out_a > 0)

    result = np.concatenate([out_rgb, out_a * 255.0], axis=-1)
    return to_channel_array(round_half_up(result))


def _paint(canvas: np.ndarray, image: np.ndarray, x: int, y: int) -> None:
    """Composite image onto canvas at (x, y) in place, clipping to the canvas."""
    canvas_h, canvas_w = canvas.shape[:2]
    image_h, image_w = image.shape[:2]

    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + image_w, canvas_w), min(y + image_h, canvas_h)
    if x0 >= x1 or y0 >= y1:
        return

    region = canvas[y0:y1, x0:x1]
    canvas[y0:y1, x0:x1] = alpha_over(region, image[y0 - y : y1 - y, x0 - x : x1 - x])


def merge(base: PixelBuffer, overlay: PixelBuffer, offset: OffsetLike = None) -> PixelBuffer:
    """
    Merge two images.

    The canvas is as large as the larger of both images in each dimension;
    the offset does not enlarge it. The base is painted at (0, 0), then the
    overlay at the offset. Overlay pixels falling outside the canvas are
    dropped.

    Args:
        base: Image underneath
        overlay: Image on top
        offset: Overlay position (Offset, (x, y) or None for no offset)

    Returns:
        New merged image
    """
    offset = Offset.coerce(offset)
    width = max(base.width, overlay.width)
    height = max(base.height, overlay.height)

    canvas = np.zeros((height, width, ChannelConstants.CHANNELS), dtype=np.uint8)
    _paint(canvas, base.array, 0, 0)
    _paint(canvas, overlay.array, offset.x, offset.y)

    logger.debug(f"Merged {overlay.size} at ({offset.x}, {offset.y}) over {base.size}")
    return PixelBuffer.from_array(canvas, copy=False)


def feather(overlay: PixelBuffer, feather_width: int, feather_height: int) -> PixelBuffer:
    """
    Fade out the alpha towards the edges of an image.

    Pixels within feather_width of the left/right edge and feather_height of
    the top/bottom edge get their alpha scaled linearly, from 1/(n+1) at
    the outermost pixel up to full alpha.

    Args:
        overlay: Image to feather
        feather_width: Width of the faded band on the left and right sides
        feather_height: Height of the faded band on the top and bottom sides

    Returns:
        New image with scaled alpha, colors unchanged
    """
    if feather_width < 0 or feather_height < 0:
        raise ValueError(
            f"Feather size must not be negative, got {feather_width}x{feather_height}"
        )

    width, height = overlay.size
    x_step = 1.0 / (feather_width + 1)
    y_step = 1.0 / (feather_height + 1)

    def feather_mapper(x, y, r, g, b, a):
        factor = np.ones(a.shape)
        factor = np.where(x < feather_width, np.minimum(factor, (x + 1) * x_step), factor)
        factor = np.where(
            x >= width - feather_width, np.minimum(factor, (width - x) * x_step), factor
        )
        factor = np.where(y < feather_height, np.minimum(factor, (y + 1) * y_step), factor)
        factor = np.where(
            y >= height - feather_height, np.minimum(factor, (height - y) * y_step), factor
        )
        factor = np.clip(factor, 0.0, 1.0)
        return r, g, b, round_half_up(a * factor)

    return overlay.map_indexed(feather_mapper)


def blend(
    base: PixelBuffer,
    overlay: PixelBuffer,
    offset: OffsetLike = None,
    feather_width: Optional[int] = None,
    feather_height: Optional[int] = None,
) -> PixelBuffer:
    """
    Blend an overlay into a base image.

    Same as merge() but the overlay edges are feathered first so they fade
    into the base.

    Args:
        base: Image to end up underneath
        overlay: Image to end up on top
        offset: Overlay position (None for no offset)
        feather_width: Faded band on the left and right sides (default: 1/10 of the width)
        feather_height: Faded band on the top and bottom sides (default: 1/10 of the height)

    Returns:
        New blended image
    """
    if feather_width is None:
        feather_width = overlay.width // ProcessingConstants.DEFAULT_FEATHER_DIVISOR
    if feather_height is None:
        feather_height = overlay.height // ProcessingConstants.DEFAULT_FEATHER_DIVISOR

    return merge(base, feather(overlay, feather_width, feather_height), offset)


def mask(image: PixelBuffer, color: ColorLike) -> PixelBuffer:
    """
    Create a silhouette of an image in a solid color.

    Args:
        image: Image whose shape (alpha channel) is used
        color: Fill color; its alpha scales the silhouette alpha

    Returns:
        New image with alpha = image alpha * color alpha / 255 and the color's
        RGB on every non-transparent pixel
    """
    color = Color.coerce(color)
    alpha_scale = color.a / 255.0

    def mask_mapper(r, g, b, a):
        alpha = round_half_up(a * alpha_scale)
        visible = alpha > 0
        return (
            np.where(visible, color.r, 0),
            np.where(visible, color.g, 0),
            np.where(visible, color.b, 0),
            alpha,
        )

    return image.map(mask_mapper)


def tint(image: PixelBuffer, color: ColorLike) -> PixelBuffer:
    """
    Tint an image with a color.

    The color's alpha is the tint strength: 0 leaves the image unchanged,
    255 covers every opaque pixel with the color.
    """
    silhouette = mask(image, color)
    return PixelBuffer.from_array(alpha_over(image.array, silhouette.array), copy=False)


def superscript(image: PixelBuffer, legacy_size: bool = True) -> PixelBuffer:
    """
    Put an image into a superscript position.

    The result keeps the height but has half the width. The source is drawn
    scaled at (0, height / 10).

    Args:
        image: Image to convert
        legacy_size: If True, the drawn region is a (width/2 x width/2) square
            regardless of the source height (legacy sizing).
            If False, the height is halved instead, keeping the aspect ratio.

    Returns:
        New image of size (width / 2, height)
    """
    new_width = image.width // ProcessingConstants.SUPERSCRIPT_WIDTH_DIVISOR
    if legacy_size:
        new_height = image.width // ProcessingConstants.SUPERSCRIPT_WIDTH_DIVISOR
    else:
        new_height = image.height // ProcessingConstants.SUPERSCRIPT_WIDTH_DIVISOR
    top = image.height // ProcessingConstants.SUPERSCRIPT_OFFSET_DIVISOR

    canvas = np.zeros((image.height, new_width, ChannelConstants.CHANNELS), dtype=np.uint8)
    if new_width > 0 and new_height > 0 and not image.is_empty:
        scaled = scale(image, new_width, new_height)
        _paint(canvas, scaled.array, 0, top)

    return PixelBuffer.from_array(canvas, copy=False)
