"""
Color operations.

Per-pixel color transforms, each expressed as a pixel mapper so they can
be applied with PixelBuffer.map() or chained with compose_mappers():
- grayscale: luminance, average or faded ("disabled" look) desaturation
- change_brightness: channel multiplication with overflow bleaching
- color: remap every pixel into shades of one color by its brightness
"""

import logging
from typing import NamedTuple

import cv2
import numpy as np

from pixelkit.core.buffer import ColorLike, PixelBuffer, PixelMapper
from pixelkit.core.constants import ChannelConstants, ProcessingConstants
from pixelkit.core.enums import GrayscaleMethod
from pixelkit.core.utils import clamp_channel, truncate
from pixelkit.schemas.common import Color

logger = logging.getLogger(__name__)

MAX = ChannelConstants.MAX_VALUE


# Grayscale


def average_gray_mapper(r, g, b, a):
    gray = (r + g + b) // 3
    return gray, gray, gray, a


def faded_gray_mapper(r, g, b, a, percent: int = ProcessingConstants.FADED_GRAY_PERCENT):
    """Gray filter of desktop toolkits for disabled icons: luminance / 3, brightened."""
    gray = truncate(
        (
            ProcessingConstants.FADED_RED_WEIGHT * r
            + ProcessingConstants.FADED_GREEN_WEIGHT * g
            + ProcessingConstants.FADED_BLUE_WEIGHT * b
        )
        / 3
    )
    gray = MAX - (MAX - gray) * (100 - percent) // 100
    return gray, gray, gray, a


def _luminance(image: PixelBuffer) -> PixelBuffer:
    pixels = image.to_array()
    gray = cv2.cvtColor(np.ascontiguousarray(pixels[..., :3]), cv2.COLOR_RGB2GRAY)
    pixels[..., :3] = gray[..., np.newaxis]
    return PixelBuffer.from_array(pixels, copy=False)


def grayscale(
    image: PixelBuffer, method: GrayscaleMethod = GrayscaleMethod.LUMINANCE
) -> PixelBuffer:
    """
    Convert an image to gray.

    Args:
        image: Image to convert (left untouched)
        method: LUMINANCE (perceptual weights), AVERAGE ((r+g+b)/3) or
            FADED (brightened gray used for disabled icons)

    Returns:
        New image with R = G = B and the original alpha
    """
    method = GrayscaleMethod(method)
    if image.is_empty:
        return image.copy()

    if method == GrayscaleMethod.LUMINANCE:
        return _luminance(image)
    if method == GrayscaleMethod.AVERAGE:
        return image.map(average_gray_mapper)
    return image.map(faded_gray_mapper)


# Brightness


class BrightnessState(NamedTuple):
    """Channel values between the steps of the brightness transform."""

    r: np.ndarray
    g: np.ndarray
    b: np.ndarray
    # Red overflow, added to green and blue only at the final clamp
    pending_g: np.ndarray
    pending_b: np.ndarray


def _scale_channel(channel, multiplier: float):
    limit = ProcessingConstants.BRIGHTNESS_SCALED_LIMIT
    with np.errstate(invalid="ignore"):
        value = np.nan_to_num(np.asarray(channel) * multiplier, nan=0.0)
    # Values past the limit saturate all three channels
    return truncate(np.clip(value, -limit, limit))


def compute_scaled(r, g, b, multiplier: float) -> BrightnessState:
    zero = np.zeros_like(np.asarray(r), dtype=np.int64)
    return BrightnessState(
        r=_scale_channel(r, multiplier),
        g=_scale_channel(g, multiplier),
        b=_scale_channel(b, multiplier),
        pending_g=zero,
        pending_b=zero,
    )


def redistribute_red(state: BrightnessState) -> BrightnessState:
    excess = np.maximum(state.r - MAX, 0)
    return state._replace(
        r=np.minimum(state.r, MAX),
        pending_g=state.pending_g + excess,
        pending_b=state.pending_b + excess,
    )


def redistribute_green(state: BrightnessState) -> BrightnessState:
    excess = np.maximum(state.g - MAX, 0)
    return state._replace(r=state.r + excess, g=np.minimum(state.g, MAX), b=state.b + excess)


def redistribute_blue(state: BrightnessState) -> BrightnessState:
    excess = np.maximum(state.b - MAX, 0)
    return state._replace(r=state.r + excess, g=state.g + excess, b=np.minimum(state.b, MAX))


def final_clamp(state: BrightnessState):
    return (
        clamp_channel(state.r),
        clamp_channel(state.g + state.pending_g),
        clamp_channel(state.b + state.pending_b),
    )


def brightness_mapper(multiplier: float) -> PixelMapper:
    """
    Pixel mapper multiplying R, G and B by multiplier.

    A channel pushed above 255 is capped and its excess is added to the
    other two channels, bleaching the pixel instead of clipping it. The
    steps run in a fixed order: red's excess is held back until the final
    clamp, while green's and blue's excess is added to the stored values
    right away (so green's excess can still make blue overflow).
    """

    def mapper(r, g, b, a):
        state = compute_scaled(r, g, b, multiplier)
        for step in (redistribute_red, redistribute_green, redistribute_blue):
            state = step(state)
        return (*final_clamp(state), a)

    return mapper


def change_brightness(image: PixelBuffer, multiplier: float) -> PixelBuffer:
    """
    Change the brightness of an image.

    Args:
        image: Image to change (left untouched)
        multiplier: Factor for R, G and B; results stay within [0, 255]

    Returns:
        New image, alpha unchanged
    """
    logger.debug(f"Changing brightness of {image.size} by {multiplier}")
    return image.map(brightness_mapper(multiplier))


# Color remapping


def color_mapper(
    target: ColorLike, median: int = ProcessingConstants.DEFAULT_COLOR_MEDIAN
) -> PixelMapper:
    """Pixel mapper for color(); see there."""
    target = Color.coerce(target)
    if not 0 <= median <= MAX:
        raise ValueError(f"median must be within [0, 255], got {median}")

    alpha_scale = target.a / 255.0

    def mapper(r, g, b, a):
        brightness = (r + g + b) / 3.0 - median
        strength = np.zeros_like(brightness, dtype=np.float64)
        np.divide(brightness, MAX - median, out=strength, where=brightness > 0)
        np.divide(brightness, median, out=strength, where=brightness < 0)

        def shade(channel: int):
            shifted = np.where(
                strength > 0, channel + (MAX - channel) * strength, channel + channel * strength
            )
            return clamp_channel(truncate(shifted))

        return (
            shade(target.r),
            shade(target.g),
            shade(target.b),
            clamp_channel(truncate(a * alpha_scale)),
        )

    return mapper


def color(
    image: PixelBuffer,
    target: ColorLike,
    median: int = ProcessingConstants.DEFAULT_COLOR_MEDIAN,
) -> PixelBuffer:
    """
    Color an image with the given color.

    Unlike tint(), which mixes the pixel colors with the given color, this
    only keeps each pixel's brightness and renders it as a lighter or
    darker shade of the color.

    Args:
        image: Image to color
        target: Color to apply; its alpha scales the image alpha
        median: Brightness that maps to exactly the target color. Higher
            values give a darker result, lower values a brighter one.

    Returns:
        New image in shades of the target color
    """
    return image.map(color_mapper(target, median))
