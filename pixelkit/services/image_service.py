"""
Image Service - Business logic for image operations over encoded images.

This service decodes base64 request images, applies a pixelkit operation
with configured defaults for the parameters a request leaves out, and
encodes the result.
"""

import logging
from typing import Callable, Optional

from pixelkit.config import Settings, get_settings
from pixelkit.core.buffer import PixelBuffer
from pixelkit.core.image import (
    blend,
    change_brightness,
    color,
    crop,
    decode,
    encode,
    grayscale,
    mask,
    merge,
    scale,
    scale_to_height,
    scale_to_width,
    superscript,
    supported_formats,
    tint,
    trim,
)
from pixelkit.core.utils import timer
from pixelkit.schemas import (
    BlendRequest,
    BrightnessRequest,
    ColorizeRequest,
    ColorRemapRequest,
    CropRequest,
    FormatsResponse,
    GrayscaleRequest,
    ImageInfoResponse,
    ImageResponse,
    MergeRequest,
    ScaleRequest,
    SuperscriptRequest,
    TrimRequest,
)

logger = logging.getLogger(__name__)


class ImageService:
    """
    Service for image operations on base64 encoded images.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize image service.

        Args:
            settings: Application settings (defaults to the cached settings)
        """
        self.settings = settings or get_settings()

    def _execute(
        self,
        name: str,
        operation: Callable[..., PixelBuffer],
        images: list,
        output_format: Optional[str] = None,
    ) -> ImageResponse:
        """
        Template method for image operations.

        Decodes the input images, runs the operation on them and encodes the
        result in the requested or default format.

        Args:
            name: Operation name for logging
            operation: Function receiving the decoded images, returning the result
            images: Base64 encoded input images
            output_format: Output format, None for the configured default

        Returns:
            ImageResponse with the encoded result
        """
        output_format = output_format or self.settings.codec.default_format

        with timer() as t:
            inputs = [decode(image) for image in images]
            result = operation(*inputs)
            encoded = encode(result, output_format, self.settings.codec.jpeg_quality)

        logger.debug(
            f"{name}: {result.width}x{result.height} {output_format} in {t.elapsed_ms:.1f} ms"
        )
        return ImageResponse(
            image=encoded,
            format=output_format.lower(),
            width=result.width,
            height=result.height,
            processing_time_ms=round(t.elapsed_ms, 3),
        )

    def info(self, image: str) -> ImageInfoResponse:
        """Decode an image and report its size."""
        buffer = decode(image)
        return ImageInfoResponse(width=buffer.width, height=buffer.height)

    def formats(self) -> FormatsResponse:
        return FormatsResponse(
            formats=supported_formats(), default=self.settings.codec.default_format
        )

    def scale(self, request: ScaleRequest) -> ImageResponse:
        """Scale to both dimensions, or to one keeping the aspect ratio."""
        interpolation = request.interpolation or self.settings.processing.interpolation

        def scale_image(image: PixelBuffer) -> PixelBuffer:
            if request.width is not None and request.height is not None:
                return scale(image, request.width, request.height, interpolation)
            if request.width is not None:
                return scale_to_width(image, request.width, interpolation)
            return scale_to_height(image, request.height, interpolation)

        return self._execute("scale", scale_image, [request.image], request.format)

    def crop(self, request: CropRequest) -> ImageResponse:
        def crop_image(image: PixelBuffer) -> PixelBuffer:
            return crop(image, request.region)

        return self._execute("crop", crop_image, [request.image], request.format)

    def trim(self, request: TrimRequest) -> ImageResponse:
        max_alpha = request.max_alpha
        if max_alpha is None:
            max_alpha = self.settings.processing.trim_max_alpha

        def trim_image(image: PixelBuffer) -> PixelBuffer:
            return trim(image, max_alpha)

        return self._execute("trim", trim_image, [request.image], request.format)

    def merge(self, request: MergeRequest) -> ImageResponse:
        def merge_images(base: PixelBuffer, overlay: PixelBuffer) -> PixelBuffer:
            return merge(base, overlay, request.offset)

        return self._execute(
            "merge", merge_images, [request.base, request.overlay], request.format
        )

    def blend(self, request: BlendRequest) -> ImageResponse:
        """Blend with feather sizes defaulting to overlay size / feather_divisor."""
        divisor = self.settings.processing.feather_divisor

        def blend_images(base: PixelBuffer, overlay: PixelBuffer) -> PixelBuffer:
            feather_width = request.feather_width
            if feather_width is None:
                feather_width = overlay.width // divisor
            feather_height = request.feather_height
            if feather_height is None:
                feather_height = overlay.height // divisor
            return blend(base, overlay, request.offset, feather_width, feather_height)

        return self._execute(
            "blend", blend_images, [request.base, request.overlay], request.format
        )

    def mask(self, request: ColorizeRequest) -> ImageResponse:
        def mask_image(image: PixelBuffer) -> PixelBuffer:
            return mask(image, request.color)

        return self._execute("mask", mask_image, [request.image], request.format)

    def tint(self, request: ColorizeRequest) -> ImageResponse:
        def tint_image(image: PixelBuffer) -> PixelBuffer:
            return tint(image, request.color)

        return self._execute("tint", tint_image, [request.image], request.format)

    def grayscale(self, request: GrayscaleRequest) -> ImageResponse:
        def gray_image(image: PixelBuffer) -> PixelBuffer:
            return grayscale(image, request.method)

        return self._execute("grayscale", gray_image, [request.image], request.format)

    def brightness(self, request: BrightnessRequest) -> ImageResponse:
        def brighten_image(image: PixelBuffer) -> PixelBuffer:
            return change_brightness(image, request.multiplier)

        return self._execute("brightness", brighten_image, [request.image], request.format)

    def color(self, request: ColorRemapRequest) -> ImageResponse:
        median = request.median
        if median is None:
            median = self.settings.processing.color_median

        def color_image(image: PixelBuffer) -> PixelBuffer:
            return color(image, request.color, median)

        return self._execute("color", color_image, [request.image], request.format)

    def superscript(self, request: SuperscriptRequest) -> ImageResponse:
        legacy_size = request.legacy_size
        if legacy_size is None:
            legacy_size = self.settings.processing.superscript_legacy_size

        def superscript_image(image: PixelBuffer) -> PixelBuffer:
            return superscript(image, legacy_size)

        return self._execute("superscript", superscript_image, [request.image], request.format)
