"""
Image API Router - Pixel operations on base64 encoded images
"""

import logging

from fastapi import APIRouter, Depends

from pixelkit.api.dependencies import get_image_service
from pixelkit.schemas import (
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
from pixelkit.services.image_service import ImageService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/formats")
def list_formats(image_service: ImageService = Depends(get_image_service)) -> FormatsResponse:
    """List the output formats images can be encoded to."""
    return image_service.formats()


@router.post("/info")
def image_info(
    request: ImageRequest, image_service: ImageService = Depends(get_image_service)
) -> ImageInfoResponse:
    """Decode an image and return its dimensions."""
    return image_service.info(request.image)


@router.post("/scale")
def scale_image(
    request: ScaleRequest, image_service: ImageService = Depends(get_image_service)
) -> ImageResponse:
    """
    Scale an image.

    With only width or only height the aspect ratio is kept; with both the
    image is resampled to exactly that size.
    """
    return image_service.scale(request)


@router.post("/crop")
def crop_image(
    request: CropRequest, image_service: ImageService = Depends(get_image_service)
) -> ImageResponse:
    """Crop an image to a region; 422 if the region exceeds the image bounds."""
    return image_service.crop(request)


@router.post("/trim")
def trim_image(
    request: TrimRequest, image_service: ImageService = Depends(get_image_service)
) -> ImageResponse:
    """Trim transparent borders."""
    return image_service.trim(request)


@router.post("/merge")
def merge_images(
    request: MergeRequest, image_service: ImageService = Depends(get_image_service)
) -> ImageResponse:
    """Paint the overlay over the base image at the given offset."""
    return image_service.merge(request)


@router.post("/blend")
def blend_images(
    request: BlendRequest, image_service: ImageService = Depends(get_image_service)
) -> ImageResponse:
    """Merge with the overlay edges faded into the base image."""
    return image_service.blend(request)


@router.post("/mask")
def mask_image(
    request: ColorizeRequest, image_service: ImageService = Depends(get_image_service)
) -> ImageResponse:
    """Silhouette of the image in a solid color."""
    return image_service.mask(request)


@router.post("/tint")
def tint_image(
    request: ColorizeRequest, image_service: ImageService = Depends(get_image_service)
) -> ImageResponse:
    """Tint the image; the color alpha sets the strength."""
    return image_service.tint(request)


@router.post("/grayscale")
def grayscale_image(
    request: GrayscaleRequest, image_service: ImageService = Depends(get_image_service)
) -> ImageResponse:
    return image_service.grayscale(request)


@router.post("/brightness")
def change_brightness(
    request: BrightnessRequest, image_service: ImageService = Depends(get_image_service)
) -> ImageResponse:
    return image_service.brightness(request)


@router.post("/color")
def color_image(
    request: ColorRemapRequest, image_service: ImageService = Depends(get_image_service)
) -> ImageResponse:
    """Render the image in shades of one color."""
    return image_service.color(request)


@router.post("/superscript")
def superscript_image(
    request: SuperscriptRequest, image_service: ImageService = Depends(get_image_service)
) -> ImageResponse:
    return image_service.superscript(request)
