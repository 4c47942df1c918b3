"""
Image operation API models.

Every request carries its input image(s) as base64 encoded bytes of any
format Pillow can read; results are returned base64 encoded in the
requested (or configured default) format.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from pixelkit.core.enums import GrayscaleMethod, Interpolation

from .common import Color, Offset, Rectangle


class ImageRequest(BaseModel):
    """Base request with a single input image"""

    image: str = Field(..., description="Base64 encoded image")
    format: Optional[str] = Field(None, description="Output format (default from settings)")


class ImageResponse(BaseModel):
    """Processed image"""

    image: str = Field(..., description="Base64 encoded result image")
    format: str
    width: int
    height: int
    processing_time_ms: float


class ImageInfoResponse(BaseModel):
    """Dimensions of a decoded image"""

    width: int
    height: int


class FormatsResponse(BaseModel):
    """Writable output formats"""

    formats: List[str]
    default: str


class ScaleRequest(ImageRequest):
    """Scale to a width or height, keeping the aspect ratio, or to both"""

    width: Optional[int] = Field(None, gt=0, description="Target width")
    height: Optional[int] = Field(None, gt=0, description="Target height")
    interpolation: Optional[Interpolation] = None

    @model_validator(mode="after")
    def check_target(self) -> "ScaleRequest":
        if self.width is None and self.height is None:
            raise ValueError("width or height is required")
        return self


class CropRequest(ImageRequest):
    """Crop to a region"""

    region: Rectangle


class TrimRequest(ImageRequest):
    """Trim transparent borders"""

    max_alpha: Optional[int] = Field(
        None, ge=0, le=255, description="Highest alpha still considered transparent"
    )


class MergeRequest(BaseModel):
    """Paint an overlay over a base image"""

    base: str = Field(..., description="Base64 encoded base image")
    overlay: str = Field(..., description="Base64 encoded overlay image")
    offset: Offset = Field(default_factory=Offset)
    format: Optional[str] = None


class BlendRequest(MergeRequest):
    """Merge with feathered overlay edges"""

    feather_width: Optional[int] = Field(None, ge=0)
    feather_height: Optional[int] = Field(None, ge=0)


class ColorizeRequest(ImageRequest):
    """Mask or tint with a color"""

    color: Color


class GrayscaleRequest(ImageRequest):
    method: GrayscaleMethod = GrayscaleMethod.LUMINANCE


class BrightnessRequest(ImageRequest):
    multiplier: float = Field(..., description="Channel multiplier")


class ColorRemapRequest(ImageRequest):
    """Recolor by brightness into shades of a color"""

    color: Color
    median: Optional[int] = Field(None, ge=0, le=255)


class SuperscriptRequest(ImageRequest):
    legacy_size: Optional[bool] = Field(
        None, description="Draw the source as a width/2 square (legacy sizing)"
    )
