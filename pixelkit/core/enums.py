"""
Enumerations shared by the core operations and the API schemas.
"""

from enum import Enum


class Interpolation(str, Enum):
    """Resampling filter used when scaling."""

    SMOOTH = "smooth"  # area averaging when shrinking, bilinear when enlarging
    BILINEAR = "bilinear"
    NEAREST = "nearest"


class GrayscaleMethod(str, Enum):
    """Desaturation formula used by grayscale."""

    LUMINANCE = "luminance"
    AVERAGE = "average"
    FADED = "faded"
