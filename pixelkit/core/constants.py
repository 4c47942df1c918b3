"""
Constants and default values for pixelkit.
Centralizes all magic numbers used by the image operations.
"""


# Channel Constants
class ChannelConstants:
    """Constants related to RGBA channel values."""

    CHANNELS = 4
    MIN_VALUE = 0
    MAX_VALUE = 255

    # Alpha channel index in the pixel array
    ALPHA = 3


# Processing Constants
class ProcessingConstants:
    """Defaults for the pixel operations."""

    # Color remapping
    DEFAULT_COLOR_MEDIAN = 255 // 2

    # Brightness: scaled channels are bounded before redistribution
    BRIGHTNESS_SCALED_LIMIT = 4 * 255

    # Blend feathering (feather size = overlay size // divisor)
    DEFAULT_FEATHER_DIVISOR = 10

    # Trim
    DEFAULT_TRIM_MAX_ALPHA = 0

    # Superscript placement
    SUPERSCRIPT_WIDTH_DIVISOR = 2
    SUPERSCRIPT_OFFSET_DIVISOR = 10

    # Faded grayscale (desktop toolkit "disabled" look)
    FADED_GRAY_PERCENT = 50
    FADED_RED_WEIGHT = 0.30
    FADED_GREEN_WEIGHT = 0.59
    FADED_BLUE_WEIGHT = 0.11


# Codec Constants
class CodecConstants:
    """Constants for the encode/decode boundary."""

    DEFAULT_FORMAT = "png"
    DEFAULT_JPEG_QUALITY = 85

    # Extension aliases not registered by Pillow as format names
    FORMAT_ALIASES = {
        "JPG": "JPEG",
        "TIF": "TIFF",
    }

    # Formats that cannot store an alpha channel
    OPAQUE_FORMATS = ("JPEG",)


# System Constants
class SystemConstants:
    """Constants for system operations."""

    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    DEFAULT_HOST = "0.0.0.0"
    DEFAULT_PORT = 8000
