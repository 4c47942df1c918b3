"""
Image operations.

This package provides focused image utilities:
- geometry: Scaling, cropping, trimming
- compositing: Merging, blending, masking, tinting, superscript
- color: Grayscale, brightness, color remapping
- converters: Codec boundary (base64, bytes, PIL, NumPy)
"""

from pixelkit.core.image.color import (
    brightness_mapper,
    change_brightness,
    color,
    color_mapper,
    grayscale,
)
from pixelkit.core.image.compositing import (
    alpha_over,
    blend,
    feather,
    mask,
    merge,
    superscript,
    tint,
)
from pixelkit.core.image.converters import (
    decode,
    decode_bytes,
    encode,
    encode_bytes,
    from_numpy,
    from_pil,
    supported_formats,
    to_numpy,
    to_pil,
)
from pixelkit.core.image.geometry import (
    crop,
    scale,
    scale_to_height,
    scale_to_width,
    trim,
    visible_bounds,
)

__all__ = [
    "alpha_over",
    "blend",
    "brightness_mapper",
    "change_brightness",
    "color",
    "color_mapper",
    "crop",
    "decode",
    "decode_bytes",
    "encode",
    "encode_bytes",
    "feather",
    "from_numpy",
    "from_pil",
    "grayscale",
    "mask",
    "merge",
    "scale",
    "scale_to_height",
    "scale_to_width",
    "superscript",
    "supported_formats",
    "tint",
    "to_numpy",
    "to_pil",
    "trim",
    "visible_bounds",
]
