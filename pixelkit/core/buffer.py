"""
Pixel buffer abstraction.

A PixelBuffer is an RGBA raster held in a NumPy uint8 array of shape
(height, width, 4), row-major with the origin at the top-left corner.
Operations never modify their input buffers; they build new ones,
typically through map() / map_indexed() with a pixel mapper.
"""

from typing import Any, Callable, Sequence, Tuple, Union

import numpy as np

from pixelkit.core.constants import ChannelConstants
from pixelkit.core.exceptions import OutOfBounds
from pixelkit.core.utils import to_channel_array
from pixelkit.schemas.common import Color

RGBA = Tuple[int, int, int, int]
ColorLike = Union[Color, Sequence[int], dict]

# mapper(r, g, b, a) -> (r, g, b, a), element-wise over scalars or arrays
PixelMapper = Callable[..., Tuple[Any, Any, Any, Any]]
# mapper(x, y, r, g, b, a) -> (r, g, b, a)
IndexedPixelMapper = Callable[..., Tuple[Any, Any, Any, Any]]


class PixelBuffer:
    """
    In-memory RGBA image.

    Channel values are 8-bit unsigned integers in RGBA order. Pixel access
    through get_pixel/set_pixel is bounds-checked.
    """

    __slots__ = ("_pixels",)
    __hash__ = None

    def __init__(self, width: int, height: int):
        """
        Allocate a fully transparent buffer.

        Args:
            width: Buffer width (may be 0)
            height: Buffer height (may be 0)
        """
        if width < 0 or height < 0:
            raise ValueError(f"Buffer dimensions must not be negative: {width}x{height}")
        self._pixels = np.zeros((height, width, ChannelConstants.CHANNELS), dtype=np.uint8)

    @classmethod
    def from_array(cls, array: np.ndarray, copy: bool = True) -> "PixelBuffer":
        """
        Create a buffer from a NumPy array.

        Args:
            array: uint8 array of shape (h, w, 4) RGBA, (h, w, 3) RGB or (h, w) gray.
                RGB and gray input becomes fully opaque.
            copy: If False, an RGBA array is adopted without copying

        Returns:
            New PixelBuffer
        """
        array = np.asarray(array)
        if array.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixel data, got {array.dtype}")

        if array.ndim == 2:
            array = np.dstack([array, array, array, np.full_like(array, 255)])
        elif array.ndim == 3 and array.shape[2] == 3:
            opaque = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array, opaque], axis=2)
        elif array.ndim != 3 or array.shape[2] != ChannelConstants.CHANNELS:
            raise ValueError(f"Unsupported pixel array shape: {array.shape}")
        elif copy:
            array = array.copy()

        buffer = cls.__new__(cls)
        buffer._pixels = np.ascontiguousarray(array)
        return buffer

    @classmethod
    def transparent(cls, width: int, height: int) -> "PixelBuffer":
        """Fully transparent buffer."""
        return cls(width, height)

    @classmethod
    def filled(cls, width: int, height: int, color: ColorLike) -> "PixelBuffer":
        """Buffer with every pixel set to color."""
        color = Color.coerce(color)
        buffer = cls(width, height)
        buffer._pixels[...] = color.as_tuple()
        return buffer

    @classmethod
    def empty(cls) -> "PixelBuffer":
        """Zero-size buffer."""
        return cls(0, 0)

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height)"""
        return (self.width, self.height)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the pixel data."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def to_array(self) -> np.ndarray:
        """Copy of the pixel data, shape (height, width, 4)."""
        return self._pixels.copy()

    def alpha(self) -> np.ndarray:
        """Copy of the alpha plane, shape (height, width)."""
        return self._pixels[..., ChannelConstants.ALPHA].copy()

    def copy(self) -> "PixelBuffer":
        return PixelBuffer.from_array(self._pixels)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(x, y, self.width, self.height)

    def get_pixel(self, x: int, y: int) -> RGBA:
        """
        Read one pixel.

        Raises:
            OutOfBounds: If (x, y) lies outside the buffer
        """
        self._check_bounds(x, y)
        r, g, b, a = self._pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def set_pixel(self, x: int, y: int, rgba: ColorLike) -> None:
        """
        Write one pixel in place.

        Args:
            x: Column
            y: Row
            rgba: Color or (r, g, b[, a]) with channels in [0, 255]

        Raises:
            OutOfBounds: If (x, y) lies outside the buffer
            ValueError: If a channel is outside [0, 255]
        """
        self._check_bounds(x, y)
        self._pixels[y, x] = Color.coerce(rgba).as_tuple()

    def _channels(self) -> Tuple[np.ndarray, ...]:
        return tuple(
            self._pixels[..., i].astype(np.int64) for i in range(ChannelConstants.CHANNELS)
        )

    def _from_channels(self, channels: Sequence[Any]) -> "PixelBuffer":
        shape = (self.height, self.width)
        planes = [np.broadcast_to(to_channel_array(c), shape) for c in channels]
        return PixelBuffer.from_array(np.stack(planes, axis=-1), copy=False)

    def map(self, mapper: PixelMapper) -> "PixelBuffer":
        """
        Apply a pixel mapper to every pixel.

        The mapper receives the r, g, b, a planes as int64 arrays and must
        return four planes (or scalars); results are clamped to [0, 255].

        Returns:
            New PixelBuffer
        """
        return self._from_channels(mapper(*self._channels()))

    def map_indexed(self, mapper: IndexedPixelMapper) -> "PixelBuffer":
        """
        Apply a coordinate-aware pixel mapper to every pixel.

        Same as map() but the mapper is called as mapper(x, y, r, g, b, a)
        where x and y are the column and row index planes.
        """
        ys, xs = np.indices((self.height, self.width))
        return self._from_channels(mapper(xs, ys, *self._channels()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and np.array_equal(
            self._pixels, other._pixels
        )

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"


def compose_mappers(*mappers: PixelMapper) -> PixelMapper:
    """
    Chain pixel mappers into one, applied left to right.

    Example:
        >>> darker_gray = compose_mappers(average_gray_mapper, brightness_mapper(0.5))
        >>> image.map(darker_gray)
    """

    def composed(r, g, b, a):
        for mapper in mappers:
            r, g, b, a = mapper(r, g, b, a)
        return r, g, b, a

    return composed
