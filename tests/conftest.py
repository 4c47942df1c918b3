"""
Pytest configuration and fixtures for pixelkit tests
"""

import numpy as np
import pytest

from pixelkit.core.buffer import PixelBuffer


@pytest.fixture
def gradient_image():
    """Opaque 40x20 image with a horizontal red and vertical green gradient"""
    height, width = 20, 40
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = np.linspace(0, 255, width, dtype=np.uint8)[np.newaxis, :]
    pixels[..., 1] = np.linspace(0, 255, height, dtype=np.uint8)[:, np.newaxis]
    pixels[..., 2] = 64
    pixels[..., 3] = 255
    return PixelBuffer.from_array(pixels)


@pytest.fixture
def random_image():
    """Random 17x11 RGBA image including partial transparency"""
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(11, 17, 4), dtype=np.uint8)
    return PixelBuffer.from_array(pixels)


@pytest.fixture
def sprite_image():
    """
    Transparent 12x10 image with an opaque block and one faint pixel.

    Block covers x 3..6, y 2..5 (alpha 255); a single pixel at (9, 8)
    has alpha 100.
    """
    pixels = np.zeros((10, 12, 4), dtype=np.uint8)
    pixels[2:6, 3:7] = (200, 30, 30, 255)
    pixels[8, 9] = (0, 0, 255, 100)
    return PixelBuffer.from_array(pixels)


@pytest.fixture
def solid_red():
    """Opaque red 6x6 image"""
    return PixelBuffer.filled(6, 6, (255, 0, 0))


@pytest.fixture
def solid_blue():
    """Opaque blue 6x6 image"""
    return PixelBuffer.filled(6, 6, (0, 0, 255))
