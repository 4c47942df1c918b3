"""
Pytest configuration for API integration tests
"""

import numpy as np
import pytest
from fastapi.testclient import TestClient

from pixelkit.core.buffer import PixelBuffer
from pixelkit.core.image import decode, encode


@pytest.fixture(scope="function")
def client():
    """
    Create a test client with initialized app state.

    The lifespan is not run; the service is set on app.state directly.
    """
    from pixelkit.config import Settings
    from pixelkit.main import app
    from pixelkit.services.image_service import ImageService

    settings = Settings()
    app.state.image_service = ImageService(settings)

    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def encoded_sprite(sprite_image):
    """Base64 PNG of the sprite fixture"""
    return encode(sprite_image)


@pytest.fixture
def encoded_gradient(gradient_image):
    """Base64 PNG of the gradient fixture"""
    return encode(gradient_image)


@pytest.fixture
def encoded_red():
    return encode(PixelBuffer.filled(4, 4, (255, 0, 0)))


@pytest.fixture
def encoded_blue():
    return encode(PixelBuffer.filled(6, 6, (0, 0, 255)))


def decode_response(response) -> PixelBuffer:
    """Decode the image of a successful ImageResponse"""
    assert response.status_code == 200, response.text
    return decode(response.json()["image"])


@pytest.fixture
def decoded():
    return decode_response


@pytest.fixture
def gray_square():
    """Base64 PNG of an opaque mid-gray 10x10 square"""
    return encode(PixelBuffer.from_array(np.full((10, 10, 3), 127, dtype=np.uint8)))
