"""
API Integration Tests for Image Endpoints
"""

import numpy as np
import pytest

from pixelkit.core.buffer import PixelBuffer
from pixelkit.core.image import encode


class TestServiceAPI:
    """Integration tests for root, health and format endpoints"""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "pixelkit"
        assert data["endpoints"]["image"] == "/api/image"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["services"]["image_service"] is True

    def test_lifespan_initializes_service(self):
        """Test the lifespan attaches an ImageService to the app state"""
        from fastapi.testclient import TestClient

        from pixelkit.main import app
        from pixelkit.services.image_service import ImageService

        with TestClient(app) as lifespan_client:
            response = lifespan_client.get("/health")
            assert isinstance(app.state.image_service, ImageService)

        assert response.json()["services"]["image_service"] is True

    def test_formats(self, client):
        response = client.get("/api/image/formats")

        assert response.status_code == 200
        data = response.json()
        assert "PNG" in data["formats"]
        assert data["default"] == "png"

    def test_info(self, client, encoded_sprite):
        response = client.post("/api/image/info", json={"image": encoded_sprite})

        assert response.status_code == 200
        assert response.json() == {"width": 12, "height": 10}


class TestGeometryAPI:
    """Integration tests for scale, crop and trim"""

    def test_scale_to_width(self, client, encoded_gradient, decoded):
        response = client.post(
            "/api/image/scale", json={"image": encoded_gradient, "width": 20}
        )

        data = response.json()
        assert (data["width"], data["height"]) == (20, 10)
        assert data["format"] == "png"
        assert data["processing_time_ms"] >= 0
        assert decoded(response).size == (20, 10)

    def test_scale_to_both(self, client, encoded_gradient, decoded):
        response = client.post(
            "/api/image/scale",
            json={"image": encoded_gradient, "width": 7, "height": 9, "interpolation": "nearest"},
        )

        assert decoded(response).size == (7, 9)

    def test_scale_requires_target(self, client, encoded_gradient):
        response = client.post("/api/image/scale", json={"image": encoded_gradient})

        assert response.status_code == 422

    def test_scale_rejects_zero_width(self, client, encoded_gradient):
        response = client.post("/api/image/scale", json={"image": encoded_gradient, "width": 0})

        assert response.status_code == 422

    def test_crop(self, client, encoded_sprite, decoded):
        response = client.post(
            "/api/image/crop",
            json={"image": encoded_sprite, "region": {"x": 3, "y": 2, "width": 4, "height": 4}},
        )

        result = decoded(response)
        assert result.size == (4, 4)
        assert np.all(result.array == [200, 30, 30, 255])

    def test_crop_exceeding_bounds(self, client, encoded_sprite):
        response = client.post(
            "/api/image/crop",
            json={"image": encoded_sprite, "region": {"x": 10, "y": 0, "width": 5, "height": 5}},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "InvalidRegion"

    def test_trim(self, client, encoded_sprite):
        response = client.post("/api/image/trim", json={"image": encoded_sprite})

        assert response.status_code == 200
        assert (response.json()["width"], response.json()["height"]) == (7, 7)

    def test_trim_with_threshold(self, client, encoded_sprite):
        response = client.post(
            "/api/image/trim", json={"image": encoded_sprite, "max_alpha": 100}
        )

        assert (response.json()["width"], response.json()["height"]) == (4, 4)

    def test_trim_fully_transparent(self, client):
        """Test a trim down to 0x0 cannot be encoded"""
        response = client.post("/api/image/trim", json={"image": encode(PixelBuffer(5, 5))})

        assert response.status_code == 400
        assert response.json()["error"] == "EncodeError"


class TestCompositingAPI:
    """Integration tests for merge, blend, mask, tint and superscript"""

    def test_merge(self, client, encoded_blue, encoded_red, decoded):
        response = client.post(
            "/api/image/merge",
            json={"base": encoded_blue, "overlay": encoded_red, "offset": {"x": 1, "y": 1}},
        )

        result = decoded(response)
        assert result.size == (6, 6)
        assert result.get_pixel(0, 0) == (0, 0, 255, 255)
        assert result.get_pixel(1, 1) == (255, 0, 0, 255)
        assert result.get_pixel(4, 4) == (255, 0, 0, 255)
        assert result.get_pixel(5, 5) == (0, 0, 255, 255)

    def test_blend_without_feather_equals_merge(self, client, encoded_blue, encoded_red, decoded):
        payload = {"base": encoded_blue, "overlay": encoded_red, "offset": {"x": 2, "y": 0}}

        merged = decoded(client.post("/api/image/merge", json=payload))
        blended = decoded(
            client.post(
                "/api/image/blend", json={**payload, "feather_width": 0, "feather_height": 0}
            )
        )

        assert blended == merged

    def test_blend_feathers_edges(self, client, decoded):
        base = encode(PixelBuffer(20, 20))
        overlay = encode(PixelBuffer.filled(20, 20, (255, 255, 255)))

        response = client.post(
            "/api/image/blend",
            json={"base": base, "overlay": overlay, "feather_width": 3, "feather_height": 3},
        )

        alpha = decoded(response).alpha()
        assert alpha[0, 0] == 64
        assert alpha[10, 10] == 255

    def test_blend_rejects_negative_feather(self, client, encoded_blue, encoded_red):
        response = client.post(
            "/api/image/blend",
            json={"base": encoded_blue, "overlay": encoded_red, "feather_width": -1},
        )

        assert response.status_code == 422

    def test_mask(self, client, encoded_sprite, decoded):
        response = client.post(
            "/api/image/mask",
            json={"image": encoded_sprite, "color": {"r": 0, "g": 255, "b": 0}},
        )

        result = decoded(response)
        assert result.get_pixel(3, 2) == (0, 255, 0, 255)
        assert result.get_pixel(0, 0) == (0, 0, 0, 0)

    def test_tint_with_transparent_color(self, client, encoded_sprite, sprite_image, decoded):
        response = client.post(
            "/api/image/tint",
            json={"image": encoded_sprite, "color": {"r": 255, "g": 0, "b": 0, "a": 0}},
        )

        assert decoded(response) == sprite_image

    def test_color_channel_out_of_range(self, client, encoded_sprite):
        response = client.post(
            "/api/image/tint",
            json={"image": encoded_sprite, "color": {"r": 300, "g": 0, "b": 0}},
        )

        assert response.status_code == 422

    @pytest.mark.parametrize("legacy_size,drawn_rows", [(True, 18), (False, 10)])
    def test_superscript(self, client, encoded_gradient, decoded, legacy_size, drawn_rows):
        response = client.post(
            "/api/image/superscript",
            json={"image": encoded_gradient, "legacy_size": legacy_size},
        )

        result = decoded(response)
        assert result.size == (20, 20)
        assert np.count_nonzero(result.alpha()[:, 0]) == drawn_rows


class TestColorAPI:
    """Integration tests for grayscale, brightness and color"""

    def test_grayscale(self, client, encoded_gradient, decoded):
        response = client.post(
            "/api/image/grayscale", json={"image": encoded_gradient, "method": "average"}
        )

        pixels = decoded(response).array
        assert np.array_equal(pixels[..., 0], pixels[..., 2])

    def test_grayscale_unknown_method(self, client, encoded_gradient):
        response = client.post(
            "/api/image/grayscale", json={"image": encoded_gradient, "method": "sepia"}
        )

        assert response.status_code == 422

    def test_brightness(self, client, decoded):
        image = encode(PixelBuffer.filled(2, 2, (200, 100, 50)))

        response = client.post(
            "/api/image/brightness", json={"image": image, "multiplier": 1.5}
        )

        assert decoded(response).get_pixel(1, 1) == (255, 195, 120, 255)

    def test_color(self, client, gray_square, decoded):
        response = client.post(
            "/api/image/color",
            json={"image": gray_square, "color": {"r": 10, "g": 150, "b": 240}},
        )

        assert decoded(response).get_pixel(5, 5) == (10, 150, 240, 255)

    def test_color_with_median(self, client, gray_square, decoded):
        response = client.post(
            "/api/image/color",
            json={"image": gray_square, "color": {"r": 100, "g": 100, "b": 100}, "median": 200},
        )

        assert decoded(response).get_pixel(0, 0)[0] < 100


class TestErrorHandling:
    """Integration tests for error responses"""

    def test_invalid_base64(self, client):
        response = client.post("/api/image/info", json={"image": "not base64!!"})

        assert response.status_code == 400
        assert response.json()["error"] == "DecodeError"

    def test_undecodable_image(self, client):
        response = client.post("/api/image/trim", json={"image": "aGVsbG8gd29ybGQ="})

        assert response.status_code == 400
        assert response.json()["error"] == "DecodeError"

    def test_unsupported_output_format(self, client, encoded_sprite):
        response = client.post("/api/image/trim", json={"image": encoded_sprite, "format": "xyz"})

        assert response.status_code == 400
        assert response.json()["error"] == "EncodeError"

    def test_jpeg_output(self, client, encoded_sprite, decoded):
        response = client.post(
            "/api/image/trim", json={"image": encoded_sprite, "format": "jpeg"}
        )

        assert response.json()["format"] == "jpeg"
        assert np.all(decoded(response).alpha() == 255)

    def test_missing_image(self, client):
        response = client.post("/api/image/trim", json={})

        assert response.status_code == 422
