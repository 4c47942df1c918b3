"""
Tests for grayscale, brightness and color remapping
"""

import numpy as np
import pytest

from pixelkit.core.buffer import PixelBuffer, compose_mappers
from pixelkit.core.enums import GrayscaleMethod
from pixelkit.core.image.color import (
    BrightnessState,
    average_gray_mapper,
    brightness_mapper,
    change_brightness,
    color,
    color_mapper,
    compute_scaled,
    faded_gray_mapper,
    grayscale,
    redistribute_green,
    redistribute_red,
)


def _single(rgba):
    return PixelBuffer.filled(1, 1, rgba)


class TestGrayscale:
    """Test grayscale methods"""

    @pytest.mark.parametrize("method", list(GrayscaleMethod))
    def test_channels_equal_and_alpha_kept(self, random_image, method):
        result = grayscale(random_image, method)
        pixels = result.array

        assert result.size == random_image.size
        assert np.array_equal(pixels[..., 0], pixels[..., 1])
        assert np.array_equal(pixels[..., 1], pixels[..., 2])
        assert np.array_equal(result.alpha(), random_image.alpha())

    def test_luminance_of_gray_is_unchanged(self):
        image = PixelBuffer.filled(3, 2, (90, 90, 90, 10))

        assert grayscale(image) == image

    def test_luminance_weights_green_highest(self):
        red = grayscale(_single((255, 0, 0))).get_pixel(0, 0)[0]
        green = grayscale(_single((0, 255, 0))).get_pixel(0, 0)[0]
        blue = grayscale(_single((0, 0, 255))).get_pixel(0, 0)[0]

        assert red == 76
        assert green > red > blue

    def test_average(self):
        result = grayscale(_single((30, 60, 90, 40)), GrayscaleMethod.AVERAGE)

        assert result.get_pixel(0, 0) == (60, 60, 60, 40)

    def test_faded(self):
        black = grayscale(_single((0, 0, 0)), GrayscaleMethod.FADED)
        gray = grayscale(_single((100, 100, 100)), GrayscaleMethod.FADED)
        white = grayscale(_single((255, 255, 255)), GrayscaleMethod.FADED)

        assert black.get_pixel(0, 0) == (128, 128, 128, 255)
        assert gray.get_pixel(0, 0) == (144, 144, 144, 255)
        assert white.get_pixel(0, 0)[0] >= 128

    def test_method_by_name(self, gradient_image):
        assert grayscale(gradient_image, "average") == grayscale(
            gradient_image, GrayscaleMethod.AVERAGE
        )

    def test_empty_image(self):
        assert grayscale(PixelBuffer.empty()).size == (0, 0)

    def test_mappers_work_on_scalars(self):
        assert average_gray_mapper(30, 60, 90, 255) == (60, 60, 60, 255)
        assert faded_gray_mapper(0, 0, 0, 255) == (128, 128, 128, 255)


class TestBrightness:
    """Test change_brightness and its steps"""

    @pytest.mark.parametrize(
        "rgb,multiplier,expected",
        [
            ((200, 200, 200), 1.5, (255, 255, 255)),
            ((200, 100, 50), 1.5, (255, 195, 120)),
            ((240, 200, 0), 1.25, (255, 255, 45)),
            ((100, 200, 20), 1.5, (195, 255, 75)),
            ((0, 50, 150), 2.0, (45, 145, 255)),
            ((200, 101, 3), 0.5, (100, 50, 1)),
            ((10, 20, 30), 0.0, (0, 0, 0)),
            ((10, 20, 30), -1.0, (0, 0, 0)),
        ],
    )
    def test_known_values(self, rgb, multiplier, expected):
        result = change_brightness(_single(rgb + (77,)), multiplier)

        assert result.get_pixel(0, 0) == expected + (77,)

    @pytest.mark.parametrize("multiplier", [1e17, 1e20, float("inf")])
    def test_huge_multipliers_saturate(self, multiplier):
        white = change_brightness(_single((255, 255, 255)), multiplier)
        mixed = change_brightness(_single((1, 0, 200, 9)), multiplier)

        assert white.get_pixel(0, 0) == (255, 255, 255, 255)
        assert mixed.get_pixel(0, 0) == (255, 255, 255, 9)

    def test_infinite_multiplier_keeps_black(self):
        result = change_brightness(_single((0, 0, 0)), float("inf"))

        assert result.get_pixel(0, 0) == (0, 0, 0, 255)

    def test_identity_multiplier(self, random_image):
        assert change_brightness(random_image, 1.0) == random_image

    def test_alpha_unchanged(self, random_image):
        for multiplier in (0.3, 1.7, 4.0, 100.0):
            result = change_brightness(random_image, multiplier)
            assert np.array_equal(result.alpha(), random_image.alpha())

    def test_mapper_on_scalars(self):
        r, g, b, a = brightness_mapper(1.5)(200, 200, 200, 255)

        assert (int(r), int(g), int(b), int(a)) == (255, 255, 255, 255)

    def test_red_overflow_is_deferred(self):
        """Test red's excess is kept pending instead of added right away"""
        state = redistribute_red(compute_scaled(300, 10, 20, 1.0))

        assert int(state.r) == 255
        assert (int(state.g), int(state.b)) == (10, 20)
        assert (int(state.pending_g), int(state.pending_b)) == (45, 45)

    def test_green_overflow_is_immediate(self):
        zero = np.int64(0)
        state = BrightnessState(
            r=np.int64(10), g=np.int64(260), b=np.int64(5), pending_g=zero, pending_b=zero
        )

        state = redistribute_green(state)

        assert (int(state.r), int(state.g), int(state.b)) == (15, 255, 10)

    def test_input_unchanged(self, gradient_image):
        before = gradient_image.copy()
        change_brightness(gradient_image, 2.0)

        assert gradient_image == before


class TestColorRemap:
    """Test color"""

    def test_median_gray_maps_to_target(self):
        result = color(_single((127, 127, 127, 200)), (10, 150, 240))

        assert result.get_pixel(0, 0) == (10, 150, 240, 200)

    def test_extremes_map_to_white_and_black(self):
        white = color(_single((255, 255, 255)), (10, 150, 240))
        black = color(_single((0, 0, 0)), (10, 150, 240))

        assert white.get_pixel(0, 0) == (255, 255, 255, 255)
        assert black.get_pixel(0, 0) == (0, 0, 0, 255)

    def test_brighter_pixels_give_lighter_shades(self, gradient_image):
        result = color(gradient_image, (100, 100, 100))
        row = result.array[10, :, 0].astype(int)

        assert np.all(np.diff(row) >= 0)

    def test_target_alpha_scales_alpha(self):
        image = _single((127, 127, 127, 200))

        assert color(image, (1, 2, 3, 0)).get_pixel(0, 0)[3] == 0
        assert color(image, (1, 2, 3, 255)).get_pixel(0, 0)[3] == 200
        assert color(image, (1, 2, 3, 128)).get_pixel(0, 0)[3] == 100

    def test_median_shifts_result(self):
        """Test a higher median darkens, a lower one brightens"""
        image = _single((100, 100, 100))
        target = (100, 100, 100)

        darker = color(image, target, median=200).get_pixel(0, 0)[0]
        brighter = color(image, target, median=50).get_pixel(0, 0)[0]

        assert darker < 100 < brighter

    @pytest.mark.parametrize("median", [0, 255])
    def test_extreme_medians(self, random_image, median):
        result = color(random_image, (60, 120, 180), median=median)

        assert result.size == random_image.size

    def test_invalid_median(self):
        with pytest.raises(ValueError):
            color_mapper((1, 2, 3), median=300)

    def test_compose_with_grayscale(self, random_image):
        """Test a composed mapper equals applying both mappers in turn"""
        remap = color_mapper((90, 30, 200))
        composed = compose_mappers(average_gray_mapper, remap)

        assert random_image.map(composed) == random_image.map(average_gray_mapper).map(remap)
