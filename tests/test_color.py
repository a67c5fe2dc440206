"""Tests for the RGB color model."""

import numpy as np
import pytest

from pixdither.color import (
    F64,
    LUMA_WEIGHTS,
    RGB,
    U8,
    clamp_to_u8,
    from_luminance,
    render_levels,
    to_luminance,
)


class TestArithmetic:
    def test_add_sub(self):
        assert RGB(1, 2, 3) + RGB(10, 20, 30) == RGB(11, 22, 33)
        assert RGB(10, 20, 30) - RGB(1, 2, 3) == RGB(9, 18, 27)

    def test_scale(self):
        assert RGB(2.0, 4.0, 6.0) * 0.5 == RGB(1.0, 2.0, 3.0)
        assert 2 * RGB(1, 2, 3) == RGB(2, 4, 6)
        assert RGB(3.0, 6.0, 9.0) / 3 == RGB(1.0, 2.0, 3.0)

    def test_equality_is_componentwise(self):
        assert RGB(1, 2, 3) == RGB(1.0, 2.0, 3.0)
        assert RGB(1, 2, 3) != RGB(1, 2, 4)

    def test_iter(self):
        assert tuple(RGB(7, 8, 9)) == (7, 8, 9)


class TestConversion:
    def test_to_f64_is_exact(self):
        c = RGB(0, 128, 255).to_f64()
        assert c == RGB(0.0, 128.0, 255.0)
        assert all(isinstance(v, float) for v in c)

    def test_to_u8_rounds_and_clamps(self):
        c = RGB(-3.2, 255.6, 127.4).to_u8()
        assert c == RGB(0, 255, 127)
        assert all(isinstance(v, int) for v in c)

    def test_clamp_to_u8(self):
        assert clamp_to_u8(300.0) == 255
        assert clamp_to_u8(-0.4) == 0
        assert clamp_to_u8(99.6) == 100

    def test_channel_array_conversion(self):
        arr = np.array([[-10.0, 12.7, 300.0]])
        out = U8.convert_array(arr)
        assert out.dtype == np.uint8
        assert out.tolist() == [[0, 13, 255]]
        assert F64.convert_array(np.array([1, 2], dtype=np.uint8)).dtype == np.float64

    def test_hex(self):
        assert RGB.from_hex(0xAA5500) == RGB(0xAA, 0x55, 0x00)
        assert RGB(0xAA, 0x55, 0x00).hex == "aa5500"


class TestLuminance:
    def test_weights_sum_to_one(self):
        assert sum(LUMA_WEIGHTS) == pytest.approx(1.0)

    def test_gray_maps_to_itself(self):
        assert RGB(100, 100, 100).luminance() == pytest.approx(100.0)

    def test_pure_channels(self):
        assert RGB(255, 0, 0).luminance() == pytest.approx(255 * 0.299)
        assert RGB(0, 255, 0).luminance() == pytest.approx(255 * 0.587)
        assert RGB(0, 0, 255).luminance() == pytest.approx(255 * 0.114)

    def test_from_luminance_replicates(self):
        assert RGB.from_luminance(42.5) == RGB(42.5, 42.5, 42.5)

    def test_image_matches_single_color(self):
        img = np.array([[[12, 200, 77], [255, 1, 30]]], dtype=np.uint8)
        gray = to_luminance(img)
        assert gray.shape == (1, 2)
        assert gray[0, 0] == RGB(12, 200, 77).to_f64().luminance()
        assert gray[0, 1] == RGB(255, 1, 30).to_f64().luminance()

    def test_from_luminance_image(self):
        gray = np.array([[0.0, 128.0]])
        rgb = from_luminance(gray)
        assert rgb.shape == (1, 2, 3)
        assert rgb[0, 1].tolist() == [128.0, 128.0, 128.0]


class TestChannelArithmetic:
    def test_u8_add_saturates(self):
        a = RGB(200, 200, 200).to_u8()
        b = RGB(100, 100, 100).to_u8()
        assert a + b == RGB(255, 255, 255)
        assert b - a == RGB(0, 0, 0)

    def test_u8_scale_saturates_and_rounds(self):
        c = RGB(100, 50, 3).to_u8()
        assert c * 3 == RGB(255, 150, 9)
        assert c * 0.5 == RGB(50, 25, 2)
        assert all(isinstance(v, int) for v in c * 0.5)

    def test_f64_is_unbounded(self):
        c = RGB(200.0, 200.0, 200.0) + RGB(100.0, 100.0, 100.0)
        assert c == RGB(300.0, 300.0, 300.0)
        assert (RGB(0.0, 0.0, 0.0) - RGB(1.5, 0.0, 0.0)).r == -1.5

    def test_result_keeps_channel(self):
        assert (RGB(1, 2, 3).to_u8() + RGB(1, 1, 1).to_u8()).channel is U8
        assert (RGB(1, 2, 3) * 2).channel is F64

    def test_mixed_channels_rejected(self):
        with pytest.raises(TypeError):
            RGB(1, 2, 3).to_u8() + RGB(1.0, 2.0, 3.0)

    def test_constructor_normalizes(self):
        c = RGB(300, -5, 12.6, U8)
        assert tuple(c) == (255, 0, 13)

    def test_from_hex_is_u8(self):
        assert RGB.from_hex(0x123456).channel is U8

    def test_channel_ops(self):
        assert U8.add(250, 10) == 255
        assert U8.sub(3, 10) == 0
        assert F64.scale(2.0, 0.25) == 0.5
        assert F64.divide(1.0, 4.0) == 0.25


class TestRenderLevels:
    def test_maps_each_level(self):
        gray = np.array([[0.0, 255.0], [255.0, 0.0]])
        out = render_levels(gray, lambda x: RGB(x, 0.0, 255.0 - x))
        assert out.dtype == np.uint8
        assert out.tolist() == [
            [[0, 0, 255], [255, 0, 0]],
            [[255, 0, 0], [0, 0, 255]],
        ]

    def test_called_once_per_level(self):
        calls = []

        def color_of(x):
            calls.append(x)
            return RGB.from_luminance(x)

        render_levels(np.array([[0.0, 128.0, 0.0, 128.0, 255.0]]), color_of)
        assert sorted(calls) == [0.0, 128.0, 255.0]
