"""Tests for the uniform and palette quantizers."""

import numpy as np
import pytest

from pixdither.color import RGB
from pixdither.dithers.quantize import PaletteQuantizer, Quantizer, UniformQuantizer
from pixdither.errors import BadBitDepth
from pixdither.palette import CGA, GRAY, RED, Palette


class TestQuantizerBase:
    def test_apply_is_abstract(self):
        with pytest.raises(TypeError):
            Quantizer()

    def test_subclass_without_apply_rejected(self):
        class NoApply(Quantizer):
            pass

        with pytest.raises(TypeError):
            NoApply()


class TestUniformQuantizer:
    @pytest.mark.parametrize("n", [0, 8, -1, 255])
    def test_bad_depth_rejected_at_construction(self, n):
        with pytest.raises(BadBitDepth) as exc:
            UniformQuantizer(n)
        assert exc.value.depth == n

    def test_one_bit_is_threshold(self):
        q = UniformQuantizer(1)
        assert q.apply(10.0) == (0.0, 10.0)
        assert q.apply(127.0) == (0.0, 127.0)
        assert q.apply(128.0) == (255.0, -128.0)
        assert q.apply(250.0) == (255.0, -6.0)
        assert q.apply(255.0) == (255.0, -1.0)

    def test_zero(self):
        quantized, residual = UniformQuantizer(1).apply(0.0)
        assert quantized == 0.0
        assert residual == 0.0

    def test_two_levels(self):
        q = UniformQuantizer(2)
        assert q.apply(100.0) == (128.0, -28.0)
        assert q.apply(30.0) == (0.0, 30.0)
        # Exactly halfway goes up.
        assert q.apply(64.0) == (128.0, -64.0)

    def test_residual_uses_unclamped_ceiling(self):
        # 200 rounds up to 256, which is clamped to 255 but the residual
        # is still measured against 256.
        quantized, residual = UniformQuantizer(2).apply(200.0)
        assert quantized == 255.0
        assert residual == -56.0
        assert residual != 200.0 - quantized

    @pytest.mark.parametrize("n", range(1, 8))
    def test_output_in_range(self, n):
        q = UniformQuantizer(n)
        step = 256.0 / n
        for x in np.linspace(0.0, 255.0, 103):
            quantized, residual = q.apply(x)
            assert 0.0 <= quantized <= 255.0
            if quantized < 255.0:
                assert residual == pytest.approx(x - quantized)
            else:
                unclamped = step * np.ceil(x / step)
                assert residual == pytest.approx(x - unclamped)

    def test_out_of_range_inputs_clamped(self):
        q = UniformQuantizer(1)
        assert q.apply(-40.0)[0] == 0.0
        assert q.apply(400.0)[0] == 255.0
        # Just above 256 the floor level is 256: clamped, residual unclamped.
        assert q.apply(300.0) == (255.0, 44.0)


class TestPaletteQuantizer:
    def test_exact_member(self):
        q = PaletteQuantizer(CGA)
        match, residual = q.apply(np.array([170.0, 0.0, 0.0]))
        assert match.tolist() == list(RED)
        assert residual.tolist() == [0.0, 0.0, 0.0]

    def test_residual_is_input_minus_match(self):
        q = PaletteQuantizer(CGA)
        value = np.array([90.0, 80.0, 88.0])
        match, residual = q.apply(value)
        assert match.tolist() == list(GRAY)
        np.testing.assert_allclose(residual, value - match)

    def test_first_entry_wins_ties(self):
        a, b = RGB(0, 0, 0), RGB(20, 0, 0)
        value = np.array([10.0, 0.0, 0.0])
        match, residual = PaletteQuantizer(Palette("ab", [a, b])).apply(value)
        assert match.tolist() == [0.0, 0.0, 0.0]
        assert residual.tolist() == [10.0, 0.0, 0.0]
        match, _ = PaletteQuantizer(Palette("ba", [b, a])).apply(value)
        assert match.tolist() == [20.0, 0.0, 0.0]

    def test_uses_l1_distance(self):
        # L1 picks (0, 0, 30) (distance 30); Euclidean would pick (20, 20, 0).
        palette = Palette("p", [RGB(20, 20, 0), RGB(0, 0, 30)])
        match, _ = PaletteQuantizer(palette).apply(np.array([0.0, 0.0, 0.0]))
        assert match.tolist() == [0.0, 0.0, 30.0]

    def test_always_returns_member(self):
        rng = np.random.default_rng(3)
        q = PaletteQuantizer(CGA)
        members = {tuple(float(v) for v in c) for c in CGA}
        for value in rng.uniform(-50, 300, size=(50, 3)):
            match, _ = q.apply(value)
            assert tuple(match.tolist()) in members

    def test_does_not_alias_palette(self):
        q = PaletteQuantizer(CGA)
        match, _ = q.apply(np.array([0.0, 0.0, 0.0]))
        match += 5
        again, _ = q.apply(np.array([0.0, 0.0, 0.0]))
        assert again.tolist() == [0.0, 0.0, 0.0]
