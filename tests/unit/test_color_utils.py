import numpy as np
import pytest

from scope_analysis.utils.color_utils import (
    calculate_luminance,
    chroma_arrays,
    luminance_array,
    rgb_to_ycbcr,
    round_half_up,
)


def test_calculate_luminance_primaries():
    assert calculate_luminance(0, 0, 0) == 0
    assert calculate_luminance(255, 255, 255) == 255
    assert calculate_luminance(255, 0, 0) == 54
    assert calculate_luminance(0, 255, 0) == 182
    assert calculate_luminance(0, 0, 255) == 18


def test_calculate_luminance_neutral_gray_is_identity():
    for value in (0, 1, 64, 127, 128, 200, 254, 255):
        assert calculate_luminance(value, value, value) == value


def test_round_half_up_ties_go_up():
    rounded = round_half_up(np.array([0.5, 1.5, 2.5, 2.4999, 7.5]))
    assert rounded.tolist() == [1.0, 2.0, 3.0, 2.0, 8.0]


def test_luminance_array_matches_scalar():
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(500, 4), dtype=np.uint8)

    result = luminance_array(pixels)

    expected = [calculate_luminance(int(r), int(g), int(b)) for r, g, b, _ in pixels]
    assert result.dtype == np.uint8
    assert result.tolist() == expected


def test_luminance_array_ignores_alpha():
    opaque = np.array([[10, 120, 240, 255]], dtype=np.uint8)
    transparent = np.array([[10, 120, 240, 0]], dtype=np.uint8)
    assert luminance_array(opaque).tolist() == luminance_array(transparent).tolist()


def test_rgb_to_ycbcr_gray_has_no_chroma():
    y, cb, cr = rgb_to_ycbcr(128, 128, 128)
    assert y == pytest.approx(128 / 255)
    assert cb == pytest.approx(0.0, abs=1e-12)
    assert cr == pytest.approx(0.0, abs=1e-12)


def test_rgb_to_ycbcr_extremes():
    _, _, cr_red = rgb_to_ycbcr(255, 0, 0)
    _, cb_blue, _ = rgb_to_ycbcr(0, 0, 255)
    _, cb_yellow, _ = rgb_to_ycbcr(255, 255, 0)

    assert cr_red == pytest.approx(0.5, abs=1e-9)
    assert cb_blue == pytest.approx(0.5, abs=1e-9)
    assert cb_yellow == pytest.approx(-0.5, abs=1e-9)


def test_chroma_arrays_match_scalar():
    pixels = np.array(
        [[255, 0, 0, 255], [0, 255, 0, 255], [12, 200, 99, 255], [128, 128, 128, 255]],
        dtype=np.uint8,
    )
    cb, cr = chroma_arrays(pixels)

    for i, (r, g, b, _) in enumerate(pixels):
        _, expected_cb, expected_cr = rgb_to_ycbcr(int(r), int(g), int(b))
        assert cb[i] == expected_cb
        assert cr[i] == expected_cr
