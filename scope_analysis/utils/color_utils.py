"""Luminance and chroma conversion utilities."""

import math
from typing import Tuple

import numpy as np

from ..constants import (
    LUMA_R,
    LUMA_G,
    LUMA_B,
    CB_DIVISOR,
    CR_DIVISOR,
    MAX_CHANNEL_VALUE,
)


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Round to the nearest integer with ties going up, like display scopes expect."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def calculate_luminance(r: int, g: int, b: int) -> int:
    """BT.709 luma of a single 8-bit RGB triple, rounded and clamped to 0-255."""
    lum = LUMA_R * r + LUMA_G * g + LUMA_B * b
    return min(MAX_CHANNEL_VALUE, max(0, math.floor(lum + 0.5)))


def luminance_array(pixels: np.ndarray) -> np.ndarray:
    """
    Compute BT.709 luma for an array of RGB(A) pixels.

    Args:
        pixels: (..., 3) or (..., 4) uint8 array; alpha is ignored

    Returns:
        uint8 array of the leading shape with luma values 0-255
    """
    r = pixels[..., 0].astype(np.float64)
    g = pixels[..., 1].astype(np.float64)
    b = pixels[..., 2].astype(np.float64)

    lum = round_half_up(LUMA_R * r + LUMA_G * g + LUMA_B * b)
    return np.clip(lum, 0, MAX_CHANNEL_VALUE).astype(np.uint8)


def rgb_to_ycbcr(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """Convert one 8-bit RGB triple to BT.709 (y, cb, cr), cb/cr in [-0.5, 0.5]."""
    rn = r / 255
    gn = g / 255
    bn = b / 255

    y = LUMA_R * rn + LUMA_G * gn + LUMA_B * bn
    cb = (bn - y) / CB_DIVISOR
    cr = (rn - y) / CR_DIVISOR
    return y, cb, cr


def chroma_arrays(pixels: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorized Cb/Cr for an array of RGB(A) pixels, float64 per pixel."""
    rn = pixels[..., 0].astype(np.float64) / 255
    gn = pixels[..., 1].astype(np.float64) / 255
    bn = pixels[..., 2].astype(np.float64) / 255

    y = LUMA_R * rn + LUMA_G * gn + LUMA_B * bn
    cb = (bn - y) / CB_DIVISOR
    cr = (rn - y) / CR_DIVISOR
    return cb, cr
