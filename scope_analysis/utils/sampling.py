"""Pixel and row sampling helpers shared by the analyzers."""

import math

import numpy as np

from ..constants import BYTES_PER_PIXEL


def effective_stride(sample_rate: float) -> int:
    """Integer stride for a sample rate; anything below 1 samples every pixel."""
    return max(1, math.floor(sample_rate))


def sample_pixels(data: np.ndarray, sample_rate: float = 1) -> np.ndarray:
    """
    Stride through a flat RGBA byte buffer.

    Rows are not respected: when the stride does not divide the row width the
    walk simply continues into the next row.

    Args:
        data: flat uint8 buffer, length a multiple of 4
        sample_rate: pixel stride, floored, minimum 1

    Returns:
        (n, 4) view of the sampled pixels
    """
    pixel_count = data.size // BYTES_PER_PIXEL
    pixels = data[:pixel_count * BYTES_PER_PIXEL].reshape(pixel_count, BYTES_PER_PIXEL)
    return pixels[::effective_stride(sample_rate)]


def sample_rows(image: np.ndarray, sample_rate: float = 1) -> np.ndarray:
    """Every n-th row of an (H, W, C) image, starting at row 0."""
    return image[::effective_stride(sample_rate)]


def column_bounds(source_width: int, target_width: int) -> np.ndarray:
    """
    Source column boundaries for a waveform of ``min(target_width, source_width)`` columns.

    Column ``c`` covers ``[bounds[c], bounds[c + 1])``. Proportional mapping
    covers the whole source width exactly once even when it does not divide
    evenly.
    """
    actual_width = max(0, min(target_width, source_width))
    cols = np.arange(actual_width + 1, dtype=np.int64)
    if actual_width == 0:
        return cols
    return (cols * source_width) // actual_width
