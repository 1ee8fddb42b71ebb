"""Histogram analyzer: per-channel and luminance bin counts."""

import logging

import numpy as np

from ..constants import HISTOGRAM_BINS
from ..models.pixel_buffer import PixelBuffer
from ..models.scope_data import HistogramData, frozen_array
from ..utils.color_utils import luminance_array
from ..utils.sampling import sample_pixels


def _bincount(values: np.ndarray) -> np.ndarray:
    return np.bincount(values, minlength=HISTOGRAM_BINS)[:HISTOGRAM_BINS]


def analyze_histogram(buffer: PixelBuffer, sample_rate: float = 1) -> HistogramData:
    """
    Count red, green, blue and luminance values over the sampled pixels.

    Pixels are visited with a flat stride through the buffer (see
    :func:`~scope_analysis.utils.sampling.sample_pixels`). Alpha is ignored.

    Args:
        buffer: RGBA frame
        sample_rate: visit every n-th pixel (default: every pixel)

    Returns:
        HistogramData with 256 bins per channel; ``max_count`` is the largest
        single bin across all four channels
    """
    pixels = sample_pixels(buffer.data, sample_rate)
    if pixels.shape[0] == 0:
        return HistogramData()

    red = _bincount(pixels[:, 0])
    green = _bincount(pixels[:, 1])
    blue = _bincount(pixels[:, 2])
    luminance = _bincount(luminance_array(pixels))

    max_count = int(max(red.max(), green.max(), blue.max(), luminance.max()))
    logging.debug(f"Histogram: {pixels.shape[0]} samples, max bin {max_count}")

    return HistogramData(
        red=frozen_array(red),
        green=frozen_array(green),
        blue=frozen_array(blue),
        luminance=frozen_array(luminance),
        max_count=max_count,
    )
