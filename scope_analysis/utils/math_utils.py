"""Normalization and exposure helpers for scope display."""

import math
from enum import Enum
from typing import Sequence, Union

import numpy as np

from ..constants import (
    DEFAULT_TARGET_SAMPLE_PIXELS,
    EXPOSURE_MIDPOINT,
    OVEREXPOSURE_THRESHOLD,
    UNDEREXPOSURE_THRESHOLD,
)
from ..models.scope_data import HistogramData

ArrayLike = Union[Sequence[float], np.ndarray]


class ExposureState(Enum):
    """Coarse exposure reading shown next to the scopes."""

    UNDEREXPOSED = "underexposed"
    BALANCED = "balanced"
    OVEREXPOSED = "overexposed"


def normalize_histogram(histogram: ArrayLike, max_count: float,
                        logarithmic: bool = False) -> np.ndarray:
    """
    Scale bin counts into 0-1 for display.

    Args:
        histogram: bin counts for one channel
        max_count: value that maps to 1.0, usually ``HistogramData.max_count``
        logarithmic: compress with ``log1p`` so sparse bins stay visible

    Returns:
        float64 array the same length as ``histogram``; all zeros when
        ``max_count`` is 0
    """
    bins = np.asarray(histogram, dtype=np.float64)
    if max_count == 0:
        return np.zeros_like(bins)
    if logarithmic:
        return np.log1p(bins) / math.log1p(max_count)
    return bins / max_count


def normalize_grid(grid: ArrayLike, max_intensity: float, logarithmic: bool = False) -> np.ndarray:
    """Vectorscope counterpart of :func:`normalize_histogram`."""
    cells = np.asarray(grid, dtype=np.float64)
    if max_intensity == 0:
        return np.zeros_like(cells)
    if logarithmic:
        return np.log1p(cells) / math.log1p(max_intensity)
    return cells / max_intensity


def calculate_exposure_level(histogram: HistogramData) -> float:
    """
    Estimate exposure from the luminance histogram.

    Returns a value of roughly -1 (underexposed) to 1 (overexposed), 0 when
    balanced or when the histogram is empty.
    """
    if histogram.max_count == 0:
        return 0.0

    luminance = np.asarray(histogram.luminance, dtype=np.float64)
    total_weight = luminance.sum()
    if total_weight == 0:
        return 0.0

    avg_luminance = float(np.dot(luminance, np.arange(luminance.size, dtype=np.float64)) / total_weight)
    return (avg_luminance - EXPOSURE_MIDPOINT) / EXPOSURE_MIDPOINT


def classify_exposure(level: float,
                      under_threshold: float = UNDEREXPOSURE_THRESHOLD,
                      over_threshold: float = OVEREXPOSURE_THRESHOLD) -> ExposureState:
    """Bucket an exposure level into under/balanced/over."""
    if level < under_threshold:
        return ExposureState.UNDEREXPOSED
    if level > over_threshold:
        return ExposureState.OVEREXPOSED
    return ExposureState.BALANCED


def recommend_sample_rate(width: int, height: int,
                          target_pixels: int = DEFAULT_TARGET_SAMPLE_PIXELS) -> int:
    """Smallest stride that keeps the number of sampled pixels at or under ``target_pixels``."""
    pixel_count = max(0, width) * max(0, height)
    if target_pixels <= 0 or pixel_count <= target_pixels:
        return 1
    return math.ceil(pixel_count / target_pixels)
