"""Utility modules for scope analysis."""

from .color_utils import calculate_luminance, rgb_to_ycbcr
from .sampling import column_bounds
from .math_utils import (
    ExposureState,
    normalize_histogram,
    normalize_grid,
    calculate_exposure_level,
    classify_exposure,
    recommend_sample_rate,
)

__all__ = [
    "calculate_luminance",
    "rgb_to_ycbcr",
    "column_bounds",
    "ExposureState",
    "normalize_histogram",
    "normalize_grid",
    "calculate_exposure_level",
    "classify_exposure",
    "recommend_sample_rate"
]
