"""
Scope Analysis - video scope data for color monitoring

Turns an RGBA frame into histogram, waveform, vectorscope and RGB parade data
ready for a scope renderer.
"""

__version__ = "1.0.0"

import logging

from .core import (
    ScopeAnalysisError,
    AnalysisConfigError,
    AnalysisExecutionError,
    AnalysisOptions,
    SettingsManager,
    analyze_frame,
    analyze_histogram,
    analyze_waveform,
    analyze_rgb_parade,
    analyze_vectorscope,
)
from .constants import LOG_FORMAT
from .models import PixelBuffer, FrameAnalysis, create_empty_analysis
from .utils import (
    ExposureState,
    normalize_histogram,
    calculate_exposure_level,
    classify_exposure,
    recommend_sample_rate,
)


def configure_logging(level: int = logging.INFO):
    """Basic console logging for scripts using the library."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = [
    "ScopeAnalysisError",
    "AnalysisConfigError",
    "AnalysisExecutionError",
    "AnalysisOptions",
    "SettingsManager",
    "PixelBuffer",
    "FrameAnalysis",
    "analyze_frame",
    "analyze_histogram",
    "analyze_waveform",
    "analyze_rgb_parade",
    "analyze_vectorscope",
    "create_empty_analysis",
    "ExposureState",
    "normalize_histogram",
    "calculate_exposure_level",
    "classify_exposure",
    "recommend_sample_rate",
    "configure_logging"
]
