"""Data models for scope analysis."""

from .pixel_buffer import PixelBuffer
from .scope_data import (
    HistogramData,
    WaveformColumn,
    WaveformData,
    VectorscopeData,
    RGBParadeData,
    FrameAnalysis,
    create_empty_analysis,
)

__all__ = [
    "PixelBuffer",
    "HistogramData",
    "WaveformColumn",
    "WaveformData",
    "VectorscopeData",
    "RGBParadeData",
    "FrameAnalysis",
    "create_empty_analysis"
]
