"""Scope analyzers, frame orchestration and configuration."""

from .exceptions import ScopeAnalysisError, AnalysisConfigError, AnalysisExecutionError
from .histogram import analyze_histogram
from .waveform import analyze_waveform, analyze_channel_waveform, analyze_rgb_parade
from .vectorscope import analyze_vectorscope
from .settings_manager import AnalysisOptions, ScopeSettings, SettingsManager
from .frame_analyzer import analyze_frame

__all__ = [
    "ScopeAnalysisError",
    "AnalysisConfigError",
    "AnalysisExecutionError",
    "analyze_histogram",
    "analyze_waveform",
    "analyze_channel_waveform",
    "analyze_rgb_parade",
    "analyze_vectorscope",
    "AnalysisOptions",
    "ScopeSettings",
    "SettingsManager",
    "analyze_frame"
]
