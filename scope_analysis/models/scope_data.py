"""Scope result data models."""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import numpy as np
import pandas as pd

from ..constants import HISTOGRAM_BINS


def frozen_array(values, dtype=np.int64) -> np.ndarray:
    """Copy ``values`` into a new read-only array."""
    array = np.array(values, dtype=dtype)
    array.setflags(write=False)
    return array


def empty_bins() -> np.ndarray:
    return frozen_array(np.zeros(HISTOGRAM_BINS))


@dataclass(frozen=True, eq=False)
class HistogramData:
    """Per-channel and luminance bin counts for one frame."""

    red: np.ndarray = field(default_factory=empty_bins)
    green: np.ndarray = field(default_factory=empty_bins)
    blue: np.ndarray = field(default_factory=empty_bins)
    luminance: np.ndarray = field(default_factory=empty_bins)
    # Largest single bin across all four channels
    max_count: int = 0

    @property
    def sample_count(self) -> int:
        """Number of pixels that went into the histogram."""
        return int(self.luminance.sum())

    def channels(self) -> Dict[str, np.ndarray]:
        return {
            'red': self.red,
            'green': self.green,
            'blue': self.blue,
            'luminance': self.luminance,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Bins as a DataFrame indexed by intensity, one column per channel."""
        df = pd.DataFrame(self.channels())
        df.index.name = 'intensity'
        return df

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {name: bins.tolist() for name, bins in self.channels().items()}
        result['maxCount'] = int(self.max_count)
        return result


@dataclass(frozen=True, eq=False)
class WaveformColumn:
    """Luminance (or single channel) summary for one waveform column."""

    min: int
    max: int
    avg: int
    distribution: np.ndarray = field(default_factory=empty_bins)

    @property
    def sample_count(self) -> int:
        return int(self.distribution.sum())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'min': int(self.min),
            'max': int(self.max),
            'avg': int(self.avg),
            'distribution': self.distribution.tolist(),
        }


@dataclass(frozen=True, eq=False)
class WaveformData:
    """Ordered waveform columns, left to right."""

    columns: Tuple[WaveformColumn, ...] = ()
    width: int = 0

    def __len__(self) -> int:
        return len(self.columns)

    def to_dataframe(self) -> pd.DataFrame:
        """Column min/max/avg as a DataFrame indexed by column."""
        df = pd.DataFrame(
            [(col.min, col.max, col.avg) for col in self.columns],
            columns=['min', 'max', 'avg'],
        )
        df.index.name = 'column'
        return df

    def to_dict(self) -> Dict[str, Any]:
        return {
            'columns': [col.to_dict() for col in self.columns],
            'width': int(self.width),
        }


@dataclass(frozen=True, eq=False)
class VectorscopeData:
    """
    Cb/Cr accumulation grid.

    Counts live in a flat row-major buffer (``y * size + x``); ``grid`` is a
    2D view over it so ``grid[y][x]`` reads a cell. Cb runs along x, Cr along
    y with positive Cr at the top. The center cell is neutral gray.
    """

    cells: np.ndarray = field(default_factory=lambda: frozen_array([]))
    size: int = 0
    max_intensity: int = 0

    @property
    def grid(self) -> np.ndarray:
        return self.cells.reshape(self.size, self.size)

    @property
    def center(self) -> int:
        return self.size // 2

    def cell(self, x: int, y: int) -> int:
        return int(self.cells[y * self.size + x])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'grid': self.grid.tolist(),
            'size': int(self.size),
            'maxIntensity': int(self.max_intensity),
        }


@dataclass(frozen=True, eq=False)
class RGBParadeData:
    """Independent waveforms for the red, green and blue channels."""

    red: WaveformData = field(default_factory=WaveformData)
    green: WaveformData = field(default_factory=WaveformData)
    blue: WaveformData = field(default_factory=WaveformData)

    def channels(self) -> Dict[str, WaveformData]:
        return {'red': self.red, 'green': self.green, 'blue': self.blue}

    def to_dict(self) -> Dict[str, Any]:
        return {name: waveform.to_dict() for name, waveform in self.channels().items()}


@dataclass(frozen=True, eq=False)
class FrameAnalysis:
    """All four scopes for one frame plus when and what was analyzed."""

    histogram: HistogramData
    waveform: WaveformData
    vectorscope: VectorscopeData
    rgb_parade: RGBParadeData
    timestamp: int  # milliseconds since the epoch
    width: int
    height: int

    def to_dict(self) -> Dict[str, Any]:
        """Plain-container form matching the scope renderers' contract."""
        return {
            'histogram': self.histogram.to_dict(),
            'waveform': self.waveform.to_dict(),
            'vectorscope': self.vectorscope.to_dict(),
            'rgbParade': self.rgb_parade.to_dict(),
            'timestamp': int(self.timestamp),
            'width': int(self.width),
            'height': int(self.height),
        }

    def __repr__(self) -> str:
        return (f"FrameAnalysis(size={self.width}x{self.height}, "
                f"timestamp={self.timestamp}, "
                f"waveform_columns={len(self.waveform.columns)}, "
                f"vectorscope_size={self.vectorscope.size})")


def create_empty_analysis() -> FrameAnalysis:
    """Structurally valid empty analysis for use before the first frame arrives."""
    empty_waveform = WaveformData()
    return FrameAnalysis(
        histogram=HistogramData(),
        waveform=empty_waveform,
        vectorscope=VectorscopeData(),
        rgb_parade=RGBParadeData(red=empty_waveform, green=empty_waveform, blue=empty_waveform),
        timestamp=0,
        width=0,
        height=0,
    )
