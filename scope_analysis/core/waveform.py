"""Waveform and RGB parade analyzers."""

import logging

import numpy as np

from ..constants import (
    BLUE_OFFSET,
    DEFAULT_WAVEFORM_WIDTH,
    GREEN_OFFSET,
    HISTOGRAM_BINS,
    RED_OFFSET,
)
from ..models.pixel_buffer import PixelBuffer
from ..models.scope_data import (
    RGBParadeData,
    WaveformColumn,
    WaveformData,
    empty_bins,
    frozen_array,
)
from ..utils.color_utils import luminance_array, round_half_up
from ..utils.sampling import column_bounds, sample_rows


def _build_waveform(values: np.ndarray, bounds: np.ndarray) -> WaveformData:
    """
    Summarize sampled rows into waveform columns.

    Args:
        values: (rows, source_width) uint8 values, already row-sampled
        bounds: source column boundaries from ``column_bounds``

    Returns:
        WaveformData with one column per ``bounds`` interval
    """
    actual_width = bounds.size - 1
    if actual_width <= 0:
        return WaveformData(columns=(), width=0)

    row_count = values.shape[0]
    if row_count == 0:
        empty = tuple(WaveformColumn(min=0, max=0, avg=0, distribution=empty_bins())
                      for _ in range(actual_width))
        return WaveformData(columns=empty, width=actual_width)

    starts = bounds[:-1]
    spans = np.diff(bounds)

    col_min = np.minimum.reduceat(values.min(axis=0), starts)
    col_max = np.maximum.reduceat(values.max(axis=0), starts)
    col_sum = np.add.reduceat(values.sum(axis=0, dtype=np.int64), starts)
    col_count = spans * row_count
    col_avg = round_half_up(col_sum / col_count).astype(np.int64)

    # One flat bincount over (column, value) pairs instead of a loop per column.
    # Keys are built in place so only one key-sized temporary exists.
    key_dtype = np.int32 if actual_width * HISTOGRAM_BINS <= np.iinfo(np.int32).max else np.int64
    column_offsets = np.repeat(np.arange(actual_width, dtype=key_dtype) * HISTOGRAM_BINS, spans)
    keys = values.astype(key_dtype)
    keys += column_offsets[np.newaxis, :]
    distributions = np.bincount(keys.ravel(), minlength=actual_width * HISTOGRAM_BINS)
    distributions = distributions.reshape(actual_width, HISTOGRAM_BINS)

    columns = tuple(
        WaveformColumn(
            min=int(col_min[c]),
            max=int(col_max[c]),
            avg=int(col_avg[c]),
            distribution=frozen_array(distributions[c]),
        )
        for c in range(actual_width)
    )
    return WaveformData(columns=columns, width=actual_width)


def analyze_waveform(buffer: PixelBuffer, target_width: int = DEFAULT_WAVEFORM_WIDTH,
                     sample_rate: float = 1) -> WaveformData:
    """
    Luminance waveform: min/max/avg and distribution per display column.

    The source width is mapped onto ``min(target_width, buffer.width)``
    columns proportionally; every source column lands in exactly one display
    column. Rows are sampled every ``floor(sample_rate)`` rows.

    Args:
        buffer: RGBA frame
        target_width: number of display columns wanted
        sample_rate: row stride (default: every row)

    Returns:
        WaveformData, one WaveformColumn per display column
    """
    bounds = column_bounds(buffer.width, target_width)
    rows = sample_rows(buffer.as_image(), sample_rate)
    waveform = _build_waveform(luminance_array(rows), bounds)
    logging.debug(f"Waveform: {waveform.width} columns from {rows.shape[0]} sampled rows")
    return waveform


def analyze_channel_waveform(buffer: PixelBuffer, channel_offset: int,
                             target_width: int = DEFAULT_WAVEFORM_WIDTH,
                             sample_rate: float = 1) -> WaveformData:
    """Waveform of one raw channel byte (0=R, 1=G, 2=B) instead of luminance."""
    bounds = column_bounds(buffer.width, target_width)
    rows = sample_rows(buffer.as_image(), sample_rate)
    return _build_waveform(rows[:, :, channel_offset], bounds)


def analyze_rgb_parade(buffer: PixelBuffer, target_width: int = DEFAULT_WAVEFORM_WIDTH,
                       sample_rate: float = 1) -> RGBParadeData:
    """Separate waveforms for the red, green and blue channels."""
    parade = RGBParadeData(
        red=analyze_channel_waveform(buffer, RED_OFFSET, target_width, sample_rate),
        green=analyze_channel_waveform(buffer, GREEN_OFFSET, target_width, sample_rate),
        blue=analyze_channel_waveform(buffer, BLUE_OFFSET, target_width, sample_rate),
    )
    logging.debug(f"RGB parade: {parade.red.width} columns per channel")
    return parade
