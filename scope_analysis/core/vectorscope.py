"""Vectorscope analyzer: Cb/Cr accumulation grid."""

import logging

import numpy as np

from ..constants import DEFAULT_VECTORSCOPE_SIZE
from ..models.pixel_buffer import PixelBuffer
from ..models.scope_data import VectorscopeData, frozen_array
from ..utils.color_utils import chroma_arrays
from ..utils.sampling import sample_pixels


def chroma_to_grid(cb: np.ndarray, cr: np.ndarray, grid_size: int) -> np.ndarray:
    """
    Map Cb/Cr in [-0.5, 0.5] to flat grid indices ``y * grid_size + x``.

    Cb runs left to right; Cr is inverted so positive Cr lands near the top.
    Out-of-range coordinates are clamped onto the edge cells.
    """
    scale = grid_size - 1
    grid_x = np.floor((cb + 0.5) * scale)
    grid_y = np.floor((0.5 - cr) * scale)

    x = np.clip(grid_x, 0, scale).astype(np.int64)
    y = np.clip(grid_y, 0, scale).astype(np.int64)
    return y * grid_size + x


def analyze_vectorscope(buffer: PixelBuffer, grid_size: int = DEFAULT_VECTORSCOPE_SIZE,
                        sample_rate: float = 1) -> VectorscopeData:
    """
    Accumulate sampled pixel chrominance into a ``grid_size`` square grid.

    Uses the same flat pixel stride as the histogram.

    Args:
        buffer: RGBA frame
        grid_size: cells per side (default: 256)
        sample_rate: visit every n-th pixel (default: every pixel)

    Returns:
        VectorscopeData; ``max_intensity`` is the fullest cell
    """
    if grid_size <= 0:
        return VectorscopeData()

    pixels = sample_pixels(buffer.data, sample_rate)
    if pixels.shape[0] == 0:
        return VectorscopeData(cells=frozen_array(np.zeros(grid_size * grid_size)), size=grid_size)

    cb, cr = chroma_arrays(pixels)
    indices = chroma_to_grid(cb, cr, grid_size)
    cells = np.bincount(indices, minlength=grid_size * grid_size)

    max_intensity = int(cells.max())
    logging.debug(f"Vectorscope: {pixels.shape[0]} samples on {grid_size}x{grid_size}, peak {max_intensity}")

    return VectorscopeData(cells=frozen_array(cells), size=grid_size, max_intensity=max_intensity)
