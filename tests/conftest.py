"""Shared pytest fixtures for the scope analysis test suite."""

from __future__ import annotations

import os
from typing import Callable, Tuple

import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt5 import QtWidgets

from scope_analysis.models import PixelBuffer


@pytest.fixture(scope="session")
def qt_application() -> QtWidgets.QApplication:
    """Provide a QApplication instance configured for offscreen rendering."""
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
        created = True
    else:
        created = False

    yield app

    if created:
        app.quit()


@pytest.fixture
def solid_buffer_factory() -> Callable[..., PixelBuffer]:
    """Factory for frames filled with a single RGBA color."""

    def _factory(width: int, height: int, color: Tuple[int, int, int], alpha: int = 255) -> PixelBuffer:
        image = np.empty((height, width, 4), dtype=np.uint8)
        image[:, :, :3] = color
        image[:, :, 3] = alpha
        return PixelBuffer.from_rgba_array(image)

    return _factory


@pytest.fixture
def horizontal_gradient() -> PixelBuffer:
    """256x16 gray ramp, black on the left to white on the right."""
    ramp = np.arange(256, dtype=np.uint8)
    image = np.empty((16, 256, 4), dtype=np.uint8)
    image[:, :, 0] = ramp
    image[:, :, 1] = ramp
    image[:, :, 2] = ramp
    image[:, :, 3] = 255
    return PixelBuffer.from_rgba_array(image)


@pytest.fixture
def random_buffer() -> PixelBuffer:
    """Deterministic noise frame with an odd width."""
    rng = np.random.default_rng(1234)
    image = rng.integers(0, 256, size=(37, 53, 4), dtype=np.uint8)
    return PixelBuffer.from_rgba_array(image)
