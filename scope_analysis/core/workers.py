"""Background worker that keeps scopes up to date with the latest frame."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from PyQt5 import QtCore

from ..models.pixel_buffer import PixelBuffer
from .frame_analyzer import OptionsLike, analyze_frame
from .settings_manager import AnalysisOptions, resolve_options


class ScopeAnalysisWorker(QtCore.QObject):
    """
    Analyze frames outside the UI thread, always favoring the newest frame.

    Frames are handed over with :meth:`submit_frame`; a frame that arrives
    before the previous one was picked up replaces it. :meth:`cancel` drops
    the pending frame and discards the result of any analysis in flight.
    """

    analysis_ready = QtCore.pyqtSignal(object)
    error = QtCore.pyqtSignal(str)
    cancelled = QtCore.pyqtSignal()

    def __init__(self, options: OptionsLike = None):
        super().__init__()
        self._options = resolve_options(options)
        self._lock = threading.Lock()
        self._pending: Optional[PixelBuffer] = None
        self._generation = 0
        self.dropped_frames = 0

    @property
    def options(self) -> AnalysisOptions:
        return self._options

    def set_options(self, options: OptionsLike) -> None:
        """Options apply from the next frame picked up."""
        resolved = resolve_options(options)
        with self._lock:
            self._options = resolved

    def has_pending_frame(self) -> bool:
        with self._lock:
            return self._pending is not None

    def submit_frame(self, buffer: PixelBuffer) -> None:
        """Queue a frame, replacing any frame not yet picked up."""
        with self._lock:
            if self._pending is not None:
                self.dropped_frames += 1
            self._pending = buffer

    @QtCore.pyqtSlot()
    def run(self) -> None:
        """Analyze the pending frame, if any, and emit the result."""
        with self._lock:
            buffer = self._pending
            self._pending = None
            generation = self._generation
            options = self._options

        if buffer is None:
            return

        try:
            analysis = analyze_frame(buffer, options)
        except Exception as exc:
            logging.error(f"Scope analysis failed: {exc}")
            self.error.emit(str(exc))
            return

        with self._lock:
            stale = generation != self._generation

        if stale:
            self.cancelled.emit()
            return

        self.analysis_ready.emit(analysis)

    @QtCore.pyqtSlot()
    def cancel(self) -> None:
        """Drop the pending frame and discard any in-flight result."""
        with self._lock:
            self._pending = None
            self._generation += 1
