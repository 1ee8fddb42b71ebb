"""RGBA pixel buffer model for frames handed to the scope analyzers."""

import os
from dataclasses import dataclass

import cv2
import numpy as np

from ..constants import BYTES_PER_PIXEL
from ..core.exceptions import ImageLoadError, InvalidPixelBufferError


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    A frame as contiguous RGBA bytes, row-major, top to bottom.

    ``data`` is a flat read-only uint8 array of ``width * height * 4`` bytes,
    the same layout a canvas ``getImageData`` call returns. The analyzers do
    not check the length against the dimensions; the factory methods below
    are where malformed frames get rejected.
    """

    width: int
    height: int
    data: np.ndarray

    @property
    def pixel_count(self) -> int:
        return self.data.size // BYTES_PER_PIXEL

    @property
    def pixels(self) -> np.ndarray:
        """(N, 4) view, one RGBA row per pixel."""
        count = self.pixel_count
        return self.data[:count * BYTES_PER_PIXEL].reshape(count, BYTES_PER_PIXEL)

    def as_image(self) -> np.ndarray:
        """(H, W, 4) view of the buffer."""
        return self.data.reshape(self.height, self.width, BYTES_PER_PIXEL)

    @classmethod
    def from_bytes(cls, width: int, height: int, data) -> 'PixelBuffer':
        """Wrap raw RGBA bytes (bytes, bytearray, memoryview or any uint8 sequence)."""
        if isinstance(data, (bytes, bytearray, memoryview)):
            flat = np.frombuffer(data, dtype=np.uint8)
        else:
            flat = np.asarray(data, dtype=np.uint8).ravel()

        expected = width * height * BYTES_PER_PIXEL
        if width < 0 or height < 0 or flat.size != expected:
            raise InvalidPixelBufferError(
                width, height, int(flat.size),
                f"expected {expected} bytes for {width}x{height} RGBA"
            )
        return cls._wrap(width, height, flat)

    @classmethod
    def from_rgba_array(cls, array: np.ndarray) -> 'PixelBuffer':
        """Wrap an (H, W, 4) uint8 RGBA image."""
        image = np.asarray(array)
        if image.ndim != 3 or image.shape[2] != BYTES_PER_PIXEL:
            raise InvalidPixelBufferError(
                image.shape[1] if image.ndim > 1 else 0,
                image.shape[0] if image.ndim > 0 else 0,
                int(image.size),
                f"expected an (H, W, 4) array, got shape {image.shape}"
            )
        height, width = image.shape[:2]
        flat = np.ascontiguousarray(image, dtype=np.uint8).ravel()
        return cls._wrap(width, height, flat)

    @classmethod
    def from_bgr_frame(cls, frame: np.ndarray) -> 'PixelBuffer':
        """Convert an OpenCV frame (BGR, BGRA or grayscale) into an RGBA buffer."""
        if frame is None or frame.size == 0:
            raise InvalidPixelBufferError(0, 0, 0, "empty frame")

        if frame.ndim == 2:
            code = cv2.COLOR_GRAY2RGBA
        elif frame.ndim == 3 and frame.shape[2] == 3:
            code = cv2.COLOR_BGR2RGBA
        elif frame.ndim == 3 and frame.shape[2] == 4:
            code = cv2.COLOR_BGRA2RGBA
        else:
            raise InvalidPixelBufferError(
                frame.shape[1], frame.shape[0], int(frame.size),
                f"unsupported frame shape {frame.shape}"
            )

        try:
            rgba = cv2.cvtColor(frame, code)
        except cv2.error as e:
            raise InvalidPixelBufferError(
                frame.shape[1], frame.shape[0], int(frame.size),
                "color conversion failed", e
            ) from e
        return cls.from_rgba_array(rgba)

    @classmethod
    def from_image_file(cls, file_path: str) -> 'PixelBuffer':
        """Decode an image file with OpenCV into an RGBA buffer."""
        if not os.path.exists(file_path):
            raise ImageLoadError(file_path, "file does not exist")

        frame = cv2.imread(file_path, cv2.IMREAD_UNCHANGED)
        if frame is None:
            raise ImageLoadError(file_path, "OpenCV could not decode the file")
        if frame.dtype != np.uint8:
            raise ImageLoadError(file_path, f"unsupported bit depth {frame.dtype}")
        return cls.from_bgr_frame(frame)

    @classmethod
    def _wrap(cls, width: int, height: int, flat: np.ndarray) -> 'PixelBuffer':
        if flat.flags.writeable:
            flat = flat.copy()
            flat.setflags(write=False)
        return cls(width=width, height=height, data=flat)

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height}, {self.data.size} bytes)"
