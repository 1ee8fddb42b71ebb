"""Tests for the PixelBuffer model and its factories."""

import cv2
import numpy as np
import pytest

from scope_analysis.core.exceptions import ImageLoadError, InvalidPixelBufferError, PixelBufferError
from scope_analysis.models import PixelBuffer


def test_from_bytes():
    raw = bytes([255, 0, 0, 255, 0, 0, 255, 255])
    buffer = PixelBuffer.from_bytes(2, 1, raw)

    assert buffer.width == 2
    assert buffer.height == 1
    assert buffer.pixel_count == 2
    assert buffer.pixels.tolist() == [[255, 0, 0, 255], [0, 0, 255, 255]]


def test_from_bytearray_is_copied():
    raw = bytearray(4)
    buffer = PixelBuffer.from_bytes(1, 1, raw)
    raw[0] = 200

    assert buffer.data[0] == 0


def test_from_list():
    buffer = PixelBuffer.from_bytes(1, 2, [1, 2, 3, 4, 5, 6, 7, 8])
    assert buffer.as_image().shape == (2, 1, 4)
    assert buffer.as_image()[1, 0].tolist() == [5, 6, 7, 8]


@pytest.mark.parametrize("width, height, length", [(2, 2, 15), (2, 2, 17), (-1, 2, 0)])
def test_from_bytes_rejects_wrong_length(width, height, length):
    with pytest.raises(InvalidPixelBufferError) as exc_info:
        PixelBuffer.from_bytes(width, height, bytes(length))

    assert exc_info.value.length == length
    assert "expected" in exc_info.value.reason


def test_from_rgba_array_rejects_wrong_shape():
    with pytest.raises(InvalidPixelBufferError):
        PixelBuffer.from_rgba_array(np.zeros((4, 4, 3), dtype=np.uint8))
    with pytest.raises(PixelBufferError):
        PixelBuffer.from_rgba_array(np.zeros(16, dtype=np.uint8))


def test_data_is_read_only():
    image = np.zeros((2, 2, 4), dtype=np.uint8)
    buffer = PixelBuffer.from_rgba_array(image)

    image[0, 0, 0] = 99
    assert buffer.data[0] == 0
    with pytest.raises(ValueError):
        buffer.data[0] = 1


def test_from_bgr_frame_swaps_channels():
    frame = np.zeros((2, 3, 3), dtype=np.uint8)
    frame[:, :, 0] = 200  # blue in OpenCV order
    buffer = PixelBuffer.from_bgr_frame(frame)

    assert (buffer.width, buffer.height) == (3, 2)
    assert buffer.pixels[0].tolist() == [0, 0, 200, 255]


def test_from_bgra_frame_keeps_alpha():
    frame = np.zeros((1, 1, 4), dtype=np.uint8)
    frame[0, 0] = (10, 20, 30, 40)
    assert PixelBuffer.from_bgr_frame(frame).pixels[0].tolist() == [30, 20, 10, 40]


def test_from_gray_frame():
    frame = np.full((2, 2), 77, dtype=np.uint8)
    assert PixelBuffer.from_bgr_frame(frame).pixels[0].tolist() == [77, 77, 77, 255]


def test_from_bgr_frame_rejects_empty():
    with pytest.raises(InvalidPixelBufferError):
        PixelBuffer.from_bgr_frame(np.zeros((0, 0, 3), dtype=np.uint8))


def test_from_image_file(tmp_path):
    frame = np.zeros((4, 5, 3), dtype=np.uint8)
    frame[:, :] = (0, 0, 255)  # red
    path = tmp_path / "red.png"
    assert cv2.imwrite(str(path), frame)

    buffer = PixelBuffer.from_image_file(str(path))

    assert (buffer.width, buffer.height) == (5, 4)
    assert buffer.pixels[0].tolist() == [255, 0, 0, 255]


def test_from_image_file_missing(tmp_path):
    path = tmp_path / "missing.png"
    with pytest.raises(ImageLoadError) as exc_info:
        PixelBuffer.from_image_file(str(path))

    assert exc_info.value.file_path == str(path)
    assert "does not exist" in str(exc_info.value)


def test_from_image_file_undecodable(tmp_path):
    path = tmp_path / "not_an_image.png"
    path.write_text("plain text")
    with pytest.raises(ImageLoadError):
        PixelBuffer.from_image_file(str(path))


def test_repr():
    assert repr(PixelBuffer.from_bytes(2, 3, bytes(24))) == "PixelBuffer(2x3, 24 bytes)"
