import time
from concurrent.futures import ThreadPoolExecutor

import cv2
import numpy as np
import pytest

from scope_analysis.core import analyze_frame
from scope_analysis.core import frame_analyzer
from scope_analysis.core.exceptions import AnalysisConfigError, AnalysisExecutionError
from scope_analysis.core.settings_manager import AnalysisOptions, SettingsManager
from scope_analysis.models import PixelBuffer
from scope_analysis.utils.math_utils import ExposureState, calculate_exposure_level, classify_exposure


def _assert_same_analysis(first, second):
    for name, bins in first.histogram.channels().items():
        assert np.array_equal(bins, second.histogram.channels()[name])
    assert first.histogram.max_count == second.histogram.max_count

    waveforms = [(first.waveform, second.waveform)]
    waveforms += [(first.rgb_parade.channels()[name], second.rgb_parade.channels()[name])
                  for name in ("red", "green", "blue")]
    for a, b in waveforms:
        assert a.width == b.width
        for col_a, col_b in zip(a.columns, b.columns):
            assert (col_a.min, col_a.max, col_a.avg) == (col_b.min, col_b.max, col_b.avg)
            assert np.array_equal(col_a.distribution, col_b.distribution)

    assert np.array_equal(first.vectorscope.cells, second.vectorscope.cells)
    assert first.vectorscope.max_intensity == second.vectorscope.max_intensity


def test_solid_red_frame_end_to_end(solid_buffer_factory):
    analysis = analyze_frame(solid_buffer_factory(10, 10, (255, 0, 0)))

    assert (analysis.width, analysis.height) == (10, 10)
    assert analysis.histogram.red[255] == 100
    assert analysis.histogram.green[0] == 100
    assert analysis.histogram.luminance[54] == 100
    assert analysis.waveform.width == 10
    assert all(column.avg == 54 for column in analysis.waveform.columns)
    assert analysis.vectorscope.size == 256
    assert analysis.vectorscope.max_intensity == 100
    center = analysis.vectorscope.center
    assert analysis.vectorscope.grid[center][center] == 0
    assert all(column.avg == 255 for column in analysis.rgb_parade.red.columns)
    assert all(column.avg == 0 for column in analysis.rgb_parade.blue.columns)


def test_options_are_applied(random_buffer):
    analysis = analyze_frame(random_buffer, {"waveformWidth": 8, "vectorscopeSize": 16, "sampleRate": 2})

    assert analysis.waveform.width == 8
    assert analysis.rgb_parade.green.width == 8
    assert analysis.vectorscope.grid.shape == (16, 16)
    # Flat stride 2 over 37 * 53 pixels
    assert analysis.histogram.sample_count == (37 * 53 + 1) // 2


def test_invalid_options_rejected(random_buffer):
    with pytest.raises(AnalysisConfigError):
        analyze_frame(random_buffer, {"vectorscopeSize": 0})


def test_parallel_matches_sequential(random_buffer):
    sequential = analyze_frame(random_buffer, AnalysisOptions(waveform_width=20, sample_rate=3))
    parallel = analyze_frame(random_buffer, AnalysisOptions(waveform_width=20, sample_rate=3, parallel=True))
    _assert_same_analysis(sequential, parallel)


def test_explicit_executor(random_buffer):
    with ThreadPoolExecutor(max_workers=2) as executor:
        shared = analyze_frame(random_buffer, executor=executor)
        again = analyze_frame(random_buffer, executor=executor)
    _assert_same_analysis(shared, again)


@pytest.mark.parametrize("parallel", [False, True])
def test_analyzer_failure_is_wrapped(monkeypatch, random_buffer, parallel):
    def broken(*args):
        raise RuntimeError("boom")

    monkeypatch.setattr(frame_analyzer, "analyze_vectorscope", broken)

    with pytest.raises(AnalysisExecutionError) as exc_info:
        analyze_frame(random_buffer, AnalysisOptions(parallel=parallel))

    assert exc_info.value.stage == "vectorscope"
    assert isinstance(exc_info.value.cause, RuntimeError)


def test_timestamp_is_current_milliseconds(solid_buffer_factory):
    before = int(time.time() * 1000)
    analysis = analyze_frame(solid_buffer_factory(2, 2, (0, 0, 0)))
    after = int(time.time() * 1000)

    assert before <= analysis.timestamp <= after + 1


def test_histogram_and_waveform_sample_differently():
    # 3x2 frame, pixel i has red value 10 * i
    image = np.zeros((2, 3, 4), dtype=np.uint8)
    image[:, :, 0] = (np.arange(6) * 10).reshape(2, 3)
    analysis = analyze_frame(PixelBuffer.from_rgba_array(image), {"sampleRate": 2})

    # Histogram walks every other pixel across rows: 0, 2, 4
    assert np.nonzero(analysis.histogram.red)[0].tolist() == [0, 20, 40]
    # Waveforms take every other row: row 0 only
    assert [column.max for column in analysis.rgb_parade.red.columns] == [0, 10, 20]


def test_image_file_pipeline(tmp_path):
    frame = np.zeros((90, 160, 3), dtype=np.uint8)
    frame[:, :80] = (0, 0, 0)
    frame[:, 80:] = (255, 255, 255)
    path = tmp_path / "split.png"
    assert cv2.imwrite(str(path), frame)

    analysis = analyze_frame(PixelBuffer.from_image_file(str(path)), {"waveformWidth": 2})

    assert analysis.waveform.columns[0].max == 0
    assert analysis.waveform.columns[1].min == 255
    assert analysis.histogram.luminance[0] == analysis.histogram.luminance[255] == 80 * 90


def test_settings_drive_analysis_and_exposure(tmp_path, solid_buffer_factory):
    manager = SettingsManager(str(tmp_path / "settings.json"))
    manager.set_setting("waveform_width", 4)
    buffer = solid_buffer_factory(40, 30, (20, 20, 20))

    analysis = analyze_frame(buffer, manager.get_analysis_options(buffer.width, buffer.height))
    level = calculate_exposure_level(analysis.histogram)

    assert analysis.waveform.width == 4
    assert classify_exposure(level,
                             manager.get_setting("underexposure_threshold"),
                             manager.get_setting("overexposure_threshold")) is ExposureState.UNDEREXPOSED
