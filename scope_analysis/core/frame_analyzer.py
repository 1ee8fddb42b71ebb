"""Complete frame analysis: all four scopes over one buffer."""

import logging
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from ..models.pixel_buffer import PixelBuffer
from ..models.scope_data import FrameAnalysis
from .exceptions import AnalysisExecutionError
from .histogram import analyze_histogram
from .settings_manager import AnalysisOptions, resolve_options
from .vectorscope import analyze_vectorscope
from .waveform import analyze_rgb_parade, analyze_waveform

OptionsLike = Union[AnalysisOptions, Mapping[str, Any], None]
Task = Tuple[Callable[..., Any], Tuple[Any, ...]]


def _build_tasks(buffer: PixelBuffer, opts: AnalysisOptions) -> Dict[str, Task]:
    return {
        'histogram': (analyze_histogram, (buffer, opts.sample_rate)),
        'waveform': (analyze_waveform, (buffer, opts.waveform_width, opts.sample_rate)),
        'vectorscope': (analyze_vectorscope, (buffer, opts.vectorscope_size, opts.sample_rate)),
        'rgb_parade': (analyze_rgb_parade, (buffer, opts.waveform_width, opts.sample_rate)),
    }


def _run_parallel(tasks: Dict[str, Task], executor: Executor) -> Dict[str, Any]:
    """Submit every analyzer, then join in a fixed order."""
    futures = {name: executor.submit(func, *args) for name, (func, args) in tasks.items()}

    results = {}
    for name, future in futures.items():
        try:
            results[name] = future.result()
        except Exception as e:
            raise AnalysisExecutionError(name, e) from e
    return results


def _run_inline(tasks: Dict[str, Task]) -> Dict[str, Any]:
    results = {}
    for name, (func, args) in tasks.items():
        try:
            results[name] = func(*args)
        except Exception as e:
            raise AnalysisExecutionError(name, e) from e
    return results


def analyze_frame(buffer: PixelBuffer, options: OptionsLike = None,
                  executor: Optional[Executor] = None) -> FrameAnalysis:
    """
    Run histogram, waveform, vectorscope and RGB parade analysis on one frame.

    The analyzers share nothing but the read-only buffer, so they can run
    concurrently. They are fanned out on ``executor`` when one is given, on a
    short-lived thread pool when ``options.parallel`` is set, and inline
    otherwise. The result is identical either way.

    Args:
        buffer: RGBA frame
        options: AnalysisOptions, a mapping of option names (camelCase or
            snake_case), or None for defaults
        executor: optional executor to run the analyzers on

    Returns:
        FrameAnalysis stamped with the current time in milliseconds and the
        buffer's dimensions

    Raises:
        AnalysisConfigError: if the options are invalid
        AnalysisExecutionError: if any analyzer fails
    """
    opts = resolve_options(options)
    tasks = _build_tasks(buffer, opts)

    start = time.perf_counter()
    if executor is not None:
        results = _run_parallel(tasks, executor)
    elif opts.parallel:
        with ThreadPoolExecutor(max_workers=len(tasks), thread_name_prefix="scope") as pool:
            results = _run_parallel(tasks, pool)
    else:
        results = _run_inline(tasks)

    elapsed_ms = (time.perf_counter() - start) * 1000
    logging.debug(f"Analyzed {buffer.width}x{buffer.height} frame in {elapsed_ms:.1f} ms "
                  f"(sample rate {opts.sample_rate})")

    return FrameAnalysis(
        histogram=results['histogram'],
        waveform=results['waveform'],
        vectorscope=results['vectorscope'],
        rgb_parade=results['rgb_parade'],
        timestamp=int(time.time() * 1000),
        width=buffer.width,
        height=buffer.height,
    )
