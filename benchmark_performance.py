#!/usr/bin/env python3
"""
Performance Benchmark Script for Scope Analysis

Times each scope analyzer and the complete frame analysis on synthetic
frames, comparing inline and thread-pool execution across sample rates.
"""

import json
import sys
import time
from typing import Callable, Dict, List

import cv2
import numpy as np

from scope_analysis import configure_logging
from scope_analysis.core import (
    AnalysisOptions,
    analyze_frame,
    analyze_histogram,
    analyze_rgb_parade,
    analyze_vectorscope,
    analyze_waveform,
)
from scope_analysis.models import PixelBuffer


class PerformanceBenchmark:
    """Performance benchmarking for the scope analyzers."""

    def __init__(self, width: int = 1920, height: int = 1080):
        self.width = width
        self.height = height

    def create_test_frames(self, num_frames: int) -> List[PixelBuffer]:
        """Generate synthetic BGR frames and convert them the way a capture pipeline would."""
        print(f"Generating {num_frames} test frames ({self.width}x{self.height})...")
        rng = np.random.default_rng(0)
        frames = []

        for i in range(num_frames):
            frame = rng.integers(0, 256, size=(self.height, self.width, 3), dtype=np.uint8)

            # Oscillating brightness so exposure varies between frames
            brightness_factor = 0.5 + 0.5 * np.sin(i * 0.1)
            frame = (frame * brightness_factor).astype(np.uint8)
            frame = cv2.GaussianBlur(frame, (5, 5), 0)

            frames.append(PixelBuffer.from_bgr_frame(frame))

        return frames

    @staticmethod
    def _time_per_frame(frames: List[PixelBuffer], func: Callable[[PixelBuffer], object]) -> float:
        start_time = time.perf_counter()
        for frame in frames:
            func(frame)
        return (time.perf_counter() - start_time) / len(frames)

    def benchmark_analyzers(self, frames: List[PixelBuffer], sample_rate: int = 1) -> Dict[str, float]:
        """Milliseconds per frame for each analyzer on its own."""
        print(f"Benchmarking individual analyzers (sample rate {sample_rate})...")
        analyzers = {
            'histogram': lambda f: analyze_histogram(f, sample_rate),
            'waveform': lambda f: analyze_waveform(f, 256, sample_rate),
            'vectorscope': lambda f: analyze_vectorscope(f, 256, sample_rate),
            'rgb_parade': lambda f: analyze_rgb_parade(f, 256, sample_rate),
        }

        results = {}
        for name, func in analyzers.items():
            results[name] = self._time_per_frame(frames, func) * 1000
            print(f"  {name}: {results[name]:.1f} ms/frame")

        return results

    def benchmark_frame_analysis(self, frames: List[PixelBuffer], sample_rate: int = 1) -> dict:
        """Compare inline and parallel complete frame analysis."""
        print(f"Benchmarking frame analysis (sample rate {sample_rate})...")
        inline_options = AnalysisOptions(sample_rate=sample_rate)
        parallel_options = inline_options.with_overrides(parallel=True)

        inline_time = self._time_per_frame(frames, lambda f: analyze_frame(f, inline_options))
        parallel_time = self._time_per_frame(frames, lambda f: analyze_frame(f, parallel_options))

        results = {
            'inline_ms': inline_time * 1000,
            'inline_fps': 1.0 / inline_time,
            'parallel_ms': parallel_time * 1000,
            'parallel_fps': 1.0 / parallel_time,
            'speedup': inline_time / parallel_time if parallel_time > 0 else 1.0,
        }

        print(f"  Inline: {results['inline_fps']:.1f} fps")
        print(f"  Parallel: {results['parallel_fps']:.1f} fps")
        print(f"  Speedup: {results['speedup']:.2f}x")

        return results

    def run_full_benchmark(self, num_frames: int = 20, sample_rates=(1, 2, 4)) -> dict:
        """Run complete performance benchmark."""
        print("=" * 60)
        print("SCOPE ANALYSIS PERFORMANCE BENCHMARK")
        print("=" * 60)

        frames = self.create_test_frames(num_frames)

        all_results = {
            'analyzers': {},
            'frame_analysis': {},
            'test_parameters': {
                'num_frames': num_frames,
                'frame_size': f"{self.width}x{self.height}",
                'sample_rates': list(sample_rates),
            },
        }
        for rate in sample_rates:
            all_results['analyzers'][str(rate)] = self.benchmark_analyzers(frames, rate)
            all_results['frame_analysis'][str(rate)] = self.benchmark_frame_analysis(frames, rate)

        self.print_summary(all_results)
        return all_results

    def print_summary(self, results: dict):
        """Print benchmark summary."""
        print("\n" + "=" * 60)
        print("PERFORMANCE SUMMARY")
        print("=" * 60)

        params = results['test_parameters']
        print("Test Parameters:")
        print(f"  Frames: {params['num_frames']}")
        print(f"  Frame Size: {params['frame_size']}")
        print()

        for rate, frame_results in results['frame_analysis'].items():
            slowest = max(results['analyzers'][rate].items(), key=lambda item: item[1])
            print(f"Sample rate {rate}:")
            print(f"  Slowest analyzer: {slowest[0]} ({slowest[1]:.1f} ms/frame)")
            print(f"  Inline: {frame_results['inline_ms']:.1f} ms/frame")
            print(f"  Parallel: {frame_results['parallel_ms']:.1f} ms/frame "
                  f"({frame_results['speedup']:.2f}x)")
            print()

        print("=" * 60)


def main():
    """Run the performance benchmark."""
    configure_logging()
    benchmark = PerformanceBenchmark()

    # Allow command line argument for number of frames
    num_frames = 20
    if len(sys.argv) > 1:
        try:
            num_frames = int(sys.argv[1])
        except ValueError:
            print("Invalid number of frames specified, using default 20")

    results = benchmark.run_full_benchmark(num_frames)

    with open('benchmark_results.json', 'w') as f:
        json.dump(results, f, indent=2)

    print("\nBenchmark results saved to 'benchmark_results.json'")


if __name__ == "__main__":
    main()
