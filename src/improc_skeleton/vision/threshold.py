from __future__ import annotations

import numpy as np

from improc_skeleton.progress import report_progress
from improc_skeleton.types import ProgressCallback, RasterImage

_MIN_VALUE = 0
_MAX_VALUE = 255


class ThresholdBinaryImageConverter:
    """Maps each pixel to pure black or pure white by a fixed threshold.

    A pixel whose channels are all ``<= threshold`` becomes 0 in every
    channel, any other pixel becomes 255 in every channel. Thresholds of
    255 and above therefore turn every pixel black.
    """

    def __init__(self, threshold: int) -> None:
        threshold = int(threshold)
        if threshold < _MIN_VALUE:
            raise ValueError(f"threshold must be non-negative, got {threshold}")
        self.threshold = threshold

    def __repr__(self) -> str:
        return f"ThresholdBinaryImageConverter(threshold={self.threshold})"

    def convert(self, raster: RasterImage, progress: ProgressCallback | None = None) -> RasterImage:
        arr = np.asarray(raster)
        if arr.ndim not in (2, 3):
            raise ValueError(f"Unsupported raster shape: {arr.shape}")

        out = np.empty_like(arr, dtype=np.uint8)
        height = arr.shape[0]
        for y in range(height):
            row = arr[y]
            dark = row <= self.threshold if arr.ndim == 2 else np.all(row <= self.threshold, axis=-1)
            out[y] = _MAX_VALUE
            out[y][dark] = _MIN_VALUE
            report_progress(progress, y + 1, height)

        report_progress(progress, height, height)
        return out
