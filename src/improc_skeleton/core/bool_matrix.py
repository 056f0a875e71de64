from __future__ import annotations

import numpy as np

from improc_skeleton.errors import CoordinateError, DimensionError


class BoolMatrix:
    """Per-pass scratch flags, indexed ``(x, y)`` like ``BinaryImage``."""

    __slots__ = ("_data",)

    def __init__(self, width: int, height: int, default_value: bool = False) -> None:
        if width < 1 or height < 1:
            raise DimensionError(f"Bool matrix must be at least 1x1, got {width}x{height}")
        self._data = np.full((int(height), int(width)), bool(default_value), dtype=bool)

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    def check(self, x: int, y: int) -> bool:
        self._check_bounds(x, y)
        return bool(self._data[y, x])

    def set(self, x: int, y: int) -> None:
        self._check_bounds(x, y)
        self._data[y, x] = True

    def any(self) -> bool:
        return bool(self._data.any())

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise CoordinateError(f"Cell ({x}, {y}) is outside {self.width}x{self.height} matrix")
