from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from improc_skeleton.errors import CoordinateError, DimensionError
from improc_skeleton.types import MaskImage, Pixel, PixelColor, RasterImage

_MAX_CHANNEL_VALUE = 255


class BinaryImage:
    """Fixed-size grid of black/white cells with a configurable background.

    Cells are stored as a boolean array where ``True`` means white. All
    accessors take ``(x, y)`` and are bounds-checked; negative indices are
    rejected rather than wrapped as numpy would do.
    """

    __slots__ = ("_cells", "_bg_color", "_fg_is_white")

    def __init__(self, width: int, height: int, bg_color: PixelColor = PixelColor.WHITE) -> None:
        width, height = int(width), int(height)
        if width < 1 or height < 1:
            raise DimensionError(f"Binary image must be at least 1x1, got {width}x{height}")
        self._bg_color = PixelColor(bg_color)
        self._fg_is_white = self._bg_color is PixelColor.BLACK
        self._cells = np.full((height, width), self._bg_color is PixelColor.WHITE, dtype=bool)

    @classmethod
    def from_raster(cls, raster: RasterImage, bg_color: PixelColor = PixelColor.WHITE) -> BinaryImage:
        # A pixel with any non-zero channel is white, an all-zero pixel is black.
        arr = np.asarray(raster)
        if arr.ndim == 2:
            white = arr != 0
        elif arr.ndim == 3:
            white = np.any(arr != 0, axis=2)
        else:
            raise ValueError(f"Unsupported raster shape: {arr.shape}")

        height, width = white.shape
        image = cls(width, height, bg_color)
        image._cells = white.copy()
        return image

    @classmethod
    def from_mask(cls, mask: MaskImage, bg_color: PixelColor = PixelColor.WHITE) -> BinaryImage:
        arr = np.asarray(mask)
        if arr.ndim != 2:
            raise ValueError(f"Mask must be 2D, got shape {arr.shape}")

        height, width = arr.shape
        image = cls(width, height, bg_color)
        fg = arr != 0
        image._cells = fg if image._fg_is_white else ~fg
        return image

    def to_raster(self) -> RasterImage:
        raster = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        raster[self._bg_mask()] = _MAX_CHANNEL_VALUE
        return raster

    def to_mask(self) -> MaskImage:
        # Convention: foreground = 1, background = 0.
        return (~self._bg_mask()).astype(np.uint8)

    def copy(self) -> BinaryImage:
        clone = BinaryImage(self.width, self.height, self._bg_color)
        clone._cells = self._cells.copy()
        return clone

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    @property
    def bg_color(self) -> PixelColor:
        return self._bg_color

    @property
    def fg_color(self) -> PixelColor:
        return self._bg_color.inverted()

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pixels(self) -> Iterator[Pixel]:
        """Yield every ``(x, y)`` in row-major order. Each call starts over."""
        width, height = self.width, self.height
        for y in range(height):
            for x in range(width):
                yield x, y

    def is_fg(self, x: int, y: int) -> bool:
        self._check(x, y)
        return bool(self._cells[y, x]) is self._fg_is_white

    def is_bg(self, x: int, y: int) -> bool:
        return not self.is_fg(x, y)

    def set_fg(self, x: int, y: int) -> None:
        self._check(x, y)
        self._cells[y, x] = self._fg_is_white

    def set_bg(self, x: int, y: int) -> None:
        self._check(x, y)
        self._cells[y, x] = not self._fg_is_white

    def color_at(self, x: int, y: int) -> PixelColor:
        self._check(x, y)
        return PixelColor.WHITE if self._cells[y, x] else PixelColor.BLACK

    def fill(self, color: PixelColor) -> None:
        self._cells[:, :] = PixelColor(color) is PixelColor.WHITE

    def count_fg(self) -> int:
        return int(self.width * self.height - np.count_nonzero(self._bg_mask()))

    def _bg_mask(self) -> np.ndarray:
        return self._cells != self._fg_is_white

    def _check(self, x: int, y: int) -> None:
        if not self.contains(x, y):
            raise CoordinateError(f"Pixel ({x}, {y}) is outside {self.width}x{self.height} image")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryImage):
            return NotImplemented
        return self._bg_color is other._bg_color and np.array_equal(self._cells, other._cells)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BinaryImage(width={self.width}, height={self.height}, bg_color={self._bg_color.value})"
