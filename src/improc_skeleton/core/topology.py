from __future__ import annotations

from improc_skeleton.core.binary_image import BinaryImage
from improc_skeleton.core.bool_matrix import BoolMatrix
from improc_skeleton.errors import CoordinateError
from improc_skeleton.types import AdjacencyMode

_NEIGHBORS4 = [
    (0, -1),
    (1, 0),
    (0, 1),
    (-1, 0),
]

_NEIGHBORS8 = _NEIGHBORS4 + [
    (-1, -1),
    (1, -1),
    (1, 1),
    (-1, 1),
]


def neighbor_offsets(mode: AdjacencyMode) -> list[tuple[int, int]]:
    return _NEIGHBORS8 if mode is AdjacencyMode.EIGHT else _NEIGHBORS4


def extract_window(image: BinaryImage, x: int, y: int) -> BinaryImage:
    """Copy the 3x3 neighbourhood of ``(x, y)``; cells past the image edge are background."""
    window = BinaryImage(3, 3, image.bg_color)
    for wy in range(3):
        for wx in range(3):
            sx, sy = x + wx - 1, y + wy - 1
            if image.contains(sx, sy) and image.is_fg(sx, sy):
                window.set_fg(wx, wy)
    return window


def count_components(image: BinaryImage, mode: AdjacencyMode) -> int:
    offsets = neighbor_offsets(mode)
    visited = BoolMatrix(image.width, image.height)
    amount = 0

    for x, y in image.pixels():
        if image.is_bg(x, y) or visited.check(x, y):
            continue

        amount += 1
        stack = [(x, y)]
        while stack:
            cx, cy = stack.pop()
            if visited.check(cx, cy):
                continue
            visited.set(cx, cy)

            for dx, dy in offsets:
                nx, ny = cx + dx, cy + dy
                if image.contains(nx, ny) and image.is_fg(nx, ny) and not visited.check(nx, ny):
                    stack.append((nx, ny))

    return amount


def is_local_articulation_point(image: BinaryImage, x: int, y: int, mode: AdjacencyMode) -> bool:
    """True when clearing ``(x, y)`` changes the component count of its 3x3 window.

    An isolated foreground pixel counts as an articulation point (one
    component before, none after), so thinning never erases a component.
    """
    if not image.contains(x, y):
        raise CoordinateError(f"Pixel ({x}, {y}) is outside {image.width}x{image.height} image")

    window = extract_window(image, x, y)
    before = count_components(window, mode)
    window.set_bg(1, 1)
    return before != count_components(window, mode)
