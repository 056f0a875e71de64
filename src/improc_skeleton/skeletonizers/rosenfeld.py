from __future__ import annotations

import logging
from enum import Enum

from improc_skeleton.core.binary_image import BinaryImage
from improc_skeleton.core.bool_matrix import BoolMatrix
from improc_skeleton.core.topology import is_local_articulation_point
from improc_skeleton.progress import report_progress
from improc_skeleton.skeletonizers.base import Skeletonizer
from improc_skeleton.types import AdjacencyMode, ProgressCallback

LOGGER = logging.getLogger("improc_skeleton.skeletonizers.rosenfeld")


class ProcessingSide(Enum):
    NORTH = (0, -1)
    SOUTH = (0, 1)
    WEST = (-1, 0)
    EAST = (1, 0)


_SIDE_ORDER = (
    ProcessingSide.NORTH,
    ProcessingSide.SOUTH,
    ProcessingSide.WEST,
    ProcessingSide.EAST,
)

_DIAGONALS = [
    (-1, -1),
    (1, -1),
    (1, 1),
    (-1, 1),
]


def _is_occupied(image: BinaryImage, removed: BoolMatrix, x: int, y: int) -> bool:
    # Pixels removed earlier in the same pass still count, so a directional
    # pass judges borders against the grid as it was when the pass started.
    if not image.contains(x, y):
        return False
    return image.is_fg(x, y) or removed.check(x, y)


class RosenfeldSkeletonizer(Skeletonizer):
    """Directional border erosion, one pass per side (Rosenfeld)."""

    name = "rosenfeld"

    def __init__(self, mode: AdjacencyMode = AdjacencyMode.FOUR) -> None:
        self.mode = AdjacencyMode(mode)

    def __repr__(self) -> str:
        return f"RosenfeldSkeletonizer(mode={self.mode.value})"

    @staticmethod
    def compute_max_progress(width: int, height: int) -> int:
        return max(1, max(width, height) // 2)

    def process(self, image: BinaryImage, progress: ProgressCallback | None = None) -> None:
        max_progress = self.compute_max_progress(image.width, image.height)
        iteration = 0

        while True:
            removed = sum(self.process_side(image, side) for side in _SIDE_ORDER)
            iteration += 1
            LOGGER.debug("rosenfeld mode=%s iteration=%d removed=%d", self.mode.value, iteration, removed)
            report_progress(progress, iteration, max_progress)
            if removed == 0:
                break

        report_progress(progress, max_progress, max_progress)

    def process_side(self, image: BinaryImage, side: ProcessingSide) -> int:
        amount = 0
        removed = BoolMatrix(image.width, image.height)
        side_dx, side_dy = side.value

        for x, y in image.pixels():
            if image.is_bg(x, y):
                continue

            if _is_occupied(image, removed, x + side_dx, y + side_dy):
                continue

            fg_count = 0
            for other in ProcessingSide:
                if other is side:
                    continue
                dx, dy = other.value
                if _is_occupied(image, removed, x + dx, y + dy):
                    fg_count += 1

            if self.mode is AdjacencyMode.EIGHT:
                for dx, dy in _DIAGONALS:
                    if _is_occupied(image, removed, x + dx, y + dy):
                        fg_count += 1

            if fg_count < 2:
                continue

            if is_local_articulation_point(image, x, y, self.mode):
                continue

            removed.set(x, y)
            image.set_bg(x, y)
            amount += 1

        return amount
