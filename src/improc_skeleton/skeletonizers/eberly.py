from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from improc_skeleton.core.binary_image import BinaryImage
from improc_skeleton.core.bool_matrix import BoolMatrix
from improc_skeleton.core.topology import is_local_articulation_point
from improc_skeleton.progress import report_progress
from improc_skeleton.skeletonizers.base import Skeletonizer
from improc_skeleton.types import AdjacencyMode, ProgressCallback

LOGGER = logging.getLogger("improc_skeleton.skeletonizers.eberly")

_EDGE_NEIGHBORS = [
    (0, -1),
    (1, 0),
    (0, 1),
    (-1, 0),
]


def _fg_or_false(image: BinaryImage, x: int, y: int) -> bool:
    return image.contains(x, y) and image.is_fg(x, y)


def _on_outer_edge(image: BinaryImage, x: int, y: int) -> bool:
    return x == 0 or y == 0 or x >= image.width - 1 or y >= image.height - 1


def is_four_interior(image: BinaryImage, x: int, y: int) -> bool:
    if _on_outer_edge(image, x, y):
        return False
    if image.is_bg(x, y):
        return False
    return all(image.is_fg(x + dx, y + dy) for dx, dy in _EDGE_NEIGHBORS)


def is_three_interior(image: BinaryImage, x: int, y: int) -> bool:
    if image.is_bg(x, y):
        return False
    return sum(_fg_or_false(image, x + dx, y + dy) for dx, dy in _EDGE_NEIGHBORS) == 3


def is_two_interior(image: BinaryImage, x: int, y: int) -> bool:
    if image.is_bg(x, y):
        return False
    vertical = int(_fg_or_false(image, x, y - 1)) + int(_fg_or_false(image, x, y + 1))
    horizontal = int(_fg_or_false(image, x - 1, y)) + int(_fg_or_false(image, x + 1, y))
    return horizontal == 1 and vertical == 1


@dataclass(frozen=True, slots=True)
class InteriorRule:
    name: str
    is_interior: Callable[[BinaryImage, int, int], bool]
    removes_interiors: bool


FOUR_INTERIOR = InteriorRule("four_interior", is_four_interior, removes_interiors=False)
THREE_INTERIOR = InteriorRule("three_interior", is_three_interior, removes_interiors=True)
TWO_INTERIOR = InteriorRule("two_interior", is_two_interior, removes_interiors=True)

_STAGES = (FOUR_INTERIOR, THREE_INTERIOR, TWO_INTERIOR)


class StageStatus(Enum):
    CONTINUE = "continue"
    NO_INTERIOR_PIXELS = "no_interior_pixels"
    NO_BOUNDARY_PIXELS = "no_boundary_pixels"


def interior_matrix(image: BinaryImage, rule: InteriorRule) -> BoolMatrix | None:
    interior = BoolMatrix(image.width, image.height)
    for x, y in image.pixels():
        if rule.is_interior(image, x, y):
            interior.set(x, y)
    return interior if interior.any() else None


def _touches_background(image: BinaryImage, x: int, y: int) -> bool:
    if _on_outer_edge(image, x, y):
        return True
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if image.is_bg(x + dx, y + dy):
                return True
    return False


def _touches_interior(image: BinaryImage, x: int, y: int, interior: BoolMatrix) -> bool:
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            nx, ny = x + dx, y + dy
            if image.contains(nx, ny) and interior.check(nx, ny):
                return True
    return False


def _is_boundary(image: BinaryImage, x: int, y: int, interior: BoolMatrix) -> bool:
    return (
        image.is_fg(x, y)
        and not interior.check(x, y)
        and _touches_background(image, x, y)
        and _touches_interior(image, x, y, interior)
        and not is_local_articulation_point(image, x, y, AdjacencyMode.EIGHT)
    )


def remove_boundaries(image: BinaryImage, interior: BoolMatrix) -> int:
    amount = 0
    for x, y in image.pixels():
        if _is_boundary(image, x, y, interior):
            image.set_bg(x, y)
            amount += 1
    return amount


def remove_interiors(image: BinaryImage, interior: BoolMatrix) -> int:
    amount = 0
    for x, y in image.pixels():
        if interior.check(x, y) and not is_local_articulation_point(image, x, y, AdjacencyMode.EIGHT):
            image.set_bg(x, y)
            amount += 1
    return amount


def thin(image: BinaryImage, rule: InteriorRule) -> StageStatus:
    """Run one iteration of a stage and say whether the stage should go on."""
    interior = interior_matrix(image, rule)
    if interior is None:
        return StageStatus.NO_INTERIOR_PIXELS

    if remove_boundaries(image, interior) > 0:
        return StageStatus.CONTINUE

    if rule.removes_interiors:
        remove_interiors(image, interior)
    return StageStatus.NO_BOUNDARY_PIXELS


class EberlySkeletonizer(Skeletonizer):
    """Staged thinning by four-, three- and two-interior pixels (Eberly)."""

    name = "eberly"

    def process(self, image: BinaryImage, progress: ProgressCallback | None = None) -> None:
        total = len(_STAGES)
        for index, rule in enumerate(_STAGES, start=1):
            iterations = 1
            status = thin(image, rule)
            while status is StageStatus.CONTINUE:
                iterations += 1
                status = thin(image, rule)
            LOGGER.debug("eberly stage=%s iterations=%d status=%s", rule.name, iterations, status.value)
            report_progress(progress, index, total)
