from __future__ import annotations

import logging
from collections.abc import Callable

from improc_skeleton.core.binary_image import BinaryImage
from improc_skeleton.progress import report_progress
from improc_skeleton.skeletonizers.base import Skeletonizer
from improc_skeleton.types import Pixel, ProgressCallback

LOGGER = logging.getLogger("improc_skeleton.skeletonizers.zhang_suen")

# Clockwise from north: N, NE, E, SE, S, SW, W, NW.
_CLOCKWISE = [
    (0, -1),
    (1, -1),
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
]

_N, _E, _S, _W = 0, 2, 4, 6

BlockRule = Callable[[list[bool]], bool]


def _neighbour_states(image: BinaryImage, x: int, y: int) -> list[bool]:
    states = []
    for dx, dy in _CLOCKWISE:
        nx, ny = x + dx, y + dy
        states.append(image.contains(nx, ny) and image.is_fg(nx, ny))
    return states


def _transitions(states: list[bool]) -> int:
    count = 0
    previous = states[-1]
    for current in states:
        if not previous and current:
            count += 1
        previous = current
    return count


def count_foreground_neighbours(image: BinaryImage, x: int, y: int) -> int:
    return sum(_neighbour_states(image, x, y))


def count_transitions(image: BinaryImage, x: int, y: int) -> int:
    """Background-to-foreground changes walking the 8 neighbours clockwise from north."""
    return _transitions(_neighbour_states(image, x, y))


def _first_step_blocked(states: list[bool]) -> bool:
    return states[_S] and states[_E] and (states[_N] or states[_W])


def _second_step_blocked(states: list[bool]) -> bool:
    return states[_N] and states[_W] and (states[_S] or states[_E])


def _pad(image: BinaryImage) -> BinaryImage:
    padded = BinaryImage(image.width + 2, image.height + 2, image.bg_color)
    for x, y in image.pixels():
        if image.is_fg(x, y):
            padded.set_fg(x + 1, y + 1)
    return padded


def _crop_into(padded: BinaryImage, image: BinaryImage) -> None:
    for x, y in image.pixels():
        if padded.is_fg(x + 1, y + 1):
            image.set_fg(x, y)
        else:
            image.set_bg(x, y)


class ZhangSuenSkeletonizer(Skeletonizer):
    """Two-substep parallel thinning (Zhang & Suen, 1984)."""

    name = "zhang_suen"

    def process(self, image: BinaryImage, progress: ProgressCallback | None = None) -> None:
        padded = _pad(image)
        max_progress = image.height
        iteration = 0

        while True:
            removed = self._step(padded, _first_step_blocked)
            removed += self._step(padded, _second_step_blocked)
            iteration += 1
            LOGGER.debug("zhang_suen iteration=%d removed=%d", iteration, removed)
            report_progress(progress, iteration, max_progress)
            if removed == 0:
                break

        _crop_into(padded, image)
        report_progress(progress, max_progress, max_progress)

    @staticmethod
    def _step(image: BinaryImage, blocked: BlockRule) -> int:
        marked: list[Pixel] = []

        for y in range(1, image.height - 1):
            for x in range(1, image.width - 1):
                if image.is_bg(x, y):
                    continue

                states = _neighbour_states(image, x, y)
                fg_count = sum(states)
                if fg_count < 2 or fg_count > 6:
                    continue
                if _transitions(states) != 1:
                    continue
                if blocked(states):
                    continue

                marked.append((x, y))

        # Removal is deferred so every decision in the scan sees the same grid.
        for x, y in marked:
            image.set_bg(x, y)

        return len(marked)
