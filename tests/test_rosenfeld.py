import pytest

from improc_skeleton.core.binary_image import BinaryImage
from improc_skeleton.skeletonizers.rosenfeld import ProcessingSide, RosenfeldSkeletonizer
from improc_skeleton.types import AdjacencyMode, PixelColor


def _filled(width, height):
    image = BinaryImage(width, height, PixelColor.WHITE)
    image.fill(PixelColor.BLACK)
    return image


def _fg(image):
    return sorted(p for p in image.pixels() if image.is_fg(*p))


@pytest.mark.parametrize("mode", [AdjacencyMode.FOUR, AdjacencyMode.EIGHT])
def test_square_reduces_to_two_pixels(mode):
    image = _filled(4, 4)

    RosenfeldSkeletonizer(mode).process(image)

    assert _fg(image) == [(1, 2), (2, 2)]


def test_default_mode_is_four():
    assert RosenfeldSkeletonizer().mode is AdjacencyMode.FOUR


def test_north_pass_erodes_only_top_row():
    image = _filled(4, 4)

    removed = RosenfeldSkeletonizer(AdjacencyMode.FOUR).process_side(image, ProcessingSide.NORTH)

    assert removed == 4
    assert all(image.is_bg(x, 0) for x in range(4))
    assert all(image.is_fg(x, y) for x in range(4) for y in range(1, 4))


@pytest.mark.parametrize("mode", [AdjacencyMode.FOUR, AdjacencyMode.EIGHT])
def test_thin_line_is_left_alone(mode):
    image = BinaryImage(7, 3, PixelColor.WHITE)
    for x in range(1, 6):
        image.set_fg(x, 1)
    before = image.copy()

    RosenfeldSkeletonizer(mode).process(image)

    assert image == before


def test_single_pixel_is_kept():
    image = BinaryImage(3, 3, PixelColor.WHITE)
    image.set_fg(1, 1)

    RosenfeldSkeletonizer(AdjacencyMode.EIGHT).process(image)

    assert _fg(image) == [(1, 1)]


def test_progress_is_scaled_by_half_the_larger_side():
    calls = []
    image = _filled(4, 4)

    RosenfeldSkeletonizer(AdjacencyMode.FOUR).process(image, lambda current, total: calls.append((current, total)))

    assert calls[-1] == (2, 2)
    assert all(total == 2 for _, total in calls)
    assert all(current <= total for current, total in calls)
