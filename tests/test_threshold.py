import numpy as np
import pytest

from improc_skeleton.vision.threshold import ThresholdBinaryImageConverter


@pytest.mark.parametrize("value,threshold", [(0, 0), (10, 10), (11, 10), (200, 127), (255, 254), (255, 255)])
def test_gray_pixel_maps_to_min_or_max(value, threshold):
    raster = np.full((3, 4, 3), value, dtype=np.uint8)

    out = ThresholdBinaryImageConverter(threshold).convert(raster)

    expected = 0 if value <= threshold else 255
    assert out.shape == raster.shape
    assert np.all(out == expected)


def test_any_channel_above_threshold_turns_pixel_white():
    raster = np.zeros((2, 2, 3), dtype=np.uint8)
    raster[0, 0] = (0, 0, 200)
    raster[1, 1] = (100, 100, 100)

    out = ThresholdBinaryImageConverter(127).convert(raster)

    np.testing.assert_array_equal(out[0, 0], [255, 255, 255])
    np.testing.assert_array_equal(out[1, 1], [0, 0, 0])
    np.testing.assert_array_equal(out[0, 1], [0, 0, 0])


def test_input_is_not_modified_and_grayscale_is_supported():
    gray = np.array([[0, 50], [51, 255]], dtype=np.uint8)

    out = ThresholdBinaryImageConverter(50).convert(gray)

    np.testing.assert_array_equal(out, [[0, 0], [255, 255]])
    np.testing.assert_array_equal(gray, [[0, 50], [51, 255]])


def test_progress_reported_per_row():
    calls = []
    raster = np.zeros((3, 2, 3), dtype=np.uint8)

    ThresholdBinaryImageConverter(0).convert(raster, lambda current, total: calls.append((current, total)))

    assert calls == [(1, 3), (2, 3), (3, 3), (3, 3)]


def test_negative_threshold_rejected():
    with pytest.raises(ValueError):
        ThresholdBinaryImageConverter(-1)


@pytest.mark.parametrize("threshold", [255, 256, 1000])
def test_threshold_at_or_above_channel_max_turns_everything_black(threshold):
    raster = np.array([[[0, 0, 0], [255, 255, 255]], [[255, 0, 128], [200, 200, 200]]], dtype=np.uint8)

    out = ThresholdBinaryImageConverter(threshold).convert(raster)

    assert not out.any()
