import numpy as np
import pytest

from contour3d.extraction.binarize import binarize, smooth, threshold_dark, to_gray
from contour3d.extraction.config import ExtractionConfig


def test_gray_ignores_alpha():
    colors = np.zeros((2, 2, 4), np.uint8)
    colors[..., :3] = (120, 30, 200)
    colors[0, 0, 3] = 0
    colors[1, 1, 3] = 255
    gray = to_gray(colors)
    assert gray.shape == (2, 2)
    assert gray.dtype == np.uint8
    assert len(np.unique(gray)) == 1


def test_gray_luminance_weights():
    colors = np.zeros((1, 3, 4), np.uint8)
    colors[0, 0, :3] = (255, 0, 0)
    colors[0, 1, :3] = (0, 255, 0)
    colors[0, 2, :3] = (0, 0, 255)
    gray = to_gray(colors)[0]
    # green dominates, blue contributes least
    assert gray[1] > gray[0] > gray[2]
    assert abs(int(gray[0]) - 76) <= 1
    assert abs(int(gray[1]) - 150) <= 1
    assert abs(int(gray[2]) - 29) <= 1


def test_threshold_cutoff_is_inclusive_for_dark():
    gray = np.array([[59, 60, 61, 255]], np.uint8)
    np.testing.assert_array_equal(threshold_dark(gray, 60), [[255, 255, 0, 0]])


def test_threshold_light_polarity():
    gray = np.array([[59, 60, 61, 255]], np.uint8)
    np.testing.assert_array_equal(threshold_dark(gray, 60, polarity="light"), [[0, 0, 255, 255]])


def test_smooth_size_one_is_identity():
    gray = np.arange(16, dtype=np.uint8).reshape(4, 4)
    np.testing.assert_array_equal(smooth(gray, 1), gray)


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_output_is_two_valued(seed):
    rng = np.random.default_rng(seed)
    colors = rng.integers(0, 256, size=(32, 48, 4), dtype=np.uint8)
    mask = binarize(colors)
    assert mask.shape == (32, 48)
    assert set(np.unique(mask)) <= {0, 255}


def test_single_dark_pixel_is_smoothed_away():
    colors = np.full((9, 9, 4), 255, np.uint8)
    colors[4, 4, :3] = 0
    assert not binarize(colors).any()


def test_dark_block_becomes_foreground():
    colors = np.full((20, 20, 4), 255, np.uint8)
    colors[5:15, 5:15, :3] = 10
    debug = {}
    mask = binarize(colors, ExtractionConfig(), debug=debug)
    assert mask[10, 10] == 255
    assert mask[0, 0] == 0
    assert set(debug) == {"gray", "threshold"}
