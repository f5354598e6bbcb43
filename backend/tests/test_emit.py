import numpy as np
import pytest
from PIL import Image

from contour3d.extraction.contours import extract_largest_contour
from contour3d.extraction.emit import (
    DEBUG_FILENAMES,
    format_points,
    render_overlay,
    write_debug_images,
    write_overlay,
    write_points,
)
from contour3d.extraction.errors import IOFailure

from conftest import rect_mask


def test_format_points():
    pts = np.array([[1, 2, 3], [0.5, -1, 2.25]], np.float32)
    assert format_points(pts) == "1.000000 2.000000 3.000000;\n0.500000 -1.000000 2.250000;\n"


def test_format_empty():
    assert format_points(np.empty((0, 3), np.float32)) == ""


def test_write_points(tmp_path):
    path = write_points(tmp_path / "contour_points.txt", np.array([[1.5, 2, 500]], np.float32))
    assert path.read_text() == "1.500000 2.000000 500.000000;\n"


def test_write_points_failure_is_reported(tmp_path):
    with pytest.raises(IOFailure) as exc:
        write_points(tmp_path / "missing" / "contour_points.txt", np.zeros((1, 3)))
    assert isinstance(exc.value, OSError)
    assert "missing" in exc.value.path


def test_overlay_draws_highlight_without_touching_input():
    colors = np.full((40, 40, 4), 255, np.uint8)
    colors[10:30, 10:30, :3] = 0
    colors.setflags(write=False)
    contour, _, _ = extract_largest_contour(rect_mask(40, 40, 10, 10, 30, 30))

    img = render_overlay(colors, contour, (230, 200, 230), 2)
    assert img.shape == (40, 40, 3)
    assert tuple(img[10, 10]) == (230, 200, 230)
    assert tuple(img[20, 20]) == (0, 0, 0)
    assert tuple(img[0, 0]) == (255, 255, 255)
    assert colors[10, 10, 0] == 0


def test_write_overlay_jpeg(tmp_path):
    img = np.zeros((16, 16, 3), np.uint8)
    path = write_overlay(tmp_path / "contoured_wound.jpg", img)
    with Image.open(path) as im:
        assert im.format == "JPEG"
        assert im.size == (16, 16)


def test_write_overlay_unknown_extension(tmp_path):
    with pytest.raises(IOFailure):
        write_overlay(tmp_path / "contoured_wound.nope", np.zeros((4, 4, 3), np.uint8))


def test_write_debug_images_only_present_keys(tmp_path):
    debug = {"gray": np.zeros((8, 8), np.uint8), "closed": np.full((8, 8), 255, np.uint8)}
    written = write_debug_images(tmp_path, debug)
    assert sorted(p.name for p in written) == sorted([DEBUG_FILENAMES["gray"], DEBUG_FILENAMES["closed"]])
    assert all(p.exists() for p in written)
