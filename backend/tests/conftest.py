# backend/tests/conftest.py
import numpy as np
import pytest

from contour3d.extraction.grid import assemble_grids

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


def make_flat(width, height, dark_rect=None, z=500.0, nan_mask=None):
    """
    Flat row-major buffers: white colors with an optional black rectangle
    (x0, y0, x1, y1) exclusive on the far side, and a z-plane of positions.
    """
    colors = np.tile(np.array(WHITE, np.uint8), (height, width, 1))
    if dark_rect is not None:
        x0, y0, x1, y1 = dark_rect
        colors[y0:y1, x0:x1] = BLACK

    ys, xs = np.mgrid[0:height, 0:width].astype(np.float32)
    positions = np.stack([xs, ys, np.full_like(xs, z)], axis=-1)
    if nan_mask is not None:
        positions[nan_mask] = np.nan
    return positions.reshape(-1, 3), colors.reshape(-1, 4)


@pytest.fixture
def square_grids():
    """100x100 white grid, centered black 40x40 square, depth plane z=500."""
    positions, colors = make_flat(100, 100, dark_rect=(30, 30, 70, 70))
    return assemble_grids(100, 100, positions, colors)


@pytest.fixture
def white_grids():
    positions, colors = make_flat(100, 100)
    return assemble_grids(100, 100, positions, colors)


def rect_mask(h, w, x0, y0, x1, y1):
    mask = np.zeros((h, w), np.uint8)
    mask[y0:y1, x0:x1] = 255
    return mask
