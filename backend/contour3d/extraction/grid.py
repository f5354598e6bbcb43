# backend/contour3d/extraction/grid.py
import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .errors import DimensionMismatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointGrids:
    """Co-registered position (H, W, 3) float32 and RGBA color (H, W, 4) uint8 grids."""
    positions: np.ndarray
    colors: np.ndarray

    @property
    def height(self) -> int:
        return int(self.positions.shape[0])

    @property
    def width(self) -> int:
        return int(self.positions.shape[1])


def _freeze(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def _check_size(width: int, height: int) -> None:
    if int(width) <= 0 or int(height) <= 0:
        raise DimensionMismatch(f"grid size must be positive, got {width}x{height}")


def assemble_grids(width: int, height: int, positions: Sequence, colors: Sequence) -> PointGrids:
    """
    Turn flat, row-major position / color buffers into two (height, width) grids.

    positions: N samples of (x, y, z); NaN marks a pixel without depth.
    colors:    N samples of (r, g, b, a) bytes.
    Cell (r, c) of each grid is flat element r * width + c.
    """
    _check_size(width, height)
    n = int(width) * int(height)

    pos = np.asarray(positions, dtype=np.float32)
    col = np.asarray(colors, dtype=np.uint8)

    if pos.ndim != 2 or pos.shape[1] != 3:
        raise DimensionMismatch(f"positions must be N x 3, got shape {pos.shape}")
    if col.ndim != 2 or col.shape[1] != 4:
        raise DimensionMismatch(f"colors must be N x 4, got shape {col.shape}")
    if len(pos) != len(col):
        raise DimensionMismatch(
            f"positions ({len(pos)}) and colors ({len(col)}) disagree in length"
        )
    if len(pos) != n:
        raise DimensionMismatch(
            f"expected {width}x{height}={n} samples, got {len(pos)}"
        )

    logger.debug("Transferring xyz and rgba data into %dx%d grids", width, height)
    pos_grid = pos.reshape(int(height), int(width), 3).copy()
    col_grid = col.reshape(int(height), int(width), 4).copy()
    return PointGrids(positions=_freeze(pos_grid), colors=_freeze(col_grid))


def grids_from_arrays(positions: np.ndarray, colors: np.ndarray) -> PointGrids:
    """Same checks as assemble_grids, for inputs that are already (H, W, C) shaped."""
    pos = np.asarray(positions, dtype=np.float32)
    col = np.asarray(colors, dtype=np.uint8)
    if pos.ndim != 3 or pos.shape[2] != 3:
        raise DimensionMismatch(f"position grid must be H x W x 3, got shape {pos.shape}")
    if col.ndim != 3 or col.shape[2] != 4:
        raise DimensionMismatch(f"color grid must be H x W x 4, got shape {col.shape}")
    if pos.shape[:2] != col.shape[:2]:
        raise DimensionMismatch(
            f"position grid {pos.shape[:2]} and color grid {col.shape[:2]} disagree"
        )
    _check_size(pos.shape[1], pos.shape[0])
    return PointGrids(positions=_freeze(pos.copy()), colors=_freeze(col.copy()))
