# backend/contour3d/extraction/pointmap.py
"""
Loading of saved point maps.

A point map archive is a numpy ``.npz`` with ``positions`` and ``colors``.
They are either gridded ((H, W, 3) / (H, W, 4)) or flat ((N, 3) / (N, 4)),
in which case integer ``width`` and ``height`` entries must be present too.
"""
import io
import zipfile
from pathlib import Path
from typing import Union

import numpy as np

from .errors import ContourExtractionError, PointMapError
from .grid import PointGrids, assemble_grids, grids_from_arrays


def _grids_from_npz(npz) -> PointGrids:
    missing = [k for k in ("positions", "colors") if k not in npz.files]
    if missing:
        raise PointMapError(f"point map is missing arrays: {missing}")

    positions = npz["positions"]
    colors = npz["colors"]
    if positions.ndim == 3:
        return grids_from_arrays(positions, colors)

    if "width" not in npz.files or "height" not in npz.files:
        raise PointMapError("flat point map needs 'width' and 'height' entries")
    return assemble_grids(int(npz["width"]), int(npz["height"]), positions, colors)


def load_point_map(source: Union[str, Path, bytes]) -> PointGrids:
    """Read a point map from a path or from raw archive bytes."""
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        data = np.load(source, allow_pickle=False)
    except (OSError, EOFError, ValueError, zipfile.BadZipFile) as e:
        raise PointMapError(f"could not read point map: {e}") from e
    if not hasattr(data, "files"):
        raise PointMapError("expected an .npz archive, got a single array")
    with data as npz:
        try:
            return _grids_from_npz(npz)
        except ContourExtractionError:
            raise
        except (ValueError, TypeError, zipfile.BadZipFile) as e:
            # object members, non-numeric samples, bad width/height
            raise PointMapError(f"malformed point map: {e}") from e


def save_point_map(path: Union[str, Path], grids: PointGrids) -> None:
    np.savez_compressed(path, positions=grids.positions, colors=grids.colors)
