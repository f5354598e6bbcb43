# backend/contour3d/extraction/project.py
import logging

import numpy as np

from .contours import contour_pixels

logger = logging.getLogger(__name__)


def project_contour(contour: np.ndarray, positions: np.ndarray) -> np.ndarray:
    """
    Look up the 3D point behind every contour pixel, in traversal order.

    Pixels whose x coordinate is NaN (no depth, e.g. reflections or shadow)
    are dropped. The result is (m, 3) float32, possibly empty.
    """
    pts = contour_pixels(contour)
    if len(pts) == 0:
        return np.empty((0, 3), dtype=np.float32)
    xs, ys = pts[:, 0], pts[:, 1]
    xyz = positions[ys, xs].astype(np.float32)
    valid = ~np.isnan(xyz[:, 0])
    dropped = len(xyz) - int(valid.sum())
    if dropped:
        logger.debug("skipped %d of %d contour px without depth", dropped, len(xyz))
    return xyz[valid]
