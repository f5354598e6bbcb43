# backend/contour3d/extraction/region.py
"""
Mask cleanup between thresholding and contour search.

The target blob gets its interior holes filled (flood fill of the outside
background, inverted and merged back) and is then smoothed with a single
morphological closing.
"""
import logging
from typing import Iterator, Tuple

import numpy as np
import cv2

from .binarize import BACKGROUND, FOREGROUND
from .config import ExtractionConfig

logger = logging.getLogger(__name__)

_SHAPES = {
    "ellipse": cv2.MORPH_ELLIPSE,
    "rect": cv2.MORPH_RECT,
}


def _border_pixels(h: int, w: int) -> Iterator[Tuple[int, int]]:
    """(x, y) of every border pixel, clockwise from the top-left corner."""
    for x in range(w):
        yield x, 0
    for y in range(1, h):
        yield w - 1, y
    if h > 1:
        for x in range(w - 2, -1, -1):
            yield x, h - 1
    if w > 1:
        for y in range(h - 2, 0, -1):
            yield 0, y


def _flood_outside(mask: np.ndarray, fill_seed: str):
    """
    Flood the background reachable from the seed(s) with foreground.
    Returns the filled copy, or None when no usable seed exists.
    """
    h, w = mask.shape[:2]
    filled = mask.copy()
    # floodFill wants a mask 2px larger than the image
    ff_mask = np.zeros((h + 2, w + 2), np.uint8)

    if fill_seed == "corner":
        if mask[0, 0] != BACKGROUND:
            return None
        cv2.floodFill(filled, ff_mask, (0, 0), FOREGROUND)
        return filled

    seeded = False
    for x, y in _border_pixels(h, w):
        if filled[y, x] == BACKGROUND:
            cv2.floodFill(filled, ff_mask, (x, y), FOREGROUND)
            seeded = True
    return filled if seeded else None


def _touches_border(holes: np.ndarray) -> bool:
    return bool(
        holes[0, :].any() or holes[-1, :].any()
        or holes[:, 0].any() or holes[:, -1].any()
    )


def fill_holes(mask: np.ndarray, fill_seed: str = "corner", debug=None) -> np.ndarray:
    filled = _flood_outside(mask, fill_seed)
    if filled is None:
        # Target touches the seed; there is no outside to flood from
        logger.warning(
            "hole fill skipped: no background seed pixel (fill_seed=%s); "
            "target probably touches the image border",
            fill_seed,
        )
        out = mask.copy()
    else:
        holes = cv2.bitwise_not(filled)
        if _touches_border(holes):
            # Background cut off from the seed by the target is not a hole
            logger.warning(
                "hole fill reached the image border (fill_seed=%s); target probably "
                "splits the background, try fill_seed='border'",
                fill_seed,
            )
        out = cv2.bitwise_or(mask, holes)
        logger.debug("filled %d hole px", int(np.count_nonzero(holes)))
    if debug is not None:
        debug["filled"] = out
    return out


def structuring_element(radius: int = 2, shape: str = "ellipse") -> np.ndarray:
    size = 2 * radius + 1
    return cv2.getStructuringElement(_SHAPES[shape], (size, size), (radius, radius))


def close_mask(mask: np.ndarray, radius: int = 2, shape: str = "ellipse") -> np.ndarray:
    """Dilate then erode once, replicating the border."""
    if radius == 0:
        return mask.copy()
    kernel = structuring_element(radius, shape)
    return cv2.morphologyEx(
        mask, cv2.MORPH_CLOSE, kernel,
        anchor=(-1, -1), iterations=1, borderType=cv2.BORDER_REPLICATE,
    )


def normalize_region(mask: np.ndarray, config: ExtractionConfig = ExtractionConfig(), debug=None) -> np.ndarray:
    out = fill_holes(mask, config.fill_seed, debug=debug)
    out = close_mask(out, config.morph_radius, config.morph_shape)
    if debug is not None:
        debug["closed"] = out
    return out
