# backend/contour3d/extraction/contours.py
import logging
from typing import List, Sequence, Tuple

import numpy as np
import cv2

from .errors import NoContourFound

logger = logging.getLogger(__name__)


def find_all_contours(mask: np.ndarray) -> List[np.ndarray]:
    """
    Every outer and inner boundary in the mask as a flat list.
    CHAIN_APPROX_NONE keeps every boundary pixel, which the 3D lookup needs.
    """
    cnts, _ = cv2.findContours(mask, cv2.RETR_LIST, cv2.CHAIN_APPROX_NONE)
    return list(cnts)


def contour_area(contour: np.ndarray) -> float:
    # Shoelace area of the traced polygon (unsigned)
    return float(cv2.contourArea(contour, False))


def select_largest(contours: Sequence[np.ndarray]) -> Tuple[int, float]:
    """
    Index and area of the largest contour.

    Only a strictly larger area replaces the current pick, so ties go to the
    contour found first. With every area at 0 the first contour wins.
    """
    if not contours:
        raise NoContourFound("mask contains no contours")
    largest_index, largest_area = 0, 0.0
    for i, c in enumerate(contours):
        a = contour_area(c)
        if a > largest_area:
            largest_index, largest_area = i, a
    return largest_index, largest_area


def extract_largest_contour(mask: np.ndarray) -> Tuple[np.ndarray, float, int]:
    """Returns (contour, area, number of contours found)."""
    logger.info("Finding the contours")
    contours = find_all_contours(mask)
    logger.info("Finding the largest contour among %d", len(contours))
    idx, area = select_largest(contours)
    logger.debug("largest contour #%d: area=%.1f, %d px", idx, area, len(contours[idx]))
    return contours[idx], area, len(contours)


def contour_pixels(contour: np.ndarray) -> np.ndarray:
    """(n, 1, 2) OpenCV contour -> (n, 2) array of (x, y)."""
    return contour.reshape(-1, 2)
