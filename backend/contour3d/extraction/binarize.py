# backend/contour3d/extraction/binarize.py
import logging

import numpy as np
import cv2

from .config import ExtractionConfig

logger = logging.getLogger(__name__)

FOREGROUND = 255
BACKGROUND = 0


def to_gray(colors: np.ndarray) -> np.ndarray:
    # Luminance weights on RGB only, alpha is ignored
    rgb = np.ascontiguousarray(colors[..., :3], dtype=np.uint8)
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2GRAY)


def smooth(gray: np.ndarray, ksize: int = 3) -> np.ndarray:
    """Box blur to knock out single-pixel noise along region edges."""
    if ksize <= 1:
        return gray.copy()
    return cv2.blur(gray, (ksize, ksize))


def threshold_dark(gray: np.ndarray, cutoff: int = 60, polarity: str = "dark") -> np.ndarray:
    """
    Fixed-cutoff binarization into a {0, 255} mask.

    polarity "dark":  intensity <= cutoff -> foreground
    polarity "light": intensity >  cutoff -> foreground
    """
    mode = cv2.THRESH_BINARY_INV if polarity == "dark" else cv2.THRESH_BINARY
    _, mask = cv2.threshold(gray, cutoff, FOREGROUND, mode)
    return mask


def binarize(colors: np.ndarray, config: ExtractionConfig = ExtractionConfig(), debug=None) -> np.ndarray:
    """
    Color grid -> gray -> blur -> threshold.

    If ``debug`` is a dict the gray and thresholded images are stored in it.
    """
    gray = to_gray(colors)
    blurred = smooth(gray, config.blur_ksize)
    mask = threshold_dark(blurred, config.threshold, config.polarity)
    logger.debug(
        "binarized %dx%d grid: %d foreground px (cutoff=%d, polarity=%s)",
        mask.shape[1], mask.shape[0], int(np.count_nonzero(mask)),
        config.threshold, config.polarity,
    )
    if debug is not None:
        debug["gray"] = gray
        debug["threshold"] = mask
    return mask
