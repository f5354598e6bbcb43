# backend/contour3d/extraction/emit.py
import logging
from pathlib import Path
from typing import Dict, List, Tuple, Union

import numpy as np
import cv2
from PIL import Image

from .errors import IOFailure

logger = logging.getLogger(__name__)

POINTS_FILENAME = "contour_points.txt"
OVERLAY_FILENAME = "contoured_wound.jpg"

# debug key -> file name
DEBUG_FILENAMES = {
    "gray": "gray_image.jpg",
    "threshold": "threshold_image.jpg",
    "filled": "threshold_image_inverted.jpg",
    "closed": "morph_closing_image.jpg",
}

PathLike = Union[str, Path]


def format_points(points: np.ndarray) -> str:
    """One "x y z;" line per point."""
    return "".join("%f %f %f;\n" % (x, y, z) for x, y, z in np.asarray(points, dtype=np.float64))


def write_points(path: PathLike, points: np.ndarray) -> Path:
    path = Path(path)
    logger.info("Saving %d contour points in %s", len(points), path)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(format_points(points))
    except OSError as e:
        raise IOFailure(path, e) from e
    return path


def render_overlay(
    colors: np.ndarray,
    contour: np.ndarray,
    highlight_rgb: Tuple[int, int, int] = (230, 200, 230),
    line_width: int = 2,
) -> np.ndarray:
    """RGB copy of the color grid with the contour drawn on top."""
    rgb = np.ascontiguousarray(colors[..., :3], dtype=np.uint8).copy()
    cv2.drawContours(rgb, [contour], -1, tuple(int(c) for c in highlight_rgb), line_width)
    return rgb


def _save_image(path: Path, image: np.ndarray) -> Path:
    try:
        Image.fromarray(image).save(path)
    except (OSError, ValueError) as e:
        # ValueError: Pillow can't map the extension to a format
        raise IOFailure(path, e) from e
    return path


def write_overlay(path: PathLike, image: np.ndarray) -> Path:
    path = Path(path)
    logger.info("Saving the contoured image in %s", path)
    return _save_image(path, image)


def write_debug_images(out_dir: PathLike, debug: Dict[str, np.ndarray]) -> List[Path]:
    out_dir = Path(out_dir)
    written = []
    for key, name in DEBUG_FILENAMES.items():
        if key not in debug:
            continue
        written.append(_save_image(out_dir / name, debug[key]))
    logger.debug("wrote %d debug images to %s", len(written), out_dir)
    return written
