# backend/contour3d/pipeline/wound_contour.py

"""
Largest-dark-region contour pipeline.

    point grids -> binarize -> fill holes + close -> largest contour -> 3D points

Callers (CLI, HTTP API) only need:
    extract_wound_contour(grids, config)         pure, nothing touches disk
    save_wound_contour(grids, out_dir, config)   same, plus the artifacts
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np

from contour3d.extraction.binarize import binarize
from contour3d.extraction.config import ExtractionConfig
from contour3d.extraction.contours import extract_largest_contour
from contour3d.extraction.emit import (
    OVERLAY_FILENAME,
    POINTS_FILENAME,
    format_points,
    render_overlay,
    write_debug_images,
    write_overlay,
    write_points,
)
from contour3d.extraction.errors import IOFailure
from contour3d.extraction.grid import PointGrids
from contour3d.extraction.project import project_contour
from contour3d.extraction.region import normalize_region

logger = logging.getLogger(__name__)


@dataclass
class ContourResult:
    grids: PointGrids
    contour: np.ndarray
    contour_area: float
    contour_count: int
    points: np.ndarray
    config: ExtractionConfig
    debug: Dict[str, np.ndarray] = field(default_factory=dict)

    @property
    def contour_length(self) -> int:
        return int(len(self.contour))

    def overlay(self) -> np.ndarray:
        return render_overlay(
            self.grids.colors, self.contour,
            self.config.highlight_rgb, self.config.line_width,
        )

    def points_text(self) -> str:
        return format_points(self.points)

    def summary(self) -> dict:
        return {
            "width": self.grids.width,
            "height": self.grids.height,
            "contour_count": self.contour_count,
            "contour_area": self.contour_area,
            "contour_length": self.contour_length,
            "point_count": int(len(self.points)),
        }

    def to_json(self) -> str:
        return json.dumps(self.summary())


def extract_wound_contour(
    grids: PointGrids,
    config: Optional[ExtractionConfig] = None,
) -> ContourResult:
    """
    Run every stage in memory. Raises NoContourFound when the cleaned mask is
    empty; nothing is written in any case.
    """
    config = config or ExtractionConfig()
    debug: Dict[str, np.ndarray] = {}

    mask = binarize(grids.colors, config, debug=debug)
    mask = normalize_region(mask, config, debug=debug)
    contour, area, count = extract_largest_contour(mask)
    points = project_contour(contour, grids.positions)

    logger.info(
        "contour: %d px, area %.1f, %d/%d px with depth",
        len(contour), area, len(points), len(contour),
    )
    return ContourResult(
        grids=grids,
        contour=contour,
        contour_area=area,
        contour_count=count,
        points=points,
        config=config,
        debug=debug,
    )


def save_wound_contour(
    grids: PointGrids,
    out_dir: Union[str, Path],
    config: Optional[ExtractionConfig] = None,
    debug_images: bool = False,
) -> ContourResult:
    """
    Extract, then write contour_points.txt, contoured_wound.jpg and (optionally)
    the intermediate masks into out_dir. Write errors surface as IOFailure;
    whatever was already written stays.
    """
    result = extract_wound_contour(grids, config)

    out_dir = Path(out_dir)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IOFailure(out_dir, e) from e

    written: List[Path] = []
    if debug_images:
        written += write_debug_images(out_dir, result.debug)
    written.append(write_points(out_dir / POINTS_FILENAME, result.points))
    written.append(write_overlay(out_dir / OVERLAY_FILENAME, result.overlay()))
    logger.debug("artifacts: %s", [str(p) for p in written])
    return result
