# backend/contour3d/cli.py
"""
Command line entry point: run the contour pipeline on a saved point map.

    contour3d scan.npz -o out/ --threshold 50 --debug-images
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from contour3d.extraction.config import ExtractionConfig, MORPH_SHAPES, POLARITIES, FILL_SEEDS
from contour3d.extraction.errors import ContourExtractionError
from contour3d.extraction.pointmap import load_point_map
from contour3d.pipeline.wound_contour import save_wound_contour

logger = logging.getLogger("contour3d")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="contour3d",
        description="Extract the 3D contour of the largest dark region from a colored point map.",
    )
    ap.add_argument("pointmap", help=".npz archive with 'positions' and 'colors'")
    ap.add_argument("-o", "--out-dir", default=".", help="where to write the artifacts (default: cwd)")
    ap.add_argument("--threshold", type=int, default=None, help="intensity cutoff 0..255 (default 60)")
    ap.add_argument("--blur", dest="blur_ksize", type=int, default=None, help="box filter size (default 3)")
    ap.add_argument("--morph-radius", type=int, default=None, help="closing radius (default 2)")
    ap.add_argument("--morph-shape", choices=MORPH_SHAPES, default=None)
    ap.add_argument("--polarity", choices=POLARITIES, default=None,
                    help="dark: dark target on light surface (default); light: the reverse")
    ap.add_argument("--fill-seed", choices=FILL_SEEDS, default=None,
                    help="hole fill seed: top-left corner (default) or every border pixel")
    ap.add_argument("--debug-images", action="store_true", help="also save the intermediate masks")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ExtractionConfig().with_overrides(
            threshold=args.threshold,
            blur_ksize=args.blur_ksize,
            morph_radius=args.morph_radius,
            morph_shape=args.morph_shape,
            polarity=args.polarity,
            fill_seed=args.fill_seed,
        )
        grids = load_point_map(args.pointmap)
        result = save_wound_contour(grids, args.out_dir, config, debug_images=args.debug_images)
    except ContourExtractionError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    logger.info("done: %s", result.to_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
