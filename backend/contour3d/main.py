# backend/contour3d/main.py

import logging
from typing import Optional

from fastapi import FastAPI, File, UploadFile, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contour3d.extraction.config import ExtractionConfig, MORPH_SHAPES, POLARITIES, FILL_SEEDS
from contour3d.extraction.errors import (
    ConfigError,
    DimensionMismatch,
    NoContourFound,
    PointMapError,
)
from contour3d.extraction.pointmap import load_point_map
from contour3d.pipeline.wound_contour import extract_wound_contour

logger = logging.getLogger(__name__)

app = FastAPI(title="Contour3D Extraction API")

# The capture station UI runs on another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/extract")
async def extract(
    file: UploadFile = File(...),
    threshold: Optional[int] = Query(None),
    polarity: Optional[str] = Query(None, description=f"one of {POLARITIES}"),
    fill_seed: Optional[str] = Query(None, description=f"one of {FILL_SEEDS}"),
    morph_radius: Optional[int] = Query(None),
    morph_shape: Optional[str] = Query(None, description=f"one of {MORPH_SHAPES}"),
):
    """
    Contour extraction endpoint.

    - Accepts: multipart/form-data with 'file' (a .npz point map)
    - Returns: JSON summary plus the boundary points and their text rendering
    """
    try:
        data = await file.read()
        if not data:
            raise HTTPException(status_code=400, detail="Empty file upload")

        config = ExtractionConfig.from_dict({
            "threshold": threshold,
            "polarity": polarity,
            "fill_seed": fill_seed,
            "morph_radius": morph_radius,
            "morph_shape": morph_shape,
        })
        grids = load_point_map(data)
        result = extract_wound_contour(grids, config)

        body = result.summary()
        body["points"] = result.points.astype(float).tolist()
        body["contour_points_txt"] = result.points_text()
        return JSONResponse(body)
    except HTTPException:
        # Re-raise so status codes are preserved
        raise
    except (ConfigError, PointMapError, DimensionMismatch) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NoContourFound as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception("extraction failed")
        raise HTTPException(status_code=500, detail=f"extraction failed: {e}")


# For local dev (inside the backend directory):
#   uvicorn contour3d.main:app --reload --host 0.0.0.0 --port 8000
