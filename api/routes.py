"""
REST endpoints for the live session and one-shot image analysis.
"""
from fastapi import APIRouter, UploadFile, File, HTTPException
from fastapi.responses import JSONResponse, Response
import logging

from facemood.config import Settings
from facemood.errors import StartupError
from facemood.live import LiveSession
from facemood.models import LiveStatus
from facemood.pipeline import analyze_image

import tempfile
import shutil
import os


router = APIRouter()
settings = Settings()
session = LiveSession(settings)
logger = logging.getLogger(__name__)


@router.post("/analyze/image")
async def analyze_image_route(file: UploadFile = File(...)):
    """
    Detect faces in an uploaded image and classify the largest ones.

    Args:
        file: Uploaded image file (any format OpenCV can decode).

    Returns:
        JSONResponse: ImageAnalysis payload.
    """
    logger.debug(f"[api] /analyze/image filename={file.filename}")
    try:
        suffix = os.path.splitext(file.filename or "")[1] or ".png"
        with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
            shutil.copyfileobj(file.file, tmp)
            tmp_path = tmp.name
    except Exception as e:
        logger.exception("[api] upload save failed")
        raise HTTPException(status_code=400, detail=f"Upload failed: {e}")

    try:
        result = analyze_image(tmp_path, settings, collaborators=session.collaborators())
        return JSONResponse(result.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StartupError as e:
        logger.exception("[api] analyze_image could not load models")
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.exception("[api] analyze_image failed")
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        try:
            os.unlink(tmp_path)
        except OSError:
            logger.warning(f"[api] failed to cleanup tmp file: {tmp_path}")


@router.post("/live/start")
async def live_start():
    status = session.start()
    return {"status": status, "message": session.status().message}

@router.post("/live/stop")
async def live_stop():
    return {"status": session.stop()}

@router.get("/live/status", response_model=LiveStatus)
async def live_status():
    return session.status()

@router.get("/live/frame")
async def live_frame():
    data = session.surface.encode_jpeg()
    if data is None:
        raise HTTPException(status_code=404, detail="No frame yet")
    return Response(content=data, media_type="image/jpeg")

@router.post("/live/reload")
async def live_reload():
    if not session.reload():
        return {"status": "already_loaded"}
    return {"status": "loading"}
