"""File upload endpoint for tempo analysis."""

import logging
import os
import tempfile

from fastapi import APIRouter, UploadFile, File, HTTPException

from tempometer.api.schemas import AnalysisResponse
from tempometer.analysis.engine import TempoEngine
from tempometer.audio.loader import AudioLoadError
from tempometer.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _suffix(filename: str | None) -> str:
    if filename and "." in filename:
        return "." + filename.rsplit(".", 1)[-1]
    return ""


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_file(file: UploadFile = File(...)):
    """Estimate the tempo of an uploaded audio file."""
    suffix = _suffix(file.filename)
    if suffix not in settings.audio_extensions:
        raise HTTPException(400, f"Unsupported format. Use: {', '.join(settings.audio_extensions)}")

    content = await file.read()
    if len(content) > settings.max_upload_mb * 1024 * 1024:
        raise HTTPException(400, f"File too large (max {settings.max_upload_mb} MB)")

    tmp_path: str | None = None
    try:
        with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
            tmp.write(content)
            tmp_path = tmp.name

        result = TempoEngine().analyze_file(tmp_path)
        return AnalysisResponse(
            bpm=result.bpm,
            raw_bpm=result.raw_bpm,
            peak_count=result.peak_count,
            sample_rate=result.sample_rate,
            duration=result.duration,
        )
    except AudioLoadError as e:
        raise HTTPException(422, f"{e.kind}: {file.filename}")
    except Exception:
        logger.exception("Upload analysis failed")
        raise HTTPException(500, "Analysis failed")
    finally:
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
