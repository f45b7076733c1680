"""
Video generation routes

A single synchronous request runs the whole pipeline and answers with the MP4
bytes, or with `{"error": message}` if anything fails before streaming starts.
"""

import asyncio

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core import (
    ConfigurationError,
    MissingToolsError,
    PipelineError,
    get_logger,
    missing_tools,
)
from ..models import VideoGenerationRequest
from ..services.pipeline.assembly import stream_video
from ..services.use_cases import VideoGenerationUseCase, VideoRequest

router = APIRouter(prefix="/api/manim", tags=["generation"])

logger = get_logger(__name__, component="generation_route")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/generate")
async def generate_video(request: VideoGenerationRequest):
    """Generate a narrated explainer video for a problem statement"""
    if not request.question.strip():
        return error_response(400, "question is required")

    use_case = VideoGenerationUseCase()
    try:
        result = await use_case.execute(
            VideoRequest(question=request.question, context=request.context)
        )
    except ConfigurationError as e:
        logger.warning(f"Generation unavailable: {e}")
        return error_response(503, str(e))
    except PipelineError as e:
        logger.error(f"Generation failed: {e}")
        return error_response(500, str(e))
    except ValueError as e:
        return error_response(400, str(e))

    try:
        return stream_video(result.final_path, result.job)
    except OSError as e:
        result.job.cleanup()
        logger.error(f"Final video unreadable: {e}")
        return error_response(500, f"Final video unreadable: {e}")


@router.get("/readiness")
async def readiness():
    """Report whether ffmpeg, ffprobe and manim are installed"""
    missing = await asyncio.to_thread(missing_tools)
    if missing:
        return error_response(503, str(MissingToolsError(missing)))
    return {"ok": True, "missing": []}
