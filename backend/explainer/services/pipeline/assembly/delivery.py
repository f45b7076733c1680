"""
Delivery - streams the final video to the caller and removes the job directory.

Once headers are sent the status can no longer change, so errors while
streaming are logged and the connection is simply closed.
"""

import asyncio
from pathlib import Path
from typing import AsyncIterator

from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from explainer.config import DELIVERY_CHUNK_SIZE, DELIVERY_FILENAME
from explainer.core import get_logger
from explainer.services.infrastructure.storage import RenderJob

logger = get_logger(__name__, component="delivery")


async def iter_file_chunks(path: Path, job: RenderJob, chunk_size: int = DELIVERY_CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield the file in chunks; the job directory is removed when iteration ends for any reason."""
    sent = 0
    try:
        with open(path, "rb") as handle:
            while True:
                chunk = await asyncio.to_thread(handle.read, chunk_size)
                if not chunk:
                    break
                sent += len(chunk)
                yield chunk
        logger.info("Video delivered", extra={"bytes": sent})
    except Exception as e:
        logger.error(f"Streaming failed after {sent} bytes: {e}")
    finally:
        job.cleanup()


def stream_video(final_path: Path, job: RenderJob) -> StreamingResponse:
    """Build the response for a finished video. Takes over cleanup of `job`."""
    job.hand_off()
    size = final_path.stat().st_size
    return StreamingResponse(
        iter_file_chunks(final_path, job),
        media_type="video/mp4",
        headers={
            "Content-Length": str(size),
            "Content-Disposition": f'inline; filename="{DELIVERY_FILENAME}"',
        },
        background=BackgroundTask(job.cleanup),
    )
