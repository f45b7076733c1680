"""
VideoGenerationUseCase - problem statement in, muxed MP4 out.

Stages run strictly in order: readiness, plan, synthesize, assemble script,
render, locate, concatenate audio, mux. The job directory is removed on every
failure; on success ownership passes to the caller, which streams the file.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from explainer.config import get_job_root
from explainer.core import LogTimer, assert_tools_available, get_logger
from explainer.services.infrastructure.storage import RenderJob
from explainer.services.pipeline.animation import build_scene_script, find_rendered_video, render_scene
from explainer.services.pipeline.assembly import concatenate_audio, mux_video_audio
from explainer.services.pipeline.audio import TTSEngine
from explainer.services.pipeline.planning import ScenePlanner

from .base import UseCase

logger = get_logger(__name__, component="video_use_case")


@dataclass
class VideoRequest:
    question: str
    context: Optional[str] = None


@dataclass
class RenderedVideo:
    """Finished artifact. The caller owns `job` and must clean it up."""
    job: RenderJob
    final_path: Path
    segments: int


async def check_readiness() -> None:
    """Raise MissingToolsError if ffmpeg, ffprobe or manim cannot be found."""
    await asyncio.to_thread(assert_tools_available)


class VideoGenerationUseCase(UseCase[VideoRequest, RenderedVideo]):
    """Run the whole explainer pipeline for one request."""

    def __init__(
        self,
        planner: Optional[ScenePlanner] = None,
        tts: Optional[TTSEngine] = None,
        job_root: Optional[Path] = None,
        render_timeout: Optional[float] = None,
    ):
        self.planner = planner or ScenePlanner()
        self.tts = tts or TTSEngine()
        self.job_root = job_root
        self.render_timeout = render_timeout

    async def execute(self, request: VideoRequest) -> RenderedVideo:
        question = (request.question or "").strip()
        if not question:
            raise ValueError("question is required")

        await check_readiness()
        self.planner.ensure_configured()

        root = self.job_root or get_job_root()
        with RenderJob.create(root) as job:
            with LogTimer(logger, "video pipeline"):
                plan = await self.planner.plan(question, request.context)

                audio_paths = [job.segment_audio_path(i) for i in range(len(plan))]
                with LogTimer(logger, "audio synthesis"):
                    tracks = await self.tts.synthesize_all(plan.narrations, audio_paths)

                script = build_scene_script(plan.segments, [track.duration_seconds for track in tracks])
                job.script_path.write_text(script, encoding="utf-8")

                with LogTimer(logger, "scene render"):
                    await render_scene(job.script_path, job.media_dir, script, timeout=self.render_timeout)
                video_path = find_rendered_video(job.media_dir)

                await concatenate_audio([track.audio_path for track in tracks], job.manifest_path, job.audio_path)
                await mux_video_audio(video_path, job.audio_path, job.final_path)

            job.hand_off()
            return RenderedVideo(job=job, final_path=job.final_path, segments=len(plan))
