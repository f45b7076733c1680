"""
Tests for explainer.services.use_cases.video_use_case

External tools are replaced by fakes that write plausible files, so the whole
pipeline runs against a real job directory.
"""

import asyncio
import json
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from explainer.core import (
    ArtifactNotFoundError,
    ConfigurationError,
    CommandFailedError,
    CommandTimeoutError,
    MediaToolError,
    MissingToolsError,
    PlanParseError,
    RenderTimeoutError,
)
from explainer.core.process import CommandResult
from explainer.services.infrastructure.llm import LLMConfig, LLMProvider, LLMResponse, ProviderType
from explainer.services.pipeline.audio import TTSEngine
from explainer.services.pipeline.planning import ScenePlanner
from explainer.services.use_cases import VideoGenerationUseCase, VideoRequest, check_readiness


PLAN = json.dumps({
    "segments": [
        {"narration": "Let us solve x squared plus five x plus six equals zero.", "manimCode": "eq = Text('x²+5x+6=0')\nself.play(Write(eq))"},
        {"narration": "Find two numbers that multiply to six.", "manimCode": "self.play(eq.animate.to_edge(UP))"},
        {"narration": "They are two and three.", "manimCode": "ans = Text('x=-2, x=-3', color=GREEN)\nself.play(FadeIn(ans))"},
    ]
})


class FakeProvider(LLMProvider):
    provider_type = ProviderType.GEMINI

    def __init__(self, text=PLAN, available=True):
        self.text = text
        self.available = available

    async def generate(self, prompt: str, config: LLMConfig) -> LLMResponse:
        return LLMResponse(text=self.text, model=config.model, provider=self.provider_type)

    def is_available(self) -> bool:
        return self.available


class FakeTools:
    """Stands in for ffmpeg, ffprobe and manim by writing their output files."""

    def __init__(self, render_error=None, mux_error=None, render_output=True):
        self.render_error = render_error
        self.mux_error = mux_error
        self.render_output = render_output
        self.commands = []

    async def run(self, cmd, timeout=None):
        self.commands.append(list(cmd))
        program = Path(cmd[0]).name
        if program == "manim":
            if self.render_error:
                raise self.render_error
            if self.render_output:
                media = Path(cmd[cmd.index("--media_dir") + 1])
                video = media / "videos" / "scene" / "480p15" / "MathScene.mp4"
                video.parent.mkdir(parents=True)
                video.write_bytes(b"video")
        elif program == "ffprobe":
            return CommandResult(0, "4.0\n", "")
        elif program == "ffmpeg":
            if "-map" in cmd and self.mux_error:
                raise self.mux_error
            Path(cmd[-1]).write_bytes(b"media")
        return CommandResult(0, "", "")


class FailingSilenceTools(FakeTools):
    """ffmpeg cannot encode the silent tracks."""

    def __init__(self, stderr):
        super().__init__()
        self.stderr = stderr

    async def run(self, cmd, timeout=None):
        if "anullsrc=r=44100:cl=mono" in cmd:
            self.commands.append(list(cmd))
            raise CommandFailedError(cmd, 1, stderr=self.stderr)
        return await super().run(cmd, timeout)


class ReverseCompletionTools(FakeTools):
    """Silent tracks finish last-segment-first; records the concat manifest as ffmpeg sees it."""

    def __init__(self, segments):
        super().__init__()
        self.segments = segments
        self.completed = []
        self.manifest = None

    async def run(self, cmd, timeout=None):
        if "anullsrc=r=44100:cl=mono" in cmd:
            index = int(Path(cmd[-1]).stem.removeprefix("seg"))
            await asyncio.sleep(0.02 * (self.segments - index))
            self.completed.append(index)
        elif "concat" in cmd:
            manifest = Path(cmd[cmd.index("-i") + 1])
            self.manifest = manifest.read_text(encoding="utf-8").splitlines()
        return await super().run(cmd, timeout)


@pytest.fixture
def no_missing_tools():
    with patch("explainer.core.runtime.missing_tools", return_value=[]):
        yield


def _patch_tools(tools: FakeTools):
    modules = [
        "explainer.services.pipeline.audio.tts_engine",
        "explainer.services.pipeline.animation.renderer",
        "explainer.services.pipeline.assembly.ffmpeg",
    ]
    patches = [patch(f"{module}.run_command", side_effect=tools.run) for module in modules]
    patches += [patch(f"{module}.resolve_tool", side_effect=lambda name: name) for module in modules]
    return patches


class _Patched:
    def __init__(self, patches):
        self.patches = patches

    def __enter__(self):
        for p in self.patches:
            p.start()
        return self

    def __exit__(self, *exc):
        for p in reversed(self.patches):
            p.stop()


def _use_case(job_root, provider=None, tts=None):
    return VideoGenerationUseCase(
        planner=ScenePlanner(provider=provider or FakeProvider(), model="gemini-test"),
        tts=tts or TTSEngine(api_key=""),
        job_root=job_root,
        render_timeout=5,
    )


@pytest.mark.asyncio
@pytest.mark.usefixtures("no_missing_tools")
class TestVideoGenerationUseCase:
    """End-to-end orchestration with fake external tools."""

    async def test_silent_pipeline_produces_video(self, job_root):
        tools = FakeTools()
        with _Patched(_patch_tools(tools)):
            result = await _use_case(job_root).execute(VideoRequest(question="Solve x²+5x+6=0"))

        assert result.segments == 3
        assert result.final_path.read_bytes() == b"media"
        assert result.job.path.exists()

        manifest = result.job.manifest_path.read_text(encoding="utf-8").splitlines()
        assert manifest == [f"file '{result.job.segment_audio_path(i).resolve()}'" for i in range(3)]

        script = result.job.script_path.read_text(encoding="utf-8")
        assert script.index("# Segment 1") < script.index("# Segment 2") < script.index("# Segment 3")
        assert "self.wait(5.00)" in script
        assert "self.wait(3.00)" in script

        programs = [Path(cmd[0]).name for cmd in tools.commands]
        assert programs[-3:] == ["manim", "ffmpeg", "ffmpeg"]
        result.job.cleanup()

    async def test_all_speech_requests_failing_still_produces_video(self, job_root):
        def handler(request):
            return httpx.Response(500, text="service unavailable")

        real_client = httpx.AsyncClient

        def client_factory(*args, **kwargs):
            return real_client(transport=httpx.MockTransport(handler))

        tools = FakeTools()
        with _Patched(_patch_tools(tools)), \
             patch("explainer.services.pipeline.audio.tts_engine.httpx.AsyncClient", side_effect=client_factory):
            result = await _use_case(job_root, tts=TTSEngine(api_key="el-key")).execute(
                VideoRequest(question="Solve x²+5x+6=0")
            )

        assert result.final_path.exists()
        silent_cmds = [cmd for cmd in tools.commands if "anullsrc=r=44100:cl=mono" in cmd]
        assert len(silent_cmds) == 3
        result.job.cleanup()

    async def test_blank_question(self, job_root):
        with pytest.raises(ValueError, match="question is required"):
            await _use_case(job_root).execute(VideoRequest(question="   "))

    async def test_missing_planner_credentials_creates_no_job(self, job_root):
        with pytest.raises(ConfigurationError):
            await _use_case(job_root, provider=FakeProvider(available=False)).execute(
                VideoRequest(question="Solve it")
            )

        assert list(job_root.iterdir()) == []

    async def test_planner_parse_failure_removes_job(self, job_root):
        with _Patched(_patch_tools(FakeTools())):
            with pytest.raises(PlanParseError):
                await _use_case(job_root, provider=FakeProvider(text="no json")).execute(
                    VideoRequest(question="Solve it")
                )

        assert list(job_root.iterdir()) == []

    async def test_render_timeout_removes_job(self, job_root):
        tools = FakeTools(render_error=CommandTimeoutError(["manim"], 5))
        with _Patched(_patch_tools(tools)):
            with pytest.raises(RenderTimeoutError) as exc_info:
                await _use_case(job_root).execute(VideoRequest(question="Solve it"))

        assert "class MathScene(Scene):" in str(exc_info.value)
        assert list(job_root.iterdir()) == []

    async def test_missing_artifact_removes_job(self, job_root):
        with _Patched(_patch_tools(FakeTools(render_output=False))):
            with pytest.raises(ArtifactNotFoundError):
                await _use_case(job_root).execute(VideoRequest(question="Solve it"))

        assert list(job_root.iterdir()) == []

    async def test_mux_failure_removes_job(self, job_root):
        tools = FakeTools(mux_error=CommandFailedError(["ffmpeg"], 1, stderr="matches no streams"))
        with _Patched(_patch_tools(tools)):
            with pytest.raises(MediaToolError):
                await _use_case(job_root).execute(VideoRequest(question="Solve it"))

        assert list(job_root.iterdir()) == []

    async def test_synthesis_failure_removes_job(self, job_root):
        tools = FailingSilenceTools(stderr="Unknown encoder 'libmp3lame'")
        with _Patched(_patch_tools(tools)):
            with pytest.raises(MediaToolError) as exc_info:
                await _use_case(job_root).execute(VideoRequest(question="Solve it"))

        assert "Failed to generate silent audio" in str(exc_info.value)
        assert "Unknown encoder 'libmp3lame'" in str(exc_info.value)
        assert not any(Path(cmd[0]).name == "manim" for cmd in tools.commands)
        assert list(job_root.iterdir()) == []

    async def test_manifest_order_ignores_completion_order(self, job_root):
        tools = ReverseCompletionTools(segments=3)
        with _Patched(_patch_tools(tools)):
            result = await _use_case(job_root).execute(VideoRequest(question="Solve x²+5x+6=0"))

        assert tools.completed == [2, 1, 0]
        assert tools.manifest == [f"file '{result.job.segment_audio_path(i).resolve()}'" for i in range(3)]
        result.job.cleanup()


@pytest.mark.asyncio
class TestReadiness:
    async def test_missing_tools(self):
        with patch("explainer.core.runtime.missing_tools", return_value=["manim"]):
            with pytest.raises(MissingToolsError, match="Missing required tools: manim"):
                await check_readiness()

    async def test_missing_tools_creates_no_job(self, job_root):
        with patch("explainer.core.runtime.missing_tools", return_value=["ffmpeg"]):
            with pytest.raises(MissingToolsError):
                await _use_case(job_root).execute(VideoRequest(question="Solve it"))

        assert list(job_root.iterdir()) == []
