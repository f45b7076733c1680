"""
TTS Engine - Text-to-Speech using ElevenLabs, with silent-track fallback

Each segment gets exactly one MP3 file. When the speech service is not
configured, or a request fails, the segment gets a silent track sized from its
word count instead, so the video still renders with correct pacing.
"""

import asyncio
import math
import os
from pathlib import Path
from typing import List, Optional, Sequence

import httpx

from explainer.config import (
    MIN_AUDIO_DURATION,
    SILENT_WORDS_PER_SECOND,
    TTS_API_URL,
    TTS_MODEL_ID,
    TTS_VOICE_SETTINGS,
    get_tts_api_key,
    get_tts_timeout,
    get_tts_voice_id,
)
from explainer.core import CommandError, MediaToolError, PipelineError, get_logger, resolve_tool, run_command
from explainer.models import SynthesisResult

logger = get_logger(__name__, component="tts")


def silent_duration(narration: str) -> float:
    """Seconds of silence for a narration: max(3, ceil(words / 2.5))."""
    words = len(narration.split())
    return float(max(MIN_AUDIO_DURATION, math.ceil(words / SILENT_WORDS_PER_SECOND)))


async def generate_silent_audio(output_path: Path, seconds: float) -> None:
    """Write a silent mono MP3 of the given length."""
    cmd = [
        resolve_tool("ffmpeg"), "-y",
        "-f", "lavfi",
        "-i", "anullsrc=r=44100:cl=mono",
        "-t", f"{seconds:g}",
        "-q:a", "9",
        "-acodec", "libmp3lame",
        str(output_path),
    ]
    try:
        await run_command(cmd)
    except CommandError as e:
        raise MediaToolError(f"Failed to generate silent audio: {e}") from e


async def probe_duration(audio_path: Path) -> Optional[float]:
    """Duration of a media file in seconds, or None when ffprobe reports nothing usable.

    Raises:
        MediaToolError: ffprobe could not run or exited non-zero
    """
    cmd = [
        resolve_tool("ffprobe"),
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "csv=p=0",
        str(audio_path),
    ]
    try:
        result = await run_command(cmd)
    except CommandError as e:
        raise MediaToolError(f"Failed to probe audio duration: {e}") from e

    try:
        duration = float(result.stdout.strip())
    except ValueError:
        return None
    if not math.isfinite(duration) or duration <= 0:
        return None
    return duration


async def pad_audio(audio_path: Path, minimum: float) -> None:
    """Extend a track with trailing silence up to `minimum` seconds, in place."""
    padded = audio_path.with_name(f"{audio_path.stem}.padded{audio_path.suffix}")
    cmd = [
        resolve_tool("ffmpeg"), "-y",
        "-i", str(audio_path),
        "-af", f"apad=whole_dur={minimum:g}",
        "-acodec", "libmp3lame",
        str(padded),
    ]
    try:
        await run_command(cmd)
    except CommandError as e:
        raise MediaToolError(f"Failed to pad audio: {e}") from e
    os.replace(padded, audio_path)


class SpeechRequestError(Exception):
    """The speech service answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}: {body[:200]}")


class TTSEngine:
    """ElevenLabs synthesis for scene narrations."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        voice_id: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else get_tts_api_key()
        self.voice_id = voice_id or get_tts_voice_id()
        self.timeout = timeout if timeout is not None else get_tts_timeout()

    def is_available(self) -> bool:
        return bool(self.api_key)

    async def _request_speech(self, client: httpx.AsyncClient, text: str) -> bytes:
        response = await client.post(
            f"{TTS_API_URL}/{self.voice_id}",
            headers={
                "xi-api-key": self.api_key,
                "Content-Type": "application/json",
                "Accept": "audio/mpeg",
            },
            json={
                "text": text,
                "model_id": TTS_MODEL_ID,
                "voice_settings": TTS_VOICE_SETTINGS,
            },
        )
        if not response.is_success:
            raise SpeechRequestError(response.status_code, response.text)
        return response.content

    async def _synthesize_silent(self, narration: str, output_path: Path) -> SynthesisResult:
        seconds = silent_duration(narration)
        await generate_silent_audio(output_path, seconds)
        return SynthesisResult(audio_path=output_path, duration_seconds=seconds, source="silent")

    async def synthesize_segment(
        self,
        narration: str,
        output_path: Path,
        client: Optional[httpx.AsyncClient] = None,
    ) -> SynthesisResult:
        """
        Produce the audio for one segment.

        Speech failures degrade to silence for this segment only; ffmpeg or
        ffprobe failures propagate as MediaToolError.
        """
        if client is None or not self.is_available():
            return await self._synthesize_silent(narration, output_path)

        try:
            audio = await self._request_speech(client, narration)
        except (httpx.HTTPError, SpeechRequestError) as e:
            logger.warning(f"Speech synthesis failed, using silent track: {e}")
            return await self._synthesize_silent(narration, output_path)

        output_path.write_bytes(audio)

        duration = await probe_duration(output_path)
        if duration is None:
            seconds = silent_duration(narration)
            logger.warning(
                "Could not read speech duration, using word-count estimate",
                extra={"path": str(output_path), "seconds": seconds},
            )
            return SynthesisResult(audio_path=output_path, duration_seconds=seconds, source="speech")

        if duration < MIN_AUDIO_DURATION:
            await pad_audio(output_path, MIN_AUDIO_DURATION)
            duration = MIN_AUDIO_DURATION

        return SynthesisResult(audio_path=output_path, duration_seconds=duration, source="speech")

    async def synthesize_all(
        self,
        narrations: Sequence[str],
        output_paths: Sequence[Path],
    ) -> List[SynthesisResult]:
        """Synthesize every segment concurrently; results keep segment order.

        Raises:
            MediaToolError: ffmpeg or ffprobe failed for a segment; remaining
                segments are cancelled and the first failure is raised as is
        """
        if len(narrations) != len(output_paths):
            raise ValueError("narrations and output paths must have the same length")

        results: List[Optional[SynthesisResult]] = [None] * len(narrations)

        async def run(index: int, client: Optional[httpx.AsyncClient]) -> None:
            results[index] = await self.synthesize_segment(narrations[index], output_paths[index], client)

        async def fan_out(client: Optional[httpx.AsyncClient]) -> None:
            async with asyncio.TaskGroup() as group:
                for index in range(len(narrations)):
                    group.create_task(run(index, client))

        try:
            if self.is_available():
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    await fan_out(client)
            else:
                logger.info("ELEVENLABS_API_KEY not set, narration will be silent")
                await fan_out(None)
        except ExceptionGroup as group_error:
            failures = group_error.subgroup(lambda e: isinstance(e, PipelineError))
            if failures is None:
                raise
            logger.error(f"Audio synthesis failed: {failures.exceptions[0]}")
            raise failures.exceptions[0] from None

        speech = sum(1 for result in results if result.source == "speech")
        logger.info(
            "Audio synthesis complete",
            extra={"segments": len(results), "speech": speech, "silent": len(results) - speech},
        )
        return results
