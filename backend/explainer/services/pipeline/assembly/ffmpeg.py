"""
Audio and video utilities for ffmpeg operations
"""

from pathlib import Path
from typing import List, Sequence

from explainer.config import AUDIO_BITRATE, AUDIO_CODEC
from explainer.core import CommandError, MediaToolError, get_logger, resolve_tool, run_command

logger = get_logger(__name__, component="ffmpeg")


def quote_concat_path(path: Path) -> str:
    """Quote a path for an ffmpeg concat list; `'` becomes `'\\''`."""
    return "'" + str(Path(path).resolve()).replace("'", "'\\''") + "'"


def write_concat_manifest(audio_paths: Sequence[Path], manifest_path: Path) -> Path:
    """Write one `file '<abs path>'` line per track, in the given order."""
    lines = [f"file {quote_concat_path(path)}\n" for path in audio_paths]
    manifest_path.write_text("".join(lines), encoding="utf-8")
    return manifest_path


def build_concat_cmd(manifest_path: Path, output_path: Path) -> List[str]:
    return [
        resolve_tool("ffmpeg"), "-y",
        "-f", "concat",
        "-safe", "0",
        "-i", str(manifest_path),
        "-c", "copy",
        str(output_path),
    ]


def build_mux_cmd(video_path: Path, audio_path: Path, output_path: Path) -> List[str]:
    """Video stream copied, audio re-encoded, output cut to the shorter input."""
    return [
        resolve_tool("ffmpeg"), "-y",
        "-i", str(video_path),
        "-i", str(audio_path),
        "-map", "0:v:0",
        "-map", "1:a:0",
        "-c:v", "copy",
        "-c:a", AUDIO_CODEC,
        "-b:a", AUDIO_BITRATE,
        "-shortest",
        str(output_path),
    ]


async def concatenate_audio(
    audio_paths: Sequence[Path],
    manifest_path: Path,
    output_path: Path,
) -> Path:
    """Join the segment tracks into one narration track.

    Raises:
        MediaToolError: ffmpeg failed
    """
    if not audio_paths:
        raise MediaToolError("No audio tracks to concatenate")

    write_concat_manifest(audio_paths, manifest_path)
    try:
        await run_command(build_concat_cmd(manifest_path, output_path))
    except CommandError as e:
        raise MediaToolError(f"Audio concatenation failed: {e}") from e

    logger.info("Concatenated narration", extra={"tracks": len(audio_paths), "output": str(output_path)})
    return output_path


async def mux_video_audio(video_path: Path, audio_path: Path, output_path: Path) -> Path:
    """Combine the silent render with the narration track.

    Raises:
        MediaToolError: ffmpeg failed
    """
    try:
        await run_command(build_mux_cmd(video_path, audio_path, output_path))
    except CommandError as e:
        raise MediaToolError(f"Failed to combine video and audio: {e}") from e

    logger.info("Muxed final video", extra={"output": str(output_path)})
    return output_path
