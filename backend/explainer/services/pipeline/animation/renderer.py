"""
Animation Renderer - runs the Manim engine over the assembled scene script
and finds the video it produced.

Rendering only: no code fixing and no retries. A failed or timed-out render
aborts the request with the generated script attached for debugging.
"""

import os
from pathlib import Path
from typing import Optional

from explainer.config import RENDER_QUALITY_FLAG, RENDER_TIMEOUT, SCENE_CLASS_NAME, VIDEO_EXTENSION
from explainer.core import (
    ArtifactNotFoundError,
    CommandFailedError,
    CommandTimeoutError,
    RenderError,
    RenderTimeoutError,
    get_logger,
    resolve_tool,
    run_command,
)

logger = get_logger(__name__, component="animation_renderer")

# Manim keeps per-animation fragments here; they are never the final video
PARTIAL_MOVIE_DIR = "partial_movie_files"


def build_render_cmd(script_path: Path, media_dir: Path) -> list:
    return [
        resolve_tool("manim"),
        RENDER_QUALITY_FLAG,
        "--media_dir", str(media_dir),
        "--disable_caching",
        str(script_path),
        SCENE_CLASS_NAME,
    ]


def _diagnostic(error) -> str:
    return (error.stderr or error.stdout or str(error)).strip()


async def render_scene(
    script_path: Path,
    media_dir: Path,
    script_text: str,
    timeout: Optional[float] = None,
) -> None:
    """Render the scene into `media_dir`.

    Raises:
        RenderTimeoutError: The engine ran past its budget and was killed
        RenderError: The engine could not start or exited non-zero
    """
    timeout = RENDER_TIMEOUT if timeout is None else timeout
    cmd = build_render_cmd(script_path, media_dir)
    logger.info("Rendering scene", extra={"script": str(script_path), "timeout": timeout})

    try:
        result = await run_command(cmd, timeout=timeout)
    except CommandTimeoutError as e:
        logger.error(f"Manim rendering timed out (Limit: {timeout:g}s)")
        raise RenderTimeoutError(timeout, script_text, e.stderr.strip()) from e
    except CommandFailedError as e:
        logger.error(f"Manim render process failed: {e}")
        raise RenderError(_diagnostic(e), script_text) from e

    if result.stdout:
        logger.debug(f"Manim stdout: {result.stdout[-500:]}")


def _search(directory: Path) -> Optional[Path]:
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError:
        return None

    for entry in entries:
        if entry.is_file() and entry.name.endswith(VIDEO_EXTENSION):
            return Path(entry.path)

    for entry in entries:
        if entry.is_dir(follow_symlinks=False) and entry.name != PARTIAL_MOVIE_DIR:
            found = _search(Path(entry.path))
            if found is not None:
                return found
    return None


def find_rendered_video(root: Path) -> Path:
    """First .mp4 under `root`, depth-first with files before subdirectories.

    The engine's output location depends on quality and version, so the whole
    tree is searched rather than a fixed path.

    Raises:
        ArtifactNotFoundError: No video file exists anywhere under root
    """
    found = _search(Path(root))
    if found is None:
        raise ArtifactNotFoundError()
    logger.info("Found rendered video", extra={"path": str(found)})
    return found
