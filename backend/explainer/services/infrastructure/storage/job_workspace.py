"""
Per-request scratch directories.

Every pipeline run owns one uniquely named directory holding all of its
intermediate files. Used as a context manager, the directory is removed on
every exit path unless ownership was handed to the delivery stage, which then
removes it once the response has been streamed.
"""

import secrets
import shutil
import time
from pathlib import Path
from typing import Optional

from explainer.config import SCENE_SCRIPT_NAME
from explainer.core import get_logger, set_job_id

logger = get_logger(__name__, component="job_workspace")

JOB_DIR_PREFIX = "manim-"


def new_job_name() -> str:
    """Time-based name with a random suffix so concurrent requests never collide."""
    return f"{JOB_DIR_PREFIX}{int(time.time() * 1000)}-{secrets.token_hex(5)}"


class RenderJob:
    """Scratch directory for one pipeline run."""

    def __init__(self, root: Path, name: Optional[str] = None):
        self.name = name or new_job_name()
        self.path = Path(root) / self.name
        self._handed_off = False
        self._removed = False

    @classmethod
    def create(cls, root: Path) -> "RenderJob":
        job = cls(root)
        job.path.mkdir(parents=True, exist_ok=False)
        set_job_id(job.name)
        logger.info("Created job directory", extra={"path": str(job.path)})
        return job

    # Well-known locations inside the job directory
    @property
    def script_path(self) -> Path:
        return self.path / SCENE_SCRIPT_NAME

    @property
    def media_dir(self) -> Path:
        return self.path / "media"

    @property
    def manifest_path(self) -> Path:
        return self.path / "concat.txt"

    @property
    def audio_path(self) -> Path:
        return self.path / "audio.mp3"

    @property
    def final_path(self) -> Path:
        return self.path / "final.mp4"

    def segment_audio_path(self, index: int) -> Path:
        return self.path / f"seg{index}.mp3"

    @property
    def removed(self) -> bool:
        return self._removed

    def hand_off(self) -> None:
        """Transfer cleanup responsibility to whoever streams the final artifact."""
        self._handed_off = True

    def cleanup(self) -> None:
        """Remove the directory. Safe to call any number of times; never raises."""
        if self._removed:
            return
        self._removed = True
        try:
            shutil.rmtree(self.path, ignore_errors=True)
            logger.info("Removed job directory", extra={"path": str(self.path)})
        except Exception as e:
            logger.debug(f"Job directory cleanup failed: {e}")

    def __enter__(self) -> "RenderJob":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None or not self._handed_off:
            self.cleanup()
