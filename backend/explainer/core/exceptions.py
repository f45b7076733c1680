"""
Core Exceptions
Error taxonomy for the explainer video pipeline.

ConfigurationError subclasses are raised before any work starts and map to
503. PipelineError subclasses abort the request and map to 500.
"""

from typing import Iterable


class ExplainerError(Exception):
    """Base exception for all application errors."""
    pass


class ConfigurationError(ExplainerError):
    """Missing credentials or external tools."""
    pass


class MissingToolsError(ConfigurationError):
    """Raised when required executables cannot be resolved."""

    INSTALL_HINT = "Install with: brew install ffmpeg && pip install manim"

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing required tools: {', '.join(self.missing)}. {self.INSTALL_HINT}"
        )


class PipelineError(ExplainerError):
    """Base exception for processing pipeline errors."""
    pass


class PlanningError(PipelineError):
    """Raised when the planning service fails or returns an unusable plan."""
    pass


class PlanParseError(PlanningError):
    """Raised when no parse attempt recovers a JSON object from the planner output."""
    pass


class EmptyPlanError(PlanningError):
    """Raised when normalization leaves zero segments."""

    def __init__(self, message: str = "no segments generated"):
        super().__init__(message)


class MediaToolError(PipelineError):
    """Raised when ffmpeg or ffprobe fails."""
    pass


class RenderError(PipelineError):
    """Raised when the Manim engine exits non-zero.

    The message carries the process diagnostic and the full generated script.
    """

    def __init__(self, diagnostic: str, script: str, *, prefix: str = "Manim render failed"):
        self.diagnostic = diagnostic
        self.script = script
        super().__init__(f"{prefix}:\n{diagnostic}\n\nGenerated code:\n{script}")


class RenderTimeoutError(RenderError):
    """Raised when the Manim engine exceeds its wall-clock budget."""

    def __init__(self, timeout: float, script: str, diagnostic: str = ""):
        self.timeout = timeout
        detail = (
            f"Render exceeded {timeout:g}s and was terminated. "
            "Try a simpler scene with fewer animations."
        )
        if diagnostic:
            detail = f"{detail}\n{diagnostic}"
        super().__init__(detail, script, prefix="Manim render timed out")


class ArtifactNotFoundError(PipelineError):
    """Raised when the renderer exits cleanly but leaves no video behind."""

    def __init__(self, message: str = "renderer produced no output file"):
        super().__init__(message)
