"""Use cases - application-level orchestration behind the HTTP routes."""

from .base import UseCase
from .video_use_case import RenderedVideo, VideoGenerationUseCase, VideoRequest, check_readiness

__all__ = [
    "UseCase",
    "RenderedVideo",
    "VideoGenerationUseCase",
    "VideoRequest",
    "check_readiness",
]
