"""
Domain objects and API request/response schemas
"""

from .scene import Segment, ScenePlan, SynthesisResult
from .generation import VideoGenerationRequest, ErrorResponse, ReadinessResponse

__all__ = [
    "Segment",
    "ScenePlan",
    "SynthesisResult",
    "VideoGenerationRequest",
    "ErrorResponse",
    "ReadinessResponse",
]
