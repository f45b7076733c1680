"""
API schemas for generation endpoints
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class VideoGenerationRequest(BaseModel):
    """Request to turn a problem statement into a narrated video"""
    question: str = ""
    # Opaque personalization string from the profile service; embedded in the prompt as-is
    context: Optional[str] = Field(default=None, max_length=8000)


class ErrorResponse(BaseModel):
    error: str


class ReadinessResponse(BaseModel):
    ok: bool
    missing: List[str] = []
