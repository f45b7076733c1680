"""
Routes module - contains all API route handlers
"""

from .generation import router as generation_router

__all__ = [
    "generation_router",
]
