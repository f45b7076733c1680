"""LLM infrastructure - provider interface and the Gemini planning backend."""

from .base import LLMConfig, LLMProvider, LLMResponse, ProviderType, UsageStats
from .gemini_provider import GeminiProvider


def get_planning_provider() -> LLMProvider:
    """Provider used by the scene planner, configured from the environment."""
    return GeminiProvider()


__all__ = [
    "LLMConfig",
    "LLMProvider",
    "LLMResponse",
    "ProviderType",
    "UsageStats",
    "GeminiProvider",
    "get_planning_provider",
]
