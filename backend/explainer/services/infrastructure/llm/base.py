"""
Base classes for LLM providers

Defines the interface the scene planner talks to, so the planning service
can be swapped or faked without touching the pipeline.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ProviderType(str, Enum):
    """Supported LLM providers"""
    GEMINI = "gemini"


@dataclass
class LLMConfig:
    """Configuration for an LLM request"""
    model: str
    temperature: float = 0.7
    max_tokens: Optional[int] = None
    system_instruction: Optional[str] = None
    extra_options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class UsageStats:
    """Token usage statistics"""
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        if self.total_tokens == 0:
            self.total_tokens = self.input_tokens + self.output_tokens


@dataclass
class LLMResponse:
    """Unified response from any LLM provider"""
    text: str
    model: str
    provider: ProviderType
    usage: Optional[UsageStats] = None
    raw_response: Any = None


class LLMProvider(ABC):
    """Abstract base class for LLM providers"""

    provider_type: ProviderType

    @abstractmethod
    async def generate(self, prompt: str, config: LLMConfig) -> LLMResponse:
        """Generate a response for a text prompt

        Args:
            prompt: The prompt text
            config: Model and sampling options

        Returns:
            LLMResponse with the generated text and metadata
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is configured and can be used"""

    @property
    def name(self) -> str:
        return self.provider_type.value
