"""
Gemini LLM Provider

Implementation of LLMProvider for Google's Gemini models.
"""

import asyncio
from typing import Any, Optional

from google import genai
from google.genai import types

from explainer.config import get_planner_api_key

from .base import LLMConfig, LLMProvider, LLMResponse, ProviderType, UsageStats


class GeminiProvider(LLMProvider):
    """Google Gemini LLM Provider"""

    provider_type = ProviderType.GEMINI

    def __init__(self, api_key: Optional[str] = None):
        """
        Args:
            api_key: Gemini API key. If not provided, uses GEMINI_API_KEY env var
        """
        self.api_key = api_key or get_planner_api_key()
        self.client = genai.Client(api_key=self.api_key) if self.api_key else None

    def is_available(self) -> bool:
        return self.client is not None

    def _build_generation_config(self, config: LLMConfig) -> types.GenerateContentConfig:
        kwargs: dict = {"temperature": config.temperature}
        if config.max_tokens:
            kwargs["max_output_tokens"] = config.max_tokens
        if config.system_instruction:
            kwargs["system_instruction"] = config.system_instruction
        kwargs.update(config.extra_options)
        return types.GenerateContentConfig(**kwargs)

    @staticmethod
    def _extract_usage(response: Any) -> Optional[UsageStats]:
        usage = getattr(response, "usage_metadata", None)
        if not usage:
            return None
        return UsageStats(
            input_tokens=getattr(usage, "prompt_token_count", 0) or 0,
            output_tokens=getattr(usage, "candidates_token_count", 0) or 0,
        )

    async def generate(self, prompt: str, config: LLMConfig) -> LLMResponse:
        if not self.is_available():
            raise RuntimeError("Gemini provider is not available. Check GEMINI_API_KEY.")

        # The SDK call blocks; keep it off the event loop
        response = await asyncio.to_thread(
            self.client.models.generate_content,
            model=config.model,
            contents=prompt,
            config=self._build_generation_config(config),
        )

        return LLMResponse(
            text=response.text.strip() if response.text else "",
            model=config.model,
            provider=self.provider_type,
            usage=self._extract_usage(response),
            raw_response=response,
        )
