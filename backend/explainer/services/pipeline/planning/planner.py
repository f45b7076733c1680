"""
Scene Planner - turns a problem statement into an ordered ScenePlan.

One call to the planning service, then JSON recovery and normalization.
"""

from typing import Optional

from explainer.config import (
    MAX_SEGMENTS,
    MIN_SEGMENTS,
    PLANNER_MAX_TOKENS,
    get_planner_model,
)
from explainer.core import (
    ConfigurationError,
    EmptyPlanError,
    LogTimer,
    PlanningError,
    PlanParseError,
    get_logger,
)
from explainer.models import ScenePlan
from explainer.services.infrastructure.llm import LLMConfig, LLMProvider, get_planning_provider
from explainer.services.infrastructure.parsing import JSONRecoveryError, parse_llm_json

from .normalize import normalize_segments
from .prompts import build_scene_plan_prompt

logger = get_logger(__name__, component="planner")


def parse_scene_plan(text: str) -> ScenePlan:
    """Recover and normalize a scene plan from raw planner output.

    Raises:
        PlanParseError: No JSON could be recovered
        EmptyPlanError: The JSON held no usable segments
    """
    try:
        parsed = parse_llm_json(text)
    except JSONRecoveryError as e:
        raise PlanParseError(f"Planning service returned invalid JSON for scene plan: {e}") from e

    if parsed.stage != "direct":
        logger.info("Recovered scene plan JSON", extra={"stage": parsed.stage})

    segments = normalize_segments(parsed.value)
    if not segments:
        raise EmptyPlanError()

    if not MIN_SEGMENTS <= len(segments) <= MAX_SEGMENTS:
        logger.warning(
            "Scene plan segment count outside the requested range",
            extra={"segments": len(segments), "min": MIN_SEGMENTS, "max": MAX_SEGMENTS},
        )
    return ScenePlan(segments=tuple(segments))


class ScenePlanner:
    """Plans narrated segments with the configured LLM provider."""

    def __init__(self, provider: Optional[LLMProvider] = None, model: Optional[str] = None):
        self.provider = provider or get_planning_provider()
        self.model = model or get_planner_model()

    def ensure_configured(self) -> None:
        """Raise ConfigurationError when the planning service has no credentials."""
        if not self.provider.is_available():
            raise ConfigurationError(
                f"Planning service ({self.provider.name}) is not configured. Set GEMINI_API_KEY."
            )

    async def plan(self, question: str, context: Optional[str] = None) -> ScenePlan:
        self.ensure_configured()

        prompt = build_scene_plan_prompt(question, context)
        config = LLMConfig(model=self.model, max_tokens=PLANNER_MAX_TOKENS)

        with LogTimer(logger, "scene planning"):
            try:
                response = await self.provider.generate(prompt, config)
            except Exception as e:
                raise PlanningError(f"Planning service request failed: {e}") from e

        if response.usage:
            logger.debug(
                "Planner token usage",
                extra={
                    "input_tokens": response.usage.input_tokens,
                    "output_tokens": response.usage.output_tokens,
                },
            )

        plan = parse_scene_plan(response.text)
        logger.info("Scene plan ready", extra={"segments": len(plan)})
        return plan
