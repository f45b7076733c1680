"""Planning stage - problem statement to ScenePlan."""

from .normalize import (
    PALETTE,
    ANIMATIONS,
    coerce_color,
    coerce_animation,
    coerce_duration,
    normalize_segment,
    normalize_segments,
)
from .planner import ScenePlanner, parse_scene_plan
from .prompts import build_scene_plan_prompt

__all__ = [
    "PALETTE",
    "ANIMATIONS",
    "coerce_color",
    "coerce_animation",
    "coerce_duration",
    "normalize_segment",
    "normalize_segments",
    "ScenePlanner",
    "parse_scene_plan",
    "build_scene_plan_prompt",
]
