"""
Normalization of parsed planner output into Segments.

Planner JSON is loosely typed. Every field gets a safe default here so later
stages can rely on types without re-checking.
"""

import math
from typing import Any, Dict, List, Tuple

from explainer.config import DEFAULT_SEGMENT_DURATION, MIN_SEGMENT_DURATION
from explainer.models import Segment

PALETTE = ("white", "blue", "green")

# Lossy on purpose: the storyboard renderer only has three colours
COLOR_MAP = {
    "green": "green",
    "blue": "blue",
    "yellow": "blue",
    "red": "blue",
    "orange": "blue",
}
DEFAULT_COLOR = "white"

ANIMATIONS = ("fadeIn", "write", "grow")
ANIMATION_MAP = {
    "write": "write",
    "draw": "write",
    "typing": "write",
    "grow": "grow",
    "create": "grow",
}
DEFAULT_ANIMATION = "fadeIn"


def coerce_color(value: Any) -> str:
    if not isinstance(value, str):
        return DEFAULT_COLOR
    return COLOR_MAP.get(value.strip().lower(), DEFAULT_COLOR)


def coerce_animation(value: Any) -> str:
    if not isinstance(value, str):
        return DEFAULT_ANIMATION
    return ANIMATION_MAP.get(value.strip().lower(), DEFAULT_ANIMATION)


def coerce_duration(value: Any) -> float:
    """Numeric (or numeric string) durations, defaulted and floored."""
    duration = DEFAULT_SEGMENT_DURATION
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        duration = float(value)
    elif isinstance(value, str):
        try:
            duration = float(value.strip())
        except ValueError:
            duration = DEFAULT_SEGMENT_DURATION
    if not math.isfinite(duration):
        duration = DEFAULT_SEGMENT_DURATION
    return max(MIN_SEGMENT_DURATION, duration)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_step(step: Dict[str, Any]) -> Dict[str, Any]:
    normalized = dict(step)
    if "color" in normalized:
        normalized["color"] = coerce_color(normalized["color"])
    if "animation" in normalized:
        normalized["animation"] = coerce_animation(normalized["animation"])
    return normalized


def normalize_steps(value: Any) -> Tuple[Dict[str, Any], ...]:
    if not isinstance(value, list):
        return ()
    return tuple(normalize_step(step) for step in value if isinstance(step, dict))


def normalize_segment(raw: Any) -> Segment:
    if not isinstance(raw, dict):
        raw = {}
    code = raw.get("manimCode")
    if not isinstance(code, str):
        code = raw.get("code")
    return Segment(
        narration=_text(raw.get("narration")),
        code=code.rstrip() if isinstance(code, str) else "",
        duration=coerce_duration(raw.get("duration")),
        steps=normalize_steps(raw.get("steps")),
    )


def normalize_segments(payload: Any) -> List[Segment]:
    """Segments from `{"segments": [...]}` or a bare list; anything else yields none."""
    if isinstance(payload, dict):
        payload = payload.get("segments")
    if not isinstance(payload, list):
        return []
    return [normalize_segment(raw) for raw in payload if isinstance(raw, dict)]
