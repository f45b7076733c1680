"""
Scene plan domain objects

Produced by the planner and consumed read-only by every later stage.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class Segment:
    """One narrated beat: spoken text plus the Manim lines that animate it."""
    narration: str
    code: str = ""
    duration: float = 6.0
    steps: Tuple[Dict[str, Any], ...] = ()


@dataclass(frozen=True)
class ScenePlan:
    """Ordered segments. Later segments may reference variables bound by earlier ones."""
    segments: Tuple[Segment, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def narrations(self) -> List[str]:
        return [segment.narration for segment in self.segments]


@dataclass(frozen=True)
class SynthesisResult:
    audio_path: Path
    duration_seconds: float
    source: str = "silent"  # "speech" or "silent"
