"""
Scene Script Builder - concatenates segment code into one Manim scene.

All segments share a single construct() body so objects created early stay on
screen and stay addressable by later segments. Each block is followed by a
wait sized to its narration track, which keeps video and audio aligned.
"""

from typing import List, Sequence

from explainer.config import SCENE_CLASS_NAME
from explainer.models import Segment

BODY_INDENT = " " * 8

SCRIPT_HEADER = (
    "from manim import *\n"
    "\n"
    f"class {SCENE_CLASS_NAME}(Scene):\n"
    "    def construct(self):\n"
)


def indent_code(code: str, prefix: str = BODY_INDENT) -> str:
    """Indent every non-blank line; blank lines stay empty."""
    return "\n".join(prefix + line if line.strip() else "" for line in code.splitlines())


def build_segment_block(index: int, segment: Segment, duration: float) -> str:
    lines: List[str] = [f"{BODY_INDENT}# Segment {index}"]
    body = indent_code(segment.code)
    if body.strip():
        lines.append(body)
    lines.append(f"{BODY_INDENT}self.wait({duration:.2f})")
    return "\n".join(lines)


def build_scene_script(segments: Sequence[Segment], durations: Sequence[float]) -> str:
    """
    Assemble the complete scene script.

    Args:
        segments: Planned segments in narration order
        durations: Audio length of each segment, same order

    Raises:
        ValueError: segments and durations differ in length
    """
    if len(segments) != len(durations):
        raise ValueError(
            f"Got {len(segments)} segments but {len(durations)} durations"
        )

    blocks = [
        build_segment_block(index, segment, duration)
        for index, (segment, duration) in enumerate(zip(segments, durations), start=1)
    ]
    return SCRIPT_HEADER + "\n\n".join(blocks) + "\n"
