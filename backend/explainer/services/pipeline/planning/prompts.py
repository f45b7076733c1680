"""
Prompt for the scene planner.

The response contract is a raw JSON object with a `segments` list; each entry
pairs a short narration with the Manim lines that animate it.
"""

from typing import Optional

from explainer.config import MAX_SEGMENTS, MIN_SEGMENTS

NARRATION_MIN_WORDS = 15
NARRATION_MAX_WORDS = 25

RESPONSE_SCHEMA = """{
  "segments": [
    {
      "narration": "Plain English, 1-2 sentences, no symbols. 15-25 words.",
      "manimCode": "Python lines inside construct(self). No class/def. Variables from earlier segments remain in scope. Do NOT add self.wait() - it is added automatically."
    }
  ]
}"""

MANIM_TOOLBOX = """TEXT & EQUATIONS (no LaTeX - use Unicode):
  Text("x² + 5x + 6 = 0", font_size=44, color=WHITE)
  Unicode: ², ³, √, π, ×, ÷, ±, ≠, ≤, ≥, →, ∞

BUILD EQUATIONS PART BY PART:
  lhs = Text("x²", color=BLUE, font_size=48)
  rhs = Text(" = 0", color=YELLOW, font_size=48)
  eq = VGroup(lhs, rhs).arrange(RIGHT, buff=0.05)
  self.play(Write(lhs), run_time=0.8)
  self.play(Write(rhs), run_time=0.6)

ATTENTION & HIGHLIGHTING:
  self.play(Indicate(obj, color=YELLOW, scale_factor=1.3))
  self.play(Circumscribe(obj, color=YELLOW, run_time=1.5))
  box = SurroundingRectangle(obj, color=YELLOW, buff=0.15, corner_radius=0.1)
  self.play(Create(box))

SHAPES & ARROWS:
  arrow = Arrow(start=UP*0.5, end=DOWN*0.5, color=YELLOW, buff=0.1)
  self.play(GrowArrow(arrow))
  rect = Rectangle(width=4, height=1.2, color=BLUE, fill_opacity=0.15)
  dot = Dot(point=ORIGIN, color=RED, radius=0.12)

ANIMATION VARIETY:
  Write, FadeIn(obj, shift=UP*0.3), GrowFromCenter, DrawBorderThenFill, FadeOut,
  ReplacementTransform(old, new), a.animate.set_color(GREEN), a.animate.scale(1.4)

LAYOUT (no animation):
  obj.to_edge(UP, buff=0.4); obj.next_to(other, DOWN, buff=0.5); obj.move_to(ORIGIN)
  VGroup(a, b, c).arrange(DOWN, buff=0.35)

COLOUR PALETTE:
  WHITE default text, BLUE unknowns/variables, YELLOW active term,
  GREEN results, RED errors/emphasis, ORANGE intermediate results, GREY secondary text

SCREEN MANAGEMENT (the screen fills fast):
  self.play(group.animate.to_edge(UP).scale(0.6))
  self.play(FadeOut(old_obj))"""

DESIGN_RULES = """1. Segment 1: write the problem dramatically, part by part or colour-coded.
2. Middle segments: at least two distinct visual actions each; change colours as insight is revealed.
3. Use Indicate() or Circumscribe() whenever the narration refers to a specific part.
4. Show algebraic steps as on-screen transformations rather than swapping text.
5. Final segment: reveal the answer in GREEN inside a box or with Circumscribe.
6. Prefer simultaneous animations: self.play(FadeIn(a), Write(b))."""

EXAMPLE = r"""{
  "segments": [
    {
      "narration": "Let us solve x squared plus five x plus six equals zero by factoring.",
      "manimCode": "lhs = Text(\"x²\", color=BLUE, font_size=52)\nrest = Text(\" + 5x + 6 = 0\", color=WHITE, font_size=52)\neq = VGroup(lhs, rest).arrange(RIGHT, buff=0.05).move_to(ORIGIN)\nself.play(GrowFromCenter(lhs), run_time=0.9)\nself.play(Write(rest), run_time=1.0)"
    },
    {
      "narration": "We need two numbers that multiply to six and add up to five.",
      "manimCode": "self.play(eq.animate.to_edge(UP).scale(0.7))\nprompt = Text(\"? × ? = 6   and   ? + ? = 5\", font_size=38, color=YELLOW)\nself.play(FadeIn(prompt, shift=UP*0.3))\nself.play(Indicate(prompt, scale_factor=1.1))"
    },
    {
      "narration": "Two and three work, so the roots are x equals negative two or x equals negative three.",
      "manimCode": "sols = Text(\"x = −2   or   x = −3\", color=GREEN, font_size=48)\nself.play(ReplacementTransform(prompt, sols))\nself.play(Circumscribe(sols, color=GREEN))"
    }
  ]
}"""


def build_scene_plan_prompt(question: str, context: Optional[str] = None) -> str:
    """Build the planning prompt for one problem statement.

    `context` is an opaque personalization string from the profile service.
    """
    parts = [
        "You are creating a visually rich Manim animation to explain a maths problem. "
        "Think like 3Blue1Brown: use colour, motion and visual elements to make the maths feel intuitive.",
        f'Problem: "{question}"',
    ]

    if context and context.strip():
        parts.append(
            "Learner context (adapt vocabulary, pacing and examples to this learner):\n"
            f"{context.strip()}"
        )

    parts.extend([
        "Return ONLY a raw JSON object - no markdown, no code fences:\n" + RESPONSE_SCHEMA,
        "=== AVAILABLE MANIM TOOLS ===\n" + MANIM_TOOLBOX,
        "=== VISUAL DESIGN RULES ===\n" + DESIGN_RULES,
        "=== CONSTRAINTS ===\n"
        f"- {MIN_SEGMENTS}-{MAX_SEGMENTS} segments\n"
        f"- Each narration: {NARRATION_MIN_WORDS}-{NARRATION_MAX_WORDS} words\n"
        "- Variables declared in one segment are available in all later segments",
        "=== EXAMPLE ===\n" + EXAMPLE,
    ])
    return "\n\n".join(parts)
