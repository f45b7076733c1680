"""Animation stage - scene script assembly and Manim rendering."""

from .renderer import PARTIAL_MOVIE_DIR, build_render_cmd, find_rendered_video, render_scene
from .script_builder import SCRIPT_HEADER, build_scene_script, indent_code

__all__ = [
    "PARTIAL_MOVIE_DIR",
    "build_render_cmd",
    "find_rendered_video",
    "render_scene",
    "SCRIPT_HEADER",
    "build_scene_script",
    "indent_code",
]
