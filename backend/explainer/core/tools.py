"""
External tool resolution.

Package-manager locations are searched before system locations; anything not
found there is left to the inherited PATH and verified with a `--version`
probe.
"""

import os
import subprocess
from typing import Iterable, List

from .logging import get_logger

logger = get_logger(__name__, component="tools")

SEARCH_PATHS = (
    "/opt/homebrew/bin",  # macOS Apple Silicon
    "/usr/local/bin",     # macOS Intel
    "/usr/bin",
    "/bin",
)

REQUIRED_TOOLS = ("ffmpeg", "ffprobe", "manim")

PROBE_TIMEOUT = 15


def _find_in_search_paths(name: str) -> str | None:
    for directory in SEARCH_PATHS:
        candidate = os.path.join(directory, name)
        if os.path.isfile(candidate):
            return candidate
    return None


def resolve_tool(name: str) -> str:
    """Return an invocable path for `name`, or the bare name for PATH lookup."""
    return _find_in_search_paths(name) or name


def is_tool_available(name: str) -> bool:
    if _find_in_search_paths(name):
        return True
    try:
        subprocess.run(
            [name, "--version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=PROBE_TIMEOUT,
            check=True,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"Tool probe failed for {name}: {e}")
        return False
    return True


def missing_tools(required: Iterable[str] = REQUIRED_TOOLS) -> List[str]:
    """Names from `required` that cannot be invoked, in the given order."""
    return [name for name in required if not is_tool_available(name)]
