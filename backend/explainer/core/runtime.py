"""
Runtime environment guards and dependency checks.
"""

import os
from pathlib import Path
from typing import Dict, Iterable

from .exceptions import MissingToolsError
from .tools import REQUIRED_TOOLS, missing_tools


def parse_bool_env(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def assert_tools_available(tools: Iterable[str] = REQUIRED_TOOLS) -> None:
    missing = missing_tools(tools)
    if missing:
        raise MissingToolsError(missing)


def assert_directory_writable(path: Path, *, create: bool = True) -> None:
    if create:
        path.mkdir(parents=True, exist_ok=True)
    if not path.exists() or not path.is_dir():
        raise RuntimeError(f"Required directory is missing: {path}")

    probe = path / f".write_probe_{os.getpid()}.tmp"
    try:
        probe.write_text("ok", encoding="utf-8")
        probe.unlink(missing_ok=True)
    except OSError as exc:
        raise RuntimeError(f"Directory is not writable: {path}") from exc


def run_startup_runtime_checks(*, job_root: Path, strict_tools: bool) -> Dict[str, object]:
    """Check the scratch root and external tools once at startup.

    The scratch root must be writable. Missing tools only abort startup when
    `strict_tools` is set; otherwise they are reported per request.
    """
    assert_directory_writable(job_root)

    missing = missing_tools(REQUIRED_TOOLS)
    report: Dict[str, object] = {
        "job_root": str(job_root),
        "tools": {"required": list(REQUIRED_TOOLS), "missing": missing},
        "ok": not missing,
    }
    if missing and strict_tools:
        raise MissingToolsError(missing)
    return report
