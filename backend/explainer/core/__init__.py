"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - logging.py: Structured logging configuration and utilities
    - exceptions.py: Error taxonomy shared by every pipeline stage
    - process.py: Bounded subprocess execution
    - tools.py: External executable resolution
    - runtime.py: Startup and per-request environment checks
    - auth.py: Bearer-token caller identity

Usage:
    from explainer.core import get_logger, resolve_tool, run_command
"""

# Logging
from .logging import (
    setup_logging,
    get_logger,
    set_request_id,
    set_job_id,
    clear_context,
    LogTimer,
)

# Errors
from .exceptions import (
    ExplainerError,
    ConfigurationError,
    MissingToolsError,
    PipelineError,
    PlanningError,
    PlanParseError,
    EmptyPlanError,
    MediaToolError,
    RenderError,
    RenderTimeoutError,
    ArtifactNotFoundError,
)

# Subprocess execution
from .process import (
    CommandResult,
    CommandError,
    CommandFailedError,
    CommandTimeoutError,
    run_command,
)

# Tool resolution
from .tools import (
    SEARCH_PATHS,
    REQUIRED_TOOLS,
    resolve_tool,
    is_tool_available,
    missing_tools,
)

# Runtime guards
from .runtime import (
    parse_bool_env,
    assert_tools_available,
    assert_directory_writable,
    run_startup_runtime_checks,
)

# Auth
from .auth import (
    LOCAL_USER_ID,
    is_auth_enabled,
    is_public_path,
    issue_auth_token,
    verify_auth_token,
    authenticate_request,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "set_request_id",
    "set_job_id",
    "clear_context",
    "LogTimer",
    # Errors
    "ExplainerError",
    "ConfigurationError",
    "MissingToolsError",
    "PipelineError",
    "PlanningError",
    "PlanParseError",
    "EmptyPlanError",
    "MediaToolError",
    "RenderError",
    "RenderTimeoutError",
    "ArtifactNotFoundError",
    # Process
    "CommandResult",
    "CommandError",
    "CommandFailedError",
    "CommandTimeoutError",
    "run_command",
    # Tools
    "SEARCH_PATHS",
    "REQUIRED_TOOLS",
    "resolve_tool",
    "is_tool_available",
    "missing_tools",
    # Runtime
    "parse_bool_env",
    "assert_tools_available",
    "assert_directory_writable",
    "run_startup_runtime_checks",
    # Auth
    "LOCAL_USER_ID",
    "is_auth_enabled",
    "is_public_path",
    "issue_auth_token",
    "verify_auth_token",
    "authenticate_request",
]
