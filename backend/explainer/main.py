"""
Manim Explainer API
FastAPI application that turns a short problem statement into a narrated
Manim explainer video.

This is the main entry point that wires together routes and services.
"""

import asyncio
import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
    get_job_root,
    get_planner_api_key,
    get_tts_api_key,
)
from .routes import generation_router
from .core import (
    REQUIRED_TOOLS,
    setup_logging,
    get_logger,
    set_request_id,
    clear_context,
    parse_bool_env,
    run_startup_runtime_checks,
    authenticate_request,
    is_auth_enabled,
    is_public_path,
    missing_tools,
    resolve_tool,
)

# Initialize logging
log_level = os.getenv("LOG_LEVEL", "INFO")
log_file = os.getenv("LOG_FILE")
use_json_logs = os.getenv("JSON_LOGS", "false").lower() == "true"

setup_logging(
    level=log_level,
    log_file=Path(log_file) if log_file else None,
    use_json=use_json_logs,
)

logger = get_logger(__name__, service="api")
logger.info("Starting Manim Explainer API", extra={
    "log_level": log_level,
    "json_logs": use_json_logs,
    "auth_enabled": is_auth_enabled(),
})


@asynccontextmanager
async def lifespan(_app: FastAPI):
    strict_runtime = parse_bool_env(
        os.getenv("STARTUP_STRICT_RUNTIME_CHECKS"),
        default=os.getenv("ENV", "").lower() == "production",
    )
    runtime_report = await asyncio.to_thread(
        run_startup_runtime_checks,
        job_root=get_job_root(),
        strict_tools=strict_runtime,
    )
    _app.state.runtime_report = runtime_report
    if runtime_report["ok"]:
        logger.info("Startup runtime checks complete", extra={"runtime_report": runtime_report})
    else:
        logger.warning("Startup runtime checks found missing tools", extra={"runtime_report": runtime_report})
    yield


# Create FastAPI app
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_correlation(request: Request, call_next):
    """Add correlation ID, authenticate the caller, and attach security headers."""
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    set_request_id(request_id)
    path = request.url.path

    logger.info(f"{request.method} {path}", extra={
        "method": request.method,
        "path": path,
        "client": request.client.host if request.client else "unknown",
    })

    try:
        if request.method != "OPTIONS" and not is_public_path(path):
            user_id = authenticate_request(request)
            if user_id is None:
                return JSONResponse(status_code=401, content={"error": "Authentication required"})
            request.state.user_id = user_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("X-Frame-Options", "DENY")

        logger.info(f"Response: {response.status_code}", extra={
            "status_code": response.status_code,
            "method": request.method,
            "path": path,
        })

        return response
    finally:
        clear_context()


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(_request: Request, exc: Exception):
    logger.error("Unhandled error", extra={"error": str(exc)}, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(generation_router)


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "message": "Manim Explainer API - Narrated videos from problem statements",
        "version": API_VERSION,
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint for container orchestration.

    Reports external tools (manim, ffmpeg, ffprobe) and service credentials.
    Returns 200 if every required tool resolves, 503 otherwise. A missing
    speech key is not a failure: narration falls back to silence.
    """
    missing = await asyncio.to_thread(missing_tools)
    checks = {
        "tools": {
            name: {"available": name not in missing, "path": resolve_tool(name)}
            for name in REQUIRED_TOOLS
        },
        "planner_api_key": {"configured": bool(get_planner_api_key())},
        "tts_api_key": {"configured": bool(get_tts_api_key())},
    }

    runtime_report = getattr(app.state, "runtime_report", None)
    if runtime_report is not None:
        checks["runtime_startup"] = runtime_report

    for name in missing:
        logger.warning(f"Health check: {name} not found (REQUIRED)")

    body = {"status": "unhealthy" if missing else "healthy", "checks": checks}
    if missing:
        return JSONResponse(status_code=503, content=body)
    return body


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
