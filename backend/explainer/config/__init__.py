"""
Application configuration and settings
"""

import os
import tempfile
from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from .pipeline import (
    SCENE_CLASS_NAME,
    SCENE_SCRIPT_NAME,
    RENDER_QUALITY_FLAG,
    RENDER_TIMEOUT,
    VIDEO_EXTENSION,
    MIN_SEGMENTS,
    MAX_SEGMENTS,
    DEFAULT_SEGMENT_DURATION,
    MIN_SEGMENT_DURATION,
    MIN_AUDIO_DURATION,
    SILENT_WORDS_PER_SECOND,
    AUDIO_CODEC,
    AUDIO_BITRATE,
    DELIVERY_FILENAME,
    DELIVERY_CHUNK_SIZE,
)

# API settings
API_TITLE = "Manim Explainer API"
API_DESCRIPTION = "Turn a short problem statement into a narrated Manim explainer video"
API_VERSION = "1.0.0"

# CORS origins
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]


def get_job_root() -> Path:
    """Directory under which per-request scratch directories are created."""
    raw = os.getenv("JOB_TEMP_DIR", "").strip()
    return Path(raw) if raw else Path(tempfile.gettempdir())


# Planning service (Gemini)
def get_planner_api_key() -> str | None:
    return os.getenv("GEMINI_API_KEY", "").strip() or None


def get_planner_model() -> str:
    return os.getenv("PLANNER_MODEL", "gemini-2.5-flash").strip()


PLANNER_MAX_TOKENS = 3000

# Text-to-speech service (ElevenLabs)
TTS_API_URL = "https://api.elevenlabs.io/v1/text-to-speech"
TTS_MODEL_ID = "eleven_turbo_v2_5"
TTS_VOICE_SETTINGS = {"stability": 0.45, "similarity_boost": 0.75}
DEFAULT_TTS_VOICE_ID = "9BWtsMINqrJLrRacOk9x"


def get_tts_api_key() -> str | None:
    return os.getenv("ELEVENLABS_API_KEY", "").strip() or None


def get_tts_voice_id() -> str:
    return os.getenv("ELEVENLABS_VOICE_ID", "").strip() or DEFAULT_TTS_VOICE_ID


def get_tts_timeout() -> float:
    try:
        return float(os.getenv("TTS_TIMEOUT_SECONDS", "60"))
    except ValueError:
        return 60.0


__all__ = [
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
    "get_job_root",
    "get_planner_api_key",
    "get_planner_model",
    "PLANNER_MAX_TOKENS",
    "TTS_API_URL",
    "TTS_MODEL_ID",
    "TTS_VOICE_SETTINGS",
    "DEFAULT_TTS_VOICE_ID",
    "get_tts_api_key",
    "get_tts_voice_id",
    "get_tts_timeout",
    "SCENE_CLASS_NAME",
    "SCENE_SCRIPT_NAME",
    "RENDER_QUALITY_FLAG",
    "RENDER_TIMEOUT",
    "VIDEO_EXTENSION",
    "MIN_SEGMENTS",
    "MAX_SEGMENTS",
    "DEFAULT_SEGMENT_DURATION",
    "MIN_SEGMENT_DURATION",
    "MIN_AUDIO_DURATION",
    "SILENT_WORDS_PER_SECOND",
    "AUDIO_CODEC",
    "AUDIO_BITRATE",
    "DELIVERY_FILENAME",
    "DELIVERY_CHUNK_SIZE",
]
