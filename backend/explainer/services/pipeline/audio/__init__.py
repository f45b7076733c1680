"""Audio stage - one narration track per segment."""

from .tts_engine import (
    TTSEngine,
    SpeechRequestError,
    silent_duration,
    generate_silent_audio,
    probe_duration,
    pad_audio,
)

__all__ = [
    "TTSEngine",
    "SpeechRequestError",
    "silent_duration",
    "generate_silent_audio",
    "probe_duration",
    "pad_audio",
]
