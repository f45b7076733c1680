"""
Tests for explainer.config
"""

import tempfile
from pathlib import Path

from explainer import config


class TestEnvironmentSettings:
    def test_job_root_default(self, monkeypatch):
        monkeypatch.delenv("JOB_TEMP_DIR", raising=False)

        assert config.get_job_root() == Path(tempfile.gettempdir())

    def test_job_root_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("JOB_TEMP_DIR", str(tmp_path))

        assert config.get_job_root() == tmp_path

    def test_planner_defaults(self, monkeypatch):
        monkeypatch.delenv("PLANNER_MODEL", raising=False)
        monkeypatch.setenv("GEMINI_API_KEY", "  ")

        assert config.get_planner_model() == "gemini-2.5-flash"
        assert config.get_planner_api_key() is None
        assert config.PLANNER_MAX_TOKENS == 3000

    def test_tts_defaults(self, monkeypatch):
        monkeypatch.delenv("TTS_TIMEOUT_SECONDS", raising=False)

        assert config.get_tts_api_key() is None
        assert config.get_tts_voice_id() == "9BWtsMINqrJLrRacOk9x"
        assert config.get_tts_timeout() == 60.0

    def test_tts_overrides(self, monkeypatch):
        monkeypatch.setenv("ELEVENLABS_VOICE_ID", "voice-x")
        monkeypatch.setenv("TTS_TIMEOUT_SECONDS", "not-a-number")

        assert config.get_tts_voice_id() == "voice-x"
        assert config.get_tts_timeout() == 60.0


class TestPipelineConstants:
    def test_values(self):
        assert (config.MIN_SEGMENTS, config.MAX_SEGMENTS) == (5, 7)
        assert config.DEFAULT_SEGMENT_DURATION == 6.0
        assert config.MIN_SEGMENT_DURATION == 4.0
        assert config.MIN_AUDIO_DURATION == 3.0
        assert config.SCENE_CLASS_NAME == "MathScene"
        assert config.DELIVERY_CHUNK_SIZE == 64 * 1024
