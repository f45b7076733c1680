from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def mock_service_env(monkeypatch):
    """Automatically configure service environment variables for all tests"""
    monkeypatch.setenv("GEMINI_API_KEY", "mock-key")
    monkeypatch.setenv("AUTH_ENABLED", "false")
    monkeypatch.delenv("ELEVENLABS_API_KEY", raising=False)
    monkeypatch.delenv("ELEVENLABS_VOICE_ID", raising=False)


@pytest.fixture
def job_root(tmp_path, monkeypatch) -> Path:
    """Isolated scratch root for render jobs"""
    root = tmp_path / "jobs"
    root.mkdir()
    monkeypatch.setenv("JOB_TEMP_DIR", str(root))
    return root
