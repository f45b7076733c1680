import json
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from explainer.core import (
    CommandFailedError,
    ConfigurationError,
    MissingToolsError,
    RenderError,
    issue_auth_token,
)
from explainer.main import app
from explainer.services.infrastructure.llm import LLMResponse, ProviderType
from explainer.services.infrastructure.storage import RenderJob
from explainer.services.pipeline.audio import TTSEngine
from explainer.services.pipeline.planning import ScenePlanner
from explainer.services.use_cases import RenderedVideo, VideoGenerationUseCase

client = TestClient(app)


def _use_case(result=None, error=None):
    mock_use_case = AsyncMock()
    if error:
        mock_use_case.execute.side_effect = error
    else:
        mock_use_case.execute.return_value = result
    return mock_use_case


# --- Health & readiness ---
def test_root():
    response = client.get("/")
    assert response.status_code == 200
    assert "version" in response.json()


def test_health_ok():
    with patch("explainer.main.missing_tools", return_value=[]):
        response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert set(data["checks"]["tools"]) == {"ffmpeg", "ffprobe", "manim"}
    assert data["checks"]["planner_api_key"]["configured"] is True
    assert data["checks"]["tts_api_key"]["configured"] is False


def test_health_missing_tool():
    with patch("explainer.main.missing_tools", return_value=["manim"]):
        response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["checks"]["tools"]["manim"]["available"] is False


def test_readiness_ok():
    with patch("explainer.routes.generation.missing_tools", return_value=[]):
        response = client.get("/api/manim/readiness")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "missing": []}


def test_readiness_missing():
    with patch("explainer.routes.generation.missing_tools", return_value=["ffmpeg", "ffprobe"]):
        response = client.get("/api/manim/readiness")

    assert response.status_code == 503
    assert response.json() == {
        "error": "Missing required tools: ffmpeg, ffprobe. Install with: brew install ffmpeg && pip install manim"
    }


# --- Generation ---
def test_generate_requires_question():
    with patch("explainer.routes.generation.VideoGenerationUseCase") as mock_cls:
        response = client.post("/api/manim/generate", json={"question": "   "})

    assert response.status_code == 400
    assert response.json() == {"error": "question is required"}
    mock_cls.assert_not_called()


def test_generate_missing_body_field():
    response = client.post("/api/manim/generate", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "question is required"}


def test_generate_invalid_body():
    response = client.post("/api/manim/generate", json={"question": ["not", "a", "string"]})

    assert response.status_code == 400
    assert "error" in response.json()


def test_generate_missing_tools():
    use_case = _use_case(error=MissingToolsError(["manim"]))
    with patch("explainer.routes.generation.VideoGenerationUseCase", return_value=use_case):
        response = client.post("/api/manim/generate", json={"question": "Solve x+1=2"})

    assert response.status_code == 503
    assert response.json()["error"].startswith("Missing required tools: manim.")


def test_generate_unconfigured_planner():
    use_case = _use_case(error=ConfigurationError("Planning service (gemini) is not configured."))
    with patch("explainer.routes.generation.VideoGenerationUseCase", return_value=use_case):
        response = client.post("/api/manim/generate", json={"question": "Solve x+1=2"})

    assert response.status_code == 503


def test_generate_pipeline_failure():
    use_case = _use_case(error=RenderError("NameError: eq", "from manim import *"))
    with patch("explainer.routes.generation.VideoGenerationUseCase", return_value=use_case):
        response = client.post("/api/manim/generate", json={"question": "Solve x+1=2"})

    assert response.status_code == 500
    error = response.json()["error"]
    assert "NameError: eq" in error
    assert "Generated code:\nfrom manim import *" in error


def test_generate_streams_video_and_cleans_up(tmp_path):
    job = RenderJob.create(tmp_path)
    job.final_path.write_bytes(b"\x00\x00\x00\x18ftypmp42" * 10_000)
    result = RenderedVideo(job=job, final_path=job.final_path, segments=5)
    use_case = _use_case(result=result)

    with patch("explainer.routes.generation.VideoGenerationUseCase", return_value=use_case):
        response = client.post(
            "/api/manim/generate",
            json={"question": "Solve x+1=2", "context": "Grade 7"},
        )

    assert response.status_code == 200
    assert response.headers["content-type"] == "video/mp4"
    assert response.headers["content-disposition"] == 'inline; filename="explanation.mp4"'
    assert len(response.content) == 120_000
    assert not job.path.exists()

    request = use_case.execute.call_args[0][0]
    assert request.question == "Solve x+1=2"
    assert request.context == "Grade 7"


def test_generate_synthesis_failure_reports_diagnostic(tmp_path):
    def failing_ffmpeg(cmd, timeout=None):
        raise CommandFailedError(cmd, 1, stderr="Unknown encoder 'libmp3lame'")

    provider = AsyncMock()
    provider.is_available = lambda: True
    provider.generate.return_value = LLMResponse(
        text=json.dumps({"segments": [
            {"narration": "Subtract one from both sides.", "manimCode": "self.play(Write(Text('x=1')))"},
            {"narration": "So x equals one.", "manimCode": "self.wait(1)"},
        ]}),
        model="gemini-test",
        provider=ProviderType.GEMINI,
    )
    use_case = VideoGenerationUseCase(
        planner=ScenePlanner(provider=provider, model="gemini-test"),
        tts=TTSEngine(api_key=""),
        job_root=tmp_path,
    )

    with patch("explainer.routes.generation.VideoGenerationUseCase", return_value=use_case), \
         patch("explainer.core.runtime.missing_tools", return_value=[]), \
         patch("explainer.services.pipeline.audio.tts_engine.resolve_tool", side_effect=lambda name: name), \
         patch("explainer.services.pipeline.audio.tts_engine.run_command", side_effect=failing_ffmpeg):
        response = client.post("/api/manim/generate", json={"question": "Solve x+1=2"})

    assert response.status_code == 500
    error = response.json()["error"]
    assert error.startswith("Failed to generate silent audio")
    assert "Unknown encoder 'libmp3lame'" in error
    assert list(tmp_path.iterdir()) == []


# --- Middleware ---
def test_request_id_echoed():
    response = client.get("/", headers={"X-Request-ID": "req-abc"})

    assert response.headers["X-Request-ID"] == "req-abc"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_auth_required_when_enabled(monkeypatch):
    monkeypatch.setenv("AUTH_ENABLED", "true")

    response = client.post("/api/manim/generate", json={"question": "Solve x+1=2"})

    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required"}


def test_auth_token_accepted(monkeypatch):
    monkeypatch.setenv("AUTH_ENABLED", "true")
    headers = {"Authorization": f"Bearer {issue_auth_token('alice')}"}

    response = client.post("/api/manim/generate", json={"question": ""}, headers=headers)

    assert response.status_code == 400


def test_public_paths_skip_auth(monkeypatch):
    monkeypatch.setenv("AUTH_ENABLED", "true")

    with patch("explainer.routes.generation.missing_tools", return_value=[]):
        assert client.get("/api/manim/readiness").status_code == 200
