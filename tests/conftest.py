import os
import sys
from pathlib import Path
import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# Ensure repo root is on sys.path so `import relay...` works in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from relay.core.config import Settings
from relay.extract.summarizer import Summarizer
from relay.guardrails.errors import ProviderError
from relay.main import create_app


class FakeTranscriber:
    """Stands in for AssemblyAIClient. Returns the queued status payloads in order (the last one repeats) and records what it was sent."""

    def __init__(self, job_id="abc123", statuses=None, fail_on=None):
        self.job_id = job_id
        self.statuses = list(statuses or [{"status": "queued"}])
        self.fail_on = fail_on
        self.uploaded = []  # (path, existed_at_upload_time)
        self.audio_urls = []
        self.polled = []

    def upload(self, path):
        self.uploaded.append((path, os.path.exists(path)))
        if self.fail_on == "upload":
            raise ProviderError("upload failed with HTTP 401")
        return "https://cdn.example.test/upload/1"

    def create_transcript(self, audio_url):
        self.audio_urls.append(audio_url)
        if self.fail_on == "create":
            raise ProviderError("create transcript failed with HTTP 500")
        return self.job_id

    def get_transcript(self, transcript_id):
        self.polled.append(transcript_id)
        if self.fail_on == "get":
            raise ProviderError("get transcript failed with HTTP 500")
        if len(self.statuses) > 1:
            return self.statuses.pop(0)
        return self.statuses[0]


def fake_openai(content="Point one\nPoint two"):
    """MagicMock shaped like the OpenAI client, answering chat.completions.create with content."""
    resp = MagicMock()
    resp.choices = [MagicMock()]
    resp.choices[0].message.content = content
    resp.usage = MagicMock(prompt_tokens=10, completion_tokens=5)
    oc = MagicMock()
    oc.chat.completions.create.return_value = resp
    return oc


@pytest.fixture
def settings(tmp_path):
    return Settings(
        assemblyai_api_key="test-assemblyai",
        openai_api_key="test-openai",
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def transcriber(app):
    fake = FakeTranscriber()
    app.state.transcriber = fake
    return fake


@pytest.fixture
def openai_client(app):
    oc = fake_openai()
    summarizer = Summarizer(app.state.settings)
    summarizer._client = oc
    app.state.summarizer = summarizer
    return oc


@pytest.fixture
def client(app):
    return TestClient(app)


def pretty_json(obj) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False, sort_keys=True)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Attach request/response payloads into pytest-html report.

    In tests, store payloads like:
      item._api_logs = [{"title": "...", "request": ..., "response": ...}, ...]
    """
    outcome = yield
    rep = outcome.get_result()

    if rep.when != "call":
        return

    api_logs = getattr(item, "_api_logs", None)
    if not api_logs:
        return

    # Only attach if pytest-html is installed/enabled
    extras = getattr(rep, "extras", [])

    try:
        from pytest_html import extras as html_extras
    except ImportError:
        rep.extras = extras
        return

    for entry in api_logs:
        title = entry.get("title", "API Call")
        req = entry.get("request", {})
        res = entry.get("response", {})

        html = f"""
        <div style="font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, 'Liberation Mono', monospace;">
          <h4 style="margin:8px 0;">{title}</h4>
          <details style="margin:6px 0;">
            <summary><b>Request</b></summary>
            <pre>{pretty_json(req)}</pre>
          </details>
          <details style="margin:6px 0;">
            <summary><b>Response</b></summary>
            <pre>{pretty_json(res)}</pre>
          </details>
        </div>
        """
        extras.append(html_extras.html(html))

    rep.extras = extras
