"""Unit tests for the AssemblyAI provider client and job normalization."""
from unittest.mock import MagicMock, patch

import pytest
import requests

from relay.guardrails.errors import ProviderError
from relay.transcribe.assemblyai import AssemblyAIClient
from relay.transcribe.jobs import Job, poll_job, submit_audio

BASE = "https://api.assemblyai.test/v2"


def _resp(status_code=200, body=None):
    r = MagicMock()
    r.status_code = status_code
    r.ok = 200 <= status_code < 300
    r.json.return_value = body if body is not None else {}
    r.text = str(body)
    return r


@pytest.fixture
def audio_file(tmp_path):
    p = tmp_path / "sample.wav"
    p.write_bytes(b"RIFFfake")
    return str(p)


def test_upload_streams_file_with_authorization(audio_file):
    client = AssemblyAIClient("secret", BASE + "/")

    with patch("relay.transcribe.assemblyai.requests.post", return_value=_resp(200, {"upload_url": "https://cdn/u1"})) as post:
        url = client.upload(audio_file)

    assert url == "https://cdn/u1"
    args, kwargs = post.call_args
    assert args[0] == f"{BASE}/upload"
    assert kwargs["headers"] == {"authorization": "secret"}
    assert hasattr(kwargs["data"], "read")


def test_create_transcript_posts_audio_url():
    client = AssemblyAIClient("secret", BASE)

    with patch("relay.transcribe.assemblyai.requests.post", return_value=_resp(200, {"id": "abc123", "status": "queued"})) as post:
        job_id = client.create_transcript("https://cdn/u1")

    assert job_id == "abc123"
    assert post.call_args.args[0] == f"{BASE}/transcript"
    assert post.call_args.kwargs["json"] == {"audio_url": "https://cdn/u1"}


def test_get_transcript_returns_body():
    client = AssemblyAIClient("secret", BASE)
    body = {"id": "abc123", "status": "processing", "text": None}

    with patch("relay.transcribe.assemblyai.requests.get", return_value=_resp(200, body)) as get:
        assert client.get_transcript("abc123") == body

    assert get.call_args.args[0] == f"{BASE}/transcript/abc123"


@pytest.mark.parametrize(
    "transcript_id, path",
    [
        ("abc?x=1", "abc%3Fx%3D1"),
        ("../upload", "..%2Fupload"),
        ("a b#c", "a%20b%23c"),
    ],
)
def test_get_transcript_escapes_id_in_url(transcript_id, path):
    client = AssemblyAIClient("secret", BASE)

    with patch("relay.transcribe.assemblyai.requests.get", return_value=_resp(200, {"status": "queued"})) as get:
        client.get_transcript(transcript_id)

    assert get.call_args.args[0] == f"{BASE}/transcript/{path}"


def test_non_success_status_raises_provider_error(audio_file):
    client = AssemblyAIClient("bad-key", BASE)

    with patch("relay.transcribe.assemblyai.requests.post", return_value=_resp(401, {"error": "Authentication error"})):
        with pytest.raises(ProviderError):
            client.upload(audio_file)


def test_transport_error_raises_provider_error():
    client = AssemblyAIClient("secret", BASE)

    with patch("relay.transcribe.assemblyai.requests.get", side_effect=requests.ConnectionError("down")):
        with pytest.raises(ProviderError):
            client.get_transcript("abc123")


def test_missing_fields_raise_provider_error(audio_file):
    client = AssemblyAIClient("secret", BASE)

    with patch("relay.transcribe.assemblyai.requests.post", return_value=_resp(200, {})):
        with pytest.raises(ProviderError):
            client.upload(audio_file)
        with pytest.raises(ProviderError):
            client.create_transcript("https://cdn/u1")


def test_submit_audio_chains_upload_and_create():
    provider = MagicMock()
    provider.upload.return_value = "https://cdn/u1"
    provider.create_transcript.return_value = "abc123"

    assert submit_audio(provider, "/tmp/x.wav") == "abc123"
    provider.upload.assert_called_once_with("/tmp/x.wav")
    provider.create_transcript.assert_called_once_with("https://cdn/u1")


def test_poll_job_normalizes_states():
    provider = MagicMock()

    provider.get_transcript.return_value = {"status": "processing", "text": None}
    assert poll_job(provider, "j") == Job(job_id="j", status="processing")

    provider.get_transcript.return_value = {"status": "completed", "text": "hi"}
    assert poll_job(provider, "j").transcript_text == "hi"

    provider.get_transcript.return_value = {"status": "completed", "text": ""}
    assert poll_job(provider, "j").transcript_text == "No transcription available."

    provider.get_transcript.return_value = {"status": "error"}
    job = poll_job(provider, "j")
    assert job.status == "error"
    assert job.error == "Transcription failed."
