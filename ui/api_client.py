import os

import requests

API_BASE = os.getenv("API_BASE", "http://localhost:8000")


class RelayClient:
    """HTTP calls from the page to the relay: submit, poll, summarize. One request per user action."""

    def __init__(self, base_url: str = API_BASE, timeout: int = 120):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def submit_audio(self, filename: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        """POST the audio file as multipart field 'audio'; returns the job id."""
        resp = requests.post(
            f"{self.base_url}/transcribe",
            files={"audio": (filename, data, content_type)},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()["jobId"]

    def poll(self, job_id: str) -> dict:
        """GET the job status. The relay's 500 {"status": "error"} body is returned as-is rather than raised."""
        resp = requests.get(f"{self.base_url}/transcription/{job_id}", timeout=self.timeout)
        if resp.status_code == 500 and resp.headers.get("content-type", "").startswith("application/json"):
            body = resp.json()
            if body.get("status") == "error":
                return body
        resp.raise_for_status()
        return resp.json()

    def summarize(self, text: str) -> str:
        resp = requests.post(f"{self.base_url}/summarize", json={"text": text}, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json().get("summary", "")
