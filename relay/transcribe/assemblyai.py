"""AssemblyAI v2 REST client: upload audio, create a transcript job, read job state."""
import logging
from typing import Any, Dict
from urllib.parse import quote

import requests

from relay.guardrails.errors import ProviderError

logger = logging.getLogger(__name__)

# Fixed socket timeout for provider calls; there is no retry.
PROVIDER_TIMEOUT_SECONDS = 120


class AssemblyAIClient:
    """Thin wrapper over the three AssemblyAI endpoints the relay needs. Holds only immutable configuration, so one instance is shared across requests."""

    def __init__(self, api_key: str, base_url: str = "https://api.assemblyai.com/v2"):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    def _headers(self) -> Dict[str, str]:
        return {"authorization": self.api_key}

    def _json(self, resp: requests.Response, what: str) -> Dict[str, Any]:
        """Return the JSON body of a successful response; raise ProviderError otherwise."""
        if not resp.ok:
            raise ProviderError(f"{what} failed with HTTP {resp.status_code}: {resp.text[:200]}")
        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderError(f"{what} returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise ProviderError(f"{what} returned an unexpected body")
        return data

    def upload(self, path: str) -> str:
        """Stream the file at path to the upload endpoint and return the provider's upload_url."""
        try:
            with open(path, "rb") as f:
                resp = requests.post(
                    f"{self.base_url}/upload",
                    data=f,
                    headers=self._headers(),
                    timeout=PROVIDER_TIMEOUT_SECONDS,
                )
        except requests.RequestException as e:
            raise ProviderError(f"upload request failed: {e}") from e

        upload_url = self._json(resp, "upload").get("upload_url")
        if not upload_url:
            raise ProviderError("upload response has no upload_url")
        return upload_url

    def create_transcript(self, audio_url: str) -> str:
        """Request transcription of an uploaded audio handle; returns the provider job id."""
        try:
            resp = requests.post(
                f"{self.base_url}/transcript",
                json={"audio_url": audio_url},
                headers=self._headers(),
                timeout=PROVIDER_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            raise ProviderError(f"transcript request failed: {e}") from e

        transcript_id = self._json(resp, "create transcript").get("id")
        if not transcript_id:
            raise ProviderError("transcript response has no id")
        return str(transcript_id)

    def get_transcript(self, transcript_id: str) -> Dict[str, Any]:
        """Fetch the current provider-side state of a transcript job."""
        try:
            resp = requests.get(
                f"{self.base_url}/transcript/{quote(transcript_id, safe='')}",
                headers=self._headers(),
                timeout=PROVIDER_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            raise ProviderError(f"transcript status request failed: {e}") from e

        data = self._json(resp, "get transcript")
        logger.debug("transcript %s status=%s", transcript_id, data.get("status"))
        return data
