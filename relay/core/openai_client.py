"""OpenAI client for summary generation (api_key from the Settings passed at startup)."""
from openai import OpenAI

from relay.core.config import Settings


def build_openai_client(settings: Settings) -> OpenAI:
    """Return an OpenAI client configured with the summarization credential from settings."""
    return OpenAI(api_key=settings.openai_api_key)
