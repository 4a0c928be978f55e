#!/usr/bin/env python3
"""Print the relay configuration (from .env / environment) with credentials masked. Run from repo root: python scripts/print_config.py"""
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from relay.core.config import Settings
from relay.transcribe.assemblyai import PROVIDER_TIMEOUT_SECONDS
from relay.transcribe.uploads import ACCEPTED_AUDIO_FORMATS


def _mask(secret: str) -> str:
    """Show only whether a credential is set, plus its last 4 characters."""
    if not secret:
        return "(not set)"
    return "****" + secret[-4:]


def main():
    """Print provider credentials (masked), provider URL, chat model, prompt version and upload limits."""
    settings = Settings.from_env()
    print("Relay configuration")
    print("-------------------")
    print(f"  ASSEMBLYAI_API_KEY    = {_mask(settings.assemblyai_api_key)}")
    print(f"  OPENAI_API_KEY        = {_mask(settings.openai_api_key)}")
    print(f"  ASSEMBLYAI_BASE_URL   = {settings.assemblyai_base_url}")
    print(f"  CHAT_MODEL            = {settings.chat_model}")
    print(f"  PROMPT_VERSION        = {settings.prompt_version}")
    print(f"  UPLOAD_DIR            = {settings.upload_dir} (staged uploads, deleted after forwarding)")
    print(f"  Accepted formats      = {', '.join(ACCEPTED_AUDIO_FORMATS)}")
    print(f"  Provider timeout      = {PROVIDER_TIMEOUT_SECONDS} s (single attempt, no retry)")
    print("")
    print("Env: see .env.example")


if __name__ == "__main__":
    main()
