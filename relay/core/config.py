import os
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator


class Settings(BaseModel):
    """Relay settings: one credential per provider, provider base URL, chat model, prompt version and upload staging directory.
    Built once at startup and passed to create_app; never mutated afterwards."""

    model_config = ConfigDict(frozen=True)

    assemblyai_api_key: str = ""
    openai_api_key: str = ""
    assemblyai_base_url: str = "https://api.assemblyai.com/v2"
    chat_model: str = "gpt-4o-mini"
    prompt_version: str = "v1"
    upload_dir: str = os.path.join("data", "uploads")
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    @field_validator("assemblyai_base_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        """Normalize the base URL so endpoint paths can be appended with a single slash."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v):
        return (v or "INFO").upper()

    @classmethod
    def from_env(cls) -> "Settings":
        """Load .env (if present) and build settings from the process environment."""
        load_dotenv()
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            assemblyai_api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            assemblyai_base_url=os.getenv("ASSEMBLYAI_BASE_URL", "https://api.assemblyai.com/v2"),
            chat_model=os.getenv("CHAT_MODEL", "gpt-4o-mini"),
            prompt_version=os.getenv("PROMPT_VERSION", "v1"),
            upload_dir=os.getenv("UPLOAD_DIR", os.path.join("data", "uploads")),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
