"""
Versioned prompt loader: reads prompts from relay/prompts/{version}/{component}.yaml.
The version comes from Settings.prompt_version (default v1).
"""
from pathlib import Path

import yaml

# Base path: relay/prompts/ (next to this file)
_PROMPTS_DIR = Path(__file__).resolve().parent


def load_prompts(component: str, version: str = "v1") -> dict[str, str]:
    """Load prompt templates for a component. Returns dict with keys "system", "user" (either optional); values may contain placeholders like <<TRANSCRIPT>>."""
    path = _PROMPTS_DIR / version / f"{component}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Prompt file not found: {path}")

    with path.open() as f:
        data = yaml.safe_load(f) or {}

    out: dict[str, str] = {}
    for key in ("system", "user"):
        val = data.get(key)
        if val is not None:
            out[key] = val.strip() if isinstance(val, str) else str(val).strip()
    return out


def get_system_prompt(component: str, version: str = "v1") -> str:
    """Load and return the 'system' prompt template for the given component. Raises ValueError if the component has no system prompt in the specified version."""
    prompts = load_prompts(component, version=version)
    if "system" not in prompts:
        raise ValueError(f"Component {component} has no 'system' prompt in version {version}")
    return prompts["system"]


def get_user_prompt(component: str, version: str = "v1") -> str:
    """Load and return the 'user' prompt template for the given component. Raises ValueError if the component has no user prompt in the specified version."""
    prompts = load_prompts(component, version=version)
    if "user" not in prompts:
        raise ValueError(f"Component {component} has no 'user' prompt in version {version}")
    return prompts["user"]
