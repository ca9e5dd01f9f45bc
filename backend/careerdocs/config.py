import os
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_TEXT_MODEL = "google/gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "google/gemini-2.5-flash-image-preview"


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    gateway_url: str
    text_model: str
    image_model: str
    timeout: float


def get_settings() -> Settings:
    """Read gateway settings from the environment.

    Called per request so the credential is resolved at call time, never
    cached at import.
    """
    api_key = os.getenv("AI_GATEWAY_API_KEY") or os.getenv("LOVABLE_API_KEY")
    return Settings(
        api_key=api_key or None,
        gateway_url=os.getenv("AI_GATEWAY_URL", DEFAULT_GATEWAY_URL),
        text_model=os.getenv("AI_TEXT_MODEL", DEFAULT_TEXT_MODEL),
        image_model=os.getenv("AI_IMAGE_MODEL", DEFAULT_IMAGE_MODEL),
        timeout=float(os.getenv("AI_GATEWAY_TIMEOUT", "60")),
    )


def cors_origins() -> List[str]:
    origins_env = os.getenv("CORS_ORIGINS")
    origins = [o.strip() for o in (origins_env or "").split(",") if o.strip()]
    # Browser clients call the functions directly, so default to any origin
    return origins or ["*"]
