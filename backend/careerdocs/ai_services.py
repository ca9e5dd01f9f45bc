"""
AI Services Module for the career-document tools
Builds the prompt, calls the gateway once and normalizes the reply
"""
import logging
from typing import Any, Dict, Optional

from .config import Settings, get_settings
from .errors import InvalidRequest, upstream_error_for
from .gateway import GatewayClient
from .normalizer import normalize
from .prompts import build_photo_instruction, build_prompt, parse_kind, to_messages, to_photo_messages
from .schemas import RequestKind

logger = logging.getLogger(__name__)

PHOTO_MODALITIES = ("image", "text")


class AIService:
    """Orchestrates one request; holds no state between requests"""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[GatewayClient] = None):
        self.settings = settings or get_settings()
        self.client = client or GatewayClient(self.settings)

    async def generate(self, kind: Any, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a text kind (resume, analysis, cover letter) and return ``{"result": ...}``."""
        kind = parse_kind(kind)
        if kind is RequestKind.GENERATE_PHOTO:
            raise InvalidRequest("generate-photo requests must be sent to /generate-photo")
        logger.info(f"Processing {kind.value} request")

        prompt = build_prompt(kind, data or {})
        response = await self.client.invoke(self.settings.text_model, to_messages(prompt))
        if not response.ok:
            raise upstream_error_for(response.status_code, response.body)

        logger.info("AI response received successfully")
        return normalize(kind, response.body)

    async def generate_photo(self, image_base64: Optional[str], style: Optional[str]) -> Dict[str, Any]:
        """Restyle a headshot; echoes the upload when no edited image comes back."""
        if not image_base64:
            raise InvalidRequest("No image provided")
        logger.info(f"Processing photo with style: {style}")

        instruction = build_photo_instruction(style)
        response = await self.client.invoke(
            self.settings.image_model,
            to_photo_messages(instruction, image_base64),
            modalities=PHOTO_MODALITIES,
        )
        if not response.ok:
            raise upstream_error_for(response.status_code, response.body)

        return normalize(RequestKind.GENERATE_PHOTO, response.body, original_image=image_base64)


def get_ai_service() -> AIService:
    """Build a fresh service per request so the credential is read at call time"""
    return AIService()
