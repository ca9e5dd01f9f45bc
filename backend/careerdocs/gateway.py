"""
Client for the hosted AI gateway (OpenAI-compatible chat completions).
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import httpx

from .config import Settings, get_settings
from .errors import MissingCredential

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayResponse:
    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class GatewayClient:
    """Single-attempt POST to the gateway. Non-2xx replies are returned, not raised."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    async def invoke(self, model: str, messages: List[Dict[str, Any]],
                     modalities: Optional[Sequence[str]] = None) -> GatewayResponse:
        if not self.settings.api_key:
            raise MissingCredential()

        headers = {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }
        payload: Dict[str, Any] = {"model": model, "messages": messages}
        if modalities:
            payload["modalities"] = list(modalities)

        logger.info(f"Calling AI gateway with model {model}")
        async with httpx.AsyncClient(timeout=self.settings.timeout) as client:
            resp = await client.post(self.settings.gateway_url, json=payload, headers=headers)

        try:
            body = resp.json()
        except ValueError:
            body = resp.text
        if not 200 <= resp.status_code < 300:
            logger.error(f"AI Gateway error: {resp.status_code} {resp.text}")
        return GatewayResponse(status_code=resp.status_code, body=body)
