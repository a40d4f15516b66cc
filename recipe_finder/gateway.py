"""Client for the hosted chat-completion gateway."""

import logging
from typing import Dict, List, Optional

import httpx

from .config import Settings
from .errors import ConfigurationError, GatewayError

logger = logging.getLogger(__name__)

Message = Dict[str, str]


class ChatClient:
    """Send one chat-completion request and return the generated text.

    The API key is only checked when a request is made, so an app without a
    key still starts and serves the other pages.
    """

    def __init__(
        self,
        api_key: Optional[str],
        url: str,
        model: str,
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChatClient":
        return cls(
            api_key=settings.ai_gateway_api_key,
            url=settings.ai_gateway_url,
            model=settings.ai_gateway_model,
            timeout=settings.ai_gateway_timeout,
        )

    def complete(self, messages: List[Message]) -> str:
        if not self.api_key:
            raise ConfigurationError("AI_GATEWAY_API_KEY is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {"model": self.model, "messages": messages}

        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            response = client.post(self.url, headers=headers, json=payload)

        if not response.is_success:
            logger.error("AI Gateway error: %s %s", response.status_code, response.text)
            raise GatewayError(response.status_code, response.text)

        data = response.json()
        return data["choices"][0]["message"]["content"]
