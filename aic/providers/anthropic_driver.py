from __future__ import annotations

import logging

import httpx

from ..config import Config
from ..exceptions import GenerationRejected, GenerationUnavailable
from .base import BaseDriver

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicDriver(BaseDriver):
    """Driver handling Anthropic API calls (messages endpoint)."""

    name = "anthropic"
    max_tokens = 1024

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self._api_key = config.resolve_api_key()

    def check_available(self) -> None:
        if not self._api_key:
            raise GenerationUnavailable(
                f"Environment variable '{self.config.api_key_env}' is not set or empty."
            )

    def invoke(self, prompt: str) -> str:
        self.check_available()
        url = self.config.endpoint.rstrip("/") + "/v1/messages"
        headers = {
            "x-api-key": self._api_key or "",
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }
        payload = {
            "model": self.config.model,
            "max_tokens": self.max_tokens,
            "messages": [
                {"role": "user", "content": [{"type": "text", "text": prompt}]}
            ],
        }
        logger.debug("messages request model=%s", self.config.model)
        try:
            response = httpx.post(
                url,
                headers=headers,
                json=payload,
                timeout=self.config.request_timeout,
            )
        except httpx.HTTPError as e:
            raise GenerationUnavailable(
                f"Anthropic network error during messages request: {e}"
            ) from e
        status = response.status_code
        if status in (401, 403):
            raise GenerationRejected(
                f"Anthropic rejected the API key in '{self.config.api_key_env}' "
                f"({status}): {response.text}"
            )
        if status >= 400:
            raise GenerationRejected(f"Anthropic error {status}: {response.text}")
        data = response.json()
        texts = [
            chunk.get("text", "")
            for chunk in data.get("content") or []
            if chunk.get("type") == "text"
        ]
        return "\n".join(filter(None, texts))
