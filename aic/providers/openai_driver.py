from __future__ import annotations

import logging
from typing import Any

import openai

from ..config import Config
from ..exceptions import GenerationRejected, GenerationUnavailable
from .base import BaseDriver

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You write git commit messages. "
    "Follow the requested format exactly and return only the message."
)


class OpenAIDriver(BaseDriver):
    """OpenAI / OpenAI-compatible chat completions."""

    name = "openai"

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self._client: Any = None

    def check_available(self) -> None:
        if not self.config.resolve_api_key():
            raise GenerationUnavailable(
                f"Environment variable '{self.config.api_key_env}' is not set or empty."
            )

    def _get_client(self) -> Any:
        if self._client is None:
            self.check_available()
            # aic never retries on its own; regeneration is the user's call
            self._client = openai.OpenAI(
                base_url=self.config.endpoint or None,
                api_key=self.config.resolve_api_key(),
                timeout=self.config.request_timeout,
                max_retries=0,
            )
        return self._client

    def invoke(self, prompt: str) -> str:
        client = self._get_client()
        logger.debug(
            "chat completion model=%s prompt=%d chars", self.config.model, len(prompt)
        )
        try:
            resp = client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except openai.AuthenticationError as e:
            raise GenerationRejected(
                f"OpenAI rejected the API key in '{self.config.api_key_env}': {e}"
            ) from e
        except (openai.APIConnectionError, openai.APITimeoutError) as e:
            raise GenerationUnavailable(f"OpenAI endpoint unreachable: {e}") from e
        except openai.APIError as e:
            raise GenerationRejected(f"OpenAI error: {e}") from e

        try:
            choice0 = resp.choices[0]
        except (AttributeError, IndexError):
            raise GenerationRejected("Missing choices in OpenAI response") from None
        message = getattr(choice0, "message", None)
        content = getattr(message, "content", "") if message is not None else ""
        if isinstance(content, list):
            fragments = []
            for part in content:
                if isinstance(part, dict):
                    fragments.append(str(part.get("text") or ""))
                else:
                    fragments.append(str(getattr(part, "text", "") or ""))
            content = "".join(fragments)
        return content or ""
