"""Generator integration for aic.

``GenerationClient`` is the one place that talks to the (slow) external
generator. It picks a driver from the configured provider, trims the
answer and refuses blank results. It never retries on its own.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from .config import Config, get_active_config
from .exceptions import ConfigError, GenerationEmpty
from .providers.anthropic_driver import AnthropicDriver
from .providers.base import BaseDriver
from .providers.gemini_driver import GeminiCLIDriver
from .providers.openai_driver import OpenAIDriver

logger = logging.getLogger(__name__)

DRIVERS: dict[str, type[BaseDriver]] = {
    "gemini": GeminiCLIDriver,
    "openai": OpenAIDriver,
    "anthropic": AnthropicDriver,
}


def make_driver(config: Config) -> BaseDriver:
    driver_cls = DRIVERS.get(config.provider)
    if driver_cls is None:
        raise ConfigError(f"Unsupported provider: {config.provider}")
    return driver_cls(config)


class GenerationClient:
    """Provider-aware client turning a request into a draft message."""

    def __init__(
        self,
        config: Optional[Config] = None,
        driver: Optional[BaseDriver] = None,
    ) -> None:
        self.config = config or get_active_config()
        self._driver = driver or make_driver(self.config)

    @property
    def provider(self) -> str:
        return self._driver.name

    @property
    def command_hint(self) -> str:
        """What the user should run or fix when the generator fails."""
        if self.config.provider == "gemini":
            return self.config.generator_command or "gemini"
        return self.config.api_key_env or self.config.provider

    def check_available(self) -> None:
        self._driver.check_available()

    def generate(self, request: str) -> str:
        started = time.monotonic()
        raw = self._driver.invoke(request)
        logger.debug(
            "%s answered in %.2fs (%d chars)",
            self.provider,
            time.monotonic() - started,
            len(raw or ""),
        )
        message = (raw or "").strip()
        if not message:
            raise GenerationEmpty(f"{self.provider} returned an empty message")
        return message
