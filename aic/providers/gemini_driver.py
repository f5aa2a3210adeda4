from __future__ import annotations

import logging
import shlex
import subprocess

from ..config import Config
from ..exceptions import GenerationRejected, GenerationUnavailable
from .base import BaseDriver

logger = logging.getLogger(__name__)

_AUTH_HINTS = (
    "auth",
    "login",
    "log in",
    "credential",
    "api key",
    "unauthenticated",
    "permission denied",
)


class GeminiCLIDriver(BaseDriver):
    """Runs the Gemini command line tool with the request on stdin.

    ``-p -`` reads the prompt from stdin, ``-m`` picks the model and
    ``-e ""`` disables extensions so startup stays fast.
    """

    name = "gemini"

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self.command = shlex.split(config.generator_command or "gemini")

    def check_available(self) -> None:
        try:
            subprocess.run(
                [*self.command, "--version"],
                capture_output=True,
                text=True,
                check=True,
                timeout=self.config.request_timeout,
            )
        except FileNotFoundError as exc:
            raise GenerationUnavailable(
                f"'{self.command[0]}' is not installed or not on PATH"
            ) from exc
        except subprocess.CalledProcessError as exc:
            raise GenerationUnavailable(
                f"'{self.command[0]} --version' failed: {(exc.stderr or '').strip()}"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise GenerationUnavailable(
                f"'{self.command[0]} --version' timed out"
            ) from exc

    def build_argv(self) -> list[str]:
        return [*self.command, "-p", "-", "-m", self.config.model, "-e", ""]

    def invoke(self, prompt: str) -> str:
        argv = self.build_argv()
        logger.debug("invoking %s (prompt %d chars)", argv[0], len(prompt))
        try:
            completed = subprocess.run(
                argv,
                input=prompt,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.config.request_timeout,
            )
        except FileNotFoundError as exc:
            raise GenerationUnavailable(
                f"'{self.command[0]}' is not installed or not on PATH"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise GenerationUnavailable(
                f"'{self.command[0]}' did not answer within "
                f"{self.config.request_timeout:g}s"
            ) from exc

        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            if any(hint in stderr.lower() for hint in _AUTH_HINTS):
                raise GenerationRejected(
                    f"Authentication required for '{self.command[0]}': {stderr}"
                )
            raise GenerationRejected(
                f"'{self.command[0]}' exited with status "
                f"{completed.returncode}: {stderr or '<no output>'}"
            )
        return completed.stdout
