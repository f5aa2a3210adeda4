"""Hand a draft to the user for editing."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Callable, Mapping, Optional, Protocol

from .exceptions import ConfigError, EditAborted, EditorError

logger = logging.getLogger(__name__)


class EditorBridge(Protocol):
    def edit(self, initial_text: str) -> str:
        """Return the edited message.

        Raises EditAborted when the user left the draft unchanged or emptied it.
        """
        ...


def resolve_editor_command(
    env: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
) -> list[str]:
    """Return the editor argv from $VISUAL / $EDITOR or a platform default."""
    env = os.environ if env is None else env
    platform = platform or sys.platform
    raw = env.get("VISUAL") or env.get("EDITOR")
    if raw and raw.strip():
        return shlex.split(raw, posix=not platform.startswith("win"))
    return ["notepad"] if platform.startswith("win") else ["vi"]


class ExternalEditor:
    """Opens the draft in an external editor that owns the terminal."""

    def __init__(
        self,
        command: Optional[list[str]] = None,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self.command = command or resolve_editor_command()
        self._runner = runner

    def edit(self, initial_text: str) -> str:
        fd, name = tempfile.mkstemp(prefix="aic-edit-", suffix=".txt")
        path = Path(name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(initial_text)
            before = path.stat().st_mtime_ns
            logger.debug("launching editor %s on %s", self.command, path)
            try:
                # stdio is inherited so the editor gets the terminal
                self._runner([*self.command, str(path)], check=False)
            except FileNotFoundError as exc:
                raise EditorError(
                    f"Editor not found: {self.command[0]}. "
                    "Set $EDITOR or use --editor inline."
                ) from exc
            after = path.stat().st_mtime_ns
            content = path.read_text(encoding="utf-8").strip()
        finally:
            path.unlink(missing_ok=True)

        if after <= before:
            raise EditAborted("Editor closed without saving")
        if not content:
            raise EditAborted("Edited message is empty")
        return content


class InlineEditor:
    """Reads a replacement message from a single prompt line."""

    def __init__(
        self,
        prompt: str = "",
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ) -> None:
        self.prompt = prompt
        self._input = input_fn
        self._output = output

    def edit(self, initial_text: str) -> str:
        if self.prompt:
            self._output(self.prompt)
        try:
            answer = self._input("> ").strip()
        except EOFError as exc:
            raise EditAborted("No input") from exc
        if not answer:
            raise EditAborted("Edited message is empty")
        if answer == initial_text.strip():
            raise EditAborted("Message unchanged")
        return answer


def make_editor(
    mode: str,
    *,
    prompt: str = "",
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> EditorBridge:
    if mode == "external":
        return ExternalEditor()
    if mode == "inline":
        return InlineEditor(prompt=prompt, input_fn=input_fn, output=output)
    raise ConfigError(f"Unsupported editor mode: {mode}")
