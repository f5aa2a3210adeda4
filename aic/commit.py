"""Committing the chosen message through a temporary message file."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from .git import GitRepo

logger = logging.getLogger(__name__)


class CommitFinalizer:
    """Creates the commit with exactly the given message.

    The message is written to a temporary file and passed to
    ``git commit -F`` so quotes, backticks and newlines never pass through
    an argument list or a shell.
    """

    def __init__(self, repo: GitRepo) -> None:
        self.repo = repo

    def commit(self, message: str) -> None:
        fd, name = tempfile.mkstemp(prefix="aic-msg-", suffix=".txt")
        path = Path(name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(message)
            logger.debug("committing with message file %s", path)
            self.repo.commit_from_file(str(path))
        finally:
            path.unlink(missing_ok=True)
