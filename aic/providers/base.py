from __future__ import annotations

from abc import ABC, abstractmethod

from ..config import Config


class BaseDriver(ABC):
    """Abstract base for one generation backend.

    A driver turns an already rendered request into raw text. It raises
    ``GenerationUnavailable`` when the backend cannot be reached and
    ``GenerationRejected`` when the backend answers with an error. Trimming
    and empty-result detection stay in ``GenerationClient`` so every
    backend behaves the same way.
    """

    name = "base"

    def __init__(self, config: Config) -> None:
        self.config = config

    @abstractmethod
    def check_available(self) -> None:
        """Raise GenerationUnavailable when the backend cannot be used."""
        raise NotImplementedError

    @abstractmethod
    def invoke(self, prompt: str) -> str:
        """Return the backend's raw answer to ``prompt``."""
        raise NotImplementedError
