"""Custom exceptions for aic."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .branch import BranchRelation


class AicError(Exception):
    """Base exception for aic."""


class ConfigError(AicError):
    """Invalid or inconsistent configuration."""


class GitError(AicError):
    """Git command failed."""


class NotARepositoryError(GitError):
    """The working directory is not inside a Git work tree."""


class NoUpstreamError(GitError):
    """The current branch has no upstream configured."""


class PreconditionError(AicError):
    """The environment cannot run a commit session at all."""


class NoChangesError(AicError):
    """Nothing is staged after staging the working tree."""


class GenerationError(AicError):
    """Base class for failures of the message generator."""


class GenerationUnavailable(GenerationError):
    """The generator is not installed or cannot be reached."""


class GenerationRejected(GenerationError):
    """The generator ran but reported an error (auth, quota, bad request)."""


class GenerationEmpty(GenerationError):
    """The generator answered with nothing but whitespace."""


class SafetyBlocked(AicError):
    """Committing now would ignore remote work or a detached HEAD."""

    def __init__(self, relation: "BranchRelation", message: str = "") -> None:
        self.relation = relation
        super().__init__(message or f"Commit blocked: branch is {relation.value}")


class EditorError(AicError):
    """The configured editor could not be launched."""


class EditAborted(AicError):
    """The edit produced no usable message; the current draft stays."""
