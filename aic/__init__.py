"""aic - AI-drafted, human-approved Git commit messages."""

from importlib import import_module
from typing import TYPE_CHECKING

__version__ = "0.1.0"

# Public API (lazy-exported so `import aic` stays cheap for the CLI)
__all__ = [
    # Config
    "Config", "load_config",
    # Git
    "GitRepo",
    # Building blocks
    "ChangeSummary", "summarize_status",
    "budget_diff", "build_prompt", "FormatRules",
    "GenerationClient",
    "BranchRelation", "BranchSafetyGuard",
    "CommitFinalizer",
    "ExternalEditor", "InlineEditor",
    "Spinner",
    # Core workflow
    "AicWorkflow", "CommitSession", "SessionState", "MenuChoice",
    # Exceptions
    "AicError", "GitError", "GenerationError", "ConfigError", "PreconditionError",
]


def __getattr__(name: str):
    """Lazy attribute loader so submodules are imported on first access."""
    mapping = {
        "Config": ("aic.config", "Config"),
        "load_config": ("aic.config", "load_config"),
        "GitRepo": ("aic.git", "GitRepo"),
        "ChangeSummary": ("aic.summary", "ChangeSummary"),
        "summarize_status": ("aic.summary", "summarize_status"),
        "budget_diff": ("aic.prompt", "budget_diff"),
        "build_prompt": ("aic.prompt", "build_prompt"),
        "FormatRules": ("aic.prompt", "FormatRules"),
        "GenerationClient": ("aic.llm", "GenerationClient"),
        "BranchRelation": ("aic.branch", "BranchRelation"),
        "BranchSafetyGuard": ("aic.branch", "BranchSafetyGuard"),
        "CommitFinalizer": ("aic.commit", "CommitFinalizer"),
        "ExternalEditor": ("aic.editor", "ExternalEditor"),
        "InlineEditor": ("aic.editor", "InlineEditor"),
        "Spinner": ("aic.progress", "Spinner"),
        "AicWorkflow": ("aic.core", "AicWorkflow"),
        "CommitSession": ("aic.core", "CommitSession"),
        "SessionState": ("aic.core", "SessionState"),
        "MenuChoice": ("aic.core", "MenuChoice"),
        "AicError": ("aic.exceptions", "AicError"),
        "GitError": ("aic.exceptions", "GitError"),
        "GenerationError": ("aic.exceptions", "GenerationError"),
        "ConfigError": ("aic.exceptions", "ConfigError"),
        "PreconditionError": ("aic.exceptions", "PreconditionError"),
    }
    if name in mapping:
        mod_name, attr = mapping[name]
        mod = import_module(mod_name)
        value = getattr(mod, attr)
        globals()[name] = value  # cache for future access
        return value
    raise AttributeError(f"module 'aic' has no attribute {name!r}")


if TYPE_CHECKING:
    from .branch import BranchRelation, BranchSafetyGuard
    from .commit import CommitFinalizer
    from .config import Config, load_config
    from .core import AicWorkflow, CommitSession, MenuChoice, SessionState
    from .editor import ExternalEditor, InlineEditor
    from .exceptions import (
        AicError,
        ConfigError,
        GenerationError,
        GitError,
        PreconditionError,
    )
    from .git import GitRepo
    from .llm import GenerationClient
    from .progress import Spinner
    from .prompt import FormatRules, budget_diff, build_prompt
    from .summary import ChangeSummary, summarize_status
