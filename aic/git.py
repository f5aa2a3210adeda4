"""Git operations for aic."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Iterable, Optional

from .exceptions import GitError, NoUpstreamError, NotARepositoryError

logger = logging.getLogger(__name__)

_NOT_A_REPO_MARKER = "not a git repository"
_NO_UPSTREAM_MARKERS = (
    "no upstream configured",
    "no upstream branch",
    "does not point to a branch",
)


def find_git_repo_root(start_path: Optional[Path] = None) -> Optional[Path]:
    """Return the top-level Git repository directory for ``start_path``.

    Uses ``git rev-parse --show-toplevel`` so worktrees and submodules are
    handled correctly. Returns ``None`` outside a repository or when git is
    not installed.
    """

    path = Path(start_path or Path.cwd()).expanduser().resolve(strict=False)
    if path.is_file():
        path = path.parent

    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=path,
            capture_output=True,
            text=True,
            check=True,
        )
    except (subprocess.CalledProcessError, FileNotFoundError, NotADirectoryError):
        return None
    top = result.stdout.strip()
    return Path(top) if top else None


class GitRepo:
    """Stateless gateway to the Git command line for one working directory."""

    def __init__(self, repo_path: Optional[str] = None) -> None:
        self.repo_path = Path(repo_path or ".")

    def _run_git_command(self, args: list[str], *, strip: bool = True) -> str:
        """Run a Git command and return its output."""
        logger.debug("git %s", " ".join(args))
        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
        except subprocess.CalledProcessError as e:
            cmd = " ".join(args)
            stderr = e.stderr or ""
            lowered = stderr.lower()
            if _NOT_A_REPO_MARKER in lowered:
                raise NotARepositoryError(
                    f"Not a Git repository: {self.repo_path}"
                ) from e
            if any(marker in lowered for marker in _NO_UPSTREAM_MARKERS):
                raise NoUpstreamError(
                    f"No upstream configured for the current branch\n{stderr}"
                ) from e
            raise GitError(f"Git command failed: {cmd}\n{stderr}") from e
        except FileNotFoundError as exc:
            raise GitError("Git command not found. Please install Git.") from exc
        except NotADirectoryError as exc:
            raise NotARepositoryError(
                f"Not a Git repository: {self.repo_path}"
            ) from exc
        return result.stdout.strip() if strip else result.stdout

    def _rev_parse(self, *args: str) -> Optional[str]:
        """Return the resolved object name, or None if it does not resolve."""
        try:
            output = self._run_git_command(
                ["rev-parse", "--verify", "--quiet", *args]
            )
        except NoUpstreamError:
            return None
        except NotARepositoryError:
            raise
        except GitError:
            # --quiet exits 1 without stderr when the ref does not exist
            return None
        return output or None

    def is_inside_repo(self) -> bool:
        """Check whether ``repo_path`` is inside a Git work tree."""
        try:
            output = self._run_git_command(["rev-parse", "--is-inside-work-tree"])
        except NotARepositoryError:
            return False
        return output == "true"

    def stage_all(self) -> None:
        """Stage all changes (including new and deleted files)."""
        self._run_git_command(["add", "-A"])

    def staged_diff(self, exclude_globs: Iterable[str] = ()) -> str:
        """Get the diff of staged changes, minus the excluded paths."""
        args = ["diff", "--cached", "--", "."]
        args += [f":(exclude){glob}" for glob in exclude_globs]
        return self._run_git_command(args, strip=False)

    def recent_subjects(self, count: int) -> list[str]:
        """Return up to ``count`` commit subjects, newest first."""
        if count <= 0:
            return []
        if self.local_ref() is None:
            # Unborn branch: git log would fail with "does not have any commits"
            return []
        output = self._run_git_command(
            ["log", "-n", str(count), "--pretty=format:%s"]
        )
        return output.split("\n") if output else []

    def status(self) -> list[str]:
        """Return raw ``git status --porcelain`` lines."""
        output = self._run_git_command(["status", "--porcelain"], strip=False)
        return [line for line in output.split("\n") if line.strip()]

    def commit_from_file(self, message_file: str) -> None:
        """Create a commit whose message is read verbatim from a file."""
        self._run_git_command(
            ["commit", "--cleanup=verbatim", "-F", str(message_file)]
        )

    def current_branch(self) -> Optional[str]:
        """Return the short branch name, or None when HEAD is detached."""
        try:
            output = self._run_git_command(
                ["symbolic-ref", "--quiet", "--short", "HEAD"]
            )
        except NotARepositoryError:
            raise
        except GitError:
            return None
        return output or None

    def local_ref(self) -> Optional[str]:
        return self._rev_parse("HEAD")

    def upstream_ref(self) -> Optional[str]:
        """Return the upstream head, or None when no upstream is configured."""
        return self._rev_parse("@{upstream}")

    def require_upstream_ref(self) -> str:
        ref = self.upstream_ref()
        if ref is None:
            raise NoUpstreamError("No upstream configured for the current branch")
        return ref

    def merge_base(self, first: str, second: str) -> Optional[str]:
        try:
            output = self._run_git_command(["merge-base", first, second])
        except NotARepositoryError:
            raise
        except GitError:
            # Exit status 1 means the histories share no common ancestor
            return None
        return output or None
