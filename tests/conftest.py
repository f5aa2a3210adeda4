import os
import shutil
import subprocess
from collections.abc import Generator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def reset_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for key in list(os.environ):
        if key.startswith("AIC_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("VISUAL", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)

    from aic.config import clear_active_config

    clear_active_config()
    yield
    clear_active_config()


def git(args: list[str], cwd: Path) -> str:
    result = subprocess.run(
        ["git"] + args,
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A fresh repository with one commit on branch ``main``."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    git(["init", "-q"], repo)
    git(["symbolic-ref", "HEAD", "refs/heads/main"], repo)
    git(["config", "user.name", "Test"], repo)
    git(["config", "user.email", "test@example.com"], repo)
    git(["config", "commit.gpgsign", "false"], repo)
    (repo / "README.md").write_text("hello\n")
    git(["add", "README.md"], repo)
    git(["commit", "-q", "-m", "chore: init"], repo)
    return repo
