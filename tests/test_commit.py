import os
import types

import pytest

from aic.commit import CommitFinalizer
from aic.exceptions import GitError
from aic.git import GitRepo

from .conftest import git


def test_message_goes_through_a_file_and_file_is_removed():
    seen = {}

    def commit_from_file(path):
        seen["path"] = path
        with open(path, encoding="utf-8", newline="") as handle:
            seen["content"] = handle.read()

    CommitFinalizer(types.SimpleNamespace(commit_from_file=commit_from_file)).commit(
        'feat: "quoted"\n\nbody'
    )
    assert seen["content"] == 'feat: "quoted"\n\nbody'
    assert os.path.basename(seen["path"]).startswith("aic-msg-")
    assert not os.path.exists(seen["path"])


def test_file_removed_when_commit_fails():
    seen = {}

    def commit_from_file(path):
        seen["path"] = path
        raise GitError("hook rejected")

    with pytest.raises(GitError):
        CommitFinalizer(types.SimpleNamespace(commit_from_file=commit_from_file)).commit(
            "fix: x"
        )
    assert not os.path.exists(seen["path"])


@pytest.mark.integration
def test_hostile_message_commits_byte_for_byte(git_repo):
    message = (
        'feat: handle "quotes" and `backticks` $(whoami) \'single\'\n'
        "\n"
        "- cli.py: escape ; && | > < * ? ~ \\ characters\n"
        "# not a comment to strip\n"
    )
    (git_repo / "x.txt").write_text("x\n")
    repo = GitRepo(str(git_repo))
    repo.stage_all()

    CommitFinalizer(repo).commit(message)

    raw = git(["cat-file", "commit", "HEAD"], git_repo)
    body = raw.split("\n\n", 1)[1]
    assert body == message
