import itertools
import types

import pytest

from aic.branch import BranchRelation, BranchSafetyGuard, classify_branch
from aic.exceptions import NoUpstreamError, SafetyBlocked

from .conftest import git


def test_detached_wins_over_everything():
    assert classify_branch("a", "b", "c", detached=True) is BranchRelation.DETACHED


def test_no_upstream():
    assert classify_branch("a", None, None) is BranchRelation.NO_UPSTREAM


def test_up_to_date():
    assert classify_branch("a", "a", "a") is BranchRelation.UP_TO_DATE


def test_remote_ahead():
    assert classify_branch("base", "remote", "base") is BranchRelation.REMOTE_AHEAD


def test_local_ahead():
    assert classify_branch("local", "base", "base") is BranchRelation.LOCAL_AHEAD


def test_diverged():
    assert classify_branch("local", "remote", "base") is BranchRelation.DIVERGED


def test_unknown_merge_base_is_diverged():
    assert classify_branch("local", "remote", None) is BranchRelation.DIVERGED


def test_classification_is_total():
    values = [None, "a", "b", "c"]
    for local, upstream, base, detached in itertools.product(
        values, values, values, [False, True]
    ):
        relation = classify_branch(local, upstream, base, detached)
        assert isinstance(relation, BranchRelation)


@pytest.mark.parametrize(
    "relation,blocks",
    [
        (BranchRelation.NO_UPSTREAM, False),
        (BranchRelation.UP_TO_DATE, False),
        (BranchRelation.LOCAL_AHEAD, False),
        (BranchRelation.REMOTE_AHEAD, True),
        (BranchRelation.DIVERGED, True),
        (BranchRelation.DETACHED, True),
    ],
)
def test_blocking_relations(relation, blocks):
    assert relation.blocks_commit is blocks
    assert relation.describe()


def _fake_repo(branch="main", upstream="u", local="l", base="b"):
    def require_upstream_ref():
        if upstream is None:
            raise NoUpstreamError("no upstream")
        return upstream

    return types.SimpleNamespace(
        current_branch=lambda: branch,
        require_upstream_ref=require_upstream_ref,
        local_ref=lambda: local,
        merge_base=lambda a, b: base,
    )


def test_guard_uses_gateway_refs():
    guard = BranchSafetyGuard(_fake_repo(local="b", upstream="u", base="b"))
    assert guard.check() is BranchRelation.REMOTE_AHEAD


def test_guard_detached_head():
    guard = BranchSafetyGuard(_fake_repo(branch=None))
    assert guard.check() is BranchRelation.DETACHED


def test_guard_ensure_safe_raises_for_blocking():
    guard = BranchSafetyGuard(_fake_repo(local="l", upstream="u", base="b"))
    with pytest.raises(SafetyBlocked) as ei:
        guard.ensure_safe()
    assert ei.value.relation is BranchRelation.DIVERGED


def test_guard_ensure_safe_passes_without_upstream():
    guard = BranchSafetyGuard(_fake_repo(upstream=None))
    assert guard.ensure_safe() is BranchRelation.NO_UPSTREAM


@pytest.mark.integration
def test_guard_against_real_repositories(git_repo, tmp_path):
    from aic.git import GitRepo

    guard = BranchSafetyGuard(GitRepo(str(git_repo)))
    assert guard.check() is BranchRelation.NO_UPSTREAM

    remote = tmp_path / "remote.git"
    git(["init", "-q", "--bare", str(remote)], tmp_path)
    git(["remote", "add", "origin", str(remote)], git_repo)
    git(["push", "-q", "-u", "origin", "main"], git_repo)
    assert guard.check() is BranchRelation.UP_TO_DATE

    (git_repo / "a.txt").write_text("a\n")
    git(["add", "a.txt"], git_repo)
    git(["commit", "-q", "-m", "feat: a"], git_repo)
    assert guard.check() is BranchRelation.LOCAL_AHEAD

    # Someone else pushes, so the histories diverge
    other = tmp_path / "other"
    git(["clone", "-q", "-b", "main", str(remote), str(other)], tmp_path)
    git(["config", "user.name", "Other"], other)
    git(["config", "user.email", "other@example.com"], other)
    git(["config", "commit.gpgsign", "false"], other)
    (other / "b.txt").write_text("b\n")
    git(["add", "b.txt"], other)
    git(["commit", "-q", "-m", "feat: b"], other)
    git(["push", "-q", "origin", "HEAD:main"], other)
    git(["fetch", "-q", "origin"], git_repo)
    assert guard.check() is BranchRelation.DIVERGED

    git(["reset", "-q", "--hard", "HEAD~1"], git_repo)
    assert guard.check() is BranchRelation.REMOTE_AHEAD

    git(["checkout", "-q", "--detach"], git_repo)
    assert guard.check() is BranchRelation.DETACHED
