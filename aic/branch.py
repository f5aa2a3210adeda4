"""Local vs upstream branch comparison guarding the commit step."""

from __future__ import annotations

import enum
import logging
from typing import Optional

from .exceptions import NoUpstreamError, SafetyBlocked
from .git import GitRepo

logger = logging.getLogger(__name__)


class BranchRelation(enum.Enum):
    NO_UPSTREAM = "no-upstream"
    UP_TO_DATE = "up-to-date"
    LOCAL_AHEAD = "local-ahead"
    REMOTE_AHEAD = "remote-ahead"
    DIVERGED = "diverged"
    DETACHED = "detached"

    @property
    def blocks_commit(self) -> bool:
        return self in _BLOCKING

    def describe(self) -> str:
        return _DESCRIPTIONS[self]


_BLOCKING = frozenset(
    {BranchRelation.REMOTE_AHEAD, BranchRelation.DIVERGED, BranchRelation.DETACHED}
)

_DESCRIPTIONS = {
    BranchRelation.NO_UPSTREAM: "branch has no upstream; committing locally",
    BranchRelation.UP_TO_DATE: "branch is up to date with its upstream",
    BranchRelation.LOCAL_AHEAD: "branch is ahead of its upstream",
    BranchRelation.REMOTE_AHEAD: (
        "upstream has new commits; pull before committing"
    ),
    BranchRelation.DIVERGED: (
        "branch and upstream have diverged; rebase or merge first"
    ),
    BranchRelation.DETACHED: "HEAD is detached; check out a branch first",
}


def classify_branch(
    local: Optional[str],
    upstream: Optional[str],
    merge_base: Optional[str],
    detached: bool = False,
) -> BranchRelation:
    """Classify the relation between the local head and its upstream.

    Exactly one relation is returned for every input combination. An unknown
    merge base with two distinct heads counts as diverged.
    """
    if detached:
        return BranchRelation.DETACHED
    if upstream is None:
        return BranchRelation.NO_UPSTREAM
    if local == upstream:
        return BranchRelation.UP_TO_DATE
    if merge_base is not None and local == merge_base:
        return BranchRelation.REMOTE_AHEAD
    if merge_base is not None and upstream == merge_base:
        return BranchRelation.LOCAL_AHEAD
    return BranchRelation.DIVERGED


class BranchSafetyGuard:
    """Resolves refs through the gateway and vetoes unsafe commits."""

    def __init__(self, repo: GitRepo) -> None:
        self.repo = repo

    def check(self) -> BranchRelation:
        detached = self.repo.current_branch() is None
        if detached:
            relation = BranchRelation.DETACHED
        else:
            try:
                upstream: Optional[str] = self.repo.require_upstream_ref()
            except NoUpstreamError:
                upstream = None
            local = self.repo.local_ref() if upstream is not None else None
            base = (
                self.repo.merge_base(local, upstream)
                if local is not None and upstream is not None
                else None
            )
            relation = classify_branch(local, upstream, base)
        logger.debug("branch relation: %s", relation.value)
        return relation

    def ensure_safe(self) -> BranchRelation:
        """Return the relation, raising SafetyBlocked when it blocks commits."""
        relation = self.check()
        if relation.blocks_commit:
            raise SafetyBlocked(relation, relation.describe())
        return relation
