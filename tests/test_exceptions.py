from aic.branch import BranchRelation
from aic.exceptions import (
    AicError,
    ConfigError,
    EditAborted,
    EditorError,
    GenerationEmpty,
    GenerationError,
    GenerationRejected,
    GenerationUnavailable,
    GitError,
    NoChangesError,
    NoUpstreamError,
    NotARepositoryError,
    PreconditionError,
    SafetyBlocked,
)


def test_exceptions_hierarchy_and_str():
    # Given exception classes
    # When instantiating
    g = GitError("git")
    c = ConfigError("cfg")
    p = PreconditionError("pre")

    # Then hierarchy holds
    others = (NoChangesError("none"), GenerationError("gen"), EditAborted("same"))
    for exc in (g, c, p, EditorError("vi"), *others):
        assert isinstance(exc, AicError)
    assert issubclass(NotARepositoryError, GitError)
    assert issubclass(NoUpstreamError, GitError)
    # And messages are retained
    assert "git" in str(g)
    assert "cfg" in str(c)
    assert "pre" in str(p)


def test_generation_failures_share_a_base():
    for cls in (GenerationUnavailable, GenerationRejected, GenerationEmpty):
        assert issubclass(cls, GenerationError)
    assert not issubclass(GenerationRejected, GenerationUnavailable)


def test_safety_blocked_carries_relation():
    exc = SafetyBlocked(BranchRelation.DIVERGED)
    assert exc.relation is BranchRelation.DIVERGED
    assert "diverged" in str(exc)
