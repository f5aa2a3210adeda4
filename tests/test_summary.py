import pytest

from aic.summary import ChangeSummary, summarize_status


def test_empty_status_is_empty_summary():
    summary = summarize_status([])
    assert summary == ChangeSummary(0, 0, 0)
    assert summary.is_empty


def test_blank_lines_are_ignored():
    assert summarize_status(["", "   "]).is_empty


def test_basic_classification():
    lines = [
        "?? new.txt",
        "A  added.py",
        "M  changed.py",
        " M worktree.py",
        "D  gone.py",
    ]
    summary = summarize_status(lines)
    assert summary == ChangeSummary(added=2, modified=2, deleted=1)
    assert not summary.is_empty


def test_multi_marker_codes_count_in_every_bucket():
    # "AM": added to the index, then modified in the work tree
    # "MD": modified in the index, deleted in the work tree
    summary = summarize_status(["AM file.py", "MD other.py"])
    assert summary.added == 1
    assert summary.modified == 2
    assert summary.deleted == 1


def test_bare_codes_are_accepted():
    assert summarize_status(["??", "M ", " D"]) == ChangeSummary(1, 1, 1)


def test_only_the_code_is_examined():
    # Path characters must not leak into classification
    assert summarize_status(["?? MAD.txt"]) == ChangeSummary(1, 0, 0)


def test_rename_counts_nothing():
    assert summarize_status(["R  old.py -> new.py"]).is_empty


def test_summary_is_immutable_and_non_negative():
    summary = ChangeSummary(1, 2, 3)
    with pytest.raises(AttributeError):
        summary.added = 5  # type: ignore[misc]
    with pytest.raises(ValueError):
        ChangeSummary(added=-1)


@pytest.mark.parametrize("line", ["R  old.py -> new.py", "C  a.py -> b.py", "T  link"])
def test_rename_copy_and_type_change_are_not_counted(line):
    # Only ?, A, M and D are summary markers
    assert summarize_status([line]).is_empty
