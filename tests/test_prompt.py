import pytest

from aic.exceptions import ConfigError
from aic.prompt import (
    NO_HISTORY_PLACEHOLDER,
    NO_INTENT_PLACEHOLDER,
    TRUNCATION_MARKER,
    FormatRules,
    budget_diff,
    build_prompt,
)


@pytest.mark.parametrize("diff", ["", "short", "x" * 100])
def test_budget_is_identity_within_limit(diff):
    assert budget_diff(diff, 100) == diff


def test_budget_truncates_hard_with_marker():
    diff = "line one\nline two\n" * 50
    out = budget_diff(diff, 25)
    assert out.startswith(diff[:25])
    assert out == diff[:25] + TRUNCATION_MARKER
    assert len(out) == 25 + len(TRUNCATION_MARKER)
    # Marker sits on its own line
    assert out.endswith("\n...(diff truncated for performance)")


def test_budget_zero_keeps_only_marker():
    assert budget_diff("abc", 0) == TRUNCATION_MARKER


def test_budget_rejects_negative():
    with pytest.raises(ConfigError):
        budget_diff("abc", -1)


def _build(intent, history=("feat: add x", "fix: y")):
    return build_prompt(
        "English",
        history,
        intent,
        "diff --git a/x b/x",
        FormatRules(body_example="- x.py: do a thing"),
    )


def test_prompt_is_deterministic():
    assert _build("ship it") == _build("ship it")


def test_absent_and_empty_intent_render_differently():
    absent = _build(None)
    empty = _build("")
    assert absent != empty
    assert NO_INTENT_PLACEHOLDER in absent
    assert NO_INTENT_PLACEHOLDER not in empty
    assert '[USER CONTEXT]\n""\n' in empty


def test_sections_appear_in_fixed_order():
    text = _build("because")
    positions = [
        text.index("Generate a detailed git commit message in English"),
        text.index("[STYLE HISTORY]\nfeat: add x\nfix: y"),
        text.index("[USER CONTEXT]\nbecause"),
        text.index("[DIFF]\ndiff --git a/x b/x"),
        text.index("[FORMAT]"),
    ]
    assert positions == sorted(positions)


def test_empty_history_has_placeholder():
    assert NO_HISTORY_PLACEHOLDER in _build(None, history=())


def test_format_rules_render_title_cap_and_types():
    rules = FormatRules(title_max_chars=42, change_types=("feat", "fix"))
    text = rules.render()
    assert "max 42 chars" in text
    assert "(feat, fix)" in text
    assert "FILENAME" in text
    assert "blank line" in text
    assert "backticks or quotes" in text
    assert "Example" not in text


def test_rules_are_swappable_without_touching_other_sections():
    base = build_prompt("English", (), None, "d", FormatRules())
    other = build_prompt("English", (), None, "d", FormatRules(title_max_chars=72))
    assert base.split("[FORMAT]")[0] == other.split("[FORMAT]")[0]
    assert base != other
