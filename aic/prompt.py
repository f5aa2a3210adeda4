"""Diff budgeting and generation-request assembly.

Everything here is pure: the same inputs always produce byte-identical
output, which keeps regeneration reproducible apart from the generator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .exceptions import ConfigError

TRUNCATION_MARKER = "\n...(diff truncated for performance)"
NO_INTENT_PLACEHOLDER = "None (no context provided)"
NO_HISTORY_PLACEHOLDER = "(no previous commits)"

DEFAULT_CHANGE_TYPES = ("feat", "fix", "refactor", "style", "docs", "chore")


def budget_diff(diff: str, max_chars: int) -> str:
    """Cap ``diff`` at ``max_chars`` characters.

    Longer diffs are cut hard at ``max_chars`` (not at a line boundary) and
    followed by ``TRUNCATION_MARKER`` so the cut is visible to the reader.
    """
    if max_chars < 0:
        raise ConfigError("diff budget must be zero or positive")
    if len(diff) <= max_chars:
        return diff
    return diff[:max_chars] + TRUNCATION_MARKER


@dataclass(frozen=True)
class FormatRules:
    """Output rules handed to the generator."""

    title_max_chars: int = 50
    change_types: Sequence[str] = DEFAULT_CHANGE_TYPES
    body_example: str = ""

    def render(self) -> str:
        types = ", ".join(self.change_types)
        lines = [
            (
                f"1. TITLE: A concise summary (max {self.title_max_chars} chars), "
                f"starting with a type ({types})."
            ),
            "2. BODY: Detailed explanation of changes.",
            (
                "   - For each changed file, use ONLY the FILENAME "
                "(exclude directory paths) followed by a one-line description "
                "of what changed."
            ),
        ]
        if self.body_example:
            lines.append(f'   - Example: "{self.body_example}"')
        lines += [
            "3. Use a blank line between TITLE and BODY.",
            (
                "4. Output ONLY the commit message without any markdown "
                "backticks or quotes."
            ),
        ]
        return "\n".join(lines)


def render_intent(intent: Optional[str]) -> str:
    if intent is None:
        return NO_INTENT_PLACEHOLDER
    if not intent.strip():
        # Present but blank: keep it distinguishable from "not provided".
        return f'"{intent}"'
    return intent


def build_prompt(
    language: str,
    history: Sequence[str],
    intent: Optional[str],
    diff: str,
    rules: FormatRules,
) -> str:
    """Compose the generation request text.

    Sections appear in a fixed order: language directive, style history,
    user context, diff, format rules.
    """
    history_text = "\n".join(history) if history else NO_HISTORY_PLACEHOLDER
    parts = [
        f"Generate a detailed git commit message in {language} based on the diff.",
        "Match the project style from recent history if possible.",
        "",
        "[STYLE HISTORY]",
        history_text,
        "",
        "[USER CONTEXT]",
        render_intent(intent),
        "",
        "[DIFF]",
        diff,
        "",
        "[FORMAT]",
        rules.render(),
    ]
    return "\n".join(parts)
