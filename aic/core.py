"""Core workflow logic for aic."""

from __future__ import annotations

import enum
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from .branch import BranchRelation, BranchSafetyGuard
from .commit import CommitFinalizer
from .config import Config, get_active_config
from .editor import EditorBridge, make_editor
from .exceptions import (
    EditAborted,
    EditorError,
    GenerationUnavailable,
    NoChangesError,
    PreconditionError,
    SafetyBlocked,
)
from .git import GitRepo
from .llm import GenerationClient
from .locales import ENGLISH, Locale
from .progress import Spinner
from .prompt import FormatRules, budget_diff, build_prompt
from .summary import ChangeSummary, summarize_status

logger = logging.getLogger(__name__)

RESET = "\033[0m"
CYAN = "\033[96m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
MAGENTA = "\033[95m"
WHITE = "\033[97m"
RED = "\033[91m"

RULE = "-" * 44

_ASK = object()


class SessionState(enum.Enum):
    DRAFTING = "drafting"
    MENU_OPEN = "menu-open"
    COMMITTING = "committing"
    EDITING = "editing"
    CANCELLED = "cancelled"
    COMMITTED = "committed"

    @property
    def terminal(self) -> bool:
        return self in (SessionState.CANCELLED, SessionState.COMMITTED)


class MenuChoice(enum.Enum):
    COMMIT = "1"
    REGENERATE = "2"
    EDIT = "3"
    CANCEL = "4"

    @classmethod
    def parse(cls, raw: str) -> Optional["MenuChoice"]:
        try:
            return cls(raw.strip())
        except ValueError:
            return None


@dataclass(frozen=True)
class SessionInputs:
    """Everything a generation request is built from, captured once."""

    language: str
    history: Tuple[str, ...]
    intent: Optional[str]
    diff: str
    rules: FormatRules


@dataclass
class SessionResult:
    state: SessionState
    message: Optional[str] = None
    edited: bool = False
    generation_calls: int = 0
    commit_calls: int = 0


class CommitSession:
    """Interactive draft / menu / commit state machine.

    The loop only ends in ``COMMITTED`` or ``CANCELLED``. A failed
    generation cancels the session and re-raises the error so the caller can
    report it; the menu is never shown without a draft.
    """

    def __init__(
        self,
        inputs: SessionInputs,
        generator: GenerationClient,
        guard: BranchSafetyGuard,
        finalizer: CommitFinalizer,
        editor: EditorBridge,
        locale: Locale = ENGLISH,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        spinner_factory: Callable[[str], Spinner] = Spinner,
    ) -> None:
        self.inputs = inputs
        self.generator = generator
        self.guard = guard
        self.finalizer = finalizer
        self.editor = editor
        self.locale = locale
        self._input = input_fn
        self._output = output
        self._spinner_factory = spinner_factory

        self.state = SessionState.DRAFTING
        self.draft: Optional[str] = None
        self.edited = False
        self.generation_calls = 0
        self.commit_calls = 0

    def build_request(self) -> str:
        i = self.inputs
        return build_prompt(i.language, i.history, i.intent, i.diff, i.rules)

    def run(self) -> SessionResult:
        while not self.state.terminal:
            logger.debug("session state: %s", self.state.value)
            if self.state is SessionState.DRAFTING:
                self._draft()
            elif self.state is SessionState.MENU_OPEN:
                self._menu()
            elif self.state is SessionState.EDITING:
                self._edit()
            elif self.state is SessionState.COMMITTING:
                self._commit()
        return SessionResult(
            state=self.state,
            message=self.draft,
            edited=self.edited,
            generation_calls=self.generation_calls,
            commit_calls=self.commit_calls,
        )

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------
    def _draft(self) -> None:
        request = self.build_request()
        logger.debug("request built (%d chars)", len(request))
        self._output("")
        spinner = self._spinner_factory(self.locale.generating).start()
        self.generation_calls += 1
        try:
            draft = self.generator.generate(request)
        except BaseException:
            # Generation errors and Ctrl-C both end the session
            spinner.fail()
            self.state = SessionState.CANCELLED
            raise
        spinner.update(f"{self.locale.analysis_done} {spinner.elapsed():.2f}s")
        spinner.stop()

        self.draft = draft
        self.edited = False
        self._show_draft()
        self.state = SessionState.MENU_OPEN

    def _menu(self) -> None:
        t = self.locale
        self._output(f"{CYAN}{t.menu_title}{RESET}")
        self._output(f"1) {t.menu_commit}")
        self._output(f"2) {t.menu_regenerate}")
        self._output(f"3) {t.menu_edit}")
        self._output(f"4) {t.menu_cancel}")
        try:
            raw = self._input(t.selection)
        except EOFError:
            raw = MenuChoice.CANCEL.value

        choice = MenuChoice.parse(raw)
        if choice is None:
            self._output(f"{RED}{t.invalid}{RESET}")
        elif choice is MenuChoice.COMMIT:
            self.state = SessionState.COMMITTING
        elif choice is MenuChoice.REGENERATE:
            self._output(f"{YELLOW}\n🔄 {t.regenerating}{RESET}")
            self.state = SessionState.DRAFTING
        elif choice is MenuChoice.EDIT:
            self.state = SessionState.EDITING
        else:
            self._output(f"{RED}{t.cancelled}{RESET}")
            self.state = SessionState.CANCELLED

    def _edit(self) -> None:
        self.state = SessionState.MENU_OPEN
        try:
            edited = self.editor.edit(self.draft or "")
        except EditAborted as exc:
            logger.debug("edit aborted: %s", exc)
            self._output(f"{YELLOW}{self.locale.edit_aborted}{RESET}")
            return
        except EditorError as exc:
            self._output(f"{RED}{self.locale.error} {exc}{RESET}")
            return
        self.draft = edited
        self.edited = True
        self._output(f"{GREEN}{self.locale.edited}{RESET}")
        self._show_draft()

    def _commit(self) -> None:
        # Re-evaluated on every attempt: the remote may move while the menu
        # is open.
        try:
            relation = self.guard.ensure_safe()
        except SafetyBlocked as blocked:
            self._output(
                f"{RED}{self.locale.blocked.format(reason=blocked.relation.describe())}"
                f"{RESET}"
            )
            self.state = SessionState.MENU_OPEN
            return
        if relation is BranchRelation.NO_UPSTREAM:
            self._output(
                f"{CYAN}{self.locale.branch_info.format(reason=relation.describe())}"
                f"{RESET}"
            )

        self.commit_calls += 1
        self.finalizer.commit(self.draft or "")
        done = self.locale.success_edited if self.edited else self.locale.success
        self._output(f"{GREEN}{done}{RESET}")
        self.state = SessionState.COMMITTED

    def _show_draft(self) -> None:
        self._output(f"{WHITE}\n{RULE}{RESET}")
        self._output(f"{GREEN}{self.draft}{RESET}")
        self._output(f"{WHITE}{RULE}{RESET}")


class AicWorkflow:
    """Preconditions, staging and context gathering around a CommitSession."""

    def __init__(
        self,
        config: Optional[Config] = None,
        locale: Locale = ENGLISH,
        repo: Optional[GitRepo] = None,
        generator: Optional[GenerationClient] = None,
        editor: Optional[EditorBridge] = None,
        intent=_ASK,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        spinner_factory: Callable[[str], Spinner] = Spinner,
    ) -> None:
        self._config = config or get_active_config()
        self.locale = locale
        self.git_repo = repo or GitRepo(self._config.repo_path)
        self.generator = generator or GenerationClient(self._config)
        self.editor = editor or make_editor(
            self._config.editor_mode,
            prompt=locale.inline_edit_prompt,
            input_fn=input_fn,
            output=output,
        )
        self.guard = BranchSafetyGuard(self.git_repo)
        self.finalizer = CommitFinalizer(self.git_repo)
        self._intent = intent
        self._input = input_fn
        self._output = output
        self._spinner_factory = spinner_factory
        self.session: Optional[CommitSession] = None

    def check_preconditions(self) -> None:
        """Raise PreconditionError when the generator or repository is missing."""
        try:
            self.generator.check_available()
        except GenerationUnavailable as exc:
            raise PreconditionError(
                self.locale.err_not_installed.format(
                    command=self.generator.command_hint
                )
            ) from exc
        if not self.git_repo.is_inside_repo():
            raise PreconditionError(self.locale.err_not_git)

    def gather(self) -> Tuple[ChangeSummary, str, Sequence[str]]:
        """Stage everything, then read status, diff and history concurrently."""
        self.git_repo.stage_all()
        with ThreadPoolExecutor(max_workers=3) as pool:
            status_future = pool.submit(self.git_repo.status)
            diff_future = pool.submit(
                self.git_repo.staged_diff, self._config.exclude_globs
            )
            history_future = pool.submit(
                self.git_repo.recent_subjects, self._config.history_count
            )
            summary = summarize_status(status_future.result())
            diff = diff_future.result()
            history = history_future.result()
        logger.debug(
            "summary=%s diff=%d chars history=%d subjects",
            summary,
            len(diff),
            len(history),
        )
        return summary, diff, history

    def execute(self) -> SessionResult:
        t = self.locale
        self._output(f"{MAGENTA}{t.starting}{RESET}")

        step = self._spinner_factory(t.checking).start()
        try:
            self.check_preconditions()
            step.update(t.staging)
            summary, diff, history = self.gather()
        except BaseException:
            step.fail()
            raise
        if summary.is_empty:
            step.stop("⚠", YELLOW)
            raise NoChangesError(t.no_changes)
        step.stop()

        self._show_summary(summary)
        relation = self.guard.check()
        if relation.blocks_commit:
            self._output(
                f"{YELLOW}{t.blocked.format(reason=relation.describe())}{RESET}"
            )

        inputs = SessionInputs(
            language=t.prompt_language,
            history=tuple(history),
            intent=self._resolve_intent(),
            diff=budget_diff(diff, self._config.diff_budget),
            rules=FormatRules(body_example=t.prompt_example),
        )
        self.session = CommitSession(
            inputs,
            generator=self.generator,
            guard=self.guard,
            finalizer=self.finalizer,
            editor=self.editor,
            locale=t,
            input_fn=self._input,
            output=self._output,
            spinner_factory=self._spinner_factory,
        )
        return self.session.run()

    def _resolve_intent(self) -> Optional[str]:
        if self._intent is not _ASK:
            return self._intent
        self._output(f"{CYAN}{self.locale.context_prompt}{RESET}")
        try:
            answer = self._input("> ")
        except EOFError:
            return None
        # Pressing Enter skips the question
        return answer.strip() or None

    def _show_summary(self, summary: ChangeSummary) -> None:
        t = self.locale
        self._output(f"{MAGENTA}{t.summary}{RESET}")
        if summary.added:
            self._output(f"  {GREEN}+ {summary.added} {t.files_added}{RESET}")
        if summary.modified:
            self._output(f"  {YELLOW}~ {summary.modified} {t.files_modified}{RESET}")
        if summary.deleted:
            self._output(f"  {RED}- {summary.deleted} {t.files_deleted}{RESET}")
