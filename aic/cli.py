"""Command line entrypoint for aic."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional

from . import __version__
from .config import (
    DEFAULT_MODELS,
    EDITOR_MODES,
    LANGUAGES,
    describe_provider,
    load_config,
    save_config,
)
from .core import AicWorkflow
from .exceptions import (
    AicError,
    ConfigError,
    GenerationEmpty,
    GenerationError,
    GenerationRejected,
    GenerationUnavailable,
    NoChangesError,
    PreconditionError,
)
from .llm import GenerationClient
from .locales import Locale, get_locale

logger = logging.getLogger(__name__)

RESET = "\033[0m"
CYAN = "\033[96m"
YELLOW = "\033[93m"
RED = "\033[91m"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


class CLI:
    """Argument parsing, language selection and exit-code mapping."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ) -> None:
        self._input = input_fn
        self._output = output
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="aic",
            description=(
                "Stage all changes, draft a commit message with an AI "
                "generator and commit it after review."
            ),
        )
        parser.add_argument("--version", action="version", version=__version__)
        parser.add_argument(
            "--lang",
            choices=LANGUAGES,
            help="Message and interface language (asked interactively if unset)",
        )
        parser.add_argument(
            "--provider",
            choices=sorted(DEFAULT_MODELS),
            help="Generation backend (default: gemini)",
        )
        parser.add_argument("--model", help="Model name passed to the backend")
        parser.add_argument("--endpoint", help="API endpoint for HTTP backends")
        parser.add_argument(
            "--api-key-env",
            help="Environment variable holding the API key for HTTP backends",
        )
        parser.add_argument(
            "--max-diff-chars",
            type=int,
            help="Character budget for the diff sent to the generator",
        )
        parser.add_argument(
            "--history",
            type=int,
            help="Number of recent commit subjects used as style samples",
        )
        parser.add_argument(
            "--editor",
            choices=EDITOR_MODES,
            help="Edit drafts in $EDITOR (external) or on the prompt (inline)",
        )
        parser.add_argument(
            "--context",
            help="Intent for this commit; skips the interactive question",
        )
        parser.add_argument("--repo-path", help="Repository to commit in")
        parser.add_argument(
            "--save",
            action="store_true",
            help="Persist the effective settings to .aic/config.json",
        )
        parser.add_argument(
            "--debug", action="store_true", help="Log internals to stderr"
        )
        return parser

    def run(self, args: Optional[list[str]] = None) -> int:
        try:
            parsed = self.parser.parse_args(args)
        except SystemExit as exc:
            # argparse exits for --help/--version (0) and usage errors (2)
            return int(exc.code or 0)

        logging.basicConfig(
            level=logging.DEBUG if parsed.debug else logging.WARNING,
            format="DEBUG %(name)s: %(message)s" if parsed.debug else "%(message)s",
            stream=sys.stderr,
        )

        try:
            config = load_config(
                overrides={
                    "language": parsed.lang,
                    "provider": parsed.provider,
                    "model": parsed.model,
                    "endpoint": parsed.endpoint,
                    "api_key_env": parsed.api_key_env,
                    "diff_budget": parsed.max_diff_chars,
                    "history_count": parsed.history,
                    "editor_mode": parsed.editor,
                    "repo_path": parsed.repo_path,
                }
            )
        except ConfigError as exc:
            self._output(f"{RED}{exc}{RESET}")
            return EXIT_USAGE
        logger.debug(
            "provider %s, model %s, repo %s",
            describe_provider(config.provider),
            config.model,
            config.repo_path,
        )

        try:
            language = config.language or self._select_language()
        except EOFError:
            return EXIT_USAGE
        locale = get_locale(language)

        if parsed.save:
            config.language = language
            path = save_config(config, config.repo_path)
            self._output(f"{CYAN}Saved settings to {path}{RESET}")

        try:
            generator = GenerationClient(config)
        except ConfigError as exc:
            self._output(f"{RED}{exc}{RESET}")
            return EXIT_USAGE

        try:
            workflow_kwargs = {
                "config": config,
                "locale": locale,
                "generator": generator,
                "input_fn": self._input,
                "output": self._output,
            }
            if parsed.context is not None:
                workflow_kwargs["intent"] = parsed.context
            workflow = AicWorkflow(**workflow_kwargs)
            workflow.execute()
        except NoChangesError:
            self._output(f"{YELLOW}{locale.no_changes}{RESET}")
            return EXIT_OK
        except PreconditionError as exc:
            self._output(f"{RED}{exc}{RESET}")
            return EXIT_FAILURE
        except GenerationError as exc:
            self._report_generation_error(exc, locale, generator)
            return EXIT_FAILURE
        except ConfigError as exc:
            self._output(f"{RED}{exc}{RESET}")
            return EXIT_USAGE
        except AicError as exc:
            self._output(f"{RED}{locale.error} {exc}{RESET}")
            return EXIT_FAILURE
        except KeyboardInterrupt:
            self._output(f"{RED}{locale.cancelled}{RESET}")
            return EXIT_INTERRUPTED
        return EXIT_OK

    def _select_language(self) -> str:
        while True:
            self._output(f"{CYAN}\n🌐 Select Language / 언어 선택{RESET}")
            self._output("1) English")
            self._output("2) 한국어")
            choice = self._input("Selection [1-2] > ").strip()
            if choice == "1":
                return "en"
            if choice == "2":
                return "ko"
            self._output(
                f"{RED}Invalid selection. Please choose 1 or 2. / "
                f"잘못된 선택입니다. 1 또는 2를 선택해주세요.{RESET}"
            )

    def _report_generation_error(
        self, exc: GenerationError, locale: Locale, generator: GenerationClient
    ) -> None:
        hint = generator.command_hint
        if isinstance(exc, GenerationRejected):
            self._output(
                f"{RED}\n{locale.err_not_authenticated.format(command=hint)}{RESET}"
            )
        elif isinstance(exc, GenerationUnavailable):
            self._output(f"{RED}\n{locale.err_not_installed.format(command=hint)}{RESET}")
        elif isinstance(exc, GenerationEmpty):
            self._output(f"{RED}\n{locale.err_generation_empty}{RESET}")
        self._output(f"{RED}{locale.error} {exc}{RESET}")


def main(argv: Optional[list[str]] = None) -> int:
    return CLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
