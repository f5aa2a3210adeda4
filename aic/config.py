"""Configuration management for aic."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import ConfigError
from .git import find_git_repo_root

CONFIG_DIR_NAME = ".aic"
CONFIG_FILE_NAME = "config.json"

DEFAULT_MODELS = {
    "gemini": {
        "model": "flash",
        "endpoint": "",
        "api_key_env": "",
    },
    "openai": {
        "model": "gpt-4.1-mini",
        "endpoint": "https://api.openai.com/v1",
        "api_key_env": "OPENAI_API_KEY",
    },
    "anthropic": {
        "model": "claude-3-5-haiku-latest",
        "endpoint": "https://api.anthropic.com",
        "api_key_env": "ANTHROPIC_API_KEY",
    },
}

DEFAULT_EXCLUDE_GLOBS = [
    "*.lock",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "poetry.lock",
    "uv.lock",
    "Cargo.lock",
]

DEFAULT_DIFF_BUDGET = 3000
DEFAULT_HISTORY_COUNT = 3
DEFAULT_REQUEST_TIMEOUT = 120.0

EDITOR_MODES = ("external", "inline")
LANGUAGES = ("en", "ko")


@dataclass
class Config:
    """Runtime configuration for aic."""

    provider: str = "gemini"
    model: str = DEFAULT_MODELS["gemini"]["model"]
    endpoint: str = ""
    api_key_env: str = ""
    generator_command: str = "gemini"
    # None means "ask at startup".
    language: Optional[str] = None
    diff_budget: int = DEFAULT_DIFF_BUDGET
    history_count: int = DEFAULT_HISTORY_COUNT
    exclude_globs: List[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_GLOBS)
    )
    editor_mode: str = "external"
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    repo_path: str = "."

    def resolve_api_key(self) -> Optional[str]:
        """Return the API key from the configured environment variable."""
        if not self.api_key_env:
            return None
        return os.environ.get(self.api_key_env)

    def validate(self) -> None:
        if self.provider not in DEFAULT_MODELS:
            raise ConfigError(
                f"Unsupported provider: {self.provider}. "
                f"Use one of: {', '.join(DEFAULT_MODELS)}"
            )
        if self.language is not None and self.language not in LANGUAGES:
            raise ConfigError(f"Unsupported language: {self.language}")
        if self.editor_mode not in EDITOR_MODES:
            raise ConfigError(
                f"Unsupported editor mode: {self.editor_mode} "
                "(expected 'external' or 'inline')"
            )
        if self.diff_budget < 0:
            raise ConfigError("diff_budget must be zero or positive")
        if self.history_count < 0:
            raise ConfigError("history_count must be zero or positive")
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")

    def to_dict(self) -> Dict[str, Any]:
        """Serialise configuration to a dict for persistence."""
        return asdict(self)


_CONFIG_STATE: Dict[str, Optional[Config]] = {"active": None}


def _ensure_path(path_like: Optional[Path]) -> Path:
    if path_like is None:
        return Path.cwd().resolve(strict=False)
    return Path(path_like).expanduser().resolve(strict=False)


def config_file_path(repo_root: Optional[Path] = None) -> Path:
    return _ensure_path(repo_root) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def save_config(config: Config, repo_root: Optional[Path] = None) -> Path:
    """Persist configuration JSON within the repository."""
    cfg_path = config_file_path(repo_root)
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    # Keep the settings directory out of `git add -A`
    ignore_path = cfg_path.parent / ".gitignore"
    if not ignore_path.exists():
        ignore_path.write_text("*\n")
    data = config.to_dict()
    # The repository location is implied by where the file lives.
    data.pop("repo_path", None)
    cfg_path.write_text(json.dumps(data, indent=2))
    return cfg_path


def load_persisted_config(
    repo_root: Optional[Path] = None,
) -> Optional[Dict[str, Any]]:
    cfg_path = config_file_path(repo_root)
    if not cfg_path.exists():
        return None
    try:
        data = json.loads(cfg_path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid config file {cfg_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file {cfg_path}: expected an object")
    known = set(Config.__dataclass_fields__)
    return {key: value for key, value in data.items() if key in known}


def _as_int(name: str, raw: Any) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _as_float(name: str, raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def _split_globs(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_config(
    *,
    repo_root: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Config:
    """Build configuration from config file, environment and overrides.

    Precedence (lowest to highest): built-in defaults, persisted
    ``.aic/config.json``, ``AIC_*`` environment variables, ``overrides``.
    Overrides with a value of ``None`` are ignored.
    """

    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    explicit_root = overrides.get("repo_path") or repo_root
    if explicit_root is None:
        # Settings live at the top of the repository, not in a subdirectory
        explicit_root = find_git_repo_root()
    repo_root = _ensure_path(explicit_root)
    persisted = load_persisted_config(repo_root) or {}

    provider = (
        overrides.get("provider")
        or os.environ.get("AIC_PROVIDER")
        or persisted.get("provider")
        or "gemini"
    )
    if provider not in DEFAULT_MODELS:
        raise ConfigError(
            f"Unsupported provider: {provider}. "
            f"Use one of: {', '.join(DEFAULT_MODELS)}"
        )
    defaults = DEFAULT_MODELS[provider]

    # Only reuse persisted provider-specific values for the same provider.
    same_provider = persisted.get("provider", provider) == provider

    def _provider_value(key: str, env_name: str) -> str:
        if key in overrides:
            return str(overrides[key])
        if os.environ.get(env_name):
            return os.environ[env_name]
        if same_provider and persisted.get(key):
            return str(persisted[key])
        return defaults[key]

    model = _provider_value("model", "AIC_MODEL")
    endpoint = _provider_value("endpoint", "AIC_ENDPOINT")
    api_key_env = _provider_value("api_key_env", "AIC_API_KEY_ENV")

    generator_command = (
        overrides.get("generator_command")
        or os.environ.get("AIC_GENERATOR_COMMAND")
        or persisted.get("generator_command")
        or "gemini"
    )
    language = (
        overrides.get("language")
        or os.environ.get("AIC_LANG")
        or persisted.get("language")
    )
    diff_budget = _as_int(
        "diff_budget",
        overrides.get("diff_budget")
        if "diff_budget" in overrides
        else os.environ.get("AIC_DIFF_BUDGET")
        or persisted.get("diff_budget", DEFAULT_DIFF_BUDGET),
    )
    history_count = _as_int(
        "history_count",
        overrides.get("history_count")
        if "history_count" in overrides
        else os.environ.get("AIC_HISTORY_COUNT")
        or persisted.get("history_count", DEFAULT_HISTORY_COUNT),
    )
    request_timeout = _as_float(
        "request_timeout",
        overrides.get("request_timeout")
        if "request_timeout" in overrides
        else os.environ.get("AIC_REQUEST_TIMEOUT")
        or persisted.get("request_timeout", DEFAULT_REQUEST_TIMEOUT),
    )
    editor_mode = str(
        overrides.get("editor_mode")
        or os.environ.get("AIC_EDITOR_MODE")
        or persisted.get("editor_mode")
        or "external"
    ).lower()

    exclude_env = os.environ.get("AIC_EXCLUDE")
    if "exclude_globs" in overrides:
        exclude_globs = list(overrides["exclude_globs"])
    elif exclude_env is not None:
        exclude_globs = _split_globs(exclude_env)
    else:
        exclude_globs = list(persisted.get("exclude_globs", DEFAULT_EXCLUDE_GLOBS))

    config = Config(
        provider=provider,
        model=model,
        endpoint=endpoint,
        api_key_env=api_key_env,
        generator_command=str(generator_command),
        language=language,
        diff_budget=diff_budget,
        history_count=history_count,
        exclude_globs=exclude_globs,
        editor_mode=editor_mode,
        request_timeout=request_timeout,
        repo_path=str(repo_root),
    )
    config.validate()

    set_active_config(config)
    return config


def set_active_config(config: Config) -> None:
    _CONFIG_STATE["active"] = config


def get_active_config() -> Config:
    active = _CONFIG_STATE.get("active")
    if active is None:
        return load_config()
    return active


def clear_active_config() -> None:
    _CONFIG_STATE["active"] = None


def describe_provider(provider: str) -> str:
    meta = DEFAULT_MODELS.get(provider)
    if not meta:
        return provider
    return f"{provider} (default model: {meta['model']})"
