"""Settings loader.

Settings come from a YAML file (JSON is accepted as well, being a YAML
subset). Every key is optional; the file is checked against
``settings.schema.json`` before any value is used.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator

from .discovery import DEFAULT_PATTERN
from .oracles import DEFAULT_IGNORED_WARNINGS

SCHEMA_PATH = Path(__file__).resolve().with_name("settings.schema.json")
CONFIG_PATH_ENV_VAR = "TAP_VALIDATOR_CONFIG"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    library_path: Path = Path(".")
    pattern: str = DEFAULT_PATTERN
    taps_root: Path = Path("Taps")
    oracle: str = "ruby"
    ruby_path: str = "ruby"
    ignored_warnings: tuple[str, ...] = DEFAULT_IGNORED_WARNINGS
    jobs: int = 1

    def with_overrides(self, **changes: Any) -> Settings:
        """Return a copy with the given non-None values replaced."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> Settings:
        """Create Settings from a schema-valid mapping.

        Relative paths are taken relative to ``base_dir`` (the config file's
        directory) when given.
        """
        defaults = cls()

        def _path(key: str, default: Path) -> Path:
            value = data.get(key)
            if value is None:
                return default
            path = Path(value).expanduser()
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path
            return path

        return cls(
            library_path=_path("library_path", defaults.library_path),
            pattern=data.get("pattern", defaults.pattern),
            taps_root=_path("taps_root", defaults.taps_root),
            oracle=data.get("oracle", defaults.oracle),
            ruby_path=data.get("ruby_path", defaults.ruby_path),
            ignored_warnings=tuple(data.get("ignored_warnings", defaults.ignored_warnings)),
            jobs=data.get("jobs", defaults.jobs),
        )


def _load_schema() -> dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def _format_errors(errors: list) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_config(data: Any) -> None:
    """Raise ConfigError listing every schema violation in ``data``."""
    validator = Draft202012Validator(_load_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        raise ConfigError("Invalid configuration:\n" + _format_errors(errors))


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. TAP_VALIDATOR_CONFIG environment variable
    3. None (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Optional path to the config file. If not provided, uses the
            TAP_VALIDATOR_CONFIG env var or falls back to built-in defaults.

    Returns:
        A Settings object.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return Settings()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    validate_config(data)
    return Settings.from_dict(data, base_dir=config_path.parent)
