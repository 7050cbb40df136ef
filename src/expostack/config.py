"""User defaults for expostack, stored as JSON in the config directory."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from . import paths
from .models import (
    DEFAULT_STYLING,
    STYLING_PACKAGE_VALUES,
    CliFlags,
    CommandOptions,
    PackageManager,
)


class ConfigError(RuntimeError):
    """Raised when the user defaults file cannot be read or validated."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"invalid config at {path}: {detail}")


class UserConfig(BaseModel):
    """User-level defaults applied before command-line options.

    Attributes:
        package_manager: Preferred package manager, or ``None`` to detect.
        no_install: Skip dependency installation by default.
        no_git: Skip git initialization by default.
        styling: Default styling package.
        log_level: Default log level name.

    Example:
        >>> UserConfig.model_validate({"package_manager": "PNPM"}).package_manager
        'pnpm'
    """

    model_config = ConfigDict(extra="forbid")

    package_manager: PackageManager | None = None
    no_install: bool = False
    no_git: bool = False
    styling: str = DEFAULT_STYLING
    log_level: str | None = None

    @field_validator("package_manager", "log_level", mode="before")
    @classmethod
    def normalize_optional_strings(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip().lower()
            return normalized or None
        return value

    @field_validator("styling", mode="before")
    @classmethod
    def normalize_styling(cls, value: object) -> object:
        if value is None:
            return DEFAULT_STYLING
        if isinstance(value, str):
            return value.strip().lower() or DEFAULT_STYLING
        return value

    @field_validator("styling")
    @classmethod
    def validate_styling(cls, value: str) -> str:
        if value not in STYLING_PACKAGE_VALUES:
            raise ValueError(f"expected one of: {', '.join(STYLING_PACKAGE_VALUES)}")
        return value


def load_json(path: Path) -> dict | None:
    """Load a JSON file if it exists.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed payload as a dict, or ``None`` if the file does not exist.

    Example:
        >>> from pathlib import Path
        >>> load_json(Path("missing.json")) is None
        True
    """
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def load_user_config(path: Path | None = None) -> UserConfig:
    """Load and validate user defaults.

    Args:
        path: Config path override (defaults to ``paths.user_config_path()``).

    Returns:
        ``UserConfig``; defaults when the file is absent.

    Raises:
        ConfigError: The file cannot be read, is not valid JSON, or fails
            validation.
    """
    config_path = path or paths.user_config_path()
    try:
        payload = load_json(config_path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(config_path, str(exc)) from exc
    if payload is None:
        return UserConfig()
    if not isinstance(payload, dict):
        raise ConfigError(config_path, "expected a JSON object")
    try:
        return UserConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(config_path, str(exc)) from exc


def resolve_flags(
    user_config: UserConfig,
    options: CommandOptions,
    *,
    package_manager: str | None = None,
) -> CliFlags:
    """Merge user defaults with command-line values into effective flags.

    Example:
        >>> flags = resolve_flags(UserConfig(no_git=True), CommandOptions())
        >>> (flags.no_install, flags.no_git, flags.package_manager)
        (False, True, None)
    """
    return CliFlags(
        no_install=user_config.no_install or options.no_install,
        no_git=user_config.no_git or options.no_git,
        package_manager=package_manager or user_config.package_manager,
    )
