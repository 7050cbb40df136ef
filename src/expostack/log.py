"""Structured terminal logging for expostack commands."""

from __future__ import annotations

import os
import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


LOG_LEVEL_NAMES = ("trace", "debug", "info", "success", "warning", "error")

_LEVEL_BY_NAME = {name: LogLevel[name.upper()] for name in LOG_LEVEL_NAMES}
_STYLE_BY_LEVEL = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.SUCCESS: "green",
    LogLevel.ERROR: "bold red",
}
_DEFAULT_LEVEL = LogLevel.INFO
_HIGHLIGHT_STYLE = "bold cyan"
_configured_level: LogLevel | None = None
_no_color_override: bool | None = None


def _normalize_level(value: str | None) -> LogLevel:
    if not value or not value.strip():
        return _DEFAULT_LEVEL
    return _LEVEL_BY_NAME.get(value.strip().lower(), _DEFAULT_LEVEL)


def configured_level() -> LogLevel:
    global _configured_level
    if _configured_level is None:
        _configured_level = _normalize_level(os.environ.get("EXPOSTACK_LOG_LEVEL"))
    return _configured_level


def set_level(value: str | None) -> None:
    """Set the active log level; unknown names mean ``info``."""
    global _configured_level
    _configured_level = _normalize_level(value)


def set_no_color(value: bool | None) -> None:
    """Force color output off (``True``) or defer to the environment (``None``)."""
    global _no_color_override
    _no_color_override = value


def no_color() -> bool:
    if _no_color_override is not None:
        return _no_color_override
    return bool(os.environ.get("NO_COLOR") or os.environ.get("EXPOSTACK_NO_COLOR"))


def console(*, stderr: bool = False) -> Console:
    return Console(
        file=sys.stderr if stderr else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=no_color(),
    )


def emit(level: LogLevel, message: str, *, style: str | None = None) -> None:
    """Print ``message`` when ``level`` is enabled; errors go to stderr."""
    if level < configured_level():
        return
    text = Text(message, style=style or _STYLE_BY_LEVEL.get(level, ""))
    console(stderr=level >= LogLevel.WARNING).print(text)


def trace(message: str) -> None:
    emit(LogLevel.TRACE, message)


def debug(message: str) -> None:
    emit(LogLevel.DEBUG, message)


def info(message: str) -> None:
    emit(LogLevel.INFO, message)


def highlight(message: str) -> None:
    """Print an informational line that should stand out (URLs, commands)."""
    emit(LogLevel.INFO, message, style=_HIGHLIGHT_STYLE)


def success(message: str) -> None:
    emit(LogLevel.SUCCESS, message)


def error(message: str) -> None:
    emit(LogLevel.ERROR, message)
