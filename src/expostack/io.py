"""Console prompts for interactive generation."""

from __future__ import annotations

import sys

import questionary


def interactive() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def prompt(text: str, default: str | None = None) -> str | None:
    """Prompt the user for a line of text.

    Args:
        text: Prompt label shown to the user.
        default: Value used when the user submits an empty answer.

    Returns:
        The stripped answer, ``default`` for an empty answer, or ``None``
        when the prompt was aborted (Ctrl-C).

    Example:
        What is the name of your project? [my-expo-app]:
    """
    value = questionary.text(text, default=default or "").ask()
    if value is None:
        return None
    value = str(value).strip()
    if value == "" and default is not None:
        return default
    return value
