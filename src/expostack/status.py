"""Start/stop progress indicator for long-running provisioning steps."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.status import Status

from . import log


class StatusIndicator(Protocol):
    """Progress surface used by the provisioning sequence."""

    def start(self, message: str) -> None: ...

    def stop(self, message: str) -> None: ...


class Spinner:
    """Single-slot spinner backed by ``rich.status.Status``.

    Only one message is in progress at a time. ``start`` replaces any pending
    message without resolving it. On consoles that are not terminals the
    spinner degrades to plain start/stop lines.
    """

    def __init__(self, *, console: Console | None = None) -> None:
        self._console = console or log.console()
        self._status: Status | None = None

    @property
    def active(self) -> bool:
        return self._status is not None

    def start(self, message: str) -> None:
        self.abandon()
        if not self._console.is_terminal:
            self._console.print(message, style="dim", highlight=False)
            return
        self._status = self._console.status(message, spinner="dots")
        self._status.start()

    def stop(self, message: str) -> None:
        self.abandon()
        self._console.print(f"✔ {message}", style="green", highlight=False)

    def abandon(self) -> None:
        """Clear the pending indicator without reporting an outcome."""
        if self._status is None:
            return
        self._status.stop()
        self._status = None
