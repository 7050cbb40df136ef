"""Service failure contracts.

Services return typed outcomes on success and raise ServiceFailure on expected
domain/policy/runtime failures. Programmer bugs raise normal exceptions.
"""

from __future__ import annotations

from typing import Literal

ServiceFailureCode = Literal[
    "dependency_missing",
    "external_command_failed",
]


class ServiceFailure(Exception):
    """Expected service failure: a missing or failing external command.

    Raised by services instead of returning a failure value. Use ``raise
    ServiceFailure(...) from exc`` to chain a causing exception; it is
    available as ``__cause__``. Callers catch ServiceFailure and handle per
    their interface (the CLI logs the message and exits non-zero).
    """

    def __init__(
        self,
        code: ServiceFailureCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.recovery_hint = recovery_hint


class DependencyMissingError(ServiceFailure):
    """Required executable is missing or unavailable."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("dependency_missing", message, recovery_hint=recovery_hint)


class ExternalCommandFailedError(ServiceFailure):
    """External command (package manager, git, prettier) failed."""

    def __init__(
        self,
        message: str,
        *,
        argv: tuple[str, ...] = (),
        returncode: int | None = None,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__("external_command_failed", message, recovery_hint=recovery_hint)
        self.argv = argv
        self.returncode = returncode
